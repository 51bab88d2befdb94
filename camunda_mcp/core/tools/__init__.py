from camunda_mcp.core.tools.catalog import TOOL_CATALOG, ToolDescriptor, get_descriptor, list_tools
from camunda_mcp.core.tools.dispatcher import ToolDispatcher

__all__ = ["TOOL_CATALOG", "ToolDescriptor", "ToolDispatcher", "get_descriptor", "list_tools"]
