# -*- coding: utf-8 -*-
"""Expose dispatcher-backed tools through FastMCP."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Iterable, List

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from camunda_mcp.api.scheme.response import ToolResponse
from camunda_mcp.core.tools.catalog import ToolDescriptor
from camunda_mcp.providers.logger import get_logger

Invoke = Callable[[str, Dict[str, Any]], Awaitable[ToolResponse]]


class CamundaTool(Tool):
    """
    FastMCP tool whose schema comes verbatim from the catalog and whose
    execution is delegated to the dispatcher.

    Error envelopes are raised as ``ToolError`` so MCP clients receive a
    result with ``isError=true`` and the same text.
    """

    invoke: Invoke

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, invoke: Invoke) -> "CamundaTool":
        return cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            tags={"camunda"},
            invoke=invoke,
        )

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        response = await self.invoke(self.name, arguments)
        if response.is_error:
            raise ToolError(response.text)
        return ToolResult(content=[TextContent(type="text", text=block.text) for block in response.content])


def register_tools(app: FastMCP, descriptors: Iterable[ToolDescriptor], invoke: Invoke) -> List[str]:
    """Register one FastMCP tool per descriptor, in the given order."""
    names = []
    for descriptor in descriptors:
        app.add_tool(CamundaTool.from_descriptor(descriptor, invoke))
        names.append(descriptor.name)
    get_logger().info(f"✅ MCP tools registered: {len(names)}")
    return names
