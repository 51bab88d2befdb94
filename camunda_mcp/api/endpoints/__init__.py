from fastmcp import FastMCP

from camunda_mcp.config.settings import global_settings
from camunda_mcp.api.endpoints.base import CamundaTool, register_tools
from camunda_mcp.api.endpoints.middleware import CamundaInitializeMiddleware, camunda_params
from camunda_mcp.api.endpoints.status_endpoint import register_status_routes


def create_main_app() -> FastMCP:
    """Create the main FastMCP application"""
    return FastMCP(
        name=global_settings.app.name,
        version=global_settings.app.version,
    )


__all__ = [
    "create_main_app",
    "CamundaInitializeMiddleware",
    "CamundaTool",
    "camunda_params",
    "register_tools",
    "register_status_routes",
]
