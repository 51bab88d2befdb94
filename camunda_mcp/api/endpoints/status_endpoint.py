# -*- coding: utf-8 -*-
"""Health status route for the HTTP transport."""

from __future__ import annotations

from typing import Callable

from fastmcp import FastMCP
from starlette.responses import JSONResponse

from camunda_mcp.core.health.checker import CamundaHealthChecker
from camunda_mcp.core.health.models import HealthStatus
from camunda_mcp.providers.logger import get_logger

logger = get_logger()

HEALTH_ROUTE = "/api/status/health"


def register_status_routes(app: FastMCP, checker_factory: Callable[[], CamundaHealthChecker]):
    """
    Mount ``GET /api/status/health``.

    Answers 200 for healthy and degraded reports, 503 for unhealthy ones.
    Returns the route handler.
    """

    @app.custom_route(HEALTH_ROUTE, methods=["GET"])
    async def get_health_status(request):
        try:
            report = await checker_factory().perform_health_check()
        except Exception as exc:
            logger.error(f"[status] health check failed: {exc}")
            return JSONResponse(content={"detail": str(exc)}, status_code=500)

        status_code = 503 if report.status is HealthStatus.UNHEALTHY else 200
        return JSONResponse(content=report.to_json_dict(), status_code=status_code)

    return get_health_status
