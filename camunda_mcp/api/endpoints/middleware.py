# -*- coding: utf-8 -*-
"""MCP middleware that picks up engine settings sent with ``initialize``."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from fastmcp.server.middleware import Middleware, MiddlewareContext

from camunda_mcp.providers.logger import get_logger

logger = get_logger()


def camunda_params(message: Any) -> Optional[Mapping[str, Any]]:
    """The ``camunda`` block of an initialize request, if the client sent one."""
    params = getattr(message, "params", message)
    if params is None:
        return None
    if isinstance(params, Mapping):
        block = params.get("camunda")
    else:
        block = getattr(params, "camunda", None)
        if block is None:
            block = (getattr(params, "model_extra", None) or {}).get("camunda")
    return block if isinstance(block, Mapping) else None


class CamundaInitializeMiddleware(Middleware):
    """
    Hands the client's ``camunda`` initialize parameters to ``on_params``
    before the handshake completes.
    """

    def __init__(self, on_params: Callable[[Mapping[str, Any]], Any]):
        self.on_params = on_params

    async def on_initialize(self, context: MiddlewareContext, call_next):
        block = camunda_params(context.message)
        if block is not None:
            logger.info(f"[initialize] camunda parameters received: {', '.join(sorted(block)) or '-'}")
            self.on_params(block)
        return await call_next(context)
