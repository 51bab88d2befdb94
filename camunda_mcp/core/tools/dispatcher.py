# -*- coding: utf-8 -*-
"""
Tool dispatcher - routes a tool call to its handler and folds every outcome
into one ``ToolResponse``.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from camunda_mcp.api.scheme.errors import (
    BackendRejection,
    Error,
    InvalidArgumentsError,
    MissingArgumentsError,
    UnknownToolError,
)
from camunda_mcp.api.scheme.response import (
    ToolResponse,
    error_response,
    rejection_response,
    success_response,
)
from camunda_mcp.config.settings import CamundaConfig
from camunda_mcp.core.client.camunda_client import CamundaClient
from camunda_mcp.core.tools.catalog import ToolDescriptor
from camunda_mcp.core.tools.handlers import ToolHandler, build_handlers
from camunda_mcp.providers.logger import get_logger

logger = get_logger()


class ToolDispatcher:
    """
    Name -> handler registry plus the error boundary of every tool call.

    ``call`` never raises: unknown tools, missing arguments, unreadable
    artifacts, engine rejections and transport failures all come back as an
    error-flagged response. Each call issues at most one engine request.
    """

    def __init__(
        self,
        config: CamundaConfig,
        client: Optional[CamundaClient] = None,
        handlers: Optional[Iterable[ToolHandler]] = None,
    ):
        self.config = config
        self.client = client or CamundaClient(config)
        self._handlers: Dict[str, ToolHandler] = {}
        for handler in (build_handlers() if handlers is None else handlers):
            self.register(handler)

    def register(self, handler: ToolHandler) -> None:
        if handler.name in self._handlers:
            raise ValueError(f"Tool already registered: {handler.name}")
        self._handlers[handler.name] = handler

    @property
    def descriptors(self) -> List[ToolDescriptor]:
        return [handler.descriptor for handler in self._handlers.values()]

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _validate(self, handler: ToolHandler, arguments: Mapping[str, Any]) -> None:
        if not self.config.strict_arguments:
            return
        missing = handler.descriptor.missing_fields(dict(arguments))
        if missing:
            raise InvalidArgumentsError(handler.name, missing)

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        try:
            if arguments is None:
                raise MissingArgumentsError()
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)

            self._validate(handler, arguments)
            logger.info(f"[tools] {name} called with: {', '.join(sorted(arguments)) or '-'}")
            data = await handler.handle(self.client, arguments)
            return success_response(data)

        except BackendRejection as e:
            logger.warning(f"[tools] {name} rejected: {e.status_code} {e.reason}")
            return rejection_response(e)
        except Error as e:
            logger.warning(f"[tools] {name} failed: {e}")
            return error_response(e)
        except Exception as e:
            logger.exception(f"[tools] {name} crashed: {e}")
            return error_response(e)
