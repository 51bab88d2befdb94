# -*- coding: utf-8 -*-
"""FastMCP API service - wires the dispatcher, the tools and the status route."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx
from fastmcp import FastMCP

from camunda_mcp.api.endpoints import (
    CamundaInitializeMiddleware,
    create_main_app,
    register_status_routes,
    register_tools,
)
from camunda_mcp.api.scheme.response import ToolResponse
from camunda_mcp.config.settings import CamundaConfig, GlobalSettings, global_settings, resolve_camunda_config
from camunda_mcp.core.client.camunda_client import CamundaClient
from camunda_mcp.core.health.checker import CamundaHealthChecker
from camunda_mcp.core.tools.catalog import TOOL_CATALOG
from camunda_mcp.core.tools.dispatcher import ToolDispatcher
from camunda_mcp.providers.logger import get_logger, init_logger

logger = get_logger()


def _camunda_block(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    params = params or {}
    nested = params.get("camunda")
    source = nested if isinstance(nested, Mapping) else params
    return {key: value for key, value in source.items() if value not in (None, "")}


class CamundaService:
    """
    The FastMCP app together with the engine connection behind it.

    The connection is resolved exactly once: from the client's ``initialize``
    parameters when they arrive first, otherwise on first use from the
    explicit startup parameters and the environment. Later initialize
    parameters are ignored.
    """

    def __init__(
        self,
        app: FastMCP,
        settings: GlobalSettings,
        init_params: Optional[Mapping[str, Any]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.app = app
        self.settings = settings
        self.init_params = _camunda_block(init_params)
        self.transport = transport
        self._config: Optional[CamundaConfig] = None
        self._dispatcher: Optional[ToolDispatcher] = None

    def _resolve(self, overrides: Optional[Mapping[str, Any]] = None) -> CamundaConfig:
        params = dict(self.init_params)
        params.update(_camunda_block(overrides))
        self._config = resolve_camunda_config(params, self.settings.camunda)
        logger.info(f"✅ Camunda engine: {self._config.base_url} (auth: {'basic' if self._config.auth else 'none'})")
        return self._config

    def apply_initialize(self, params: Mapping[str, Any]) -> CamundaConfig:
        """Resolve the connection from initialize parameters, unless already resolved."""
        if self._config is not None:
            logger.warning("[initialize] engine connection already resolved, ignoring camunda parameters")
            return self._config
        return self._resolve(params)

    @property
    def config(self) -> CamundaConfig:
        if self._config is None:
            return self._resolve()
        return self._config

    @property
    def dispatcher(self) -> ToolDispatcher:
        if self._dispatcher is None:
            config = self.config
            self._dispatcher = ToolDispatcher(config, client=CamundaClient(config, transport=self.transport))
        return self._dispatcher

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        return await self.dispatcher.call(name, arguments)

    def health_checker(self) -> CamundaHealthChecker:
        return CamundaHealthChecker(
            self.config,
            timeout_ms=self.settings.health.timeout_ms,
            environment=self.settings.app.env,
            transport=self.transport,
        )

    async def close(self) -> None:
        if self._dispatcher is not None:
            await self._dispatcher.close()


def create_app(
    init_params: Optional[Mapping[str, Any]] = None,
    settings: GlobalSettings = global_settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CamundaService:
    """
    Create the FastMCP application.

    ``init_params`` carries explicit connection parameters (flat or under a
    ``camunda`` key). A client's ``initialize`` parameters take precedence
    over them; the environment fills whatever is missing.
    """
    init_logger(
        name=settings.app.name,
        level=settings.logger.level,
        log_file=settings.logger.log_file,
        enable_file=settings.logger.enable_file,
        enable_console=settings.logger.enable_console,
        max_file_size=settings.logger.max_file_size,
        retention_days=settings.logger.retention_days,
    )

    app = create_main_app()
    service = CamundaService(app, settings, init_params=init_params, transport=transport)

    app.add_middleware(CamundaInitializeMiddleware(service.apply_initialize))
    register_tools(app, TOOL_CATALOG, service.call)
    register_status_routes(app, service.health_checker)

    logger.info(f"✅ {settings.app.name} {settings.app.version} ready")
    return service
