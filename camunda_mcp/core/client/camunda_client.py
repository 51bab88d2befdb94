# -*- coding: utf-8 -*-
"""
Camunda REST client - async httpx wrapper around the engine-rest API.

Every call goes out exactly once: there is no retry layer. Errors are
converted here so callers only deal with ``BackendRejection`` (engine
answered with a non-2xx status) and ``TransportError`` (no answer).
"""
from typing import Any, Dict, Mapping, Optional

import httpx

from camunda_mcp.api.scheme.errors import BackendRejection, TransportError
from camunda_mcp.config.settings import CamundaConfig
from camunda_mcp.providers.logger import get_logger


def drop_unset(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Remove ``None`` values so unset fields are absent from the query string."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


def decode_body(response: httpx.Response) -> Any:
    """JSON body when there is one, raw text otherwise, ``None`` when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class CamundaClient:
    """
    Camunda engine-rest HTTP client

    One instance owns one ``httpx.AsyncClient``; use it as an async context
    manager or call ``close()``.
    """

    def __init__(self, config: CamundaConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            config: resolved connection settings
            transport: optional httpx transport, used by tests
        """
        self.config = config
        self.logger = get_logger()

        self.client = httpx.AsyncClient(
            base_url=self.config.base_url,
            auth=self.config.auth,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        data: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        """
        Issue one request against the engine.

        Raises:
            BackendRejection: the engine answered with a non-2xx status
            TransportError: connection failure or timeout
        """
        url = f"{self.config.base_url}{path}"
        kwargs: Dict[str, Any] = {"params": drop_unset(params)}
        if json is not None:
            kwargs["json"] = json
        if data is not None:
            kwargs["data"] = data
        if files is not None:
            kwargs["files"] = files
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self.logger.warning(f"[camunda] {method} {path} -> HTTP {status}")
            raise BackendRejection(status, e.response.reason_phrase, decode_body(e.response)) from e
        except httpx.HTTPError as e:
            self.logger.error(f"[camunda] {method} {path} failed: {e!r}")
            raise TransportError(url, str(e) or e.__class__.__name__) from e

        return response

    async def get_json(self, path: str, *, params: Optional[Mapping[str, Any]] = None,
                       timeout: Optional[float] = None) -> Any:
        response = await self.request("GET", path, params=params, timeout=timeout)
        return decode_body(response)
