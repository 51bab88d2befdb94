#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Camunda MCP Server - entry point

Usage:
    python main.py
    python main.py --base-url http://camunda:8080/engine-rest --username demo --password demo
    python main.py --transport http --host 0.0.0.0 --port 8000
"""
from __future__ import annotations

import argparse
import sys
import warnings
from typing import Any, Dict, Optional, Sequence

import uvicorn

from camunda_mcp.api_service import create_app
from camunda_mcp.config.settings import global_settings

# Suppress websockets deprecation warnings until uvicorn fully migrates to new API
warnings.filterwarnings(
    "ignore",
    category=DeprecationWarning,
    module="websockets.legacy",
)
warnings.filterwarnings(
    "ignore",
    category=DeprecationWarning,
    module="uvicorn.protocols.websockets.websockets_impl",
)


def parse_args(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Camunda MCP Server - Camunda Platform REST API tools over MCP"
    )

    parser.add_argument(
        "--transport",
        type=str,
        default="stdio",
        choices=["stdio", "http"],
        help="MCP transport (default: stdio)"
    )

    parser.add_argument(
        "--host",
        type=str,
        default=global_settings.app.host,
        help=f"HTTP bind address (default: {global_settings.app.host})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=global_settings.app.port,
        help=f"HTTP port (default: {global_settings.app.port})"
    )

    parser.add_argument("--base-url", type=str, help="Camunda engine-rest URL, overrides CAMUNDA_BASE_URL")
    parser.add_argument("--username", type=str, help="Basic auth user, overrides CAMUNDA_USERNAME")
    parser.add_argument("--password", type=str, help="Basic auth password, overrides CAMUNDA_PASSWORD")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds, overrides CAMUNDA_TIMEOUT")

    return parser.parse_args(argv)


def init_params_from_args(args) -> Dict[str, Any]:
    """Explicit connection parameters, shaped like the ``camunda`` initialize block."""
    return {
        "camunda": {
            "baseUrl": args.base_url,
            "username": args.username,
            "password": args.password,
            "timeout": args.timeout,
        }
    }


def main(argv: Optional[Sequence[str]] = None):
    """Start the server on the selected transport"""
    args = parse_args(argv)
    service = create_app(init_params_from_args(args))

    if args.transport == "stdio":
        service.app.run()
        return

    uvicorn.run(service.app.http_app(path='/mcp/'), host=args.host, port=args.port)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
