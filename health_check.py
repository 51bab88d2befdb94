#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Camunda health check - entry point

Checks the engine configured through CAMUNDA_* variables, prints a summary
and exits with a status code usable by CI/CD and container health checks.

Usage:
    python health_check.py
    OUTPUT_FORMAT=json HEALTH_CHECK_TIMEOUT=3000 python health_check.py

Exit codes:
    0 healthy, 1 degraded, 2 unhealthy, 3 the check itself failed, 4 fatal error
"""
from __future__ import annotations

import asyncio
import json
import sys
from typing import Optional

import httpx

from camunda_mcp.config.settings import GlobalSettings, load_config, resolve_camunda_config, safe_print
from camunda_mcp.core.health.checker import CamundaHealthChecker
from camunda_mcp.core.health.models import CheckStatus, HealthReport, HealthStatus
from camunda_mcp.providers.logger import init_logger

EXIT_CODES = {
    HealthStatus.HEALTHY: 0,
    HealthStatus.DEGRADED: 1,
    HealthStatus.UNHEALTHY: 2,
}
EXIT_CHECK_FAILED = 3
EXIT_FATAL = 4

STATUS_EMOJI = {
    HealthStatus.HEALTHY: "✅",
    HealthStatus.DEGRADED: "⚠️",
    HealthStatus.UNHEALTHY: "❌",
    CheckStatus.PASS: "✅",
    CheckStatus.WARN: "⚠️",
    CheckStatus.FAIL: "❌",
}


def exit_code_for(status: HealthStatus) -> int:
    return EXIT_CODES[status]


def print_report(report: HealthReport, output_format: str = "text"):
    """Human readable summary, followed by the JSON report when requested."""
    safe_print(f"📊 Health Check Results ({report.timestamp})")
    safe_print(f"⏱️  Total Response Time: {report.response_time}ms")
    safe_print(f"🎯 Overall Status: {STATUS_EMOJI[report.status]} {report.status.value.upper()}\n")

    safe_print("📋 Detailed Checks:")
    for name, check in report.checks.items():
        safe_print(f"  {STATUS_EMOJI[check.status]} {name}: {check.message}")
        if check.response_time:
            safe_print(f"    ⏱️  Response Time: {check.response_time}ms")

    safe_print("\n🔧 System Info:")
    safe_print(f"  📦 Version: {report.overall.version or 'Unknown'}")
    safe_print(f"  🌍 Environment: {report.overall.environment}")
    safe_print(f"  ⏰ Uptime: {round(report.overall.uptime)}s")

    if output_format.lower() == "json":
        safe_print("\n--- JSON OUTPUT ---")
        safe_print(json.dumps(report.to_json_dict(), indent=2, ensure_ascii=False))


async def run(settings: Optional[GlobalSettings] = None,
              transport: Optional[httpx.AsyncBaseTransport] = None) -> int:
    """Run one health check and return the process exit code."""
    settings = settings or load_config()
    init_logger(
        name=settings.app.name,
        level=settings.logger.level,
        log_file=settings.logger.log_file,
        enable_file=settings.logger.enable_file,
        enable_console=settings.logger.enable_console,
        max_file_size=settings.logger.max_file_size,
        retention_days=settings.logger.retention_days,
    )

    checker = CamundaHealthChecker(
        resolve_camunda_config(settings=settings.camunda),
        timeout_ms=settings.health.timeout_ms,
        environment=settings.app.env,
        transport=transport,
    )

    safe_print("🏥 Starting Camunda MCP Server Health Check...\n")
    try:
        report = await checker.perform_health_check()
    except Exception as e:
        print(f"❌ Health check failed: {e}", file=sys.stderr, flush=True)
        return EXIT_CHECK_FAILED

    print_report(report, settings.health.output_format)
    return exit_code_for(report.status)


def cli():
    """Console script entry point."""
    try:
        code = asyncio.run(run())
    except KeyboardInterrupt:
        code = EXIT_FATAL
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr, flush=True)
        code = EXIT_FATAL
    sys.exit(code)


if __name__ == "__main__":
    cli()
