# -*- coding: utf-8 -*-
"""
Camunda health checker.

Runs a fixed set of checks against the engine and the local process and
folds them into one verdict. Every check catches its own failures and turns
them into a ``fail`` or ``warn`` record, so one broken endpoint never stops
the remaining checks.
"""
from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

import httpx
import psutil

from camunda_mcp.config.settings import CamundaConfig
from camunda_mcp.core.client.camunda_client import CamundaClient, decode_body
from camunda_mcp.core.health.models import (
    CheckStatus,
    HealthCheckRecord,
    HealthReport,
    HealthStatus,
    SystemInfo,
)
from camunda_mcp.providers.logger import get_logger

logger = get_logger()

ENGINE_CHECK = "camunda-engine"
DEFINITIONS_CHECK = "process-definitions"
CRITICAL_CHECKS = frozenset({ENGINE_CHECK, DEFINITIONS_CHECK})

PERFORMANCE_PASS_MS = 2000
PERFORMANCE_WARN_MS = 5000
MEMORY_PASS_MB = 100
MEMORY_WARN_MB = 500

# (check name, endpoint, title, noun used in the summary)
LISTING_CHECKS = (
    (DEFINITIONS_CHECK, "/process-definition", "Process definitions", "definitions"),
    ("process-instances", "/process-instance", "Process instances", "instances"),
    ("tasks", "/task", "Tasks", "tasks"),
    ("deployments", "/deployment", "Deployments", "deployments"),
)
PERFORMANCE_ENDPOINTS = ("/process-definition", "/process-instance", "/task")

Checks = Dict[str, HealthCheckRecord]


def determine_overall_status(checks: Mapping[str, HealthCheckRecord]) -> HealthStatus:
    """
    A failing critical check means unhealthy; any other failure or a warning
    means degraded; all passing means healthy.
    """
    failed = [name for name, check in checks.items() if check.status is CheckStatus.FAIL]
    if failed:
        if CRITICAL_CHECKS.intersection(failed):
            return HealthStatus.UNHEALTHY
        return HealthStatus.DEGRADED

    if any(check.status is CheckStatus.WARN for check in checks.values()):
        return HealthStatus.DEGRADED

    return HealthStatus.HEALTHY


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


def _describe(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


def _count(data: Any) -> int:
    return len(data) if isinstance(data, list) else 0


class CamundaHealthChecker:
    """
    Check the engine and the current process.

    The checker owns its own HTTP client; every request carries the
    configured health timeout.
    """

    def __init__(
        self,
        config: CamundaConfig,
        timeout_ms: int = 5000,
        environment: str = "development",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        process: Optional[psutil.Process] = None,
    ):
        self.config = config
        self.timeout = timeout_ms / 1000
        self.environment = environment
        self.transport = transport
        self.process = process or psutil.Process()

    def check_steps(self) -> List[Callable[[CamundaClient, Checks, Dict[str, Any]], Awaitable[None]]]:
        """Checks in run order."""
        return [
            self.check_engine,
            self.check_version,
            self.check_listings,
            self.check_performance,
            self.check_system_resources,
        ]

    async def perform_health_check(self) -> HealthReport:
        start = time.perf_counter()
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        checks: Checks = {}
        meta: Dict[str, Any] = {}

        async with CamundaClient(self.config.model_copy(update={"timeout": self.timeout}),
                                 transport=self.transport) as client:
            for step in self.check_steps():
                await step(client, checks, meta)

        status = determine_overall_status(checks)
        report = HealthReport(
            status=status,
            timestamp=timestamp,
            response_time=_elapsed_ms(start),
            checks=checks,
            overall=SystemInfo(
                uptime=self.uptime(),
                version=meta.get("version"),
                environment=self.environment,
            ),
        )
        logger.info(f"[health] overall={status.value} checks={len(checks)} in {report.response_time}ms")
        return report

    def uptime(self) -> float:
        return max(0.0, time.time() - self.process.create_time())

    # === Engine checks ===

    async def check_engine(self, client: CamundaClient, checks: Checks, meta: Dict[str, Any]) -> None:
        start = time.perf_counter()
        try:
            response = await client.request("GET", "/engine")
            elapsed = _elapsed_ms(start)
            if response.status_code == 200:
                checks[ENGINE_CHECK] = HealthCheckRecord(
                    status=CheckStatus.PASS,
                    message="Camunda Engine is accessible",
                    response_time=elapsed,
                    details=decode_body(response),
                )
            else:
                checks[ENGINE_CHECK] = HealthCheckRecord(
                    status=CheckStatus.FAIL,
                    message=f"Unexpected status code: {response.status_code}",
                    response_time=elapsed,
                )
        except Exception as e:
            checks[ENGINE_CHECK] = HealthCheckRecord(
                status=CheckStatus.FAIL,
                message=f"Failed to connect to Camunda Engine: {_describe(e)}",
            )
        logger.debug(f"[health] {ENGINE_CHECK}: {checks[ENGINE_CHECK].status.value}")

    async def check_version(self, client: CamundaClient, checks: Checks, meta: Dict[str, Any]) -> None:
        try:
            data = await client.get_json("/version")
            version = data.get("version") if isinstance(data, dict) else None
            meta["version"] = version
            checks["version"] = HealthCheckRecord(
                status=CheckStatus.PASS,
                message=f"Camunda version: {version}",
                details=data,
            )
        except Exception as e:
            checks["version"] = HealthCheckRecord(
                status=CheckStatus.WARN,
                message=f"Could not retrieve version: {_describe(e)}",
            )
        logger.debug(f"[health] version: {checks['version'].status.value}")

    async def check_listings(self, client: CamundaClient, checks: Checks, meta: Dict[str, Any]) -> None:
        for name, path, title, noun in LISTING_CHECKS:
            start = time.perf_counter()
            try:
                data = await client.get_json(path, params={"maxResults": 1})
                checks[name] = HealthCheckRecord(
                    status=CheckStatus.PASS,
                    message=f"{title} API accessible ({_count(data)} {noun})",
                    response_time=_elapsed_ms(start),
                )
            except Exception as e:
                checks[name] = HealthCheckRecord(
                    status=CheckStatus.FAIL,
                    message=f"{title} API failed: {_describe(e)}",
                )
            logger.debug(f"[health] {name}: {checks[name].status.value}")

    async def check_performance(self, client: CamundaClient, checks: Checks, meta: Dict[str, Any]) -> None:
        start = time.perf_counter()
        tasks = [
            asyncio.ensure_future(client.request("GET", path, params={"maxResults": 5}))
            for path in PERFORMANCE_ENDPOINTS
        ]
        try:
            await asyncio.gather(*tasks)
        except Exception as e:
            checks["performance"] = HealthCheckRecord(
                status=CheckStatus.FAIL,
                message=f"Performance test failed: {_describe(e)}",
                response_time=_elapsed_ms(start),
            )
            # the remaining calls still run to completion or timeout
            await asyncio.gather(*tasks, return_exceptions=True)
            return

        elapsed = _elapsed_ms(start)
        if elapsed < PERFORMANCE_PASS_MS:
            status, label = CheckStatus.PASS, "Good"
        elif elapsed < PERFORMANCE_WARN_MS:
            status, label = CheckStatus.WARN, "Acceptable"
        else:
            status, label = CheckStatus.FAIL, "Poor"
        checks["performance"] = HealthCheckRecord(
            status=status,
            message=f"{label} performance: {elapsed}ms for multiple API calls",
            response_time=elapsed,
        )

    # === Local process ===

    async def check_system_resources(self, client: CamundaClient, checks: Checks, meta: Dict[str, Any]) -> None:
        try:
            memory = self.process.memory_info()
            memory_mb = round(memory.rss / 1024 / 1024)
            details = memory._asdict()

            if memory_mb < MEMORY_PASS_MB:
                status, message = CheckStatus.PASS, f"Memory usage is healthy: {memory_mb}MB"
            elif memory_mb < MEMORY_WARN_MB:
                status, message = CheckStatus.WARN, f"Memory usage is elevated: {memory_mb}MB"
            else:
                status, message = CheckStatus.FAIL, f"Memory usage is high: {memory_mb}MB"
            checks["memory"] = HealthCheckRecord(status=status, message=message, details=details)

            uptime = self.uptime()
            checks["uptime"] = HealthCheckRecord(
                status=CheckStatus.PASS,
                message=f"Process uptime: {round(uptime)}s",
                details={"uptime": uptime},
            )
        except (psutil.Error, OSError) as e:
            checks["system"] = HealthCheckRecord(
                status=CheckStatus.WARN,
                message=f"Could not check system resources: {_describe(e)}",
            )
