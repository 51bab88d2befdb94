# -*- coding: utf-8 -*-
"""Pydantic schemas for health check records and the aggregated report."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class HealthCheckRecord(_CamelModel):
    status: CheckStatus = Field(..., description="Check outcome")
    message: str = Field(..., description="Human readable result")
    response_time: Optional[int] = Field(None, description="Elapsed milliseconds")
    details: Optional[Any] = Field(None, description="Raw check payload")


class SystemInfo(_CamelModel):
    uptime: float = Field(..., description="Process uptime in seconds")
    version: Optional[str] = Field(None, description="Camunda version")
    environment: str = Field("development", description="Deployment environment label")


class HealthReport(_CamelModel):
    status: HealthStatus
    timestamp: str = Field(..., description="ISO-8601 UTC start time of the run")
    response_time: int = Field(..., description="Total elapsed milliseconds")
    checks: Dict[str, HealthCheckRecord] = Field(default_factory=dict)
    overall: SystemInfo

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def failing(self) -> Dict[str, HealthCheckRecord]:
        return {name: check for name, check in self.checks.items() if check.status is not CheckStatus.PASS}
