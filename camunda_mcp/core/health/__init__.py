from camunda_mcp.core.health.checker import CamundaHealthChecker, determine_overall_status
from camunda_mcp.core.health.models import CheckStatus, HealthCheckRecord, HealthReport, HealthStatus, SystemInfo

__all__ = [
    "CamundaHealthChecker",
    "CheckStatus",
    "HealthCheckRecord",
    "HealthReport",
    "HealthStatus",
    "SystemInfo",
    "determine_overall_status",
]
