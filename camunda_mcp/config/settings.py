# -*- coding: utf-8 -*-
"""
Configuration for the Camunda MCP server and health checker.
"""
from typing import Any, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8080/engine-rest"


def safe_print(message: str):
    """Windows safe print that handles emoji characters"""
    try:
        print(message, flush=True)
    except UnicodeEncodeError:
        safe_message = message.encode('ascii', 'ignore').decode('ascii')
        print(safe_message, flush=True)


# === Config sections ===

class AppConfig(BaseModel):
    name: str = 'camunda-platform-rest-api-simple'
    version: str = '1.0.0'
    env: str = 'development'
    host: str = '127.0.0.1'
    port: int = 8000


class LoggerConfig(BaseModel):
    """Logging settings"""
    level: str = 'INFO'
    log_file: Optional[str] = None
    enable_file: bool = False
    enable_console: bool = True
    max_file_size: str = '10 MB'
    retention_days: int = 7


class CamundaSettings(BaseSettings):
    """Engine REST endpoint, read from CAMUNDA_* variables"""
    base_url: str = DEFAULT_BASE_URL
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    strict_arguments: bool = True

    model_config = SettingsConfigDict(
        env_prefix="CAMUNDA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class HealthSettings(BaseSettings):
    """Health check CLI settings"""
    timeout_ms: int = Field(
        default=5000,
        gt=0,
        validation_alias=AliasChoices("HEALTH_CHECK_TIMEOUT", "timeout_ms"),
    )
    output_format: str = Field(
        default="text",
        validation_alias=AliasChoices("OUTPUT_FORMAT", "output_format"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class GlobalSettings(BaseSettings):
    """Global settings"""
    app: AppConfig = Field(default_factory=AppConfig)
    logger: LoggerConfig = Field(default_factory=LoggerConfig)
    camunda: CamundaSettings = Field(default_factory=CamundaSettings)
    health: HealthSettings = Field(default_factory=HealthSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )


def load_config() -> GlobalSettings:
    """
    Load settings from the environment and an optional .env file.

    Variable naming:
    - APP__ENV=production
    - LOGGER__LEVEL=DEBUG
    - CAMUNDA_BASE_URL=http://camunda:8080/engine-rest
    - CAMUNDA_USERNAME / CAMUNDA_PASSWORD
    - HEALTH_CHECK_TIMEOUT=5000
    - OUTPUT_FORMAT=json
    """
    try:
        return GlobalSettings()
    except Exception as e:
        safe_print(f"❌ Failed to load settings, using defaults: {e}")
        return GlobalSettings.model_construct(
            app=AppConfig(),
            logger=LoggerConfig(),
            camunda=CamundaSettings.model_construct(
                base_url=DEFAULT_BASE_URL,
                username=None,
                password=None,
                timeout=30.0,
                strict_arguments=True,
            ),
            health=HealthSettings.model_construct(timeout_ms=5000, output_format="text"),
        )


global_settings = load_config()


# === Resolved engine config ===

class CamundaConfig(BaseModel):
    """Immutable connection settings shared by the dispatcher and the health checker."""

    base_url: str = DEFAULT_BASE_URL
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0
    strict_arguments: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        """Basic auth pair, only when both parts are set."""
        if self.username and self.password:
            return self.username, self.password
        return None


def _first(*values: Any) -> Any:
    for value in values:
        if value not in (None, ""):
            return value
    return None


def resolve_camunda_config(
    init_params: Optional[Mapping[str, Any]] = None,
    settings: Optional[CamundaSettings] = None,
) -> CamundaConfig:
    """
    Resolve the engine connection once.

    Explicit parameters win; the environment is only a fallback. Accepts
    either a flat mapping (``baseUrl``, ``username``, ``password``,
    ``timeout``) or the same keys nested under ``camunda`` as sent in an
    MCP initialize request.
    """
    params: Mapping[str, Any] = init_params or {}
    nested = params.get("camunda")
    if isinstance(nested, Mapping):
        params = nested

    env = settings if settings is not None else CamundaSettings()

    timeout = _first(params.get("timeout"), env.timeout, 30.0)
    strict = params.get("strictArguments")
    return CamundaConfig(
        base_url=str(_first(params.get("baseUrl"), params.get("base_url"), env.base_url, DEFAULT_BASE_URL)).rstrip("/"),
        username=_first(params.get("username"), env.username),
        password=_first(params.get("password"), env.password),
        timeout=float(timeout),
        strict_arguments=env.strict_arguments if strict in (None, "") else TypeAdapter(bool).validate_python(strict),
    )
