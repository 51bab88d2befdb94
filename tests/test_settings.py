# -*- coding: utf-8 -*-
import pydantic
import pytest

from camunda_mcp.config.settings import (
    DEFAULT_BASE_URL,
    CamundaConfig,
    CamundaSettings,
    GlobalSettings,
    HealthSettings,
    resolve_camunda_config,
)

CAMUNDA_ENV = (
    "CAMUNDA_BASE_URL",
    "CAMUNDA_USERNAME",
    "CAMUNDA_PASSWORD",
    "CAMUNDA_TIMEOUT",
    "CAMUNDA_STRICT_ARGUMENTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in CAMUNDA_ENV + ("HEALTH_CHECK_TIMEOUT", "OUTPUT_FORMAT", "APP__ENV"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = resolve_camunda_config()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.auth is None
    assert config.timeout == 30.0
    assert config.strict_arguments is True


def test_environment_is_fallback(monkeypatch):
    monkeypatch.setenv("CAMUNDA_BASE_URL", "http://env:8080/engine-rest/")
    monkeypatch.setenv("CAMUNDA_USERNAME", "env-user")
    monkeypatch.setenv("CAMUNDA_PASSWORD", "env-pass")
    monkeypatch.setenv("CAMUNDA_TIMEOUT", "12")

    config = resolve_camunda_config()

    assert config.base_url == "http://env:8080/engine-rest"
    assert config.auth == ("env-user", "env-pass")
    assert config.timeout == 12.0


def test_initialize_params_win(monkeypatch):
    monkeypatch.setenv("CAMUNDA_BASE_URL", "http://env:8080/engine-rest")
    monkeypatch.setenv("CAMUNDA_USERNAME", "env-user")
    monkeypatch.setenv("CAMUNDA_PASSWORD", "env-pass")

    config = resolve_camunda_config({"camunda": {
        "baseUrl": "http://init:8080/engine-rest",
        "username": "init-user",
        "password": "",
    }})

    assert config.base_url == "http://init:8080/engine-rest"
    assert config.username == "init-user"
    assert config.password == "env-pass"


def test_flat_params_and_explicit_settings():
    settings = CamundaSettings(base_url="http://settings/engine-rest", strict_arguments=True)

    config = resolve_camunda_config({"base_url": "http://flat/engine-rest", "strictArguments": False}, settings)

    assert config.base_url == "http://flat/engine-rest"
    assert config.strict_arguments is False


def test_auth_needs_both_parts():
    assert CamundaConfig(username="demo").auth is None
    assert CamundaConfig(password="demo").auth is None
    assert CamundaConfig(username="demo", password="secret").auth == ("demo", "secret")


def test_config_is_immutable():
    config = resolve_camunda_config()
    with pytest.raises(pydantic.ValidationError):
        config.base_url = "http://elsewhere"


def test_strict_mode_from_environment(monkeypatch):
    monkeypatch.setenv("CAMUNDA_STRICT_ARGUMENTS", "false")
    assert resolve_camunda_config().strict_arguments is False


def test_health_settings_from_environment(monkeypatch):
    monkeypatch.setenv("HEALTH_CHECK_TIMEOUT", "2500")
    monkeypatch.setenv("OUTPUT_FORMAT", "json")

    settings = HealthSettings()

    assert settings.timeout_ms == 2500
    assert settings.output_format == "json"


def test_nested_app_settings(monkeypatch):
    monkeypatch.setenv("APP__ENV", "production")
    assert GlobalSettings().app.env == "production"


@pytest.mark.parametrize("value, expected", [
    ("false", False),
    ("0", False),
    ("off", False),
    ("true", True),
    (False, False),
    (True, True),
])
def test_strict_arguments_param_parsed_as_boolean(value, expected):
    settings = CamundaSettings(strict_arguments=not expected)
    assert resolve_camunda_config({"strictArguments": value}, settings).strict_arguments is expected


def test_blank_strict_arguments_param_uses_environment(monkeypatch):
    monkeypatch.setenv("CAMUNDA_STRICT_ARGUMENTS", "false")
    assert resolve_camunda_config({"camunda": {"strictArguments": ""}}).strict_arguments is False
