"""Mini README: Tests for environment-driven connection settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from tellodrone.configuration import TelloSettings


def test_defaults_match_sdk_addresses() -> None:
    settings = TelloSettings()
    assert settings.drone_host == "192.168.10.1"
    assert settings.command_port == 8889
    assert settings.state_port == 8890


def test_environment_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("TELLODRONE_DRONE_HOST", "10.0.0.7")
    monkeypatch.setenv("TELLODRONE_SKIP_OK", "false")
    monkeypatch.setenv("TELLODRONE_SCHEMA_PATH", str(tmp_path / "schema.json"))
    monkeypatch.setenv("TELLODRONE_LOG_LEVEL", "debug")

    settings = TelloSettings()

    assert settings.drone_host == "10.0.0.7"
    assert settings.skip_ok is False
    assert settings.schema_path == (tmp_path / "schema.json").resolve()
    assert settings.log_level == "DEBUG"


def test_ports_are_bounded() -> None:
    with pytest.raises(ValidationError):
        TelloSettings(command_port=70000)
