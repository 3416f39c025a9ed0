from __future__ import annotations

import pytest

from routebridge.config import DEFAULT_HOOK_NAME, BridgeConfig
from routebridge.exceptions import BridgeConfigError


def test_defaults() -> None:
    config = BridgeConfig()
    assert config.autostart is True
    assert config.hook_name == DEFAULT_HOOK_NAME
    assert config.log_commands is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTEBRIDGE_AUTOSTART", "no")
    monkeypatch.setenv("ROUTEBRIDGE_HOOK_NAME", "  SECOND_BRIDGE ")
    monkeypatch.setenv("ROUTEBRIDGE_LOG_COMMANDS", "1")

    config = BridgeConfig.from_env()

    assert config.autostart is False
    assert config.hook_name == "SECOND_BRIDGE"
    assert config.log_commands is True


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTEBRIDGE_AUTOSTART", "false")
    monkeypatch.setenv("ROUTEBRIDGE_HOOK_NAME", "FROM_ENV")

    config = BridgeConfig.from_env(autostart=True, hook_name="EXPLICIT")

    assert config.autostart is True
    assert config.hook_name == "EXPLICIT"


def test_from_env_ignores_unparseable_booleans(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROUTEBRIDGE_HOOK_NAME", raising=False)
    monkeypatch.setenv("ROUTEBRIDGE_AUTOSTART", "maybe")
    monkeypatch.setenv("ROUTEBRIDGE_LOG_COMMANDS", "")

    config = BridgeConfig.from_env()

    assert config.autostart is True
    assert config.log_commands is False
    assert config.hook_name == DEFAULT_HOOK_NAME


def test_empty_hook_name_rejected() -> None:
    with pytest.raises(BridgeConfigError):
        BridgeConfig(hook_name="  ")


def test_blank_hook_name_from_env_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTEBRIDGE_HOOK_NAME", "   ")
    with pytest.raises(BridgeConfigError):
        BridgeConfig.from_env()
