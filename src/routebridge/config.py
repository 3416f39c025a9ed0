"""Bridge configuration for routebridge."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from routebridge.exceptions import BridgeConfigError

#: Default name the bridge hook is registered under.
DEFAULT_HOOK_NAME = "ROUTE_BRIDGE"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class BridgeConfig:
    """Bridge configuration.

    Parameters
    ----------
    autostart : bool
        Ask the router to start when the lifecycle stream is first
        subscribed and the router is not running yet.
    hook_name : str
        Name of the hook object registered with the router.  Routers
        that reject duplicate plugin names need a distinct name per
        bridge instance.
    log_commands : bool
        Log every inbound command at DEBUG level before validation.
        Arguments are redacted before logging.
    """

    autostart: bool = True
    hook_name: str = DEFAULT_HOOK_NAME
    log_commands: bool = False

    def __post_init__(self) -> None:
        if not self.hook_name.strip():
            raise BridgeConfigError("hook_name must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> BridgeConfig:
        """Create configuration from environment variables.

        Reads ``ROUTEBRIDGE_AUTOSTART``, ``ROUTEBRIDGE_HOOK_NAME`` and
        ``ROUTEBRIDGE_LOG_COMMANDS``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "autostart" not in overrides:
            config_kwargs["autostart"] = _env_bool(env.get("ROUTEBRIDGE_AUTOSTART"), True)

        hook_name = env.get("ROUTEBRIDGE_HOOK_NAME")
        if hook_name is not None and "hook_name" not in overrides:
            config_kwargs["hook_name"] = hook_name.strip()

        if "log_commands" not in overrides:
            config_kwargs["log_commands"] = _env_bool(env.get("ROUTEBRIDGE_LOG_COMMANDS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
