"""Custom exception hierarchy for routebridge."""

from __future__ import annotations

from typing import Any


class RouteBridgeError(Exception):
    """Base exception for all routebridge errors."""


class BridgeConfigError(RouteBridgeError):
    """Invalid bridge configuration."""


class HookRegistrationError(RouteBridgeError):
    """The router refused the bridge hook (e.g. duplicate plugin name).

    Fatal to the subscription that attempted the registration only.
    Registration is never retried.
    """

    def __init__(self, message: str, *, hook_name: str = "") -> None:
        self.hook_name = hook_name
        super().__init__(message)


class CommandError(RouteBridgeError):
    """A sink command could not be processed.

    Command errors are reported on the ``command_errors`` side channel
    and logged; they are never raised out of the command subscription.
    """

    def __init__(self, message: str, *, command: Any = None) -> None:
        self.command = command
        super().__init__(message)


class CommandNormalizationError(CommandError):
    """Command is neither a method name nor a non-empty ``[name, *args]`` sequence."""


class UnknownCommandError(CommandError):
    """Command name is not part of the sink vocabulary."""


class CommandDispatchError(CommandError):
    """The router raised while executing a valid command."""
