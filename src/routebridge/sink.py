"""Inbound navigation commands: normalization, validation, dispatch.

A command is either a method name (``"cancel"``) or a non-empty
sequence ``["navigate", "users.view", {"id": 1}]``.  Valid commands
call the router method with the remaining items as positional
arguments.  Invalid ones are dropped and reported on
:attr:`CommandSink.command_errors`; the sink keeps processing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from routebridge._redact import redact_for_log
from routebridge._stream import Observable, Subject, Subscription
from routebridge.exceptions import (
    CommandDispatchError,
    CommandError,
    CommandNormalizationError,
    UnknownCommandError,
)
from routebridge.models.commands import Command, SinkMethod
from routebridge.router import Router

_logger = logging.getLogger(__name__)

CommandHook = Callable[[Any], None]

_USAGE = (
    "A sink command should be a method name or a sequence whose first item is a "
    "method name followed by its arguments. Available methods are: "
    + ", ".join(method.value for method in SinkMethod)
    + "."
)


def normalize_command(raw: Any) -> Command:
    """Turn a raw command into a validated :class:`Command`.

    Raises
    ------
    CommandNormalizationError
        *raw* is not a string or a non-empty list/tuple.
    UnknownCommandError
        The command name is not a :class:`SinkMethod`.
    """
    if isinstance(raw, Command):
        return raw

    if isinstance(raw, str):
        name: Any = raw
        args: tuple[Any, ...] = ()
    elif isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)) and len(raw) > 0:
        name, *rest = raw
        args = tuple(rest)
    else:
        raise CommandNormalizationError(f"Malformed command {redact_for_log(raw)!r}. {_USAGE}", command=raw)

    if isinstance(name, SinkMethod):
        method = name
    else:
        try:
            method = SinkMethod(name) if isinstance(name, str) else None
        except ValueError:
            method = None
    if method is None:
        raise UnknownCommandError(f"Unknown command {name!r}. {_USAGE}", command=raw)
    return Command(method=method, args=args)


def log_command(raw: Any) -> None:
    """Diagnostic hook: log a raw inbound command at DEBUG level."""
    _logger.debug("Inbound command %s", redact_for_log(raw))


class CommandSink:
    """Dispatch commands into the router, fire-and-forget."""

    def __init__(self, router: Router, *, on_command: CommandHook | None = None) -> None:
        self._router = router
        self._on_command = on_command
        self._errors: Subject[CommandError] = Subject()

    @property
    def command_errors(self) -> Observable[CommandError]:
        """Side channel of rejected or failed commands."""
        return self._errors

    def dispatch(self, command: Command) -> Any:
        """Invoke the router method for *command* and return its result."""
        router = self._router
        args = command.args
        _logger.debug("Dispatching router.%s with %d argument(s)", command.method.attribute, len(args))
        if command.method is SinkMethod.NAVIGATE:
            return router.navigate(*args)
        if command.method is SinkMethod.CANCEL:
            return router.cancel(*args)
        if command.method is SinkMethod.START:
            return router.start(*args)
        if command.method is SinkMethod.STOP:
            return router.stop(*args)
        if command.method is SinkMethod.CAN_ACTIVATE:
            return router.can_activate(*args)
        if command.method is SinkMethod.CAN_DEACTIVATE:
            return router.can_deactivate(*args)
        raise UnknownCommandError(f"Unhandled command {command.method!r}", command=command)

    def send(self, raw: Any) -> bool:
        """Process one raw command; return whether it was dispatched.

        Never raises for a bad command: failures are logged and published
        on :attr:`command_errors`.
        """
        if self._on_command is not None:
            self._on_command(raw)
        try:
            command = normalize_command(raw)
        except CommandError as exc:
            self._report(exc)
            return False
        try:
            self.dispatch(command)
        except Exception as exc:
            error = CommandDispatchError(f"Router failed to execute {command}: {exc}", command=command)
            error.__cause__ = exc
            self._report(error)
            return False
        return True

    def consume(self, commands: Observable[Any]) -> Subscription:
        """Subscribe to a command stream; dispose the result to stop."""
        return commands.subscribe(self.send, self._on_stream_error)

    def _on_stream_error(self, error: BaseException) -> None:
        self._report(CommandError(f"Command stream failed: {error}", command=None))

    def _report(self, error: CommandError) -> None:
        _logger.warning("Dropped command %s: %s", redact_for_log(error.command), error)
        self._errors.on_next(error)
