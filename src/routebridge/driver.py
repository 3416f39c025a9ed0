"""Bridge factory: wire a router to streams and a command sink.

Usage::

    driver = make_bridge(router)
    commands = Subject()
    sources = driver(commands)

    sources.route.subscribe(render)
    commands.on_next(("navigate", "users.view", {"id": 1}))
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Callable, Iterable
from typing import Any

from routebridge._stream import Observable, Subscription
from routebridge.config import BridgeConfig
from routebridge.demux import EventDemultiplexer
from routebridge.exceptions import BridgeConfigError, CommandError
from routebridge.intersection import RouteIntersectionCalculator, TransitionPathFn
from routebridge.models.events import (
    LifecycleEvent,
    LifecycleEventType,
    RouteChange,
    TransitionErrorPayload,
    TransitionPayload,
)
from routebridge.models.state import RouterState
from routebridge.router import Router
from routebridge.sink import CommandHook, CommandSink, log_command
from routebridge.source import EventSource
from routebridge.source_api import SourceAPI
from routebridge.transition_path import transition_path as default_transition_path

_logger = logging.getLogger(__name__)

CommandSource = Observable[Any] | Iterable[Any] | None


class RouterSources(SourceAPI):
    """Everything a consumer reads from the bridge.

    Streams
    -------
    start_events, stop_events
        Bare :class:`LifecycleEventType` tags.
    transition_start_events, transition_success_events, transition_cancel_events
        :class:`TransitionPayload` values.
    transition_error_events
        :class:`TransitionErrorPayload` values.
    route
        Current state at subscribe time, then every successful route.
    transition_route
        Latest state being transitioned to, ``None`` when nothing is in flight.
    error
        Latest transition error, sticky until :meth:`reset_error`.
    command_errors
        Rejected or failed commands.

    The seven router query methods (``get_state``, ``build_url``, ...)
    are inherited from :class:`SourceAPI`.
    """

    def __init__(
        self,
        router: Router,
        *,
        demux: EventDemultiplexer,
        intersections: RouteIntersectionCalculator,
        sink: CommandSink,
        subscription: Subscription,
    ) -> None:
        super().__init__(router)
        self._demux = demux
        self._intersections = intersections
        self._sink = sink
        self._subscription = subscription

    @property
    def events(self) -> Observable[LifecycleEvent]:
        return self._demux.events

    @property
    def start_events(self) -> Observable[LifecycleEventType]:
        return self._demux.start_events

    @property
    def stop_events(self) -> Observable[LifecycleEventType]:
        return self._demux.stop_events

    @property
    def transition_start_events(self) -> Observable[TransitionPayload]:
        return self._demux.transition_start_events

    @property
    def transition_success_events(self) -> Observable[TransitionPayload]:
        return self._demux.transition_success_events

    @property
    def transition_error_events(self) -> Observable[TransitionErrorPayload]:
        return self._demux.transition_error_events

    @property
    def transition_cancel_events(self) -> Observable[TransitionPayload]:
        return self._demux.transition_cancel_events

    @property
    def transition_route(self) -> Observable[RouterState | None]:
        return self._demux.transition_route

    @property
    def error(self) -> Observable[Any]:
        return self._demux.error

    @property
    def route(self) -> Observable[RouterState | None]:
        return self._intersections.route

    @property
    def route_changes(self) -> Observable[RouteChange]:
        return self._intersections.changes

    @property
    def command_errors(self) -> Observable[CommandError]:
        return self._sink.command_errors

    @property
    def sink(self) -> CommandSink:
        return self._sink

    def route_node(self, node: str) -> Observable[RouterState]:
        return self._intersections.route_node(node)

    def reset_error(self) -> None:
        self._demux.reset_error()

    def dispose(self) -> None:
        """Stop processing the command stream."""
        self._subscription.dispose()


Driver = Callable[[CommandSource], RouterSources]


def make_bridge(
    router: Router,
    autostart: bool | None = None,
    *,
    config: BridgeConfig | None = None,
    transition_path: TransitionPathFn | None = None,
    on_command: CommandHook | None = None,
) -> Driver:
    """Make a driver function bound to *router*.

    Parameters
    ----------
    router : Router
        Router the bridge observes and commands.  Not owned by the bridge.
    autostart : bool or None
        Start the router on first subscription if it is not running.
        ``None`` uses ``config.autostart`` (``True`` by default).
    config : BridgeConfig or None
        Bridge configuration; defaults to ``BridgeConfig()``.
    transition_path : callable or None
        Intersection function ``(to_state, from_state) -> TransitionPath``.
    on_command : callable or None
        Diagnostic hook receiving every raw command before validation.
        When omitted and ``config.log_commands`` is set, commands are
        logged at DEBUG level.

    Returns
    -------
    Callable
        ``driver(commands) -> RouterSources``.  *commands* may be an
        :class:`Observable`, a plain iterable, or ``None``.
    """
    cfg = config or BridgeConfig()
    resolved_autostart = cfg.autostart if autostart is None else autostart
    command_hook = on_command if on_command is not None else (log_command if cfg.log_commands else None)

    def driver(commands: CommandSource = None) -> RouterSources:
        demux = EventDemultiplexer(EventSource(router, autostart=resolved_autostart, hook_name=cfg.hook_name))
        intersections = RouteIntersectionCalculator(
            router,
            demux.transition_success_events,
            transition_path=transition_path or default_transition_path,
        )
        sink = CommandSink(router, on_command=command_hook)
        subscription = sink.consume(_as_observable(commands))
        _logger.debug("Router bridge ready (autostart=%s, hook=%s)", resolved_autostart, cfg.hook_name)
        return RouterSources(
            router,
            demux=demux,
            intersections=intersections,
            sink=sink,
            subscription=subscription,
        )

    return driver


def _as_observable(commands: CommandSource) -> Observable[Any]:
    if commands is None:
        return Observable.from_iterable(())
    if isinstance(commands, Observable):
        return commands
    if isinstance(commands, AsyncIterable):
        raise BridgeConfigError("Async command sources are fed with routebridge.aio.feed_commands()")
    if isinstance(commands, Iterable) and not isinstance(commands, (str, bytes)):
        return Observable.from_iterable(commands)
    raise BridgeConfigError(f"Unsupported command source {type(commands).__name__}")
