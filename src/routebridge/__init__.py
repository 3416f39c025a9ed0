"""routebridge - Stream bridge for callback-driven hierarchical routers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyroutebridge")
except PackageNotFoundError:
    __version__ = "0+local"
from routebridge._stream import Observable, Observer, StateSubject, Subject, Subscription
from routebridge.config import BridgeConfig
from routebridge.demux import EventDemultiplexer
from routebridge.driver import RouterSources, make_bridge
from routebridge.exceptions import (
    BridgeConfigError,
    CommandDispatchError,
    CommandError,
    CommandNormalizationError,
    HookRegistrationError,
    RouteBridgeError,
    UnknownCommandError,
)
from routebridge.intersection import RouteIntersectionCalculator, node_affected
from routebridge.models import (
    Command,
    LifecycleEvent,
    LifecycleEventType,
    RouteChange,
    RouterState,
    SinkMethod,
    SourceMethod,
    TransitionErrorPayload,
    TransitionPath,
    TransitionPayload,
)
from routebridge.router import Router, RouterHook
from routebridge.sink import CommandSink, normalize_command
from routebridge.source import BridgeHook, EventSource
from routebridge.source_api import SourceAPI
from routebridge.transition_path import transition_path

__all__ = [
    "__version__",
    "BridgeConfig",
    "BridgeConfigError",
    "BridgeHook",
    "Command",
    "CommandDispatchError",
    "CommandError",
    "CommandNormalizationError",
    "CommandSink",
    "EventDemultiplexer",
    "EventSource",
    "HookRegistrationError",
    "LifecycleEvent",
    "LifecycleEventType",
    "Observable",
    "Observer",
    "RouteBridgeError",
    "RouteChange",
    "RouteIntersectionCalculator",
    "Router",
    "RouterHook",
    "RouterSources",
    "RouterState",
    "SinkMethod",
    "SourceAPI",
    "SourceMethod",
    "StateSubject",
    "Subject",
    "Subscription",
    "TransitionErrorPayload",
    "TransitionPath",
    "TransitionPayload",
    "UnknownCommandError",
    "make_bridge",
    "node_affected",
    "normalize_command",
    "transition_path",
]
