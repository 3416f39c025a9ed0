"""Data models for router states, lifecycle events and commands."""

from routebridge.models._base import BridgeBaseModel, BridgeEnum, camel_to_snake
from routebridge.models.commands import Command, SinkMethod, SourceMethod
from routebridge.models.events import (
    TRANSITION_EVENT_TYPES,
    LifecycleEvent,
    LifecycleEventType,
    RouteChange,
    TransitionErrorPayload,
    TransitionPath,
    TransitionPayload,
)
from routebridge.models.state import RouterState, is_ancestor_or_self, name_to_ids

__all__ = [
    "TRANSITION_EVENT_TYPES",
    "BridgeBaseModel",
    "BridgeEnum",
    "Command",
    "LifecycleEvent",
    "LifecycleEventType",
    "RouteChange",
    "RouterState",
    "SinkMethod",
    "SourceMethod",
    "TransitionErrorPayload",
    "TransitionPath",
    "TransitionPayload",
    "camel_to_snake",
    "is_ancestor_or_self",
    "name_to_ids",
]
