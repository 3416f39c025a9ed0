"""Lifecycle events emitted by the router hook and their projections."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from routebridge.models._base import BridgeBaseModel, BridgeEnum
from routebridge.models.state import RouterState


class LifecycleEventType(BridgeEnum):
    """Router lifecycle notification tags."""

    START = "start"
    STOP = "stop"
    TRANSITION_START = "transitionStart"
    TRANSITION_SUCCESS = "transitionSuccess"
    TRANSITION_ERROR = "transitionError"
    TRANSITION_CANCEL = "transitionCancel"


TRANSITION_EVENT_TYPES: frozenset[LifecycleEventType] = frozenset(
    {
        LifecycleEventType.TRANSITION_START,
        LifecycleEventType.TRANSITION_SUCCESS,
        LifecycleEventType.TRANSITION_ERROR,
        LifecycleEventType.TRANSITION_CANCEL,
    }
)


class LifecycleEvent(BridgeBaseModel):
    """One router lifecycle notification.

    ``to_state``/``from_state`` are only set for transition events;
    ``error`` only for ``transitionError``.
    """

    type: LifecycleEventType
    to_state: RouterState | None = None
    from_state: RouterState | None = None
    error: Any = None

    @property
    def is_transition(self) -> bool:
        return self.type in TRANSITION_EVENT_TYPES

    def to_payload(self) -> TransitionPayload:
        if self.type == LifecycleEventType.TRANSITION_ERROR:
            return TransitionErrorPayload(to_state=self.to_state, from_state=self.from_state, error=self.error)
        return TransitionPayload(to_state=self.to_state, from_state=self.from_state)


class TransitionPayload(BridgeBaseModel):
    to_state: RouterState | None = None
    from_state: RouterState | None = None


class TransitionErrorPayload(TransitionPayload):
    error: Any = None


class TransitionPath(BridgeBaseModel):
    """Result of comparing two states segment by segment.

    ``intersection`` is the deepest segment id shared by both states, or
    ``None`` when nothing is shared (a full top-level change).
    """

    intersection: str | None = None
    to_deactivate: tuple[str, ...] = ()
    to_activate: tuple[str, ...] = ()


class RouteChange(BridgeBaseModel):
    """A successful transition annotated with the changed subtree root."""

    intersection: str | None = None
    route: RouterState = Field(..., description="State the router transitioned to")
