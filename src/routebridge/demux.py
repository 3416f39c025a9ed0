"""Split the unified lifecycle stream into purpose-specific streams."""

from __future__ import annotations

from typing import Any

from routebridge._stream import Observable, Observer, StateSubject, Subscription
from routebridge.models.events import (
    LifecycleEvent,
    LifecycleEventType,
    TransitionErrorPayload,
    TransitionPayload,
)
from routebridge.models.state import RouterState


class EventDemultiplexer:
    """Named streams derived from one shared lifecycle event stream.

    All streams share a single upstream connection: the hook is
    registered when the first stream gains a subscriber and deregistered
    when the last subscription is disposed.

    ``transition_route`` and ``error`` are last-value caches updated from
    every event the shared connection delivers, whichever stream keeps it
    alive, and replayed to late subscribers.  ``error`` is sticky: a later
    success does not clear it, call :meth:`reset_error` for that.
    """

    def __init__(self, events: Observable[LifecycleEvent]) -> None:
        self._transition_route: StateSubject[RouterState | None] = StateSubject(None)
        self._error: StateSubject[Any] = StateSubject(None)
        self.events = events.tap(self._record).share()

        self.start_events = self._slice(LifecycleEventType.START)
        self.stop_events = self._slice(LifecycleEventType.STOP)
        self.transition_start_events = self._slice_state(LifecycleEventType.TRANSITION_START)
        self.transition_success_events = self._slice_state(LifecycleEventType.TRANSITION_SUCCESS)
        self.transition_error_events: Observable[TransitionErrorPayload] = self._slice_state(
            LifecycleEventType.TRANSITION_ERROR
        )  # type: ignore[assignment]
        self.transition_cancel_events = self._slice_state(LifecycleEventType.TRANSITION_CANCEL)

        self.transition_route: Observable[RouterState | None] = self._replay(self._transition_route)
        self.error: Observable[Any] = self._replay(self._error)

    def _record(self, event: LifecycleEvent) -> None:
        # Nothing is in flight once a transition settles or the router starts/stops.
        if event.type == LifecycleEventType.TRANSITION_START:
            self._transition_route.on_next(event.to_state)
        else:
            self._transition_route.on_next(None)
        if event.type == LifecycleEventType.TRANSITION_ERROR:
            self._error.on_next(event.error)

    def _replay(self, state: StateSubject[Any]) -> Observable[Any]:
        def subscribe(observer: Observer[Any]) -> Subscription:
            subscription = Subscription(state.subscribe(observer.on_next))
            subscription.add(self.events.subscribe(on_error=observer.on_error, on_completed=observer.on_completed))
            return subscription

        return Observable(subscribe)

    def _filter(self, event_type: LifecycleEventType) -> Observable[LifecycleEvent]:
        return self.events.filter(lambda event: event.type == event_type)

    def _slice(self, event_type: LifecycleEventType) -> Observable[LifecycleEventType]:
        return self._filter(event_type).map(lambda event: event.type)

    def _slice_state(self, event_type: LifecycleEventType) -> Observable[TransitionPayload]:
        return self._filter(event_type).map(lambda event: event.to_payload())

    @property
    def current_transition_route(self) -> RouterState | None:
        return self._transition_route.value

    @property
    def current_error(self) -> Any:
        return self._error.value

    def reset_error(self) -> None:
        """Clear the sticky ``error`` stream back to ``None``."""
        self._error.on_next(None)
