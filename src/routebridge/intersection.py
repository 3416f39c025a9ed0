"""Route change detection: which subtree did a successful transition touch."""

from __future__ import annotations

import logging
from collections.abc import Callable

from routebridge._stream import Observable
from routebridge.models.events import RouteChange, TransitionPath, TransitionPayload
from routebridge.models.state import RouterState, is_ancestor_or_self
from routebridge.router import Router
from routebridge.transition_path import transition_path as default_transition_path

_logger = logging.getLogger(__name__)

TransitionPathFn = Callable[[RouterState, RouterState | None], TransitionPath]


def node_affected(intersection: str | None, node: str) -> bool:
    """Whether a change rooted at *intersection* reaches *node*.

    ``None`` means nothing was shared (every node is affected).
    """
    if intersection is None:
        return True
    return is_ancestor_or_self(intersection, node)


class RouteIntersectionCalculator:
    """Derive ``route`` and ``route_node(name)`` from successful transitions."""

    def __init__(
        self,
        router: Router,
        transition_success_events: Observable[TransitionPayload],
        *,
        transition_path: TransitionPathFn = default_transition_path,
    ) -> None:
        self._router = router
        self._transition_path = transition_path
        self.changes: Observable[RouteChange] = transition_success_events.filter(
            lambda payload: payload.to_state is not None
        ).map(self._compute)
        self.route: Observable[RouterState | None] = self.changes.map(lambda change: change.route).start_with_call(
            lambda: [self.current_state()]
        )

    def _compute(self, payload: TransitionPayload) -> RouteChange:
        to_state = payload.to_state
        if to_state is None:
            raise ValueError("Cannot compute a route change without a target state")
        path = self._transition_path(to_state, payload.from_state)
        _logger.debug(
            "Transition %s -> %s intersects at %r",
            payload.from_state.name if payload.from_state is not None else None,
            to_state.name,
            path.intersection,
        )
        return RouteChange(intersection=path.intersection, route=to_state)

    def current_state(self) -> RouterState | None:
        return RouterState.coerce(self._router.get_state())

    def route_node(self, node: str) -> Observable[RouterState]:
        """Stream of routes for changes that reach *node*.

        Starts with the router's state at subscribe time and never emits
        ``None``.  The root node is ``""``.
        """
        return (
            self.changes.filter(lambda change: node_affected(change.intersection, node))
            .map(lambda change: change.route)
            .start_with_call(lambda: [self.current_state()])
            .filter(lambda route: route is not None)
        )  # type: ignore[return-value]
