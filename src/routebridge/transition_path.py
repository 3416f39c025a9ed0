"""Default intersection function.

Compares two router states segment by segment and reports the deepest
segment they share, plus the segments to deactivate and activate.
Segment params are compared only where router metadata says which
params a segment owns; without metadata on either state every segment
is treated as changed.

Any callable with the same signature can replace this one in
:func:`routebridge.make_bridge`.
"""

from __future__ import annotations

import logging

from routebridge.models.events import TransitionPath
from routebridge.models.state import RouterState, name_to_ids

_logger = logging.getLogger(__name__)


def _point_of_difference(to_state: RouterState, from_state: RouterState) -> int:
    to_ids = to_state.segment_ids
    from_ids = from_state.segment_ids
    max_i = min(len(to_ids), len(from_ids))
    for i in range(max_i):
        if to_ids[i] != from_ids[i]:
            return i
        to_params = to_state.segment_params(to_ids[i]) or {}
        from_params = from_state.segment_params(from_ids[i]) or {}
        if to_params.keys() != from_params.keys():
            return i
        if any(to_params[key] != from_params[key] for key in to_params):
            return i
    return max_i


def transition_path(to_state: RouterState, from_state: RouterState | None) -> TransitionPath:
    """Compute the deepest common segment of *to_state* and *from_state*.

    ``intersection`` is ``None`` when the states share no segment, which
    includes every transition from no state at all.
    """
    from_ids = name_to_ids(from_state.name) if from_state is not None else []
    to_ids = to_state.segment_ids

    if from_state is None:
        i = 0
    elif not from_state.has_meta_params and not to_state.has_meta_params:
        _logger.debug(
            "States %s -> %s carry no segment metadata, treating every segment as changed",
            from_state.name,
            to_state.name,
        )
        i = 0
    else:
        i = _point_of_difference(to_state, from_state)

    return TransitionPath(
        intersection=from_ids[i - 1] if i > 0 else None,
        to_deactivate=tuple(reversed(from_ids[i:])),
        to_activate=tuple(to_ids[i:]),
    )
