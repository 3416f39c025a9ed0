from __future__ import annotations

from typing import Any

from conftest import FakeRouter, make_state

from routebridge.demux import EventDemultiplexer
from routebridge.models.events import LifecycleEventType, TransitionErrorPayload, TransitionPayload
from routebridge.source import EventSource


def _demux(router: FakeRouter, *, autostart: bool = True) -> EventDemultiplexer:
    return EventDemultiplexer(EventSource(router, autostart=autostart))


def test_start_and_stop_project_to_tags(router: FakeRouter) -> None:
    demux = _demux(router)
    starts: list[LifecycleEventType] = []
    stops: list[LifecycleEventType] = []

    demux.start_events.subscribe(starts.append)
    demux.stop_events.subscribe(stops.append)
    router.stop()

    assert starts == [LifecycleEventType.START]
    assert stops == [LifecycleEventType.STOP]


def test_all_streams_share_one_hook(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    subscriptions = [
        demux.start_events.subscribe(lambda _v: None),
        demux.transition_success_events.subscribe(lambda _v: None),
        demux.error.subscribe(lambda _v: None),
        demux.transition_route.subscribe(lambda _v: None),
    ]
    assert len(started_router.plugins) == 1

    for subscription in subscriptions:
        subscription.dispose()

    assert started_router.plugins == []


def test_transition_streams_filter_by_type(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    seen: dict[str, list[Any]] = {"start": [], "success": [], "error": [], "cancel": []}
    demux.transition_start_events.subscribe(seen["start"].append)
    demux.transition_success_events.subscribe(seen["success"].append)
    demux.transition_error_events.subscribe(seen["error"].append)
    demux.transition_cancel_events.subscribe(seen["cancel"].append)

    home = make_state("home")
    about = make_state("about")
    started_router.begin(home)
    started_router.succeed(home)
    started_router.begin(about)
    started_router.abort(about)
    started_router.begin(about)
    started_router.fail(about, "boom")

    assert seen["start"] == [
        TransitionPayload(to_state=home, from_state=None),
        TransitionPayload(to_state=about, from_state=home),
        TransitionPayload(to_state=about, from_state=home),
    ]
    assert seen["success"] == [TransitionPayload(to_state=home, from_state=None)]
    assert seen["cancel"] == [TransitionPayload(to_state=about, from_state=home)]
    assert len(seen["error"]) == 1
    assert isinstance(seen["error"][0], TransitionErrorPayload)
    assert seen["error"][0].error == "boom"
    assert seen["error"][0].to_state == about


def test_transition_route_tracks_in_flight_state(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    values: list[Any] = []
    demux.transition_route.subscribe(values.append)
    home = make_state("home")

    started_router.begin(home)
    late: list[Any] = []
    demux.transition_route.subscribe(late.append)
    started_router.succeed(home)

    assert values == [None, home, None]
    assert late == [home, None]


def test_error_is_sticky_and_replayed(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    keep_alive = demux.start_events.subscribe(lambda _v: None)
    home = make_state("home")
    error = {"code": "ROUTE_NOT_FOUND"}

    first: list[Any] = []
    demux.error.subscribe(first.append)
    assert first == [None]

    started_router.fail(home, error)
    late: list[Any] = []
    demux.error.subscribe(late.append)
    assert late == [error]

    started_router.succeed(home)
    after_success: list[Any] = []
    demux.error.subscribe(after_success.append)

    assert after_success == [error]
    assert first == [None, error]
    assert demux.current_error == error
    keep_alive.dispose()


def test_error_cached_while_other_streams_hold_connection(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    demux.transition_success_events.subscribe(lambda _v: None)

    started_router.fail(make_state("home"), "E")
    late: list[Any] = []
    demux.error.subscribe(late.append)

    assert late == ["E"]


def test_reset_error(started_router: FakeRouter) -> None:
    demux = _demux(started_router)
    values: list[Any] = []
    demux.error.subscribe(values.append)

    started_router.fail(make_state("home"), "E")
    demux.reset_error()

    assert values == [None, "E", None]
    assert demux.current_error is None


def test_transition_route_replays_seed_before_autostart(router: FakeRouter) -> None:
    demux = _demux(router)
    values: list[Any] = []

    demux.transition_route.subscribe(values.append)

    # Seed first, then the start notification resets it (still nothing in flight).
    assert values == [None, None]
    assert router.started
    assert demux.current_transition_route is None
