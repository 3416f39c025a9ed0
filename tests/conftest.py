from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from routebridge.models.state import RouterState, name_to_ids


def make_state(name: str, *, meta: bool = True, **params: Any) -> RouterState:
    """Build a state whose leaf segment owns every param."""
    meta_params: dict[str, dict[str, str]] = {}
    if meta:
        meta_params = {segment: {} for segment in name_to_ids(name)}
        if name:
            meta_params[name] = {key: "url" for key in params}
    return RouterState(
        name=name,
        params=params,
        path="/" + name.replace(".", "/"),
        meta={"params": meta_params} if meta else None,
    )


class FakeRouter:
    """In-memory router honouring the hook contract the bridge relies on."""

    def __init__(
        self,
        *,
        started: bool = False,
        state: Any = None,
        unique_plugin_names: bool = True,
        start_state: Any = None,
    ) -> None:
        self.started = started
        self.state = state
        self.unique_plugin_names = unique_plugin_names
        self.start_state = start_state
        self.plugins: list[Any] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    # Hook registration

    def use_plugin(self, hook: Any) -> Callable[[], None]:
        if self.unique_plugin_names and any(p.name == hook.name for p in self.plugins):
            raise ValueError(f"plugin {hook.name} already registered")
        self.plugins.append(hook)

        def remove() -> None:
            self.plugins.remove(hook)

        return remove

    def _notify(self, handler: str, *args: Any) -> None:
        for plugin in list(self.plugins):
            getattr(plugin, handler)(*args)

    # Commands

    def start(self, *args: Any) -> None:
        self.calls.append(("start", args))
        self.started = True
        self._notify("on_start")
        if self.start_state is not None:
            self.succeed(self.start_state)

    def stop(self, *args: Any) -> None:
        self.calls.append(("stop", args))
        self.started = False
        self._notify("on_stop")

    def navigate(self, *args: Any) -> None:
        self.calls.append(("navigate", args))

    def cancel(self, *args: Any) -> None:
        self.calls.append(("cancel", args))

    def can_activate(self, *args: Any) -> None:
        self.calls.append(("can_activate", args))

    def can_deactivate(self, *args: Any) -> None:
        self.calls.append(("can_deactivate", args))

    # Queries

    def get_state(self) -> Any:
        return self.state

    def build_url(self, name: str, params: Any = None) -> str:
        self.calls.append(("build_url", (name, params)))
        return "/" + name.replace(".", "/")

    def build_path(self, name: str, params: Any = None) -> str:
        self.calls.append(("build_path", (name, params)))
        return "/" + name.replace(".", "/")

    def match_url(self, url: str) -> dict[str, Any]:
        self.calls.append(("match_url", (url,)))
        return {"name": url.strip("/").replace("/", "."), "params": {}}

    def match_path(self, path: str, source: Any = None) -> dict[str, Any]:
        self.calls.append(("match_path", (path, source)))
        return {"name": path.strip("/").replace("/", "."), "params": {}}

    def are_states_descendants(self, parent: Any, child: Any) -> bool:
        self.calls.append(("are_states_descendants", (parent, child)))
        return bool(child["name"].startswith(parent["name"] + "."))

    def is_active(self, name: str, params: Any = None, *, strict_equality: bool = False) -> bool:
        self.calls.append(("is_active", (name, params, strict_equality)))
        return strict_equality

    # Simulated transitions

    def begin(self, to_state: Any) -> None:
        self._notify("on_transition_start", to_state, self.state)

    def succeed(self, to_state: Any) -> None:
        from_state, self.state = self.state, to_state
        self._notify("on_transition_success", to_state, from_state)

    def fail(self, to_state: Any, error: Any) -> None:
        self._notify("on_transition_error", to_state, self.state, error)

    def abort(self, to_state: Any) -> None:
        self._notify("on_transition_cancel", to_state, self.state)


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter()


@pytest.fixture
def started_router() -> FakeRouter:
    return FakeRouter(started=True)
