"""The router surface the bridge consumes.

The bridge never constructs or owns a router.  Any object providing
these members works; router states may be :class:`RouterState`
instances or plain mappings with ``name``/``params`` keys.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class RouterHook(Protocol):
    """Hook object registered through :meth:`Router.use_plugin`.

    Every handler is optional from the router's point of view; the
    bridge's hook implements all of them.
    """

    name: str

    def on_start(self) -> None: ...

    def on_stop(self) -> None: ...

    def on_transition_start(self, to_state: Any, from_state: Any) -> None: ...

    def on_transition_success(self, to_state: Any, from_state: Any) -> None: ...

    def on_transition_error(self, to_state: Any, from_state: Any, error: Any) -> None: ...

    def on_transition_cancel(self, to_state: Any, from_state: Any) -> None: ...


class Router(Protocol):
    """Hierarchical router consumed by the bridge."""

    @property
    def started(self) -> bool: ...

    def use_plugin(self, hook: RouterHook) -> Callable[[], None] | None:
        """Register *hook*; return a callable that deregisters it."""
        ...

    # Queries
    def get_state(self) -> Any: ...

    def build_url(self, *args: Any, **kwargs: Any) -> Any: ...

    def build_path(self, *args: Any, **kwargs: Any) -> Any: ...

    def match_url(self, *args: Any, **kwargs: Any) -> Any: ...

    def match_path(self, *args: Any, **kwargs: Any) -> Any: ...

    def are_states_descendants(self, *args: Any, **kwargs: Any) -> Any: ...

    def is_active(self, *args: Any, **kwargs: Any) -> Any: ...

    # Commands
    def navigate(self, *args: Any) -> Any: ...

    def cancel(self, *args: Any) -> Any: ...

    def start(self, *args: Any) -> Any: ...

    def stop(self, *args: Any) -> Any: ...

    def can_activate(self, *args: Any) -> Any: ...

    def can_deactivate(self, *args: Any) -> Any: ...
