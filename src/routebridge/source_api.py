"""Read-only router queries, forwarded verbatim."""

from __future__ import annotations

from typing import Any

from routebridge.router import Router


class SourceAPI:
    """Stateless passthrough of the router's query methods.

    Arguments and results are forwarded unchanged; nothing is validated
    or cached.
    """

    def __init__(self, router: Router) -> None:
        self._router = router

    def get_state(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.get_state(*args, **kwargs)

    def build_url(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.build_url(*args, **kwargs)

    def build_path(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.build_path(*args, **kwargs)

    def match_url(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.match_url(*args, **kwargs)

    def match_path(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.match_path(*args, **kwargs)

    def are_states_descendants(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.are_states_descendants(*args, **kwargs)

    def is_active(self, *args: Any, **kwargs: Any) -> Any:
        return self._router.is_active(*args, **kwargs)
