"""Router hook registration and the unified lifecycle event stream."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from routebridge._stream import Observable, Observer, Teardown
from routebridge.config import DEFAULT_HOOK_NAME
from routebridge.exceptions import HookRegistrationError
from routebridge.models.events import LifecycleEvent, LifecycleEventType
from routebridge.models.state import RouterState
from routebridge.router import Router

_logger = logging.getLogger(__name__)


class BridgeHook:
    """Router hook forwarding every lifecycle notification to one callback.

    Each call is tagged and emitted synchronously; nothing is buffered.
    After :meth:`detach` further notifications are dropped, so a router
    that keeps calling a deregistered hook cannot leak events.
    """

    def __init__(self, name: str, emit: Callable[[LifecycleEvent], None]) -> None:
        self.name = name
        self._emit: Callable[[LifecycleEvent], None] | None = emit

    @property
    def attached(self) -> bool:
        return self._emit is not None

    def detach(self) -> None:
        self._emit = None

    def _push(
        self,
        event_type: LifecycleEventType,
        *,
        to_state: Any = None,
        from_state: Any = None,
        error: Any = None,
    ) -> None:
        emit = self._emit
        if emit is None:
            return
        emit(
            LifecycleEvent(
                type=event_type,
                to_state=RouterState.coerce(to_state),
                from_state=RouterState.coerce(from_state),
                error=error,
            )
        )

    def on_start(self) -> None:
        self._push(LifecycleEventType.START)

    def on_stop(self) -> None:
        self._push(LifecycleEventType.STOP)

    def on_transition_start(self, to_state: Any, from_state: Any) -> None:
        self._push(LifecycleEventType.TRANSITION_START, to_state=to_state, from_state=from_state)

    def on_transition_success(self, to_state: Any, from_state: Any) -> None:
        self._push(LifecycleEventType.TRANSITION_SUCCESS, to_state=to_state, from_state=from_state)

    def on_transition_error(self, to_state: Any, from_state: Any, error: Any = None) -> None:
        self._push(LifecycleEventType.TRANSITION_ERROR, to_state=to_state, from_state=from_state, error=error)

    def on_transition_cancel(self, to_state: Any, from_state: Any) -> None:
        self._push(LifecycleEventType.TRANSITION_CANCEL, to_state=to_state, from_state=from_state)


class EventSource(Observable[LifecycleEvent]):
    """Cold stream of router lifecycle events.

    Every subscription registers its own :class:`BridgeHook` and, when
    *autostart* is set and the router is not running, starts the router.
    Disposing the subscription deregisters the hook.
    """

    def __init__(self, router: Router, *, autostart: bool = True, hook_name: str = DEFAULT_HOOK_NAME) -> None:
        super().__init__(self._register)
        self._router = router
        self._autostart = autostart
        self._hook_name = hook_name

    def _register(self, observer: Observer[LifecycleEvent]) -> Teardown | None:
        hook = BridgeHook(self._hook_name, observer.on_next)
        try:
            deregister = self._router.use_plugin(hook)
        except Exception as exc:
            hook.detach()
            _logger.debug("Router rejected hook %s", self._hook_name, exc_info=True)
            observer.on_error(
                HookRegistrationError(
                    f"Could not register router hook {self._hook_name!r}: {exc}",
                    hook_name=self._hook_name,
                )
            )
            return None
        _logger.debug("Registered router hook %s", self._hook_name)

        def teardown() -> None:
            hook.detach()
            if deregister is not None:
                deregister()
            else:
                remove = getattr(self._router, "remove_plugin", None)
                if callable(remove):
                    remove(hook)
            _logger.debug("Deregistered router hook %s", self._hook_name)

        if self._autostart and not self._router.started:
            _logger.debug("Router not started, starting it")
            try:
                self._router.start()
            except Exception:
                teardown()
                raise

        return teardown
