"""Minimal synchronous push streams.

The bridge is driven entirely by router callbacks, so streams here are
synchronous: ``on_next`` runs on the call stack of whoever emitted.
There is no scheduler and no threading.

* :class:`Observable` is cold: the subscribe function runs once per
  subscriber and returns a teardown.
* :class:`Subject` broadcasts to whoever is attached right now.
* :class:`StateSubject` keeps the last value and hands it to every new
  subscriber before live values.
* :meth:`Observable.share` ref-counts one upstream connection between
  all subscribers.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")

Teardown = Callable[[], None]


class Subscription:
    """Disposable handle returned by :meth:`Observable.subscribe`.

    Disposal is idempotent; teardowns run once, most recent first.
    """

    def __init__(self, teardown: Teardown | Subscription | None = None) -> None:
        self._teardowns: list[Teardown] = []
        self._disposed = False
        self.add(teardown)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add(self, teardown: Teardown | Subscription | None) -> None:
        if teardown is None:
            return
        fn = teardown.dispose if isinstance(teardown, Subscription) else teardown
        if self._disposed:
            fn()
            return
        self._teardowns.append(fn)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        teardowns, self._teardowns = self._teardowns, []
        for fn in reversed(teardowns):
            fn()

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.dispose()


class Observer(Generic[T]):
    """Receiver of stream notifications.

    After ``on_error``/``on_completed`` (or disposal) further
    notifications are ignored.  An error with no handler is raised to
    the emitter.
    """

    def __init__(
        self,
        on_next: Callable[[T], Any] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        on_completed: Callable[[], Any] | None = None,
    ) -> None:
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed
        self._stopped = False
        self._on_stop: list[Teardown] = []

    @property
    def stopped(self) -> bool:
        return self._stopped

    def on_next(self, value: T) -> None:
        if self._stopped or self._on_next is None:
            return
        self._on_next(value)

    def on_error(self, error: BaseException) -> None:
        if self._stopped:
            return
        self._stopped = True
        try:
            if self._on_error is None:
                raise error
            self._on_error(error)
        finally:
            self._run_on_stop()

    def on_completed(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        try:
            if self._on_completed is not None:
                self._on_completed()
        finally:
            self._run_on_stop()

    def close(self) -> None:
        """Stop receiving without notifying the handlers."""
        self._stopped = True
        self._run_on_stop()

    def _run_on_stop(self) -> None:
        callbacks, self._on_stop = self._on_stop, []
        for callback in callbacks:
            callback()


def _as_observer(
    on_next: Callable[[Any], Any] | Observer[Any] | None,
    on_error: Callable[[BaseException], Any] | None,
    on_completed: Callable[[], Any] | None,
) -> Observer[Any]:
    if isinstance(on_next, Observer):
        return on_next
    return Observer(on_next, on_error, on_completed)


class Observable(Generic[T]):
    """A cold stream defined by a subscribe function.

    The subscribe function receives an :class:`Observer` and may return a
    teardown callable (or a :class:`Subscription`) run on disposal.
    """

    def __init__(self, subscribe_fn: Callable[[Observer[T]], Teardown | Subscription | None]) -> None:
        self._subscribe_fn = subscribe_fn

    def subscribe(
        self,
        on_next: Callable[[T], Any] | Observer[T] | None = None,
        on_error: Callable[[BaseException], Any] | None = None,
        on_completed: Callable[[], Any] | None = None,
    ) -> Subscription:
        observer = _as_observer(on_next, on_error, on_completed)
        subscription = Subscription(observer.close)
        observer._on_stop.append(subscription.dispose)  # noqa: SLF001
        try:
            teardown = self._subscribe_fn(observer)
        except Exception as exc:
            if observer.stopped:
                # Already delivered (or raised by an observer without an error handler).
                raise
            observer.on_error(exc)
            return subscription
        subscription.add(teardown)
        return subscription

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> Observable[T]:
        """Emit every item of *items* on subscription, then complete."""

        def subscribe(observer: Observer[T]) -> None:
            try:
                for item in items:
                    if observer.stopped:
                        return
                    observer.on_next(item)
            except Exception as exc:
                observer.on_error(exc)
                return
            observer.on_completed()

        return cls(subscribe)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def map(self, fn: Callable[[T], R]) -> Observable[R]:
        def subscribe(observer: Observer[R]) -> Subscription:
            return self.subscribe(lambda value: observer.on_next(fn(value)), observer.on_error, observer.on_completed)

        return Observable(subscribe)

    def filter(self, predicate: Callable[[T], bool]) -> Observable[T]:
        def on_value(observer: Observer[T], value: T) -> None:
            if predicate(value):
                observer.on_next(value)

        def subscribe(observer: Observer[T]) -> Subscription:
            return self.subscribe(lambda value: on_value(observer, value), observer.on_error, observer.on_completed)

        return Observable(subscribe)

    def start_with(self, *values: T) -> Observable[T]:
        """Emit *values* on subscription before anything from upstream."""
        return self.start_with_call(lambda: values)

    def start_with_call(self, factory: Callable[[], Iterable[T]]) -> Observable[T]:
        """Like :meth:`start_with`, but the seed values are computed at subscribe time."""

        def subscribe(observer: Observer[T]) -> Subscription | None:
            for value in factory():
                if observer.stopped:
                    return None
                observer.on_next(value)
            return self.subscribe(observer.on_next, observer.on_error, observer.on_completed)

        return Observable(subscribe)

    def share(self) -> Observable[T]:
        """Share one upstream connection between all current subscribers.

        The first subscriber connects, the last disposal disconnects.  A
        later subscriber reconnects.
        """
        return _RefCounted(self)

    def tap(self, fn: Callable[[T], Any]) -> Observable[T]:
        """Call *fn* with every value before passing it downstream."""

        def on_value(observer: Observer[T], value: T) -> None:
            fn(value)
            observer.on_next(value)

        def subscribe(observer: Observer[T]) -> Subscription:
            return self.subscribe(lambda value: on_value(observer, value), observer.on_error, observer.on_completed)

        return Observable(subscribe)


class Subject(Observable[T]):
    """Broadcasts notifications to every attached observer.

    Observers attached after a terminal notification receive it
    immediately.  The observer list is copied before each broadcast, so
    observers may attach or detach while a value is being delivered.
    """

    def __init__(self) -> None:
        super().__init__(self._attach)
        self._observers: list[Observer[T]] = []
        self._error: BaseException | None = None
        self._completed = False

    @property
    def has_observers(self) -> bool:
        return bool(self._observers)

    @property
    def is_stopped(self) -> bool:
        return self._completed or self._error is not None

    def _attach(self, observer: Observer[T]) -> Teardown | None:
        if self._error is not None:
            observer.on_error(self._error)
            return None
        if self._completed:
            observer.on_completed()
            return None
        self._observers.append(observer)

        def detach() -> None:
            with contextlib.suppress(ValueError):
                self._observers.remove(observer)

        return detach

    def on_next(self, value: T) -> None:
        if self.is_stopped:
            return
        for observer in list(self._observers):
            observer.on_next(value)

    def on_error(self, error: BaseException) -> None:
        if self.is_stopped:
            return
        self._error = error
        observers, self._observers = self._observers, []
        for observer in observers:
            observer.on_error(error)

    def on_completed(self) -> None:
        if self.is_stopped:
            return
        self._completed = True
        observers, self._observers = self._observers, []
        for observer in observers:
            observer.on_completed()


class StateSubject(Subject[T]):
    """Subject with a last-value cache.

    Every observer first receives the current value, then live values.
    """

    def __init__(self, value: T) -> None:
        super().__init__()
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def _attach(self, observer: Observer[T]) -> Teardown | None:
        detach = super()._attach(observer)
        if detach is not None:
            observer.on_next(self._value)
        return detach

    def on_next(self, value: T) -> None:
        if self.is_stopped:
            return
        self._value = value
        super().on_next(value)


class _RefCounted(Observable[T]):
    def __init__(self, source: Observable[T]) -> None:
        super().__init__(self._attach)
        self._source = source
        self._subject: Subject[T] | None = None
        self._connection: Subscription | None = None
        self._refcount = 0

    def _attach(self, observer: Observer[T]) -> Teardown:
        if self._subject is None:
            self._subject = Subject()
        subject = self._subject
        inner = subject.subscribe(observer)
        self._refcount += 1

        def teardown() -> None:
            inner.dispose()
            self._refcount -= 1
            if self._refcount == 0:
                connection, self._connection = self._connection, None
                self._subject = None
                if connection is not None:
                    connection.dispose()

        if self._refcount == 1:
            try:
                self._connection = self._source.subscribe(subject.on_next, subject.on_error, subject.on_completed)
            except Exception:
                teardown()
                raise
        return teardown
