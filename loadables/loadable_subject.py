"""
Loadables LoadableSubject - The Producer Side of a Loadable
===========================================================

This module provides LoadableSubject, which holds the current state of a
loadable value and lets the code that manages the value push new states.

A LoadableSubject is intended for the code that owns the value, for example a
data service that fetches an entity whenever the requested entity id changes.
It exposes the same read surface as a LoadableObservable (by delegating to one
it owns), and `as_observable()` returns that read-only view for consumers.

A typical data service looks like this:

    ```python
    class EntityService:
        def __init__(self, client):
            self._client = client
            self._entity = LoadableSubject()
            self.entity = self._entity.as_observable()

        def select(self, entity_id):
            self._entity.load_on(self._client.get_entity(entity_id))
    ```

- When a new id is selected, `set_loading()` is called, telling consumers the
  old value is no longer valid and a new one is on its way.
- When the request emits, `set_loaded(data)` is called and consumers receive
  the new value.
"""

import logging
from typing import Any, Generic, Optional, TypeVar

from reactivex import Observable
from reactivex import operators as ops
from reactivex.abc import DisposableBase
from reactivex.disposable import SerialDisposable, SingleAssignmentDisposable
from reactivex.subject import BehaviorSubject

from .loadable import LOADING, Loadable, Loaded
from .loadable_observable import LoadableObservable
from .operators import LoadableOperator
from .types import ShareMode

T = TypeVar("T")

_NO_DATA: Any = object()


class LoadableSubject(Generic[T]):
    """
    A mutable loadable value.

    Construct with `initial_data` to start loaded, or without it to start
    loading. `None` is a valid initial payload.
    """

    def __init__(self, initial_data: T = _NO_DATA, key: Optional[str] = None) -> None:
        self._key = key or "<unnamed>"
        self._state: Loadable[T] = LOADING if initial_data is _NO_DATA else Loaded(initial_data)
        self._is_stopped = False
        self._pending_load = SerialDisposable()
        self._subject: BehaviorSubject[Loadable[T]] = BehaviorSubject(self._state)
        self._observable = LoadableObservable(self._subject, ShareMode.MULTICAST)

    @property
    def key(self) -> str:
        return self._key

    @property
    def value(self) -> Loadable[T]:
        """The current state."""
        return self._state

    @property
    def is_stopped(self) -> bool:
        """True once `fail()` or `complete()` has been called."""
        return self._is_stopped

    # ============================================================
    # Read surface, delegated to the owned LoadableObservable
    # ============================================================

    @property
    def full_observable(self) -> Observable[Loadable[T]]:
        return self._observable.full_observable

    @property
    def loaded(self) -> Observable[bool]:
        return self._observable.loaded

    @property
    def data(self) -> Observable[T]:
        return self._observable.data

    @property
    def first_data(self) -> Observable[T]:
        return self._observable.first_data

    @property
    def first_data_expect_loaded(self) -> Observable[T]:
        return self._observable.first_data_expect_loaded

    def pipe(self, *operators: LoadableOperator[Any, Any]) -> LoadableObservable[Any]:
        return self._observable.pipe(*operators)

    def as_observable(self) -> LoadableObservable[T]:
        """The read-only view to hand to consumers."""
        return self._observable

    # ============================================================
    # Mutation
    # ============================================================

    def set_loading(self) -> None:
        """Tell consumers the value is now loading."""
        self._push(LOADING)

    def set_loaded(self, data: T) -> None:
        """
        Tell consumers the value is now loaded.

        Args:
            data: The new value
        """
        self._push(Loaded(data))

    def fail(self, error: Exception) -> None:
        """Terminate with an error, delivered to current and future subscribers."""
        self._is_stopped = True
        self._pending_load.dispose()
        self._subject.on_error(error)

    def complete(self) -> None:
        """Terminate normally, delivered to current and future subscribers."""
        self._is_stopped = True
        self._pending_load.dispose()
        self._subject.on_completed()

    def load_on(self, source: Observable[T]) -> DisposableBase:
        """
        Set loading, then load the first value `source` emits.

        Anything the source emits after its first value is ignored. An error
        from the source fails this subject. A load still pending from an
        earlier call is cancelled.

        Args:
            source: An observable expected to emit one value, e.g. a request

        Returns:
            A disposable that cancels the pending load.
        """
        if self._is_stopped:
            logging.debug(f"Ignoring load_on for '{self._key}', it has already terminated")
            return self._pending_load

        loading = SingleAssignmentDisposable()
        self._pending_load.disposable = loading
        self.set_loading()

        received = False

        def on_next(data: T) -> None:
            nonlocal received
            received = True
            self.set_loaded(data)

        def on_completed() -> None:
            if not received:
                logging.warning(
                    f"Source passed to load_on for '{self._key}' completed without a value; "
                    f"it stays loading"
                )

        loading.disposable = source.pipe(ops.take(1)).subscribe(on_next, self.fail, on_completed)
        return loading

    def _push(self, state: Loadable[T]) -> None:
        if self._is_stopped:
            logging.debug(f"Ignoring {state!r} for '{self._key}', it has already terminated")
            return
        self._state = state
        self._subject.on_next(state)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._key!r}, {self._state!r})"
