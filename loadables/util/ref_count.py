"""
Ref-Counted Share
=================

This module provides RefCountedShare, the single connection object every
loadable stream is shared through, and the pipeable operators built on it.

A RefCountedShare sits between one upstream observable and any number of
downstream observers:

- the first attachment creates a subject and connects it to the upstream
- later attachments subscribe to that same subject
- when the last attachment is disposed the upstream subscription is disposed
- the next attachment after that creates a fresh subject and connection

With `keep_alive=True` the connection, once made, is never torn down by
detachment and a terminated upstream is not reconnected. Late observers then
receive the terminal signal straight away.

With `replay_latest=True` a completed connection is likewise kept, so late
observers receive the last element and the completion without a new run of
the upstream.

Example:
    ```python
    import reactivex
    from loadables.util import ref_counted_share

    shared = reactivex.interval(1.0).pipe(ref_counted_share())

    first = shared.subscribe(print)   # connects
    second = shared.subscribe(print)  # shares the connection
    first.dispose()
    second.dispose()                  # disconnects
    ```
"""

import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

import reactivex
from reactivex import Observable, abc
from reactivex.disposable import Disposable, SingleAssignmentDisposable
from reactivex.subject import ReplaySubject, Subject

T = TypeVar("T")


class RefCountedShare(Generic[T]):
    """
    Share one upstream subscription between all subscribers of `observable`.

    Attributes:
        observable: The shared observable consumers subscribe to.
    """

    def __init__(
        self,
        source: Observable[T],
        *,
        replay_latest: bool = False,
        keep_alive: bool = False,
        key: Optional[str] = None,
    ) -> None:
        self._source = source
        self._replay_latest = replay_latest
        self._keep_alive = keep_alive
        self._key = key or "<unnamed>"
        self._lock = threading.RLock()
        self._subscriber_count = 0
        self._connection_count = 0
        self._subject: Optional[Subject[T]] = None
        self._connection: Optional[SingleAssignmentDisposable] = None
        self._completed = False
        self.observable: Observable[T] = reactivex.create(self._subscribe)

    @property
    def key(self) -> str:
        return self._key

    @property
    def subscriber_count(self) -> int:
        """Number of live downstream subscriptions."""
        with self._lock:
            return self._subscriber_count

    @property
    def connection_count(self) -> int:
        """Number of upstream connections made so far."""
        with self._lock:
            return self._connection_count

    @property
    def is_connected(self) -> bool:
        with self._lock:
            return self._connection is not None

    def _create_subject(self) -> Subject[T]:
        if self._replay_latest:
            return ReplaySubject(1)
        return Subject()

    def _subscribe(
        self,
        observer: abc.ObserverBase[T],
        scheduler: Optional[abc.SchedulerBase] = None,
    ) -> abc.DisposableBase:
        with self._lock:
            self._subscriber_count += 1

            if self._subject is None:
                self._subject = self._create_subject()
            subject = self._subject

            # Subscribe before connecting so synchronous sources are not missed
            inner = subject.subscribe(observer)

            if self._connection is None:
                self._connect(subject)

        def dispose() -> None:
            inner.dispose()
            with self._lock:
                self._subscriber_count -= 1
                # A completed replaying connection is kept for late subscribers
                if self._subscriber_count == 0 and not (self._keep_alive or self._completed):
                    self._disconnect()

        return Disposable(dispose)

    def _connect(self, subject: Subject[T]) -> None:
        connection = SingleAssignmentDisposable()
        self._connection = connection
        self._connection_count += 1

        if self._keep_alive:
            logging.debug(
                f"'{self._key}' connected for the lifetime of the share; "
                f"an upstream that never completes stays subscribed"
            )
        else:
            logging.debug(f"'{self._key}' connected (connection {self._connection_count})")

        def on_error(error: Exception) -> None:
            self._reset(connection)
            subject.on_error(error)

        def on_completed() -> None:
            if self._replay_latest:
                with self._lock:
                    if self._connection is connection:
                        self._completed = True
            else:
                self._reset(connection)
            subject.on_completed()

        connection.disposable = self._source.subscribe(
            subject.on_next, on_error, on_completed
        )

    def _reset(self, connection: SingleAssignmentDisposable) -> None:
        """Forget a terminated connection so the next attachment reconnects."""
        if self._keep_alive:
            return
        with self._lock:
            if self._connection is connection:
                self._connection = None
                self._subject = None

    def _disconnect(self) -> None:
        connection, self._connection = self._connection, None
        self._subject = None
        if connection is not None:
            logging.debug(f"'{self._key}' disconnected, no subscribers left")
            connection.dispose()


def ref_counted_share(
    key: Optional[str] = None,
) -> Callable[[Observable[T]], Observable[T]]:
    """
    Share a source between subscribers, connecting on the first subscription
    and disconnecting when the last one is disposed.
    """

    def _ref_counted_share(source: Observable[T]) -> Observable[T]:
        return RefCountedShare(source, key=key).observable

    return _ref_counted_share


def ref_counted_share_latest(
    key: Optional[str] = None,
) -> Callable[[Observable[T]], Observable[T]]:
    """
    Like `ref_counted_share`, but late subscribers immediately receive the most
    recent element while the connection is alive. Once the source completes,
    the last element and the completion are replayed to every later
    subscriber without re-subscribing to the source.
    """

    def _ref_counted_share_latest(source: Observable[T]) -> Observable[T]:
        return RefCountedShare(source, replay_latest=True, key=key).observable

    return _ref_counted_share_latest
