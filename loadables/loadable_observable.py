"""
Loadables LoadableObservable - Shared Views Over a Loadable Stream
==================================================================

This module provides LoadableObservable, which represents the state over time
of a loadable value, i.e. a value that can be loaded and reloaded by some
asynchronous process (most likely an HTTP call).

A LoadableObservable is intended for the code that consumes the loadable
value. It is usually not constructed directly: a service owns a private
`LoadableSubject` and hands out `subject.as_observable()`.

From one stream of `Loadable[T]` states it derives, once, at construction:

- `loaded` - whether each state is loaded
- `data` - the payload of every loaded state
- `first_data` - the next loaded payload, then completion
- `first_data_expect_loaded` - the current payload, failing if still loading

Example:
    ```python
    from loadables import LoadableSubject

    subject = LoadableSubject[str]()
    names = subject.as_observable()

    names.loaded.subscribe(lambda loaded: print("loaded:", loaded))
    names.data.subscribe(lambda name: print("name:", name))

    subject.set_loaded("alice")
    # loaded: True
    # name: alice
    ```
"""

from typing import Any, Generic, Optional, TypeVar, Union

from reactivex import Observable
from reactivex import operators as ops

from .errors import NotLoadedError
from .loadable import Loadable, Loaded, is_loaded
from .operators import LoadableOperator
from .types import ShareMode
from .util import RefCountedShare, ref_counted_share

T = TypeVar("T")
U = TypeVar("U")


def _get_data(loadable: Loaded[T]) -> T:
    return loadable.data


def _expect_loaded(loadable: Loadable[T]) -> T:
    if not is_loaded(loadable):
        raise NotLoadedError()
    return loadable.data


class LoadableObservable(Generic[T]):
    """
    The consumer-facing side of a loadable value.

    All views share one subscription point, `full_observable`, and every view
    applies its own ref-counted share, so N subscribers to `loaded` cost one
    subscription to `full_observable`.

    Attributes:
        full_observable: The underlying stream of `Loadable[T]` states. Prefer
            `loaded`, `data` or `first_data` for most uses.
        loaded: Emits `True`/`False` for every state, e.g. to toggle a loading
            indicator.
        data: Emits the payload of every `Loaded` state; `Loading` states are
            skipped.
        first_data: Emits the next loaded payload and completes. Errors with
            `SequenceContainsNoElementsError` if the stream completes first.
        first_data_expect_loaded: Emits the payload of the first state seen
            and completes, or errors with `NotLoadedError` if that state is
            `Loading`. Use when the value must already be loaded at call time.
    """

    def __init__(
        self,
        source: Observable[Loadable[T]],
        share_mode: Union[ShareMode, bool, str] = ShareMode.REF_COUNT,
    ) -> None:
        """
        Create a LoadableObservable from a stream of `Loadable[T]` states.

        IMPORTANT: You need to know which kind of observable you are passing.

        - A multicast, potentially infinite observable, e.g. a `Subject` or
          something piped through a multicasting operator: pass
          `ShareMode.MULTICAST` (or `True`). If the source is not actually
          multicast, each view subscription gets its own execution of the
          source and the views will not be in sync.
        - A non-multicast observable: pass `ShareMode.REF_COUNT` (or `False`).
          One connection is shared while anything is subscribed, and a fresh
          one is made after everything has unsubscribed.
        - `ShareMode.CONNECT_ONCE` keeps the first connection for the life of
          this object. If the source never completes it is never released.

        Args:
            source: The stream of loadable states
            share_mode: How the source is shared between subscribers

        Raises:
            ValueError: If share_mode does not name a share mode
        """
        self._share_mode = ShareMode.coerce(share_mode)
        self._connection: Optional[RefCountedShare[Loadable[T]]] = None

        if self._share_mode is ShareMode.MULTICAST:
            self.full_observable: Observable[Loadable[T]] = source
        else:
            self._connection = RefCountedShare(
                source,
                keep_alive=self._share_mode is ShareMode.CONNECT_ONCE,
                key="full_observable",
            )
            self.full_observable = self._connection.observable

        self.loaded: Observable[bool] = self.full_observable.pipe(
            ops.map(is_loaded),
            ref_counted_share("loaded"),
        )

        self.data: Observable[T] = self.full_observable.pipe(
            ops.filter(is_loaded),
            ops.map(_get_data),
            ref_counted_share("data"),
        )

        self.first_data: Observable[T] = self.data.pipe(ops.first())

        self.first_data_expect_loaded: Observable[T] = self.full_observable.pipe(
            ops.first(),
            ops.map(_expect_loaded),
        )

    @property
    def share_mode(self) -> ShareMode:
        return self._share_mode

    @property
    def connection(self) -> Optional[RefCountedShare[Loadable[T]]]:
        """The share inserted in front of the source, None for MULTICAST sources."""
        return self._connection

    def pipe(
        self, *operators: LoadableOperator[Any, Any]
    ) -> "LoadableObservable[Any]":
        """
        Apply loadable-to-loadable operators and wrap the result.

        The operators are applied to `full_observable`, which is already a
        shared subscription point, so the result is declared MULTICAST.
        Operators are expected to be element-wise (e.g. `ld_map`, `ld_filter`).

        Returns:
            A new LoadableObservable over the transformed states.
        """
        return LoadableObservable(self.full_observable.pipe(*operators), ShareMode.MULTICAST)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(share_mode={self._share_mode.value})"
