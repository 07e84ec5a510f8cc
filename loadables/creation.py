"""
Loadables Creation Functions
============================

Functions that build new LoadableObservables:

- `ld_combine_latest` - gate several loadables on all of them being loaded
- `of_loaded` / `of_loaded_observable` - wrap plain values as loaded states,
  mostly useful in unit tests
"""

from typing import Any, Sequence, Tuple, TypeVar

import reactivex
from reactivex import Observable
from reactivex import operators as ops

from .loadable import LOADING, Loadable, Loaded, are_loaded
from .loadable_observable import LoadableObservable
from .types import LoadableSource, ShareMode

T = TypeVar("T")


def _combine_states(states: Sequence[Loadable[Any]]) -> Loadable[Tuple[Any, ...]]:
    if are_loaded(states):
        return Loaded(tuple(state.data for state in states))
    return LOADING


def ld_combine_latest(*sources: LoadableSource[Any]) -> LoadableObservable[Tuple[Any, ...]]:
    """
    Combine several loadables into one that is loaded only when all of them are.

    Every state emitted by any source (once each source has emitted at least
    once) re-evaluates the latest state of all sources. If they are all
    `Loaded` the result is `Loaded` with a tuple of their payloads in argument
    order, otherwise it is `Loading`. The result therefore drops back to
    `Loading` as soon as any single source does.

    The combination completes once every source has completed, and errors as
    soon as any source errors.

    Example:
        ```python
        user_and_settings = ld_combine_latest(user, settings)
        user_and_settings.data.subscribe(lambda pair: render(*pair))
        ```

    Args:
        *sources: The loadables to combine. At least one must be provided.

    Returns:
        A LoadableObservable of tuples, shared with a ref-counted connection.

    Raises:
        ValueError: If no sources are provided
    """
    if not sources:
        raise ValueError("At least one loadable must be provided for combining")

    combined = reactivex.combine_latest(
        *(source.full_observable for source in sources)
    ).pipe(ops.map(_combine_states))

    return LoadableObservable(combined, ShareMode.REF_COUNT)


def of_loaded_observable(observable: Observable[T]) -> LoadableObservable[T]:
    """Wrap an observable of plain values, emitting each one as `Loaded`."""
    return LoadableObservable(observable.pipe(ops.map(Loaded)), ShareMode.REF_COUNT)


def of_loaded(*items: T) -> LoadableObservable[T]:
    """
    Create a LoadableObservable that emits each item as `Loaded`, then completes.

    A simple way to stand in for a service's loadable in unit tests.
    """
    return of_loaded_observable(reactivex.of(*items))
