"""
Loadables Operators
===================

Element-wise operators over streams of `Loadable` states. `Loading` states
pass through untouched and only `Loaded` payloads are transformed, so these
compose with `LoadableObservable.pipe()`:

    ```python
    names = users.pipe(ld_map(lambda user, _: user.name))
    ```

The projection and predicate functions receive `(data, index)`, where `index`
counts every upstream state, loading ones included.
"""

from typing import Callable, TypeVar

import reactivex
from reactivex import Observable
from reactivex import operators as ops

from .loadable import LOADING, Loadable, Loaded, is_loaded

T = TypeVar("T")
R = TypeVar("R")

LoadableOperator = Callable[[Observable[Loadable[T]]], Observable[Loadable[R]]]


def ld_map(project: Callable[[T, int], R]) -> LoadableOperator[T, R]:
    """Map the payload of every `Loaded` state."""

    def _map(loadable: Loadable[T], index: int) -> Loadable[R]:
        if not is_loaded(loadable):
            return LOADING
        return Loaded(project(loadable.data, index))

    def _ld_map(source: Observable[Loadable[T]]) -> Observable[Loadable[R]]:
        return source.pipe(ops.map_indexed(_map))

    return _ld_map


def ld_filter(predicate: Callable[[T, int], bool]) -> LoadableOperator[T, T]:
    """Drop `Loaded` states whose payload does not satisfy the predicate."""

    def _filter(loadable: Loadable[T], index: int) -> bool:
        if not is_loaded(loadable):
            return True
        return predicate(loadable.data, index)

    def _ld_filter(source: Observable[Loadable[T]]) -> Observable[Loadable[T]]:
        return source.pipe(ops.filter_indexed(_filter))

    return _ld_filter


def ld_switch_map(
    project: Callable[[T, int], Observable[Loadable[R]]],
) -> LoadableOperator[T, R]:
    """
    Switch to a new loadable stream for every `Loaded` payload.

    A `Loading` state unsubscribes from the current inner stream and emits a
    single `Loading`. A `Loaded` state unsubscribes from the current inner
    stream and subscribes to `project(data, index)`.
    """

    def _select(loadable: Loadable[T], index: int) -> Observable[Loadable[R]]:
        if not is_loaded(loadable):
            return reactivex.of(LOADING)
        return project(loadable.data, index)

    def _ld_switch_map(source: Observable[Loadable[T]]) -> Observable[Loadable[R]]:
        return source.pipe(ops.map_indexed(_select), ops.switch_latest())

    return _ld_switch_map
