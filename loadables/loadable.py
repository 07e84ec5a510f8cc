"""
Loadables Loadable - The Loading / Loaded State Value
=====================================================

This module provides the basic building block of the loadables abstraction: a
closed tagged union describing whether a value is still loading or has been
loaded.

A `Loadable[T]` is exactly one of:

- `Loading()` - no payload, the value is not available yet
- `Loaded(data)` - the value is available and carried in `data`

Discrimination is always done with `is_loaded()` (an `isinstance` guard), never
by inspecting the payload, so a `Loaded(0)` or a `Loaded(None)` is still loaded.

Example:
    ```python
    from loadables import Loaded, Loading, is_loaded

    state = Loaded("alice")
    if is_loaded(state):
        print(state.data)  # "alice"

    is_loaded(Loading())  # False
    ```
"""

from dataclasses import dataclass
from typing import Generic, Iterable, TypeGuard, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Loading:
    """The value is being loaded and has no payload."""

    def __repr__(self) -> str:
        return "Loading()"


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """The value is loaded and carries its payload in `data`."""

    data: T


Loadable = Union[Loading, Loaded[T]]

LOADING = Loading()


def is_loaded(loadable: "Loadable[T]") -> TypeGuard[Loaded[T]]:
    """
    Check whether a loadable is in the `Loaded` state.

    This is a type guard, so in branches where it has passed the loadable is
    narrowed to `Loaded[T]` and `loadable.data` can be accessed safely.

    Args:
        loadable: The state value to check

    Returns:
        True if the loadable is `Loaded`, False if it is `Loading`.
    """
    return isinstance(loadable, Loaded)


def are_loaded(loadables: Iterable["Loadable[T]"]) -> bool:
    """Check whether every loadable is `Loaded`. True for an empty collection."""
    return all(is_loaded(loadable) for loadable in loadables)
