"""
Loadables Testing Helpers
=========================

Helpers for virtual-time tests of loadable streams with
`reactivex.testing.TestScheduler`.

Source messages are written once as `Loadable` states; the expected messages of
the derived views are computed from them:

    ```python
    source = [on_next(210, LOADING), on_next(220, Loaded("b")), on_completed(230)]
    xs = scheduler.create_hot_observable(source)
    loadable = LoadableObservable(xs, ShareMode.MULTICAST)

    results = scheduler.start(lambda: loadable.data)
    assert results.messages == data_messages(source)
    ```
"""

from typing import Any, Iterable, List, Mapping, Optional

from reactivex.notification import OnNext
from reactivex.testing import ReactiveTest

from .loadable import Loadable, is_loaded

UNEXPECTED_VALUE = "UNEXPECTED VALUE"


def _notifications_since(
    messages: Iterable[Any], subscribed: Optional[float]
) -> List[Any]:
    if subscribed is None:
        return list(messages)
    return [message for message in messages if message.time > subscribed]


def loaded_messages(
    messages: Iterable[Any], subscribed: Optional[float] = None
) -> List[Any]:
    """
    Expected messages of the `loaded` view for the given source messages.

    Args:
        messages: Recorded source messages of `Loadable` states
        subscribed: Drop messages at or before this time (hot sources)
    """
    result = []
    for message in _notifications_since(messages, subscribed):
        if isinstance(message.value, OnNext):
            result.append(ReactiveTest.on_next(message.time, is_loaded(message.value.value)))
        else:
            result.append(message)
    return result


def data_messages(
    messages: Iterable[Any], subscribed: Optional[float] = None
) -> List[Any]:
    """
    Expected messages of the `data` view for the given source messages.

    Args:
        messages: Recorded source messages of `Loadable` states
        subscribed: Drop messages at or before this time (hot sources)
    """
    result = []
    for message in _notifications_since(messages, subscribed):
        if not isinstance(message.value, OnNext):
            result.append(message)
        elif is_loaded(message.value.value):
            result.append(ReactiveTest.on_next(message.time, message.value.value.data))
    return result


def loaded_value_map(values: Mapping[str, Loadable[Any]]) -> dict:
    """Map each named state to whether it is loaded."""
    return {name: is_loaded(loadable) for name, loadable in values.items()}


def data_value_map(values: Mapping[str, Loadable[Any]]) -> dict:
    """Map each named state to its payload, or a marker for loading states."""
    return {
        name: loadable.data if is_loaded(loadable) else UNEXPECTED_VALUE
        for name, loadable in values.items()
    }
