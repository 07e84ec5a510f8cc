"""
Resource tracking helpers for loadables tests.

These make it easy to assert that shared connections are made and released
the expected number of times, and that released objects are collectable.

Example:
    >>> from tests.utils.memory_utils import subscription_counter
    >>> source, counts = subscription_counter(upstream)
    >>> subscription = source.subscribe(print)
    >>> counts["subscribed"]
    1
"""

import gc
import weakref
from typing import Any, Dict, Tuple

import reactivex
from reactivex import Observable
from reactivex.disposable import CompositeDisposable, Disposable


def assert_collected(
    ref: "weakref.ref[Any]", description: str = "Object should be cleaned up"
) -> None:
    """Assert that the object behind a weak reference gets garbage collected.

    Args:
        ref: Weak reference to the object under test
        description: Custom description for the assertion failure
    """
    gc.collect()

    assert ref() is None, f"{description}: object was not cleaned up"


def subscription_counter(upstream: Observable[Any]) -> Tuple[Observable[Any], Dict[str, int]]:
    """Wrap an observable so subscriptions and disposals of it are counted.

    Args:
        upstream: The observable to forward to

    Returns:
        The counting observable and the live counts dictionary.
    """
    counts = {"subscribed": 0, "disposed": 0}

    def subscribe(observer, scheduler=None):
        counts["subscribed"] += 1

        def dispose():
            counts["disposed"] += 1

        return CompositeDisposable(upstream.subscribe(observer), Disposable(dispose))

    return reactivex.create(subscribe), counts
