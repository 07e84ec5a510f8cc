"""
Loadables Types - Share Modes and the Consumer Protocol
=======================================================

This module contains the small set of types shared across the package:

- `ShareMode` - how a `LoadableObservable` shares its source between consumers
- `LoadableSource` - the read surface every loadable exposes to consumers

`LoadableObservable` and `LoadableSubject` both satisfy `LoadableSource`, which
is what `ld_combine_latest` and consumer code should depend on.
"""

from enum import Enum
from typing import Protocol, TypeVar, Union, runtime_checkable

from reactivex import Observable

from .loadable import Loadable

T_co = TypeVar("T_co", covariant=True)


class ShareMode(Enum):
    """
    How a `LoadableObservable` turns its source into a single subscription point.

    MULTICAST:
        The source is already safely shared (a `Subject`, or something piped
        through a multicasting operator). It is used as-is. If the source is
        not actually multicast, every consumer re-executes it.
    REF_COUNT:
        The source would re-execute per subscription. A ref-counted share
        connects on the first consumer, disconnects when the last one leaves,
        and reconnects fresh on the next attachment.
    CONNECT_ONCE:
        Like REF_COUNT, but the connection is kept for the lifetime of the
        wrapper once made. A source that never completes stays subscribed.
    """

    MULTICAST = "multicast"
    REF_COUNT = "ref_count"
    CONNECT_ONCE = "connect_once"

    @classmethod
    def coerce(cls, value: Union["ShareMode", bool, str]) -> "ShareMode":
        """
        Normalise a share mode argument.

        Booleans follow the `source_is_multicast` convention: True means
        MULTICAST and False means REF_COUNT.

        Raises:
            ValueError: If the value does not name a share mode
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.MULTICAST if value else cls.REF_COUNT
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown share mode: {value!r}") from None


@runtime_checkable
class LoadableSource(Protocol[T_co]):
    """The consumer-facing surface of a loadable value."""

    @property
    def full_observable(self) -> Observable[Loadable[T_co]]: ...

    @property
    def loaded(self) -> Observable[bool]: ...

    @property
    def data(self) -> Observable[T_co]: ...

    @property
    def first_data(self) -> Observable[T_co]: ...

    @property
    def first_data_expect_loaded(self) -> Observable[T_co]: ...
