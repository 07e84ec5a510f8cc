"""
Loadables - Shared Loading / Loaded State Streams
=================================================

Models a value that starts out loading and becomes loaded (and possibly back)
as an asynchronous producer updates it, and gives consumers consistent derived
views of it without re-running the producer per consumer.
"""

from .creation import ld_combine_latest, of_loaded, of_loaded_observable
from .errors import LoadableError, NotLoadedError
from .loadable import LOADING, Loadable, Loaded, Loading, are_loaded, is_loaded
from .loadable_observable import LoadableObservable
from .loadable_subject import LoadableSubject
from .operators import ld_filter, ld_map, ld_switch_map
from .types import LoadableSource, ShareMode
from .util import RefCountedShare, ref_counted_share, ref_counted_share_latest

__all__ = [
    # State values
    "Loadable",
    "Loading",
    "Loaded",
    "LOADING",
    "is_loaded",
    "are_loaded",
    # Streams
    "LoadableObservable",
    "LoadableSubject",
    "LoadableSource",
    "ShareMode",
    # Creation functions
    "ld_combine_latest",
    "of_loaded",
    "of_loaded_observable",
    # Operators
    "ld_map",
    "ld_filter",
    "ld_switch_map",
    # Sharing
    "RefCountedShare",
    "ref_counted_share",
    "ref_counted_share_latest",
    # Exceptions
    "LoadableError",
    "NotLoadedError",
]
