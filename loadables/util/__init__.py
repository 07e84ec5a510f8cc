"""
Loadables Utilities
===================

Sharing primitives used by every loadable stream.
"""

from .ref_count import RefCountedShare, ref_counted_share, ref_counted_share_latest

__all__ = [
    "RefCountedShare",
    "ref_counted_share",
    "ref_counted_share_latest",
]
