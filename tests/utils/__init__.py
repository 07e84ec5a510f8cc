"""
Test utilities for loadables.
"""

from .memory_utils import assert_collected, subscription_counter

__all__ = [
    "assert_collected",
    "subscription_counter",
]
