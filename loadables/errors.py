"""
Loadables Errors
================

Exceptions delivered through the error channel of loadable streams.
"""


class LoadableError(Exception):
    """Base class for errors raised by the loadables package."""


class NotLoadedError(LoadableError):
    """
    Raised when `first_data_expect_loaded` is subscribed while the loadable is
    still loading.

    Callers that are happy to wait for the next loaded value should use
    `first_data` instead.
    """

    def __init__(
        self,
        message: str = "Subscribed to first_data_expect_loaded, but the LoadableObservable was not loaded",
    ) -> None:
        super().__init__(message)
