"""
Shared pytest fixtures and configuration for loadables tests.
"""

import pytest
import reactivex
from reactivex.testing import TestScheduler


@pytest.fixture
def scheduler():
    """Provide a fresh virtual-time scheduler for each test."""
    return TestScheduler()


@pytest.fixture
def subscribe_at(scheduler):
    """
    Subscribe a mock observer to an observable at a virtual time.

    Returns the observer; its `messages` are filled in once the scheduler runs.
    """

    def _subscribe_at(observable, subscribed, disposed=None):
        observer = scheduler.create_observer()
        subscription = None

        def action_subscribe(_scheduler, _state):
            nonlocal subscription
            subscription = observable.subscribe(observer)

        def action_dispose(_scheduler, _state):
            subscription.dispose()

        scheduler.schedule_absolute(subscribed, action_subscribe)
        if disposed is not None:
            scheduler.schedule_absolute(disposed, action_dispose)
        return observer

    return _subscribe_at


@pytest.fixture
def run(scheduler):
    """Run the virtual clock until nothing is left scheduled."""

    def _run():
        scheduler.start(reactivex.never)

    return _run


@pytest.fixture
def recorder():
    """Collect everything a synchronous subscription delivers."""

    class Recorder:
        def __init__(self):
            self.values = []
            self.errors = []
            self.completed = False

        def on_next(self, value):
            self.values.append(value)

        def on_error(self, error):
            self.errors.append(error)

        def on_completed(self):
            self.completed = True

        def subscribe_to(self, observable):
            return observable.subscribe(self.on_next, self.on_error, self.on_completed)

    return Recorder
