"""FastAPI dependencies resolving shared collaborators from application state.

The lifespan in ``pr_reactor.app`` installs the clock and tracking store on
``app.state``; tests swap them through ``app.dependency_overrides``.
"""

from fastapi import Request

from pr_reactor.clock import LiveClock
from pr_reactor.tracking.base import TrackingStore


def get_clock(request: Request) -> LiveClock:
    """Return the clock used for timestamp freshness checks."""
    clock = getattr(request.app.state, "clock", None)
    if clock is None:
        clock = LiveClock()
        request.app.state.clock = clock
    return clock


def get_tracking_store(request: Request) -> TrackingStore:
    """Return the tracking store created at startup."""
    store = getattr(request.app.state, "tracking_store", None)
    if store is None:
        raise RuntimeError("Tracking store not initialized. Is the app lifespan running?")
    return store
