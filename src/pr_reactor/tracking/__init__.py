"""Tracking store: which Slack messages mention which pull requests."""

from pr_reactor.tracking.base import TrackingStore
from pr_reactor.tracking.database import SqlTrackingStore
from pr_reactor.tracking.factory import create_tracking_store
from pr_reactor.tracking.memory import InMemoryTrackingStore

__all__ = [
    "create_tracking_store",
    "InMemoryTrackingStore",
    "SqlTrackingStore",
    "TrackingStore",
]
