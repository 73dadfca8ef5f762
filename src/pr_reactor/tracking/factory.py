"""
Tracking store factory.

Selects the backend named by the ``tracking_backend`` setting.
"""

import logging

from pr_reactor.config import Settings
from pr_reactor.tracking.base import TrackingStore
from pr_reactor.tracking.database import SqlTrackingStore
from pr_reactor.tracking.memory import InMemoryTrackingStore

logger = logging.getLogger(__name__)


async def create_tracking_store(settings: Settings) -> TrackingStore:
    """
    Create and initialize the configured tracking store.

    Raises:
        ValueError: If ``tracking_backend`` is not "memory" or "database".
    """
    backend = settings.tracking_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory tracking store")
        return InMemoryTrackingStore()
    if backend == "database":
        store = SqlTrackingStore(settings.database_url)
        await store.init()
        logger.info("Using database tracking store")
        return store
    raise ValueError(f"Unknown tracking backend: {settings.tracking_backend!r}")
