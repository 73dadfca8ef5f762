"""
In-memory tracking store.

Keeps records in a dict keyed by pull request URL. Suitable for tests and
single-process development; records are lost on restart.
"""

import asyncio
import logging

from pydantic import ValidationError

from pr_reactor.errors import TrackingStoreError
from pr_reactor.models.tracking import Insertion, PullRequestUrl, Retraction, TrackingRecord
from pr_reactor.tracking.base import TrackingStore, has_work

logger = logging.getLogger(__name__)


class InMemoryTrackingStore(TrackingStore):
    """Tracking store backed by a process-local dict."""

    def __init__(self) -> None:
        self._items: dict[PullRequestUrl, list[TrackingRecord]] = {}
        self._lock = asyncio.Lock()

    async def list_all(self) -> list[TrackingRecord]:
        async with self._lock:
            return _by_insertion(
                record for records in self._items.values() for record in records
            )

    async def find_by_url(self, url: PullRequestUrl) -> list[TrackingRecord]:
        async with self._lock:
            return _by_insertion(self._items.get(url, []))

    async def reconcile(
        self,
        retraction: Retraction | None = None,
        insertion: Insertion | None = None,
    ) -> None:
        if not has_work(retraction, insertion):
            return

        async with self._lock:
            # Stage both phases on a copy; swap in only if both succeed.
            staged = {url: list(records) for url, records in self._items.items()}
            try:
                if retraction is not None and not retraction.is_empty:
                    _apply_retraction(staged, retraction)
                if insertion is not None and not insertion.is_empty:
                    for record in insertion.to_records():
                        staged.setdefault(record.url, []).append(record)
            except ValidationError as exc:
                logger.error("Rejected tracking store update: %s", exc)
                raise TrackingStoreError("Failed to update tracking records") from exc
            self._items = {url: records for url, records in staged.items() if records}

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        """Close store (no-op for memory store)."""


def _apply_retraction(
    items: dict[PullRequestUrl, list[TrackingRecord]], retraction: Retraction
) -> None:
    for url in set(retraction.urls):
        if url in items:
            items[url] = [record for record in items[url] if not retraction.matches(record)]


def _by_insertion(records) -> list[TrackingRecord]:
    return sorted(records, key=lambda record: record.inserted_at)
