"""
Abstract base class for tracking store implementations.

A tracking store owns the mapping from pull request URL to the Slack messages
that mentioned it. Implementations must serialize conflicting writes and make
``reconcile`` atomic: readers never observe a half-applied edit.
"""

from abc import ABC, abstractmethod

from pr_reactor.models.tracking import Insertion, PullRequestUrl, Retraction, TrackingRecord


class TrackingStore(ABC):
    """Abstract base class for tracking record storage backends."""

    @abstractmethod
    async def list_all(self) -> list[TrackingRecord]:
        """Return every live tracking record."""

    @abstractmethod
    async def find_by_url(self, url: PullRequestUrl) -> list[TrackingRecord]:
        """Return the records whose URL equals ``url`` exactly."""

    async def insert_all(self, insertion: Insertion) -> None:
        """
        Create one fresh record per URL in ``insertion``.

        An empty insertion is a no-op and never touches the backend.

        Raises:
            TrackingStoreError: If the write failed; no rows are kept.
        """
        await self.reconcile(insertion=insertion)

    async def delete_all(self, retraction: Retraction) -> None:
        """
        Remove records whose URL is in ``retraction.urls`` and whose channel
        AND timestamp both equal ``retraction.location``.

        An empty retraction is a no-op and never touches the backend.

        Raises:
            TrackingStoreError: If the delete failed; nothing is removed.
        """
        await self.reconcile(retraction=retraction)

    @abstractmethod
    async def reconcile(
        self,
        retraction: Retraction | None = None,
        insertion: Insertion | None = None,
    ) -> None:
        """
        Apply a retraction then an insertion as one atomic unit.

        Either side may be None or empty; with a single side populated this
        behaves as that side's own operation.

        Raises:
            TrackingStoreError: If either phase failed. Neither phase is applied.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the storage backend is reachable.

        Returns:
            True if healthy, False otherwise
        """

    @abstractmethod
    async def close(self) -> None:
        """Close connections and cleanup resources."""


def has_work(retraction: Retraction | None, insertion: Insertion | None) -> bool:
    """True when at least one side carries URLs."""
    return bool(
        (retraction is not None and not retraction.is_empty)
        or (insertion is not None and not insertion.is_empty)
    )
