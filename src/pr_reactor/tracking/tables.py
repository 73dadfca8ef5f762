"""
SQLAlchemy ORM model for persisted tracking records.

One row per (id, url, inserted_at, channel, timestamp). ``id`` is never used
in a lookup predicate; queries go through the url index or the
(channel, timestamp) index.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, String, Uuid
from sqlalchemy.orm import DeclarativeBase

from pr_reactor.models.tracking import TrackingRecord


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class PullRequestRow(Base):
    """A pull request URL mentioned in one Slack message."""

    __tablename__ = "pull_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    url = Column(String(500), nullable=False, index=True)
    inserted_at = Column(DateTime(timezone=True), nullable=False)
    channel = Column(String(64), nullable=False)
    timestamp = Column(String(32), nullable=False)

    __table_args__ = (
        Index("ix_pull_requests_channel_timestamp", "channel", "timestamp"),
    )

    @classmethod
    def from_record(cls, record: TrackingRecord) -> "PullRequestRow":
        return cls(
            id=record.id,
            url=record.url,
            inserted_at=record.inserted_at,
            channel=record.channel,
            timestamp=record.timestamp,
        )

    def to_record(self) -> TrackingRecord:
        inserted_at = self.inserted_at
        # SQLite drops tzinfo on the way back; values are always written in UTC.
        if inserted_at.tzinfo is None:
            inserted_at = inserted_at.replace(tzinfo=timezone.utc)
        return TrackingRecord(
            id=self.id,
            url=self.url,
            channel=self.channel,
            timestamp=self.timestamp,
            inserted_at=inserted_at,
        )

    def __repr__(self) -> str:
        return (
            f"<PullRequestRow(id={self.id}, url='{self.url}', "
            f"channel='{self.channel}', timestamp='{self.timestamp}')>"
        )
