"""Tracking record model: which Slack message mentioned which pull request."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Canonical pull request web URL, e.g. "https://github.com/acme/widgets/pull/42"
PullRequestUrl = str


class ChatLocation(BaseModel):
    """A Slack message, identified by its channel and message timestamp."""

    model_config = ConfigDict(frozen=True)

    channel: str
    timestamp: str  # Slack message ts, e.g., "1696367451.886309"


class TrackingRecord(BaseModel):
    """Durable fact that a pull request URL was mentioned at a chat location."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    url: PullRequestUrl = Field(min_length=1)
    channel: str
    timestamp: str
    inserted_at: datetime

    @property
    def location(self) -> ChatLocation:
        return ChatLocation(channel=self.channel, timestamp=self.timestamp)

    def is_at(self, location: ChatLocation) -> bool:
        """True only when both channel and timestamp match."""
        return self.channel == location.channel and self.timestamp == location.timestamp


class Insertion(BaseModel):
    """URLs to record for one chat location."""

    urls: list[PullRequestUrl]
    location: ChatLocation
    inserted_at: datetime

    @property
    def is_empty(self) -> bool:
        return not self.urls

    def to_records(self) -> list[TrackingRecord]:
        """Build one fresh record per URL occurrence."""
        return [
            TrackingRecord(
                url=url,
                channel=self.location.channel,
                timestamp=self.location.timestamp,
                inserted_at=self.inserted_at,
            )
            for url in self.urls
        ]


class Retraction(BaseModel):
    """URLs to forget for one chat location."""

    urls: list[PullRequestUrl]
    location: ChatLocation

    @property
    def is_empty(self) -> bool:
        return not self.urls

    def matches(self, record: TrackingRecord) -> bool:
        return record.url in self.urls and record.is_at(self.location)
