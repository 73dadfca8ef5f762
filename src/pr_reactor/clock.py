"""Injectable clocks for request freshness checks.

Both clocks follow the ``slack_sdk.signature.Clock`` interface: ``now()``
returns seconds since the epoch as a float.
"""

from datetime import datetime, timezone

from slack_sdk.signature import Clock


class LiveClock(Clock):
    """Wall-clock time."""

    def now_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.now(), tz=timezone.utc)


class FrozenClock(LiveClock):
    """Clock pinned to a fixed instant. Used in tests."""

    def __init__(self, instant: float | datetime):
        if isinstance(instant, datetime):
            instant = instant.timestamp()
        self._instant = float(instant)

    def now(self) -> float:
        return self._instant

    def advance(self, seconds: float) -> None:
        self._instant += seconds
