"""Tests for the injectable clocks."""

import time
from datetime import datetime, timezone

from slack_sdk.signature import Clock

from pr_reactor.clock import FrozenClock, LiveClock


def test_live_clock_tracks_wall_time():
    before = time.time()
    now = LiveClock().now()
    assert before <= now <= time.time()


def test_live_clock_is_slack_sdk_clock():
    assert isinstance(LiveClock(), Clock)


def test_frozen_clock_returns_fixed_instant():
    clock = FrozenClock(1_700_000_000)
    assert clock.now() == 1_700_000_000.0
    assert clock.now() == clock.now()


def test_frozen_clock_accepts_datetime():
    instant = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    clock = FrozenClock(instant)
    assert clock.now_datetime() == instant


def test_frozen_clock_advance():
    clock = FrozenClock(100)
    clock.advance(301)
    assert clock.now() == 401.0
