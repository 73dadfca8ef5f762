"""Shared test fixtures."""

import os

from webhook_helpers import GITHUB_SECRET, NOW, SLACK_SECRET

# Settings are read from the environment; pin them before the app is imported.
os.environ["SLACK_SIGNING_SECRET"] = SLACK_SECRET
os.environ["GITHUB_WEBHOOK_SECRET"] = GITHUB_SECRET
os.environ["SLACK_BOT_TOKEN"] = "xoxb-test"
os.environ["TRACKING_BACKEND"] = "memory"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from pr_reactor.app import app  # noqa: E402
from pr_reactor.clock import FrozenClock  # noqa: E402
from pr_reactor.config import get_settings  # noqa: E402
from pr_reactor.dependencies import get_clock, get_tracking_store  # noqa: E402
from pr_reactor.slack.client import reset_client  # noqa: E402
from pr_reactor.tracking import InMemoryTrackingStore  # noqa: E402

get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_singletons():
    """Ensure settings and the Slack client are rebuilt for every test."""
    get_settings.cache_clear()
    reset_client()
    yield
    get_settings.cache_clear()
    reset_client()


@pytest.fixture
def store() -> InMemoryTrackingStore:
    """A fresh in-memory tracking store."""
    return InMemoryTrackingStore()


@pytest.fixture
def clock() -> FrozenClock:
    """A clock pinned to NOW."""
    return FrozenClock(NOW)


@pytest.fixture
def client(store: InMemoryTrackingStore, clock: FrozenClock):
    """TestClient with the tracking store and clock swapped for test doubles."""
    app.dependency_overrides[get_tracking_store] = lambda: store
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()
