"""FastAPI application with lifespan, health, and tracking list endpoints."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from pr_reactor.clock import LiveClock
from pr_reactor.config import get_settings
from pr_reactor.dependencies import get_tracking_store
from pr_reactor.errors import ApiError, api_error_handler
from pr_reactor.github.router import router as github_router
from pr_reactor.logging_config import configure_logging
from pr_reactor.slack.client import reset_client
from pr_reactor.slack.router import router as slack_router
from pr_reactor.tracking import TrackingStore, create_tracking_store

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, open the tracking store, close it on shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.clock = LiveClock()
    app.state.tracking_store = await create_tracking_store(settings)
    logger.info("PR Reactor started (%s)", settings.environment)
    try:
        yield
    finally:
        await app.state.tracking_store.close()
        reset_client()


app = FastAPI(
    title="PR Reactor",
    lifespan=lifespan,
)
app.add_exception_handler(ApiError, api_error_handler)
app.include_router(slack_router)
app.include_router(github_router)


@app.get("/health")
async def health(store: TrackingStore = Depends(get_tracking_store)):
    """Health check endpoint for the container platform and local development."""
    return {
        "status": "ok",
        "service": "pr-reactor",
        "version": VERSION,
        "tracking_store": "ok" if await store.health_check() else "unavailable",
    }


@app.get("/pull-requests")
async def list_pull_requests(store: TrackingStore = Depends(get_tracking_store)):
    """List every tracked pull request mention (diagnostic use)."""
    records = await store.list_all()
    return [
        {
            "id": str(record.id),
            "url": record.url,
            "inserted_at": record.inserted_at.isoformat(),
            "channel": record.channel,
            "timestamp": record.timestamp,
        }
        for record in records
    ]
