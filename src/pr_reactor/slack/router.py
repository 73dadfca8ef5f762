"""Slack webhook router with signature verification."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pr_reactor.clock import LiveClock
from pr_reactor.dependencies import get_clock, get_tracking_store
from pr_reactor.slack.events import parse_callback
from pr_reactor.slack.handlers import handle_slack_event
from pr_reactor.slack.verification import verify_slack_request
from pr_reactor.tracking.base import TrackingStore

router = APIRouter(prefix="", tags=["slack"])


@router.post("/slack/events")
async def slack_events(
    body: bytes = Depends(verify_slack_request),
    store: TrackingStore = Depends(get_tracking_store),
    clock: LiveClock = Depends(get_clock),
) -> JSONResponse:
    """Receive Slack webhook events.

    Slack redeliveries (X-Slack-Retry-Num) are processed like first attempts;
    tracking writes are idempotent, so a retry after a 500 recovers the update.
    """
    return await handle_slack_event(parse_callback(body), store, clock)
