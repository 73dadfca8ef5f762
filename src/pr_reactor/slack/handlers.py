"""Slack event dispatch: keep tracking records in step with message text."""

import logging

from fastapi.responses import JSONResponse

from pr_reactor.clock import LiveClock
from pr_reactor.errors import ApiError, TrackingStoreError
from pr_reactor.models.chat import ChatEvent, MessageChanged, MessageCreated, MessageDeleted
from pr_reactor.models.tracking import Insertion, Retraction
from pr_reactor.slack.events import (
    EventCallback,
    OtherCallback,
    UrlVerification,
    normalize_chat_event,
)
from pr_reactor.slack.urls import extract_pr_urls
from pr_reactor.tracking.base import TrackingStore

logger = logging.getLogger(__name__)


async def handle_slack_event(
    callback: UrlVerification | EventCallback | OtherCallback,
    store: TrackingStore,
    clock: LiveClock,
) -> JSONResponse:
    """Dispatch a Slack envelope based on its type.

    - url_verification: return the challenge token
    - event_callback: apply the contained message event to the tracking store
    - anything else: acknowledge with 200
    """
    if isinstance(callback, UrlVerification):
        return JSONResponse({"challenge": callback.challenge})

    if isinstance(callback, EventCallback):
        event = normalize_chat_event(callback.event)
        if event is not None:
            try:
                await apply_chat_event(event, store, clock)
            except TrackingStoreError:
                logger.error(
                    "Tracking update failed for %s %s",
                    event.location.channel,
                    event.location.timestamp,
                    exc_info=True,
                )
                raise ApiError("Failed to update tracked pull requests", 500)

    return JSONResponse({"ok": True})


async def apply_chat_event(event: ChatEvent, store: TrackingStore, clock: LiveClock) -> None:
    """Translate a message event into tracking store calls.

    - created: track every URL in the text
    - changed: retract the previous text's URLs and track the new text's
    - deleted: retract the previous text's URLs

    Every write is a single ``reconcile`` that first clears the URLs it is
    about to insert at this location, so a redelivered event leaves the same
    records behind. Empty URL lists never reach the store.
    """
    location = event.location

    if isinstance(event, MessageCreated):
        urls = extract_pr_urls(event.text)
        if not urls:
            return
        logger.info(
            "Tracking %d PR URL(s) from %s %s",
            len(urls),
            location.channel,
            location.timestamp,
        )
        await store.reconcile(
            retraction=Retraction(urls=urls, location=location),
            insertion=Insertion(urls=urls, location=location, inserted_at=clock.now_datetime()),
        )

    elif isinstance(event, MessageChanged):
        previous_urls = extract_pr_urls(event.previous_text)
        urls = extract_pr_urls(event.text)
        if not previous_urls and not urls:
            return
        retraction = Retraction(
            urls=list(dict.fromkeys(previous_urls + urls)), location=location
        )
        insertion = Insertion(urls=urls, location=location, inserted_at=clock.now_datetime())
        logger.info(
            "Reconciling %s %s: retract %d, insert %d",
            location.channel,
            location.timestamp,
            len(previous_urls),
            len(urls),
        )
        await store.reconcile(
            retraction=retraction,
            insertion=None if insertion.is_empty else insertion,
        )

    elif isinstance(event, MessageDeleted):
        retraction = Retraction(urls=extract_pr_urls(event.previous_text), location=location)
        if retraction.is_empty:
            return
        logger.info(
            "Retracting %d PR URL(s) from deleted message %s %s",
            len(retraction.urls),
            location.channel,
            location.timestamp,
        )
        await store.delete_all(retraction)
