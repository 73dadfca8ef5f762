"""GitHub event dispatch: normalize the delivery and react on tracked messages."""

import json
import logging

from pr_reactor.config import Settings
from pr_reactor.dispatch import DispatchResult, dispatch_reactions
from pr_reactor.errors import ApiError
from pr_reactor.github.events import normalize_github_event
from pr_reactor.tracking.base import TrackingStore

logger = logging.getLogger(__name__)


def parse_github_payload(body: bytes) -> dict:
    """Decode a GitHub JSON payload. Raises ApiError(400) if it is not a JSON object."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        logger.error("Failed to parse github payload: %s", exc)
        raise ApiError("Failed to parse github payload", 400)
    if not isinstance(payload, dict):
        logger.error("GitHub payload is not a JSON object")
        raise ApiError("Failed to parse github payload", 400)
    return payload


async def handle_github_event(
    event_type: str | None,
    body: bytes,
    store: TrackingStore,
    settings: Settings,
) -> DispatchResult | None:
    """Process one verified GitHub delivery.

    Returns None when the delivery is uninteresting. Reaction failures are
    logged by the dispatcher and never surface here.
    """
    payload = parse_github_payload(body)

    if event_type is None:
        raise ApiError("Missing X-GitHub-Event header", 400)

    event = normalize_github_event(event_type, payload)
    if event is None:
        logger.debug("Ignoring GitHub %s/%s delivery", event_type, payload.get("action"))
        return None

    logger.info("Received %s for %s", event.event_type.value, event.url)
    return await dispatch_reactions(event, store, settings)
