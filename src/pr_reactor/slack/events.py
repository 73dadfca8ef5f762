"""Slack Events API envelope parsing and message event normalization."""

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from pr_reactor.errors import ApiError
from pr_reactor.models.chat import ChatEvent, MessageChanged, MessageCreated, MessageDeleted
from pr_reactor.models.tracking import ChatLocation

logger = logging.getLogger(__name__)


class UrlVerification(BaseModel):
    """Handshake sent when the events URL is configured in Slack."""

    type: Literal["url_verification"]
    challenge: str


class EventCallback(BaseModel):
    """Envelope carrying a single workspace event."""

    model_config = ConfigDict(extra="allow")

    type: Literal["event_callback"]
    event: dict[str, Any]
    event_id: str | None = None


class OtherCallback(BaseModel):
    """Any other envelope type (e.g. app_rate_limited). Acknowledged and ignored."""

    model_config = ConfigDict(extra="allow")

    type: str


_CALLBACK_MODELS: dict[str, type[BaseModel]] = {
    "url_verification": UrlVerification,
    "event_callback": EventCallback,
}


def parse_callback(body: bytes) -> UrlVerification | EventCallback | OtherCallback:
    """Parse a raw Slack request body into its envelope model.

    Raises ApiError(400) on invalid JSON or a structurally invalid envelope.
    """
    try:
        data = json.loads(body)
        if not isinstance(data, dict):
            raise ValueError("payload is not a JSON object")
        model = _CALLBACK_MODELS.get(data.get("type"), OtherCallback)
        return model.model_validate(data)
    except (TypeError, ValueError, ValidationError) as exc:
        logger.error("Failed to parse slack payload: %s", exc)
        raise ApiError("Failed to parse slack payload", 400)


def normalize_chat_event(raw: dict[str, Any]) -> ChatEvent | None:
    """Map a raw Slack event into a MessageCreated/MessageChanged/MessageDeleted.

    Discriminates on ``subtype``: absent means a new message. Non-message
    events, and subtypes with no text to inspect, return None. Raises
    ApiError(400) when a message event lacks its channel or timestamp, or
    carries fields of the wrong type.
    """
    if raw.get("type") != "message":
        return None

    try:
        return _normalize_message(raw)
    except ValidationError as exc:
        logger.error("Malformed slack message event: %s", exc)
        raise ApiError("Failed to parse slack payload", 400)


def _normalize_message(raw: dict[str, Any]) -> ChatEvent | None:
    subtype = raw.get("subtype")
    event_ts = raw.get("event_ts") or raw.get("ts")

    if subtype == "message_changed":
        message = _sub_object(raw, "message")
        previous = _sub_object(raw, "previous_message")
        location = _location(raw, message.get("ts"), previous.get("ts"), event_ts)
        return MessageChanged(
            location=location,
            previous_text=previous.get("text") or "",
            text=message.get("text") or "",
            event_ts=event_ts or location.timestamp,
        )

    if subtype == "message_deleted":
        previous = _sub_object(raw, "previous_message")
        location = _location(raw, raw.get("deleted_ts"), previous.get("ts"), event_ts)
        return MessageDeleted(
            location=location,
            previous_text=previous.get("text") or "",
            event_ts=event_ts or location.timestamp,
        )

    # Plain messages plus bot messages, thread broadcasts, file shares, etc.
    if subtype is not None and "text" not in raw:
        return None

    location = _location(raw, raw.get("ts"), event_ts)
    return MessageCreated(
        location=location,
        text=raw.get("text") or "",
        event_ts=event_ts or location.timestamp,
    )


def _sub_object(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _location(raw: dict[str, Any], *timestamps: str | None) -> ChatLocation:
    """Build the ChatLocation from the channel and the first available timestamp."""
    channel = raw.get("channel")
    timestamp = next((ts for ts in timestamps if ts), None)
    if not isinstance(channel, str) or not channel or not isinstance(timestamp, str):
        raise ApiError("Failed to parse slack payload", 400)
    return ChatLocation(channel=channel, timestamp=timestamp)
