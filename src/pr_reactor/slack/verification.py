"""Slack request signature verification as a FastAPI dependency."""

import hmac
import logging

from fastapi import Depends, Request
from slack_sdk.signature import Clock, SignatureVerifier

from pr_reactor.clock import LiveClock
from pr_reactor.config import get_settings
from pr_reactor.dependencies import get_clock
from pr_reactor.errors import ApiError
from pr_reactor.signatures import parse_hex_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Slack-Signature"
TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"


def check_slack_signature(
    *,
    secret: str,
    body: bytes,
    signature_header: str | None,
    timestamp_header: str | None,
    clock: Clock,
    max_age_seconds: int = 300,
) -> None:
    """Validate Slack's signature and timestamp headers against the raw body.

    Raises ApiError(401) for missing headers, stale timestamps and signature
    mismatches; ApiError(400) for malformed header values. Requests exactly
    ``max_age_seconds`` old are still accepted.
    """
    if signature_header is None:
        raise ApiError(f"Missing {SIGNATURE_HEADER} header", 401)
    signature = parse_hex_signature(signature_header, "v0=", SIGNATURE_HEADER)

    if timestamp_header is None:
        raise ApiError(f"Missing {TIMESTAMP_HEADER} header", 401)
    try:
        timestamp = int(timestamp_header)
    except ValueError:
        raise ApiError(f"Invalid {TIMESTAMP_HEADER} header", 400)

    if int(clock.now()) - timestamp > max_age_seconds:
        logger.error("%s header is too old: %s", TIMESTAMP_HEADER, timestamp)
        raise ApiError(f"{TIMESTAMP_HEADER} header is too old", 401)

    verifier = SignatureVerifier(signing_secret=secret, clock=clock)
    try:
        expected = verifier.generate_signature(timestamp=str(timestamp), body=body)
    except UnicodeDecodeError:
        # slack_sdk signs the decoded body; Slack never sends non-UTF-8 payloads.
        expected = None

    if expected is None or not hmac.compare_digest(expected, "v0=" + signature.hex()):
        logger.error("Slack signature mismatch")
        raise ApiError("Invalid signature", 401)


async def verify_slack_request(
    request: Request,
    clock: LiveClock = Depends(get_clock),
) -> bytes:
    """Verify Slack request signature and return the raw body.

    Reads the raw body FIRST (before any JSON parsing) to ensure the
    signature verification uses the exact bytes Slack signed.
    """
    settings = get_settings()
    body = await request.body()
    check_slack_signature(
        secret=settings.slack_signing_secret,
        body=body,
        signature_header=request.headers.get(SIGNATURE_HEADER),
        timestamp_header=request.headers.get(TIMESTAMP_HEADER),
        clock=clock,
        max_age_seconds=settings.slack_request_max_age_seconds,
    )
    return body
