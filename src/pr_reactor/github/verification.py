"""GitHub webhook signature verification as a FastAPI dependency."""

import logging

from fastapi import Request

from pr_reactor.config import get_settings
from pr_reactor.errors import ApiError
from pr_reactor.signatures import parse_hex_signature, verify_signature

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Hub-Signature-256"


def check_github_signature(*, secret: str, body: bytes, signature_header: str | None) -> None:
    """Validate GitHub's ``sha256=<hex>`` signature header against the raw body.

    A missing header is a 401, a malformed one a 400; never treated as unsigned.
    """
    if signature_header is None:
        raise ApiError(f"Missing {SIGNATURE_HEADER} header", 401)
    signature = parse_hex_signature(signature_header, "sha256=", SIGNATURE_HEADER)

    if not verify_signature(secret.encode(), body, signature):
        logger.error("GitHub signature mismatch")
        raise ApiError("Invalid signature", 401)


async def verify_github_request(request: Request) -> bytes:
    """Verify the GitHub webhook signature and return the raw body."""
    settings = get_settings()
    body = await request.body()
    check_github_signature(
        secret=settings.github_webhook_secret,
        body=body,
        signature_header=request.headers.get(SIGNATURE_HEADER),
    )
    return body
