"""HMAC-SHA256 webhook signature primitives shared by the Slack and GitHub verifiers."""

import hashlib
import hmac

from pr_reactor.errors import ApiError


def compute_signature(secret: bytes, message: bytes) -> bytes:
    """Return the raw HMAC-SHA256 digest of ``message`` keyed by ``secret``."""
    return hmac.new(secret, msg=message, digestmod=hashlib.sha256).digest()


def verify_signature(secret: bytes, message: bytes, signature: bytes) -> bool:
    """Check ``signature`` against the HMAC of ``message`` in constant time.

    ``message`` must be the exact bytes that were signed (the raw request body,
    never a re-serialized form).
    """
    return hmac.compare_digest(compute_signature(secret, message), signature)


def parse_hex_signature(value: str, prefix: str, header_name: str) -> bytes:
    """Strip ``prefix`` from a signature header and decode the hex digest.

    Raises ApiError(400) when the prefix is missing or the digest is not valid hex.
    """
    if not value.startswith(prefix):
        raise ApiError(f"Invalid {header_name} header", 400)
    try:
        return bytes.fromhex(value[len(prefix):])
    except ValueError:
        raise ApiError(f"Failed to decode {header_name} header", 400)
