"""Slack reaction calls.

``add_reaction`` is fire-and-forget: it catches and logs errors but never
raises, so one failed reaction cannot abort its siblings or the webhook.
"""

import asyncio
import logging

import aiohttp
from slack_sdk.errors import SlackApiError

from pr_reactor.models.tracking import ChatLocation
from pr_reactor.slack.client import get_slack_client

logger = logging.getLogger(__name__)

# Slack error codes that mean "nothing to do" rather than a real failure
_BENIGN_ERRORS = ("already_reacted", "missing_scope", "no_item_specified", "message_not_found")


async def add_reaction(location: ChatLocation, emoji: str, timeout_seconds: float = 10.0) -> bool:
    """Add an emoji reaction to the message at ``location``.

    Args:
        location: Channel and timestamp of the message to react to.
        emoji: Emoji name without colons (e.g., "shipit").
        timeout_seconds: Upper bound on the whole call.

    Returns:
        True if Slack accepted the reaction, False otherwise.
    """
    try:
        client = await get_slack_client()
        async with asyncio.timeout(timeout_seconds):
            await client.reactions_add(
                channel=location.channel,
                name=emoji,
                timestamp=location.timestamp,
            )
        return True
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        if error_code in _BENIGN_ERRORS:
            logger.warning(
                "Reaction '%s' not added (%s): %s %s",
                emoji,
                error_code,
                location.channel,
                location.timestamp,
            )
        else:
            logger.error(
                "Failed to add reaction '%s' to %s %s: %s",
                emoji,
                location.channel,
                location.timestamp,
                error_code,
                exc_info=True,
            )
        return False
    except TimeoutError:
        logger.error(
            "Reaction '%s' timed out after %.1fs: %s %s",
            emoji,
            timeout_seconds,
            location.channel,
            location.timestamp,
        )
        return False
    except (aiohttp.ClientError, OSError):
        logger.error(
            "Failed to reach Slack adding reaction '%s' to %s %s",
            emoji,
            location.channel,
            location.timestamp,
            exc_info=True,
        )
        return False
