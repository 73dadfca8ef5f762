"""Reaction dispatch: fan a GitHub event out to every Slack message that mentioned the PR."""

import asyncio
import logging
from dataclasses import dataclass

from pr_reactor.config import Settings
from pr_reactor.models.github import GitHubEvent, ReactionKind
from pr_reactor.slack.notifier import add_reaction
from pr_reactor.tracking.base import TrackingStore

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Outcome counts for one dispatch batch."""

    emoji: str
    attempted: int = 0
    succeeded: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded


def emoji_for(reaction: ReactionKind, settings: Settings) -> str:
    """Return the configured Slack emoji name for a reaction kind."""
    return {
        ReactionKind.DELETED: settings.emoji_closed,
        ReactionKind.MERGED: settings.emoji_merged,
        ReactionKind.COMMENT: settings.emoji_commented,
        ReactionKind.CHANGE_REQUEST: settings.emoji_changes_requested,
        ReactionKind.APPROVED: settings.emoji_approved,
    }[reaction]


async def dispatch_reactions(
    event: GitHubEvent, store: TrackingStore, settings: Settings
) -> DispatchResult:
    """React to every tracked message for ``event.url``.

    All reaction calls run concurrently and are awaited as a batch. Each
    outcome is logged on its own; failures never abort siblings or raise.
    """
    emoji = emoji_for(event.reaction, settings)
    records = await store.find_by_url(event.url)
    result = DispatchResult(emoji=emoji, attempted=len(records))
    if not records:
        logger.info("No tracked messages for %s", event.url)
        return result

    outcomes = await asyncio.gather(
        *[
            add_reaction(record.location, emoji, settings.reaction_timeout_seconds)
            for record in records
        ],
        return_exceptions=True,
    )

    for record, outcome in zip(records, outcomes):
        if outcome is True:
            result.succeeded += 1
            logger.info(
                "Added reaction '%s' to %s %s for %s",
                emoji,
                record.channel,
                record.timestamp,
                event.url,
            )
        elif isinstance(outcome, BaseException):
            logger.error(
                "Reaction '%s' to %s %s raised: %r",
                emoji,
                record.channel,
                record.timestamp,
                outcome,
            )
        else:
            logger.warning(
                "Reaction '%s' to %s %s failed", emoji, record.channel, record.timestamp
            )

    logger.info(
        "Dispatched %s for %s: %d/%d reactions added",
        event.event_type.value,
        event.url,
        result.succeeded,
        result.attempted,
    )
    return result
