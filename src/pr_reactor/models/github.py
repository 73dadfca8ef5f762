"""Normalized GitHub pull request events and the reactions they map to."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from pr_reactor.models.tracking import PullRequestUrl


class GitHubEventType(str, Enum):
    """Pull request state changes we react to."""

    CLOSED = "closed"
    MERGED = "merged"
    COMMENTED = "commented"
    CHANGES_REQUESTED = "changes_requested"
    APPROVED = "approved"


class ReactionKind(str, Enum):
    """Reaction identifiers; concrete emoji names come from settings."""

    DELETED = "deleted"
    MERGED = "merged"
    COMMENT = "comment"
    CHANGE_REQUEST = "change-request"
    APPROVED = "approved"


REACTION_FOR_EVENT: dict[GitHubEventType, ReactionKind] = {
    GitHubEventType.CLOSED: ReactionKind.DELETED,
    GitHubEventType.MERGED: ReactionKind.MERGED,
    GitHubEventType.COMMENTED: ReactionKind.COMMENT,
    GitHubEventType.CHANGES_REQUESTED: ReactionKind.CHANGE_REQUEST,
    GitHubEventType.APPROVED: ReactionKind.APPROVED,
}


class GitHubEvent(BaseModel):
    """A pull request event we care about.

    ``actor`` is the commenter or reviewer login; None for closed and merged.
    """

    model_config = ConfigDict(frozen=True)

    url: PullRequestUrl
    event_type: GitHubEventType
    actor: str | None = None

    @property
    def reaction(self) -> ReactionKind:
        return REACTION_FOR_EVENT[self.event_type]
