"""Data models and enums for the PR Reactor service."""

from pr_reactor.models.chat import ChatEvent, MessageChanged, MessageCreated, MessageDeleted
from pr_reactor.models.github import GitHubEvent, GitHubEventType, ReactionKind
from pr_reactor.models.tracking import (
    ChatLocation,
    Insertion,
    PullRequestUrl,
    Retraction,
    TrackingRecord,
)

__all__ = [
    "ChatEvent",
    "ChatLocation",
    "GitHubEvent",
    "GitHubEventType",
    "Insertion",
    "MessageChanged",
    "MessageCreated",
    "MessageDeleted",
    "PullRequestUrl",
    "ReactionKind",
    "Retraction",
    "TrackingRecord",
]
