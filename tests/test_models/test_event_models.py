"""Tests for normalized chat and GitHub event models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from pr_reactor.models.chat import ChatEvent, MessageChanged, MessageCreated, MessageDeleted
from pr_reactor.models.github import GitHubEvent, GitHubEventType, ReactionKind
from pr_reactor.models.tracking import ChatLocation

LOCATION = ChatLocation(channel="C1", timestamp="100")
PR = "https://github.com/acme/widgets/pull/42"


def test_chat_event_discriminates_on_kind():
    adapter = TypeAdapter(ChatEvent)
    event = adapter.validate_python(
        {"kind": "changed", "location": LOCATION, "previous_text": "a", "text": "b", "event_ts": "1"}
    )
    assert isinstance(event, MessageChanged)


def test_chat_events_are_immutable():
    event = MessageCreated(location=LOCATION, text="hi", event_ts="100")
    with pytest.raises(ValidationError):
        event.text = "changed"


def test_message_deleted_kind():
    event = MessageDeleted(location=LOCATION, previous_text="hi", event_ts="300")
    assert event.kind == "deleted"


@pytest.mark.parametrize(
    "event_type,reaction",
    [
        (GitHubEventType.CLOSED, ReactionKind.DELETED),
        (GitHubEventType.MERGED, ReactionKind.MERGED),
        (GitHubEventType.COMMENTED, ReactionKind.COMMENT),
        (GitHubEventType.CHANGES_REQUESTED, ReactionKind.CHANGE_REQUEST),
        (GitHubEventType.APPROVED, ReactionKind.APPROVED),
    ],
)
def test_github_event_reaction_mapping(event_type: GitHubEventType, reaction: ReactionKind):
    assert GitHubEvent(url=PR, event_type=event_type).reaction == reaction


def test_reaction_identifiers():
    assert [kind.value for kind in ReactionKind] == [
        "deleted",
        "merged",
        "comment",
        "change-request",
        "approved",
    ]


def test_github_event_actor_defaults_to_none():
    assert GitHubEvent(url=PR, event_type=GitHubEventType.MERGED).actor is None
