"""GitHub webhook payload normalization.

We only care about three deliveries, keyed by the ``X-GitHub-Event`` header:

- ``pull_request`` with action ``closed``: merged or closed without merging
- ``issue_comment`` with action ``created``: a comment on a pull request
  (GitHub delivers PR conversation comments as issue comments)
- ``pull_request_review`` with action ``submitted``: approval or changes requested

Everything else, including payloads missing the fields a variant needs, is
uninteresting and normalizes to None rather than raising.
"""

import logging
from typing import Any

from pr_reactor.models.github import GitHubEvent, GitHubEventType
from pr_reactor.models.tracking import PullRequestUrl

logger = logging.getLogger(__name__)

INTERESTING_EVENTS = frozenset({"pull_request", "issue_comment", "pull_request_review"})

_REVIEW_STATES = {
    "changes_requested": GitHubEventType.CHANGES_REQUESTED,
    "approved": GitHubEventType.APPROVED,
}


def normalize_github_event(event_type: str, payload: dict[str, Any]) -> GitHubEvent | None:
    """Map an event-type header and payload to a GitHubEvent, or None if uninteresting."""
    if event_type not in INTERESTING_EVENTS:
        return None

    url = resolve_pr_url(payload)
    if url is None:
        return None

    action = payload.get("action")

    if event_type == "issue_comment" and action == "created":
        commenter = _login(_get(payload, "comment", "user"))
        if commenter is None:
            return None
        return GitHubEvent(url=url, event_type=GitHubEventType.COMMENTED, actor=commenter)

    if event_type == "pull_request" and action == "closed":
        if _get(payload, "pull_request", "merged_at"):
            return GitHubEvent(url=url, event_type=GitHubEventType.MERGED)
        return GitHubEvent(url=url, event_type=GitHubEventType.CLOSED)

    if event_type == "pull_request_review" and action == "submitted":
        reviewer = _login(_get(payload, "review", "user"))
        state = _get(payload, "review", "state")
        if reviewer is None or not isinstance(state, str):
            return None
        review_type = _REVIEW_STATES.get(state.lower())
        if review_type is None:
            return None
        return GitHubEvent(url=url, event_type=review_type, actor=reviewer)

    return None


def resolve_pr_url(payload: dict[str, Any]) -> PullRequestUrl | None:
    """Find the pull request's web URL in a payload.

    Prefers ``pull_request._links.html.href`` (``pull_request.html_url`` as a
    fallback), then ``issue.pull_request.html_url`` for issue comments.
    """
    candidates = (
        _get(payload, "pull_request", "_links", "html", "href"),
        _get(payload, "pull_request", "links", "html", "href"),
        _get(payload, "pull_request", "html_url"),
        _get(payload, "issue", "pull_request", "html_url"),
    )
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def _get(data: Any, *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a step is missing or not a dict."""
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _login(user: Any) -> str | None:
    login = _get(user, "login")
    return login if isinstance(login, str) and login else None
