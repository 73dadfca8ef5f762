"""Pull request URL extraction from Slack message text."""

import re

from pr_reactor.models.tracking import PullRequestUrl

# https://<host>/<owner>/<repo>/pull/<number>
# Slack wraps links as <url> or <url|label>; neither '>' nor '|' can match the
# character classes, so the wrapper never leaks into the captured URL.
PR_URL_PATTERN = re.compile(
    r"https://[A-Za-z0-9.-]+/[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+/pull/\d+"
)


def extract_pr_urls(text: str) -> list[PullRequestUrl]:
    """Extract all pull request URLs from message text.

    Order follows first occurrence and duplicates are preserved. Text
    without any pull request URL yields an empty list.
    """
    return PR_URL_PATTERN.findall(text)
