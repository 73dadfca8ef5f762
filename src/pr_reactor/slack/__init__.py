"""Slack ingress: webhook handling, signature verification, URL extraction, and reactions."""

from pr_reactor.slack.client import get_slack_client, reset_client
from pr_reactor.slack.notifier import add_reaction
from pr_reactor.slack.router import router
from pr_reactor.slack.urls import extract_pr_urls

__all__ = [
    "add_reaction",
    "extract_pr_urls",
    "get_slack_client",
    "reset_client",
    "router",
]
