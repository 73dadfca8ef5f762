"""GitHub ingress: webhook verification, event normalization, and reaction dispatch."""

from pr_reactor.github.events import normalize_github_event, resolve_pr_url
from pr_reactor.github.router import router

__all__ = [
    "normalize_github_event",
    "resolve_pr_url",
    "router",
]
