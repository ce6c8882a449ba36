"""Version control and hosting integrations."""

from __future__ import annotations

from multirelease.vcs.git import GitHistoryProvider, GitRepository
from multirelease.vcs.github import GitHubClient
from multirelease.vcs.publisher import GitHubPublisher, GitPublisher, make_publisher

__all__ = [
    "GitHistoryProvider",
    "GitHubClient",
    "GitHubPublisher",
    "GitPublisher",
    "GitRepository",
    "make_publisher",
]
