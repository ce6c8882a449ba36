"""Publishers: record the version bump commit and create release tags."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from multirelease.exceptions import ConfigError, PublishConflictError
from multirelease.vcs.github import GitHubClient

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from multirelease.config.models import MultiReleaseConfig
    from multirelease.vcs.git import GitRepository

logger = logging.getLogger(__name__)


class GitPublisher:
    """Commits and tags in the local repository, optionally pushing."""

    def __init__(self, repo: GitRepository, config: MultiReleaseConfig) -> None:
        self.repo = repo
        self.config = config

    def record_batch_change(self, changed_locations: Sequence[Path]) -> str:
        """Stage every changed file and commit them together.

        Returns:
            SHA of the new commit
        """
        self.repo.add(changed_locations)
        sha = self.repo.commit(self.config.commit_message)
        if self.config.push:
            self.repo.push(self.config.remote)
        return sha

    def tag_exists(self, tag_name: str) -> bool:
        return self.repo.tag_exists(tag_name)

    def create_tag(self, tag_name: str, pointer: str | None) -> None:
        if self.repo.tag_exists(tag_name):
            raise PublishConflictError(tag_name)
        self.repo.create_tag(tag_name, ref=pointer)
        if self.config.push:
            self.repo.push(self.config.remote, f"refs/tags/{tag_name}")


class GitHubPublisher(GitPublisher):
    """Commits through git and creates tags through the GitHub API."""

    def __init__(
        self,
        repo: GitRepository,
        config: MultiReleaseConfig,
        client: GitHubClient | None = None,
    ) -> None:
        super().__init__(repo, config)
        self.client = client or self._make_client(config)

    @staticmethod
    def _make_client(config: MultiReleaseConfig) -> GitHubClient:
        github = config.github
        if not github.owner or not github.repo:
            raise ConfigError("github.owner and github.repo are required for the github publisher")
        return GitHubClient(
            owner=github.owner,
            repo=github.repo,
            token=os.environ.get(github.token_env),
            api_url=github.api_url,
            timeout=github.timeout,
        )

    def tag_exists(self, tag_name: str) -> bool:
        return self.client.tag_exists(tag_name)

    def create_tag(self, tag_name: str, pointer: str | None) -> None:
        """Create the tag on GitHub and mirror it locally.

        Release history is read from local tags, so the local copy is
        what lets the next run start from this release.
        """
        sha = pointer or self.repo.head_sha()
        self.client.create_tag(tag_name, sha)
        if not self.repo.tag_exists(tag_name):
            self.repo.create_tag(tag_name, ref=sha)


def make_publisher(repo: GitRepository, config: MultiReleaseConfig) -> GitPublisher:
    if config.publisher == "github":
        return GitHubPublisher(repo, config)
    return GitPublisher(repo, config)
