"""Tests for the git and GitHub publishers."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from multirelease.config.models import GitHubConfig, MultiReleaseConfig
from multirelease.core.orchestrator import ReleaseOrchestrator
from multirelease.exceptions import ConfigError, PublishConflictError
from multirelease.project.gradle import GradleProjectReader, GradleProjectWriter
from multirelease.vcs.git import GitHistoryProvider, GitRepository
from multirelease.vcs.github import GitHubClient
from multirelease.vcs.publisher import GitHubPublisher, GitPublisher, make_publisher


@pytest.fixture
def mock_repo(tmp_path: Path) -> MagicMock:
    """Create a mock GitRepository."""
    repo = MagicMock(spec=GitRepository)
    repo.path = tmp_path
    repo.commit.return_value = "abc123"
    repo.head_sha.return_value = "head456"
    repo.tag_exists.return_value = False
    return repo


class TestGitPublisher:
    """Tests for GitPublisher."""

    def test_record_batch_change(self, mock_repo: MagicMock):
        """Changed files are staged, committed once and pushed."""
        publisher = GitPublisher(mock_repo, MultiReleaseConfig())
        files = [Path("core/build.gradle.kts"), Path("app/build.gradle.kts")]

        sha = publisher.record_batch_change(files)

        assert sha == "abc123"
        mock_repo.add.assert_called_once_with(files)
        mock_repo.commit.assert_called_once_with("chore: Update module versions")
        mock_repo.push.assert_called_once_with("origin")

    def test_no_push_when_disabled(self, mock_repo: MagicMock):
        """push = false keeps everything local."""
        publisher = GitPublisher(mock_repo, MultiReleaseConfig(push=False))

        publisher.record_batch_change([Path("core/build.gradle.kts")])
        publisher.create_tag("core-v1.0.1", "abc123")

        mock_repo.push.assert_not_called()

    def test_create_tag_pushes_tag(self, mock_repo: MagicMock):
        """Tags are created at the pointer and pushed individually."""
        mock_repo.tag_exists.return_value = False
        publisher = GitPublisher(mock_repo, MultiReleaseConfig(remote="upstream"))

        publisher.create_tag("core-v1.0.1", "abc123")

        mock_repo.create_tag.assert_called_once_with("core-v1.0.1", ref="abc123")
        mock_repo.push.assert_called_once_with("upstream", "refs/tags/core-v1.0.1")

    def test_create_existing_tag_conflicts(self, mock_repo: MagicMock):
        """Creating a tag twice raises PublishConflictError."""
        mock_repo.tag_exists.return_value = True
        publisher = GitPublisher(mock_repo, MultiReleaseConfig())

        with pytest.raises(PublishConflictError):
            publisher.create_tag("core-v1.0.1", None)

        mock_repo.create_tag.assert_not_called()

    def test_real_repository(self, gradle_git_repo: Path):
        """Commit and tag against a real repository without pushing."""
        repo = GitRepository(gradle_git_repo)
        publisher = GitPublisher(repo, MultiReleaseConfig(push=False))
        build = gradle_git_repo / "core" / "build.gradle.kts"
        build.write_text(build.read_text().replace("1.0.0", "1.0.1"))

        sha = publisher.record_batch_change([build])
        publisher.create_tag("core-v1.0.1", sha)

        assert publisher.tag_exists("core-v1.0.1")
        assert repo.get_commit_subjects(since="core-v1.0.1") == []


class TestGitHubPublisher:
    """Tests for GitHubPublisher."""

    def test_tags_go_through_api(self, mock_repo: MagicMock):
        """Tag checks and creation use the GitHub client, with a local mirror."""
        client = MagicMock(spec=GitHubClient)
        client.tag_exists.return_value = False
        publisher = GitHubPublisher(mock_repo, MultiReleaseConfig(), client=client)

        assert not publisher.tag_exists("core-v1.0.1")
        publisher.create_tag("core-v1.0.1", "abc123")

        client.create_tag.assert_called_once_with("core-v1.0.1", "abc123")
        mock_repo.create_tag.assert_called_once_with("core-v1.0.1", ref="abc123")
        mock_repo.push.assert_not_called()

    def test_existing_local_tag_not_recreated(self, mock_repo: MagicMock):
        """A local tag that is already there is left alone."""
        mock_repo.tag_exists.return_value = True
        client = MagicMock(spec=GitHubClient)
        publisher = GitHubPublisher(mock_repo, MultiReleaseConfig(), client=client)

        publisher.create_tag("core-v1.0.1", "abc123")

        client.create_tag.assert_called_once_with("core-v1.0.1", "abc123")
        mock_repo.create_tag.assert_not_called()

    def test_tag_without_pointer_uses_head(self, mock_repo: MagicMock):
        """Without a batch change the current HEAD is tagged."""
        client = MagicMock(spec=GitHubClient)
        publisher = GitHubPublisher(mock_repo, MultiReleaseConfig(), client=client)

        publisher.create_tag("core-v1.0.0", None)

        client.create_tag.assert_called_once_with("core-v1.0.0", "head456")
        mock_repo.create_tag.assert_called_once_with("core-v1.0.0", ref="head456")

    def test_requires_owner_and_repo(self, mock_repo: MagicMock):
        """The github publisher needs a target repository."""
        with pytest.raises(ConfigError, match="github.owner"):
            GitHubPublisher(mock_repo, MultiReleaseConfig(publisher="github"))

    def test_second_apply_changes_nothing(self, gradle_git_repo: Path, commit_file):
        """Tags created through the API bound the next run's history."""
        refs: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "POST":
                body = json.loads(request.content)
                if body["ref"] in refs:
                    return httpx.Response(422, json={"message": "Reference already exists"})
                refs[body["ref"]] = body["sha"]
                return httpx.Response(201, json=body)
            ref = "refs/tags/" + request.url.path.split("/git/ref/tags/", 1)[1]
            if ref in refs:
                return httpx.Response(200, json={"ref": ref})
            return httpx.Response(404, json={"message": "Not Found"})

        config = MultiReleaseConfig(
            push=False, publisher="github", github=GitHubConfig(owner="acme", repo="platform")
        )
        repo = GitRepository(gradle_git_repo)
        client = GitHubClient("acme", "platform", transport=httpx.MockTransport(handler))
        writer = GradleProjectWriter(config.gradle, config.changelog)
        orchestrator = ReleaseOrchestrator(
            reader=GradleProjectReader(gradle_git_repo, config.gradle),
            history=GitHistoryProvider(repo, config),
            writer=writer,
            publisher=GitHubPublisher(repo, config, client=client),
            config=config,
            changelog_writer=writer,
        )
        commit_file(gradle_git_repo, "core/src/A.kt", "feat!: remove X")

        first = orchestrator.run(dry_run=False)

        assert [(r.name, str(r.new_version)) for r in first.changed] == [
            (":core", "2.0.0"),
            (":api", "0.5.0"),
            (":app", "2.2.0"),
        ]
        assert refs["refs/tags/core-v2.0.0"] == repo.head_sha()
        assert repo.tag_exists("core-v2.0.0")

        second = orchestrator.run(dry_run=False)

        assert second.changed == []
        assert second.created_tags == []
        assert sorted(second.existing_tags) == ["api-v0.5.0", "app-v2.2.0", "core-v2.0.0"]
        client.close()


class TestMakePublisher:
    """Tests for make_publisher()."""

    def test_git_by_default(self, mock_repo: MagicMock):
        """The git publisher is the default."""
        publisher = make_publisher(mock_repo, MultiReleaseConfig())

        assert type(publisher) is GitPublisher

    def test_github(self, mock_repo: MagicMock, monkeypatch: pytest.MonkeyPatch):
        """publisher = github selects the API publisher with the env token."""
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        config = MultiReleaseConfig(
            publisher="github", github=GitHubConfig(owner="acme", repo="platform")
        )

        publisher = make_publisher(mock_repo, config)

        assert isinstance(publisher, GitHubPublisher)
        assert publisher.client.owner == "acme"
        publisher.client.close()
