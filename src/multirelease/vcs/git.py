"""Git operations via the git command line.

GitRepository is a thin wrapper over ``git`` subprocess calls.
GitHistoryProvider builds on it to answer "what changed in this
module since its last release".
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from multirelease.config.models import MultiReleaseConfig
from multirelease.exceptions import GitError, HistoryUnavailableError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


class GitRepository:
    """A local git working copy."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path).resolve()
        if not self.path.is_dir():
            raise GitError(f"Not a directory: {self.path}")

    def _run(self, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {args[0]} failed with exit code {e.returncode}", stderr=e.stderr) from e
        return result.stdout.strip()

    def head_sha(self) -> str:
        return self._run("rev-parse", "HEAD")

    def ref_exists(self, ref: str) -> bool:
        try:
            self._run("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        except GitError:
            return False
        return True

    def tag_exists(self, tag: str) -> bool:
        return bool(self._run("tag", "--list", tag))

    def get_latest_tag(self, pattern: str) -> str | None:
        """Return the highest version-sorted tag matching ``pattern``."""
        output = self._run("tag", "--list", pattern, "--sort=-v:refname")
        tags = output.splitlines()
        return tags[0] if tags else None

    def get_commit_subjects(self, since: str | None = None, path: Path | None = None) -> list[str]:
        """Return commit subjects, newest first.

        Args:
            since: Exclusive starting ref; full history when None
            path: Restrict to commits touching this path
        """
        args = ["log", "--format=%s"]
        if since:
            args.append(f"{since}..HEAD")
        if path is not None:
            args.extend(["--", str(path)])
        output = self._run(*args)
        return [line for line in output.splitlines() if line]

    def add(self, paths: Sequence[Path | str]) -> None:
        self._run("add", "--", *(str(p) for p in paths))

    def commit(self, message: str) -> str:
        self._run("commit", "-m", message)
        return self.head_sha()

    def create_tag(self, tag: str, ref: str | None = None, message: str | None = None) -> None:
        args = ["tag", "-a", tag, "-m", message or tag]
        if ref:
            args.append(ref)
        self._run(*args)

    def push(self, remote: str, ref: str | None = None) -> None:
        args = ["push", remote]
        if ref:
            args.append(ref)
        self._run(*args)


class GitHistoryProvider:
    """Commit history per module, bounded by the module's last release tag."""

    def __init__(self, repo: GitRepository, config: MultiReleaseConfig | None = None) -> None:
        self.repo = repo
        self.config = config or MultiReleaseConfig()

    def last_release_for(self, module_name: str) -> str | None:
        """Return the module's newest release tag, None for a first release."""
        pattern = f"{self.config.tag_prefix(module_name)}*"
        try:
            tag = self.repo.get_latest_tag(pattern)
        except GitError as e:
            raise HistoryUnavailableError(module_name, str(e)) from e

        if tag is None:
            logger.info("No previous release for %s; treating as first release", module_name)
        else:
            logger.debug("Last release of %s: %s", module_name, tag)
        return tag

    def commits_since(self, location: Path, pointer: str | None) -> list[str]:
        """Return commit subjects touching ``location`` since ``pointer``.

        A pointer that no longer resolves falls back to the full history.

        Raises:
            HistoryUnavailableError: If git cannot read the history
        """
        try:
            if pointer and not self.repo.ref_exists(pointer):
                logger.warning("%s does not exist; using full history", pointer)
                pointer = None
            return self.repo.get_commit_subjects(since=pointer, path=Path(location))
        except GitError as e:
            raise HistoryUnavailableError(str(location), str(e)) from e
