"""Conventional commit classification.

Commits are reduced to their subject lines and matched against a
fixed set of prefixes: a breaking prefix (``feat!:``) or a breaking
marker anywhere in the text, a feature prefix (``feat:``) and a fix
prefix (``fix:``). Everything else is ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from multirelease.config.models import CommitsConfig
from multirelease.core.version import BumpType


def is_breaking(subject: str, config: CommitsConfig) -> bool:
    """Check whether a commit subject announces a breaking change."""
    return subject.startswith(config.breaking_prefix) or config.breaking_marker in subject


def classify_commits(commits: Sequence[str], config: CommitsConfig | None = None) -> BumpType:
    """Reduce commit subjects to a single bump type.

    The first breaking commit short-circuits to MAJOR. Otherwise a
    feature commit raises the result to MINOR and a fix commit raises
    it to PATCH only while nothing else has been seen.

    Args:
        commits: Commit subjects in history order
        config: Prefix configuration (defaults to CommitsConfig())

    Returns:
        BumpType for the whole sequence; NONE for no commits
    """
    config = config or CommitsConfig()
    bump = BumpType.NONE

    for subject in commits:
        if is_breaking(subject, config):
            return BumpType.MAJOR
        if subject.startswith(config.feature_prefix):
            bump = bump.escalate(BumpType.MINOR)
        elif subject.startswith(config.fix_prefix) and bump == BumpType.NONE:
            bump = BumpType.PATCH

    return bump


def filter_skip_release_commits(commits: Iterable[str], patterns: Sequence[str]) -> list[str]:
    """Drop commits whose subject carries a skip-release marker.

    Markers are matched case-insensitively anywhere in the subject.
    """
    lowered = [pattern.lower() for pattern in patterns]
    return [
        subject
        for subject in commits
        if not any(pattern in subject.lower() for pattern in lowered)
    ]


@dataclass
class GroupedCommits:
    """Commit subjects grouped for changelog rendering."""

    breaking: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    fixes: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.breaking or self.features or self.fixes)


def group_commits(commits: Iterable[str], config: CommitsConfig | None = None) -> GroupedCommits:
    """Group commit subjects into breaking changes, features and fixes."""
    config = config or CommitsConfig()
    grouped = GroupedCommits()

    for subject in commits:
        if is_breaking(subject, config):
            grouped.breaking.append(subject)
        elif subject.startswith(config.feature_prefix):
            grouped.features.append(subject)
        elif subject.startswith(config.fix_prefix):
            grouped.fixes.append(subject)

    return grouped
