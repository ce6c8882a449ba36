"""Configuration management for multi-release."""

from __future__ import annotations

from multirelease.config.loader import find_config_file, load_config
from multirelease.config.models import (
    ChangelogConfig,
    CommitsConfig,
    GitHubConfig,
    GradleConfig,
    MultiReleaseConfig,
)

__all__ = [
    "ChangelogConfig",
    "CommitsConfig",
    "GitHubConfig",
    "GradleConfig",
    "MultiReleaseConfig",
    "find_config_file",
    "load_config",
]
