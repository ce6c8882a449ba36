"""Pydantic models for multi-release configuration.

All settings have defaults, so an empty or missing configuration
file yields a working setup for a Gradle Kotlin DSL project.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommitsConfig(BaseModel):
    """Commit classification settings."""

    model_config = ConfigDict(extra="forbid")

    breaking_prefix: str = "feat!:"
    breaking_marker: str = "BREAKING CHANGE"
    feature_prefix: str = "feat:"
    fix_prefix: str = "fix:"
    skip_release_patterns: list[str] = Field(
        default_factory=lambda: ["[skip release]", "[release skip]", "[no release]"]
    )


class GradleConfig(BaseModel):
    """Where to find modules, versions and dependencies."""

    model_config = ConfigDict(extra="forbid")

    settings_file: str = "settings.gradle.kts"
    build_file: str = "build.gradle.kts"
    default_version: str = "0.1.0"


class ChangelogConfig(BaseModel):
    """Per-module changelog settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    filename: str = "CHANGELOG.md"


class GitHubConfig(BaseModel):
    """GitHub API settings used by the github publisher."""

    model_config = ConfigDict(extra="forbid")

    owner: str | None = None
    repo: str | None = None
    api_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"
    timeout: float = 30.0


class MultiReleaseConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    tag_format: str = "{module}-v{version}"
    commit_message: str = "chore: Update module versions"
    remote: str = "origin"
    push: bool = True
    publisher: Literal["git", "github"] = "git"

    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    gradle: GradleConfig = Field(default_factory=GradleConfig)
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    @field_validator("tag_format")
    @classmethod
    def _check_tag_format(cls, value: str) -> str:
        if "{module}" not in value or "{version}" not in value:
            raise ValueError("tag_format must contain {module} and {version}")
        return value

    def tag_prefix(self, module_name: str) -> str:
        """Tag text preceding the version for a module, e.g. ``core-v``."""
        return self.tag_format.split("{version}", 1)[0].format(module=tag_safe_name(module_name))

    def tag_for(self, module_name: str, version: str) -> str:
        """Render the release tag for a module version."""
        return self.tag_format.format(module=tag_safe_name(module_name), version=version)


def tag_safe_name(module_name: str) -> str:
    """Turn ``:feature:auth`` into ``feature-auth`` for use in tag names."""
    return module_name.lstrip(":").replace(":", "-")
