"""Shared pytest fixtures for multi-release tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from multirelease.core.interfaces import ModuleDefinition


@pytest.fixture
def core_app_definitions() -> list[ModuleDefinition]:
    """:core (1.0.0) and :app (2.1.3) depending on :core."""
    return [
        ModuleDefinition(":core", (), "1.0.0", "core"),
        ModuleDefinition(":app", (":core",), "2.1.3", "app"),
    ]


@pytest.fixture
def gradle_project(tmp_path: Path) -> Path:
    """A Gradle Kotlin DSL project with :core, :api and :app modules."""
    (tmp_path / "settings.gradle.kts").write_text(
        """\
rootProject.name = "sample"

include(":core")
include(":api", ":app")
include(":docs")
"""
    )

    core = tmp_path / "core"
    core.mkdir()
    (core / "build.gradle.kts").write_text(
        """\
plugins {
    kotlin("jvm")
}

group = "com.example"
version = "1.0.0"
"""
    )

    api = tmp_path / "api"
    api.mkdir()
    (api / "build.gradle.kts").write_text(
        """\
version = "0.4.2"

dependencies {
    api(project(":core"))
    implementation("org.slf4j:slf4j-api:2.0.9")
}
"""
    )

    app = tmp_path / "app"
    app.mkdir()
    (app / "build.gradle.kts").write_text(
        """\
// application module
version = '2.1.3'

dependencies {
    implementation(project(":api"))
    implementation(project(":core"))
    implementation(project(":external"))
}
"""
    )

    return tmp_path


def _git(path: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=path, check=True, capture_output=True)


@pytest.fixture
def gradle_git_repo(gradle_project: Path) -> Path:
    """The Gradle project committed to a fresh git repository."""
    _git(gradle_project, "init", "-q")
    _git(gradle_project, "config", "user.email", "test@example.com")
    _git(gradle_project, "config", "user.name", "Test")
    _git(gradle_project, "config", "commit.gpgsign", "false")
    _git(gradle_project, "config", "tag.gpgsign", "false")
    _git(gradle_project, "add", ".")
    _git(gradle_project, "commit", "-q", "-m", "chore: initial import")
    return gradle_project


@pytest.fixture
def commit_file():
    """Write a file in a git repository and commit it with a message."""

    def _commit(repo: Path, relative: str, message: str) -> None:
        target = repo / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(message + "\n")
        _git(repo, "add", relative)
        _git(repo, "commit", "-q", "-m", message)

    return _commit
