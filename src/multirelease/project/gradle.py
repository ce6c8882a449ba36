"""Gradle Kotlin DSL project reading and version updating.

Modules are discovered from ``include(...)`` calls in the settings
file. Each module's build file provides its version and its
``project(":...")`` dependencies.

Build files are edited with targeted regex replacement rather than
parsing, so formatting and comments are preserved.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from multirelease.config.models import ChangelogConfig, GradleConfig
from multirelease.core.interfaces import ModuleDefinition
from multirelease.exceptions import ChangelogError, ProjectError

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)
_INCLUDE_RE = re.compile(r"\binclude\s*\(([^)]*)\)")
_QUOTED_RE = re.compile(r"""["']([^"']+)["']""")
_VERSION_RE = re.compile(r"""^(\s*version\s*=\s*)["']([^"']+)["']""", re.MULTILINE)
_DEPENDENCY_RE = re.compile(
    r"""\b(?:implementation|api)\s*\(\s*project\s*\(\s*(?:path\s*=\s*)?["'](:?[^"']+)["']\s*\)\s*\)"""
)


def module_directory(root: Path, module_name: str) -> Path:
    """Map ``:feature:auth`` to ``<root>/feature/auth``."""
    return root.joinpath(*module_name.lstrip(":").split(":"))


def _strip_comments(content: str) -> str:
    return _COMMENT_RE.sub("", content)


def _normalize(module_name: str) -> str:
    return module_name if module_name.startswith(":") else f":{module_name}"


def parse_includes(settings_content: str) -> list[str]:
    """Extract module names from settings file ``include`` calls."""
    names: list[str] = []
    for call in _INCLUDE_RE.finditer(_strip_comments(settings_content)):
        for quoted in _QUOTED_RE.finditer(call.group(1)):
            name = _normalize(quoted.group(1))
            if name not in names:
                names.append(name)
    return names


def parse_version_declaration(build_content: str) -> str | None:
    match = _VERSION_RE.search(build_content)
    return match.group(2) if match else None


def parse_project_dependencies(build_content: str) -> list[str]:
    """Extract ``implementation(project(":x"))`` style dependencies."""
    deps: list[str] = []
    for match in _DEPENDENCY_RE.finditer(_strip_comments(build_content)):
        name = _normalize(match.group(1))
        if name not in deps:
            deps.append(name)
    return deps


class GradleProjectReader:
    """Reads module definitions from a Gradle Kotlin DSL build."""

    def __init__(self, root: Path, config: GradleConfig | None = None) -> None:
        self.root = root
        self.config = config or GradleConfig()

    def list_modules(self) -> list[ModuleDefinition]:
        """Return every included module that has a build file.

        Raises:
            ProjectError: If the settings file does not exist
        """
        settings_path = self.root / self.config.settings_file
        if not settings_path.is_file():
            raise ProjectError(f"Settings file not found: {settings_path}")

        definitions = []
        for name in parse_includes(settings_path.read_text(encoding="utf-8")):
            directory = module_directory(self.root, name)
            build_path = directory / self.config.build_file
            if not build_path.is_file():
                logger.debug("Skipping %s: no %s", name, self.config.build_file)
                continue

            content = build_path.read_text(encoding="utf-8")
            definitions.append(
                ModuleDefinition(
                    name=name,
                    dependencies=tuple(parse_project_dependencies(content)),
                    current_version=parse_version_declaration(content)
                    or self.config.default_version,
                    location=directory,
                )
            )

        return definitions


class GradleProjectWriter:
    """Writes versions and changelogs back into module directories."""

    def __init__(
        self,
        config: GradleConfig | None = None,
        changelog: ChangelogConfig | None = None,
    ) -> None:
        self.config = config or GradleConfig()
        self.changelog = changelog or ChangelogConfig()

    def persist_version(self, location: Path, new_version: str) -> Path:
        """Update the version declared in a module's build file.

        A build file without a version assignment gets one appended,
        matching the default version the reader assumed for it.
        Calling again with the same version leaves the file untouched.

        Returns:
            Path to the build file

        Raises:
            ProjectError: If the build file does not exist
        """
        build_path = location / self.config.build_file
        if not build_path.is_file():
            raise ProjectError(f"Build file not found: {build_path}")

        content = build_path.read_text(encoding="utf-8")
        new_content, count = _VERSION_RE.subn(rf'\g<1>"{new_version}"', content, count=1)

        if count == 0:
            logger.info("No version declared in %s; adding one", build_path)
            if new_content and not new_content.endswith("\n"):
                new_content += "\n"
            new_content += f'version = "{new_version}"\n'

        if new_content != content:
            build_path.write_text(new_content, encoding="utf-8")
        return build_path

    def prepend_changelog(self, location: Path, content: str) -> Path:
        """Insert a changelog section above any existing entries.

        Raises:
            ChangelogError: If the changelog cannot be read or written
        """
        changelog_path = location / self.changelog.filename
        try:
            existing = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else ""
            changelog_path.write_text(content + existing, encoding="utf-8")
        except OSError as e:
            raise ChangelogError(f"Could not update {changelog_path}: {e}") from e
        return changelog_path
