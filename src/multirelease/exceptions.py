"""Exception hierarchy for multi-release.

Every error raised by the library derives from ReleaseError so the
CLI can report it with a precise message and a non-zero exit code.
"""

from __future__ import annotations


class ReleaseError(Exception):
    """Base class for all multi-release errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ReleaseError):
    """Configuration could not be loaded or is invalid."""


class ConfigNotFoundError(ConfigError):
    """The configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """The configuration file has invalid content."""


# =============================================================================
# Project structure
# =============================================================================


class ProjectError(ReleaseError):
    """The managed project could not be read or written."""


class DuplicateModuleError(ProjectError):
    """Two modules claim the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate module: {name}")


class CyclicDependencyError(ProjectError):
    """The module graph contains a dependency cycle.

    Attributes:
        cycle: Module names along the cycle, first and last element equal
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Cyclic dependency detected: {' -> '.join(cycle)}")


class InvalidVersionError(ReleaseError):
    """A version string is not a MAJOR.MINOR.PATCH triple."""

    def __init__(self, version: str, module: str | None = None) -> None:
        self.version = version
        self.module = module
        where = f" for module {module}" if module else ""
        super().__init__(f"Invalid version {version!r}{where}: expected MAJOR.MINOR.PATCH")


# =============================================================================
# Version control and publishing
# =============================================================================


class GitError(ReleaseError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class HistoryUnavailableError(ReleaseError):
    """Commit history for a module could not be retrieved."""

    def __init__(self, module: str, reason: str | None = None) -> None:
        self.module = module
        detail = f": {reason}" if reason else ""
        super().__init__(f"History unavailable for {module}{detail}")


class PublishError(ReleaseError):
    """Recording a change or creating a tag failed."""


class PublishConflictError(PublishError):
    """The tag being created already exists."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag already exists: {tag}")


class ChangelogError(ReleaseError):
    """Changelog generation failed."""
