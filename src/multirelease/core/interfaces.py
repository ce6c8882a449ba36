"""Contracts for the collaborators used by the release orchestrator.

The core never touches files, git or the network directly. Everything
is reached through these protocols, which makes the orchestrator easy
to drive from tests with in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class ModuleDefinition:
    """A module as declared by the project reader.

    Attributes:
        name: Unique module name
        dependencies: Declared dependency names (may include unmanaged ones)
        current_version: Version string as found in the build file
        location: Opaque handle passed back to the writer
    """

    name: str
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    current_version: str = "0.1.0"
    location: Any = None


class ProjectReader(Protocol):
    def list_modules(self) -> Sequence[ModuleDefinition]:
        """Return every managed module; omitted modules are unmanaged."""
        ...


class HistoryProvider(Protocol):
    def last_release_for(self, module_name: str) -> str | None:
        """Return the pointer of the module's last release, None for a first release."""
        ...

    def commits_since(self, location: Any, pointer: str | None) -> Sequence[str]:
        """Return commit subjects touching ``location`` since ``pointer``.

        Raises:
            HistoryUnavailableError: If history cannot be read
        """
        ...


class VersionWriter(Protocol):
    def persist_version(self, location: Any, new_version: str) -> Any:
        """Write the version for a module; returns what was modified."""
        ...


class ChangelogWriter(Protocol):
    def prepend_changelog(self, location: Any, content: str) -> Any:
        """Prepend a changelog section for a module; returns what was modified."""
        ...


class Publisher(Protocol):
    def tag_exists(self, tag_name: str) -> bool: ...

    def create_tag(self, tag_name: str, pointer: str | None) -> None:
        """Create a tag at ``pointer`` (current head when None).

        Raises:
            PublishConflictError: If the tag already exists
        """
        ...

    def record_batch_change(self, changed_locations: Sequence[Any]) -> str | None:
        """Record all modified files as one change; returns its pointer."""
        ...
