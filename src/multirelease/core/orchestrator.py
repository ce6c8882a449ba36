"""Release orchestration.

A single pass with no rollback:

    read modules -> build graph -> cycle check -> fetch + classify
    commits -> calculate versions -> report (dry run) or apply

Apply writes changed versions and changelogs, records them as one
batched change and tags every module at its version of record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from multirelease.config.models import MultiReleaseConfig
from multirelease.core.calculator import calculate_versions
from multirelease.core.changelog import render_module_changelog
from multirelease.core.commits import classify_commits, filter_skip_release_commits
from multirelease.core.graph import ModuleGraph
from multirelease.exceptions import HistoryUnavailableError, PublishConflictError

if TYPE_CHECKING:
    from multirelease.core.graph import Module
    from multirelease.core.interfaces import (
        ChangelogWriter,
        HistoryProvider,
        ProjectReader,
        Publisher,
        VersionWriter,
    )
    from multirelease.core.version import BumpType, Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleReport:
    """Outcome of the calculation for one module."""

    name: str
    current_version: Version
    new_version: Version
    severity: BumpType

    @property
    def changed(self) -> bool:
        return self.new_version != self.current_version


@dataclass
class ReleaseResult:
    """Everything a run computed and, in apply mode, did."""

    dry_run: bool
    modules: list[ModuleReport] = field(default_factory=list)
    written: list[Any] = field(default_factory=list)
    created_tags: list[str] = field(default_factory=list)
    existing_tags: list[str] = field(default_factory=list)

    @property
    def changed(self) -> list[ModuleReport]:
        return [report for report in self.modules if report.changed]


def build_graph(reader: ProjectReader) -> ModuleGraph:
    """Build the module graph from the project reader's definitions.

    All modules are inserted before any edge so declaration order does
    not decide which dependencies are kept.
    """
    definitions = list(reader.list_modules())
    graph = ModuleGraph()

    for definition in definitions:
        graph.add_module(definition.name, definition.current_version, definition.location)
    for definition in definitions:
        for dependency in definition.dependencies:
            graph.add_dependency(definition.name, dependency)

    logger.info("Loaded %d module(s)", len(graph))
    return graph


class ReleaseOrchestrator:
    """Drives a release run through its external collaborators."""

    def __init__(
        self,
        reader: ProjectReader,
        history: HistoryProvider,
        writer: VersionWriter,
        publisher: Publisher,
        config: MultiReleaseConfig | None = None,
        changelog_writer: ChangelogWriter | None = None,
    ) -> None:
        self.reader = reader
        self.history = history
        self.writer = writer
        self.publisher = publisher
        self.config = config or MultiReleaseConfig()
        self.changelog_writer = changelog_writer
        self._commits: dict[str, list[str]] = {}

    def plan(self) -> tuple[ModuleGraph, list[Module]]:
        """Build, validate, classify and calculate without side effects.

        Returns:
            The graph and its modules in dependency order, each carrying
            its severity and new version
        """
        graph = build_graph(self.reader)
        graph.detect_cycles()

        for module in graph:
            commits = self._fetch_commits(module)
            self._commits[module.name] = commits
            module.escalate(classify_commits(commits, self.config.commits))
            logger.debug("%s: %d commit(s) -> %s", module.name, len(commits), module.severity)

        ordered = graph.topological_order()
        calculate_versions(graph, ordered)
        return graph, ordered

    def run(self, dry_run: bool = True) -> ReleaseResult:
        """Run the release.

        Args:
            dry_run: Report only when True; apply and tag when False

        Returns:
            ReleaseResult describing the computed versions and any actions
        """
        _, ordered = self.plan()
        result = ReleaseResult(
            dry_run=dry_run,
            modules=[
                ModuleReport(
                    name=module.name,
                    current_version=module.current_version,
                    new_version=module.new_version or module.current_version,
                    severity=module.severity,
                )
                for module in ordered
            ],
        )

        if dry_run:
            logger.info("Dry run: %d module(s) would change", len(result.changed))
            return result

        self._apply(ordered, result)
        return result

    def _fetch_commits(self, module: Module) -> list[str]:
        try:
            pointer = self.history.last_release_for(module.name)
            commits = list(self.history.commits_since(module.location, pointer))
        except HistoryUnavailableError as e:
            logger.warning("%s; treating as no changes", e)
            return []
        return filter_skip_release_commits(commits, self.config.commits.skip_release_patterns)

    def _apply(self, ordered: list[Module], result: ReleaseResult) -> None:
        for module in ordered:
            if not module.changed:
                continue
            written = self.writer.persist_version(module.location, str(module.new_version))
            result.written.append(written)
            logger.info("Updated %s to %s", module.name, module.new_version)

            if self.changelog_writer is not None and self.config.changelog.enabled:
                content = render_module_changelog(
                    module.name,
                    module.new_version,
                    self._commits.get(module.name, []),
                    self.config.commits,
                )
                result.written.append(self.changelog_writer.prepend_changelog(module.location, content))

        pointer = None
        if result.written:
            pointer = self.publisher.record_batch_change(result.written)
            logger.info("Recorded %d changed file(s)", len(result.written))

        for module in ordered:
            if module.new_version is None:
                continue
            tag = self.config.tag_for(module.name, str(module.new_version))
            if self.publisher.tag_exists(tag):
                logger.info("Tag already exists: %s", tag)
                result.existing_tags.append(tag)
                continue
            try:
                self.publisher.create_tag(tag, pointer)
            except PublishConflictError:
                logger.info("Tag already exists: %s", tag)
                result.existing_tags.append(tag)
                continue
            logger.info("Created tag %s", tag)
            result.created_tags.append(tag)
