"""Core business logic for multi-release.

This module contains the fundamental building blocks:
- Version triples and bump types
- Conventional commit classification
- Module dependency graph (cycle detection, topological order)
- Version calculation with breaking-change propagation
- Release orchestration
"""

from __future__ import annotations

from multirelease.core.calculator import calculate_versions
from multirelease.core.changelog import render_module_changelog
from multirelease.core.commits import (
    GroupedCommits,
    classify_commits,
    filter_skip_release_commits,
    group_commits,
)
from multirelease.core.graph import Module, ModuleGraph
from multirelease.core.interfaces import ModuleDefinition
from multirelease.core.orchestrator import (
    ModuleReport,
    ReleaseOrchestrator,
    ReleaseResult,
    build_graph,
)
from multirelease.core.version import BumpType, Version, parse_version

__all__ = [
    # Version
    "BumpType",
    # Commits
    "GroupedCommits",
    # Graph
    "Module",
    "ModuleDefinition",
    "ModuleGraph",
    # Orchestration
    "ModuleReport",
    "ReleaseOrchestrator",
    "ReleaseResult",
    "Version",
    "build_graph",
    "calculate_versions",
    "classify_commits",
    "filter_skip_release_commits",
    "group_commits",
    "parse_version",
    # Changelog
    "render_module_changelog",
]
