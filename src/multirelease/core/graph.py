"""Module dependency graph.

The graph owns every Module in a single name-keyed table. Edges are
stored as module names on both ends: ``dependencies`` is the declared
side and ``dependents`` is its mirror, maintained only by
``ModuleGraph.add_dependency`` so the two never diverge.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from multirelease.core.version import BumpType, Version
from multirelease.exceptions import CyclicDependencyError, DuplicateModuleError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Module:
    """A single independently versioned module.

    Attributes:
        name: Unique hierarchical name, e.g. ``:core`` or ``:feature:auth``
        current_version: Version currently declared by the module
        location: Opaque handle from the project reader (e.g. a directory)
        severity: Change severity; only ever escalated during a run
        new_version: Calculated version, None until calculated
        dependencies: Names of modules this module depends on
        dependents: Names of modules depending on this module
    """

    name: str
    current_version: Version
    location: Any = None
    severity: BumpType = BumpType.NONE
    new_version: Version | None = None
    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.new_version is not None and self.new_version != self.current_version

    def escalate(self, severity: BumpType) -> None:
        """Raise the module's severity to at least the given value."""
        self.severity = self.severity.escalate(severity)


class ModuleGraph:
    """Directed graph of modules and their build-time dependencies."""

    def __init__(self) -> None:
        self._modules: dict[str, Module] = {}

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[Module]:
        return iter(self._modules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __getitem__(self, name: str) -> Module:
        return self._modules[name]

    def add_module(
        self,
        name: str,
        current_version: Version | str,
        location: Any = None,
    ) -> Module:
        """Insert a new module.

        Raises:
            DuplicateModuleError: If a module with this name exists
            InvalidVersionError: If current_version is not a valid triple
        """
        if name in self._modules:
            raise DuplicateModuleError(name)
        if not isinstance(current_version, Version):
            current_version = Version.parse(current_version, module=name)

        module = Module(name=name, current_version=current_version, location=location)
        self._modules[name] = module
        return module

    def add_dependency(self, from_name: str, to_name: str) -> None:
        """Record that ``from_name`` depends on ``to_name``.

        Unknown names on either side are ignored; build files may
        reference modules outside the managed set.
        """
        source = self._modules.get(from_name)
        target = self._modules.get(to_name)
        if source is None or target is None:
            logger.debug("Ignoring dependency %s -> %s (unmanaged module)", from_name, to_name)
            return
        if to_name not in source.dependencies:
            source.dependencies.append(to_name)
        if from_name not in target.dependents:
            target.dependents.append(from_name)

    def dependencies_of(self, name: str) -> list[Module]:
        return [self._modules[dep] for dep in self._modules[name].dependencies]

    def dependents_of(self, name: str) -> list[Module]:
        return [self._modules[dep] for dep in self._modules[name].dependents]

    def detect_cycles(self) -> None:
        """Fail if the graph contains a dependency cycle.

        Walks depth-first from every unvisited module while keeping the
        current path as an ordered set. Revisiting a node on the path
        closes a cycle, reported from that node back to itself.

        Raises:
            CyclicDependencyError: With the offending cycle path
        """
        visited: set[str] = set()

        for root in self._modules:
            if root in visited:
                continue

            path: dict[str, None] = {root: None}
            stack = [(root, iter(self._modules[root].dependencies))]

            while stack:
                name, children = stack[-1]
                child = next(children, None)

                if child is None:
                    stack.pop()
                    del path[name]
                    visited.add(name)
                elif child in path:
                    names = list(path)
                    cycle = names[names.index(child) :] + [child]
                    raise CyclicDependencyError(cycle)
                elif child not in visited:
                    path[child] = None
                    stack.append((child, iter(self._modules[child].dependencies)))

    def topological_order(self) -> list[Module]:
        """Return every module after all of its dependencies.

        Post-order depth-first traversal in insertion order, so the
        result is reproducible for identical input.

        Raises:
            CyclicDependencyError: If a cycle is encountered
        """
        order: list[Module] = []
        visited: set[str] = set()
        in_progress: dict[str, None] = {}

        for root in self._modules:
            if root in visited:
                continue

            in_progress[root] = None
            stack = [(root, iter(self._modules[root].dependencies))]

            while stack:
                name, children = stack[-1]
                child = next(children, None)

                if child is None:
                    stack.pop()
                    del in_progress[name]
                    visited.add(name)
                    order.append(self._modules[name])
                elif child in in_progress:
                    names = list(in_progress)
                    raise CyclicDependencyError(names[names.index(child) :] + [child])
                elif child not in visited:
                    in_progress[child] = None
                    stack.append((child, iter(self._modules[child].dependencies)))

        return order
