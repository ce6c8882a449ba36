"""New version calculation over a topologically ordered module list.

Because dependencies are always processed before their dependents,
propagating a breaking change one hop at a time is enough: by the time
a module is reached, every dependency already carries its final
severity. A module that was pushed to a bump by a breaking dependency
passes the push on to its own dependents, so the whole downstream
closure of a major change is bumped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from multirelease.core.version import BumpType, Version

if TYPE_CHECKING:
    from multirelease.core.graph import Module, ModuleGraph

logger = logging.getLogger(__name__)


def calculate_versions(
    graph: ModuleGraph,
    ordered: Sequence[Module],
    severity_of: Callable[[Module], BumpType] | None = None,
) -> dict[str, Version]:
    """Assign ``new_version`` to every module, in place.

    Args:
        graph: Graph owning the modules
        ordered: Modules in dependency order (dependencies first)
        severity_of: Optional override of each module's own severity;
            applied once per module before calculation

    Returns:
        Mapping of module name to its new version
    """
    if severity_of is not None:
        for module in ordered:
            module.escalate(severity_of(module))

    results: dict[str, Version] = {}
    # Modules downstream of a major change, directly or transitively
    forced: set[str] = set()

    for module in ordered:
        severity = module.severity
        if severity == BumpType.NONE:
            module.new_version = module.current_version
        else:
            module.new_version = module.current_version.bump(severity)

        if severity == BumpType.MAJOR or module.name in forced:
            for dependent in graph.dependents_of(module.name):
                if dependent.severity in (BumpType.NONE, BumpType.PATCH):
                    logger.debug(
                        "Propagating minor bump from %s to %s", module.name, dependent.name
                    )
                    dependent.severity = BumpType.MINOR
                forced.add(dependent.name)

        results[module.name] = module.new_version

    return results
