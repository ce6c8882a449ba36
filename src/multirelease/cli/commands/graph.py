"""Implementation of the 'graph' command.

Builds the module graph, checks it for cycles and prints the order in
which modules are versioned.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.tree import Tree

from multirelease.config import load_config
from multirelease.core.orchestrator import build_graph
from multirelease.exceptions import CyclicDependencyError, ReleaseError
from multirelease.project.gradle import GradleProjectReader

if TYPE_CHECKING:
    from rich.console import Console


def run_graph(
    path: str | None,
    config_path: str | None,
    console: Console,
    err_console: Console,
) -> None:
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(Path(config_path) if config_path else project_path)
        graph = build_graph(GradleProjectReader(project_path, config.gradle))
        graph.detect_cycles()
        ordered = graph.topological_order()
    except CyclicDependencyError as e:
        err_console.print(f"[red]Cyclic dependency:[/] {' -> '.join(e.cycle)}")
        raise SystemExit(1) from e
    except ReleaseError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    tree = Tree(f"[bold]{len(ordered)} module(s)[/], dependencies first")
    for module in ordered:
        branch = tree.add(f"[cyan]{module.name}[/] [dim]{module.current_version}[/]")
        for dependency in module.dependencies:
            branch.add(f"[dim]depends on[/] {dependency}")

    console.print(tree)
