"""Implementation of the 'update' command.

The update command computes new module versions and, with
``--execute``, writes them back, commits, and tags each module.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from multirelease.config import load_config
from multirelease.core.orchestrator import ReleaseOrchestrator
from multirelease.core.version import BumpType
from multirelease.exceptions import ReleaseError
from multirelease.project.gradle import GradleProjectReader, GradleProjectWriter
from multirelease.vcs import GitHistoryProvider, GitRepository, make_publisher

if TYPE_CHECKING:
    from rich.console import Console

    from multirelease.core.orchestrator import ReleaseResult

_SEVERITY_STYLES = {
    BumpType.MAJOR: "red",
    BumpType.MINOR: "yellow",
    BumpType.PATCH: "green",
    BumpType.NONE: "dim",
}


def run_update(
    path: str | None,
    execute: bool,
    config_path: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the update command.

    Args:
        path: Optional path to the project root
        execute: Whether to actually apply changes
        config_path: Optional explicit configuration file
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        config = load_config(Path(config_path) if config_path else project_path)
    except ReleaseError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    try:
        repo = GitRepository(project_path)
        writer = GradleProjectWriter(config.gradle, config.changelog)
        orchestrator = ReleaseOrchestrator(
            reader=GradleProjectReader(project_path, config.gradle),
            history=GitHistoryProvider(repo, config),
            writer=writer,
            publisher=make_publisher(repo, config),
            config=config,
            changelog_writer=writer,
        )
        result = orchestrator.run(dry_run=not execute)
    except ReleaseError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    console.print(f"\n{mode_str} - {len(result.changed)} of {len(result.modules)} module(s) change\n")
    console.print(render_result_table(result))

    if not execute:
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    console.print(
        Panel(
            f"Files written: [cyan]{len(result.written)}[/]\n"
            f"Tags created: [green]{len(result.created_tags)}[/]\n"
            f"Tags already present: [dim]{len(result.existing_tags)}[/]",
            title="[green]Update Complete[/]",
            border_style="green",
        )
    )


def render_result_table(result: ReleaseResult) -> Table:
    """Build the module/current/new/severity summary table."""
    table = Table(title="Module versions")
    table.add_column("Module", style="cyan")
    table.add_column("Current")
    table.add_column("New")
    table.add_column("Change")

    for report in result.modules:
        style = _SEVERITY_STYLES[report.severity]
        new = f"[bold]{report.new_version}[/]" if report.changed else str(report.new_version)
        table.add_row(
            report.name,
            str(report.current_version),
            new,
            f"[{style}]{report.severity}[/]",
        )

    return table
