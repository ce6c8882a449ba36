"""Command-line entry point for multi-release."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from multirelease import __version__

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="multi-release")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to multirelease.toml (defaults to the project root)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """Dependency-aware versioning for multi-module projects."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    setup_logging(verbose)


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.option("--execute", is_flag=True, help="Write versions, changelogs and tags")
@click.pass_context
def update(ctx: click.Context, path: str | None, execute: bool) -> None:
    """Compute new module versions (dry run unless --execute)."""
    from multirelease.cli.commands.update import run_update

    run_update(path, execute, ctx.obj["config_path"], console, err_console)


@cli.command()
@click.argument("path", required=False, type=click.Path(exists=True, file_okay=False))
@click.pass_context
def graph(ctx: click.Context, path: str | None) -> None:
    """Validate the module graph and print the versioning order."""
    from multirelease.cli.commands.graph import run_graph

    run_graph(path, ctx.obj["config_path"], console, err_console)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
