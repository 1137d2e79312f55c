"""Command line application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from changelogger import __version__

app = typer.Typer(
    name="changelogger",
    help="Generate or update CHANGELOG.md from git commits.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    path: Annotated[
        str | None,
        typer.Argument(help="Path to the repository, defaults to current directory"),
    ] = None,
    new_version: Annotated[
        str | None,
        typer.Option("--new-version", help="New version, otherwise computed from commits"),
    ] = None,
    from_tag: Annotated[
        str | None,
        typer.Option("--from-tag", help="Tag to start from, otherwise latest semver tag"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="File to write the changelog to"),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print to stdout instead of writing the file"),
    ] = False,
    non_interactive: Annotated[
        bool,
        typer.Option(
            "--non-interactive",
            help="Do not ask questions, unknown commits become patches",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Classify new commits and add a release section to the changelog."""
    from changelogger.cli.commands.generate import run_generate

    _configure_logging(verbose)
    run_generate(
        path=path,
        new_version=new_version,
        from_tag=from_tag,
        output=output,
        dry_run=dry_run,
        non_interactive=non_interactive,
        console=console,
        err_console=err_console,
    )


@app.command()
def version() -> None:
    """Show the changelogger version."""
    console.print(f"changelogger {__version__}")


def main() -> None:
    app()
