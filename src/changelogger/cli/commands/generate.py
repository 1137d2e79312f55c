"""Implementation of the 'generate' command.

The generate command classifies the commits since the last release,
picks the next version and prepends a release section to the changelog.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from changelogger.config import load_config
from changelogger.core.changelog import build_release_section, write_changelog
from changelogger.core.commits import default_resolver
from changelogger.core.release import plan_release
from changelogger.core.version import ZERO
from changelogger.exceptions import ChangeloggerError
from changelogger.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console


def run_generate(
    path: str | None,
    new_version: str | None,
    from_tag: str | None,
    output: Path | None,
    dry_run: bool,
    non_interactive: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the generate command.

    Args:
        path: Optional path to the repository (or a directory inside it)
        new_version: Version override (e.g., "2.0.0"), otherwise computed
        from_tag: Tag to start from, otherwise the latest release tag
        output: Changelog file, otherwise the configured one
        dry_run: Print the section instead of writing it
        non_interactive: Treat commits without a known prefix as patches
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Initialize git repository
    try:
        repo = GitRepository(project_path)
    except ChangeloggerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e
    console.print("[cyan]Opened repository[/]")

    # Load configuration
    try:
        config = load_config(repo.path)
    except ChangeloggerError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    try:
        # Find the previous release
        if from_tag:
            since, last_version = repo.resolve_tag(from_tag, config.tag_prefix)
        elif latest := repo.find_latest_semver_tag(config.tag_prefix):
            tag, since, last_version = latest
            console.print(f"[bright_blue]Info[/] latest tag is {tag} (commit {since})")
        else:
            console.print(
                "[bright_blue]Info[/] no semver git tags found, "
                "assuming previous version 0.0.0 and using full history"
            )
            since, last_version = None, ZERO

        commits = repo.get_commits_since(since)

        if non_interactive or not config.interactive:
            resolver = default_resolver
        else:
            from changelogger.cli.prompt import make_interactive_resolver

            resolver = make_interactive_resolver(console)

        plan = plan_release(
            commits,
            last_version,
            resolver=resolver,
            explicit_version=new_version,
        )
    except ChangeloggerError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(
        f"[green]Version[/] previous version {plan.last_version} "
        f"-> new version {plan.new_version} ({plan.commit_count} commits)"
    )

    remote = repo.get_remote_info(config.remote)
    section = build_release_section(
        plan.new_version,
        plan.last_version,
        date.today(),
        remote,
        plan.grouped,
    )

    if dry_run:
        console.out(f"\n{section}", highlight=False)
        return

    changelog_path = output if output is not None else repo.path / config.output
    try:
        write_changelog(changelog_path, section)
    except ChangeloggerError as e:
        err_console.print(f"[red]Error writing changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"[bright_green]Success[/] updated {escape(str(changelog_path))}")
