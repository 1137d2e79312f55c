"""Interactive classification of commits without a recognized prefix."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.prompt import Prompt

from changelogger.core.commits import CommitCategory

if TYPE_CHECKING:
    from rich.console import Console

    from changelogger.core.commits import Commit, Resolver

CHOICES = [
    CommitCategory.PATCH.value,
    CommitCategory.MINOR.value,
    CommitCategory.MAJOR.value,
    CommitCategory.IGNORE.value,
]


def ask_category(commit: Commit, console: Console) -> CommitCategory:
    """Ask the user for the category of ``commit``.

    Returns PATCH when input ends before an answer is given.
    """
    console.print(
        f"\n[bold]Commit[/] [yellow]{commit.short_sha}[/] [bold]{escape(commit.summary)}[/]"
    )
    try:
        answer = Prompt.ask(
            "Select type",
            choices=CHOICES,
            default=CommitCategory.PATCH.value,
            console=console,
        )
    except EOFError:
        return CommitCategory.PATCH
    return CommitCategory(answer)


def make_interactive_resolver(console: Console) -> Resolver:
    """Build a resolver that prompts on ``console`` for every commit."""

    def resolve(commit: Commit) -> CommitCategory:
        return ask_category(commit, console)

    return resolve
