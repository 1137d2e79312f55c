"""Commit classification.

A commit's category is inferred from its summary line:

- release markers (``-> v1.2.3``) are ignored
- a bare ``tweak``/``tweaks`` is a patch
- conventional prefixes (``type: ...`` or ``type(scope): ...``) are looked
  up in PREFIX_CATEGORIES and stripped from the summary

Commits that match none of these are left unclassified and resolved by
a caller-supplied resolver (an interactive prompt, or PATCH by default).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from changelogger.core.version import Version
from changelogger.exceptions import InvalidVersionError

logger = logging.getLogger(__name__)


class CommitCategory(StrEnum):
    """Impact of a commit on the next release."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    IGNORE = "ignore"


@dataclass
class Commit:
    """A commit as read from the repository.

    ``summary`` is the only mutable part: classification strips a
    recognized prefix from it so the changelog shows the bare message.
    """

    sha: str
    short_sha: str
    summary: str
    body: str = ""


GroupedCommits = dict[CommitCategory, list[Commit]]
Resolver = Callable[[Commit], CommitCategory]

PREFIX_CATEGORIES: dict[str, CommitCategory] = {
    "docs": CommitCategory.IGNORE,
    "doc": CommitCategory.IGNORE,
    "style": CommitCategory.IGNORE,
    "chore": CommitCategory.IGNORE,
    "test": CommitCategory.IGNORE,
    "tweak": CommitCategory.PATCH,
    "tweaks": CommitCategory.PATCH,
    "fix": CommitCategory.PATCH,
    "fixes": CommitCategory.PATCH,
    "perf": CommitCategory.PATCH,
    "refactor": CommitCategory.PATCH,
    "patch": CommitCategory.PATCH,
    "feat": CommitCategory.MINOR,
    "minor": CommitCategory.MINOR,
    "breaking": CommitCategory.MAJOR,
    "major": CommitCategory.MAJOR,
}

TWEAK_KEYWORDS = frozenset({"tweak", "tweaks"})
RELEASE_MARKER = "-> "

# Scoped form is tried first; otherwise "feat(api): x" would be read as type "feat(api)"
SCOPED_PREFIX_RE = re.compile(r"^([^():]+)\([^)]+\):\s+")
SIMPLE_PREFIX_RE = re.compile(r"^([^:]+):\s+")


def is_release_message(summary: str) -> Version | None:
    """Return the version of a release commit (``-> v1.2.3`` or ``-> 1.2.3``).

    Anything else, including an arrow followed by an invalid version,
    returns None.
    """
    if not summary.startswith(RELEASE_MARKER):
        return None
    rest = summary.removeprefix(RELEASE_MARKER).removeprefix("v")
    try:
        return Version.parse(rest)
    except InvalidVersionError:
        return None


def category_for_prefix(prefix: str) -> CommitCategory | None:
    """Look up a conventional commit type, ignoring ASCII case."""
    if not prefix.isascii():
        return None
    return PREFIX_CATEGORIES.get(prefix.lower())


def classify_commit(commit: Commit) -> CommitCategory | None:
    """Infer the category of a commit from its summary.

    When a conventional prefix is recognized it is removed from
    ``commit.summary``, together with the scope and the whitespace after
    the colon.

    Args:
        commit: Commit to classify (its summary may be rewritten)

    Returns:
        The category, or None when the commit needs manual classification
    """
    summary = commit.summary

    if is_release_message(summary) is not None:
        return CommitCategory.IGNORE

    if summary.isascii() and summary.lower() in TWEAK_KEYWORDS:
        return CommitCategory.PATCH

    match = SCOPED_PREFIX_RE.match(summary) or SIMPLE_PREFIX_RE.match(summary)
    if match is None:
        return None

    category = category_for_prefix(match.group(1))
    if category is not None:
        commit.summary = summary[match.end() :]
    return category


def classify_commits(commits: list[Commit]) -> list[tuple[Commit, CommitCategory | None]]:
    """Classify each commit, keeping the input order."""
    classified = [(commit, classify_commit(commit)) for commit in commits]
    unresolved = sum(1 for _, category in classified if category is None)
    logger.debug("Classified %d commits, %d need resolution", len(classified), unresolved)
    return classified


def resolve_unclassified(
    classified: list[tuple[Commit, CommitCategory | None]],
    resolver: Resolver,
) -> list[tuple[Commit, CommitCategory]]:
    """Fill in missing categories by asking ``resolver`` once per commit."""
    return [
        (commit, category if category is not None else resolver(commit))
        for commit, category in classified
    ]


def default_resolver(commit: Commit) -> CommitCategory:
    """Resolver for non-interactive runs: unknown commits are patches."""
    logger.debug("Defaulting %s to patch: %s", commit.short_sha, commit.summary)
    return CommitCategory.PATCH


def group_commits(classified: list[tuple[Commit, CommitCategory]]) -> GroupedCommits:
    """Group commits by category, dropping ignored ones.

    Order within each group follows the input order.
    """
    grouped: GroupedCommits = {}
    for commit, category in classified:
        if category == CommitCategory.IGNORE:
            continue
        grouped.setdefault(category, []).append(commit)
    return grouped
