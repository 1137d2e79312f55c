"""Release planning.

Ties classification, resolution, grouping and the version policy
together: given the commits since the last release, decide what goes
into the changelog and which version it gets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from changelogger.core.commits import (
    classify_commits,
    default_resolver,
    group_commits,
    resolve_unclassified,
)
from changelogger.core.version import resolve_new_version
from changelogger.exceptions import NoCommitsError, NothingToReleaseError

if TYPE_CHECKING:
    from changelogger.core.commits import Commit, GroupedCommits, Resolver
    from changelogger.core.version import Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleasePlan:
    """Outcome of planning a release."""

    last_version: Version
    new_version: Version
    grouped: GroupedCommits

    @property
    def commit_count(self) -> int:
        return sum(len(commits) for commits in self.grouped.values())


def plan_release(
    commits: list[Commit],
    last_version: Version,
    *,
    resolver: Resolver = default_resolver,
    explicit_version: str | None = None,
) -> ReleasePlan:
    """Classify commits and decide the next version.

    Args:
        commits: Commits since the last release, newest first
        last_version: Previous release, 0.0.0 when there is none
        resolver: Called for each commit that cannot be classified automatically
        explicit_version: Version to use instead of the computed one

    Returns:
        The release plan

    Raises:
        NoCommitsError: If ``commits`` is empty
        NothingToReleaseError: If every commit is ignored
        InvalidVersionError: If ``explicit_version`` is malformed
        VersionNotGreaterError: If ``explicit_version`` is not after ``last_version``
    """
    if not commits:
        raise NoCommitsError("No commits found since starting point")

    classified = resolve_unclassified(classify_commits(commits), resolver)
    grouped = group_commits(classified)

    if not grouped:
        raise NothingToReleaseError("No important commits found, nothing to put into changelog")

    new_version = resolve_new_version(last_version, grouped.keys(), explicit_version)
    logger.debug("Planned %s -> %s", last_version, new_version)

    return ReleasePlan(last_version=last_version, new_version=new_version, grouped=grouped)
