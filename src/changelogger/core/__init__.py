"""Core business logic for changelogger.

This module contains the fundamental building blocks:
- Semantic version parsing and the next-version policy
- Commit classification from conventional prefixes
- Release section rendering and changelog merging
- Release planning
"""

from __future__ import annotations

from changelogger.core.changelog import (
    build_release_section,
    extract_issue_reference,
    write_changelog,
)
from changelogger.core.commits import (
    Commit,
    CommitCategory,
    GroupedCommits,
    classify_commit,
    classify_commits,
    default_resolver,
    group_commits,
    is_release_message,
    resolve_unclassified,
)
from changelogger.core.release import ReleasePlan, plan_release
from changelogger.core.version import (
    BumpType,
    Version,
    determine_bump,
    next_version,
    parse_version,
    resolve_new_version,
)

__all__ = [
    # Version
    "BumpType",
    # Commits
    "Commit",
    "CommitCategory",
    "GroupedCommits",
    # Release
    "ReleasePlan",
    "Version",
    # Changelog
    "build_release_section",
    "classify_commit",
    "classify_commits",
    "default_resolver",
    "determine_bump",
    "extract_issue_reference",
    "group_commits",
    "is_release_message",
    "next_version",
    "parse_version",
    "plan_release",
    "resolve_new_version",
    "resolve_unclassified",
    "write_changelog",
]
