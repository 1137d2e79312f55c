"""Release section rendering and changelog persistence.

A release section is a markdown block: a version header, one
subsection per category that has commits, and a link comparing the
release with the previous tag. When the repository has a known remote,
versions, commits and issue numbers become links.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from changelogger.core.commits import CommitCategory
from changelogger.core.version import ZERO
from changelogger.exceptions import ChangelogWriteError

if TYPE_CHECKING:
    import datetime
    from pathlib import Path

    from changelogger.core.commits import Commit, GroupedCommits
    from changelogger.core.version import Version
    from changelogger.vcs.git import RemoteInfo

logger = logging.getLogger(__name__)

FOOTER = "--- Generated by changelogger"

SECTION_HEADINGS: dict[CommitCategory, str] = {
    CommitCategory.MAJOR: "Breaking changes",
    CommitCategory.MINOR: "New features",
    CommitCategory.PATCH: "Bug fixes",
}

# Squash merges append " (#123)"; plain references end with " #123"
SQUASHED_ISSUE_RE = re.compile(r"\s+\(#(\d+)\)")
TRAILING_ISSUE_RE = re.compile(r"\s+#(\d+)\Z")


def build_release_section(
    new_version: Version,
    last_version: Version,
    date: datetime.date,
    remote: RemoteInfo | None,
    grouped: GroupedCommits,
) -> str:
    """Build the markdown section for one release.

    Args:
        new_version: Version being released
        last_version: Previous release, 0.0.0 when there is none
        date: Release date
        remote: Remote repository used for links, if known
        grouped: Commits by category; IGNORE entries are not rendered

    Returns:
        Markdown text of the section
    """
    date_str = date.strftime("%Y-%m-%d")

    if remote is not None:
        header = (
            f"## [Version {new_version}]({remote.base_url}releases/tag/v{new_version})"
            f" ({date_str})\n"
        )
    else:
        header = f"## Version {new_version} ({date_str})\n"

    parts = [header]
    for category, heading in SECTION_HEADINGS.items():
        commits = grouped.get(category)
        if commits:
            parts.append(format_section(heading, commits, remote))

    if remote is not None and last_version != ZERO:
        parts.append(
            f"\n[...full changes]({remote.base_url}compare/v{last_version}...v{new_version})\n\n"
        )
    else:
        parts.append("\n")

    return "".join(parts)


def format_section(heading: str, commits: list[Commit], remote: RemoteInfo | None) -> str:
    """Render one subsection (e.g. "Bug fixes") as a markdown list."""
    lines = [f"\n### {heading}\n"]
    for commit in commits:
        lines.append(format_commit_line(commit, remote))
    lines.append("\n")
    return "".join(lines)


def format_commit_line(commit: Commit, remote: RemoteInfo | None) -> str:
    """Render ``* title: `sha` (#issue)`` for a single commit."""
    title, issue_id = extract_issue_reference(commit.summary)

    if remote is not None:
        commit_ref = f"[`{commit.short_sha}`]({remote.base_url}commit/{commit.short_sha})"
    else:
        commit_ref = f"`{commit.short_sha}`"

    if issue_id is None:
        issue_ref = ""
    elif remote is not None:
        issue_ref = f" ([#{issue_id}]({remote.base_url}issues/{issue_id}))"
    else:
        issue_ref = f" (#{issue_id})"

    return f"* {title}: {commit_ref}{issue_ref}\n"


def extract_issue_reference(title: str) -> tuple[str, str | None]:
    """Split an issue number off a commit title.

    The squashed form ``(#123)`` is tried first, then a trailing ``#123``.
    The matched reference is removed from the title.

    Returns:
        The remaining title and the issue number, or None if there was none
    """
    for pattern in (SQUASHED_ISSUE_RE, TRAILING_ISSUE_RE):
        match = pattern.search(title)
        if match:
            return pattern.sub("", title, count=1), match.group(1)
    return title, None


def write_changelog(path: Path, new_section: str) -> None:
    """Prepend a release section to the changelog at ``path``.

    A missing or blank file is initialized with the section and a
    footer. Otherwise the section is placed before the existing
    content, which is kept as is.

    Raises:
        ChangelogWriteError: If the file cannot be read or written
    """
    try:
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
    except (OSError, UnicodeDecodeError) as e:
        raise ChangelogWriteError(f"Could not read {path}: {e}") from e

    if existing.strip():
        content = f"{new_section}\n\n{existing}"
    else:
        content = f"{new_section}\n{FOOTER}\n"

    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ChangelogWriteError(f"Could not write {path}: {e}") from e

    logger.debug("Wrote %d characters to %s", len(content), path)
