"""changelogger - categorized changelogs from git history.

Commits are classified from their conventional prefixes, the next
semantic version is derived from what changed, and a markdown release
section is prepended to CHANGELOG.md.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
