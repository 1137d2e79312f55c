"""Exception hierarchy for changelogger.

Every error raised on purpose by changelogger derives from
ChangeloggerError, so the CLI can report it uniformly and exit.
"""

from __future__ import annotations


class ChangeloggerError(Exception):
    """Base class for all changelogger errors."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(ChangeloggerError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """pyproject.toml was not found."""


class ConfigValidationError(ConfigError):
    """Configuration is malformed or has invalid values."""


# =============================================================================
# Git
# =============================================================================


class GitError(ChangeloggerError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class RepositoryNotFoundError(GitError):
    """No git repository at or above the given path."""


class TagNotFoundError(GitError):
    """A tag could not be resolved to a commit."""


# =============================================================================
# Versions
# =============================================================================


class VersionError(ChangeloggerError):
    """Base class for version errors."""


class InvalidVersionError(VersionError):
    """Text is not a valid semantic version."""


class VersionNotGreaterError(VersionError):
    """The new version does not come after the previous one."""


# =============================================================================
# Release
# =============================================================================


class ReleaseError(ChangeloggerError):
    """There is nothing sensible to release."""


class NoCommitsError(ReleaseError):
    """No commits since the starting point."""


class NothingToReleaseError(ReleaseError):
    """Every commit was ignored."""


# =============================================================================
# Changelog
# =============================================================================


class ChangelogError(ChangeloggerError):
    """Changelog generation failed."""


class ChangelogWriteError(ChangelogError):
    """The changelog file could not be read or written."""
