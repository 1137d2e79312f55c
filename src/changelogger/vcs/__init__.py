"""Version control access."""

from __future__ import annotations

from changelogger.vcs.git import GitRepository, RemoteInfo, parse_remote_url

__all__ = ["GitRepository", "RemoteInfo", "parse_remote_url"]
