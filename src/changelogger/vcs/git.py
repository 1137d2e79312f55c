"""Git repository access.

All operations shell out to the ``git`` executable and parse its
output. Only read operations are performed: tags, history and remotes.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from changelogger.core.commits import Commit
from changelogger.core.version import Version, parse_version
from changelogger.exceptions import (
    GitError,
    InvalidVersionError,
    RepositoryNotFoundError,
    TagNotFoundError,
)

logger = logging.getLogger(__name__)

# Record and field separators for `git log` output
_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"
_LOG_FORMAT = "%H%x1f%h%x1f%s%x1f%b%x1e"


@dataclass(frozen=True)
class RemoteInfo:
    """Web location of a remote repository.

    Attributes:
        base_url: e.g. ``https://github.com/owner/repo/``, always ending with ``/``
    """

    base_url: str


def parse_remote_url(url: str) -> RemoteInfo | None:
    """Turn a remote URL into a browsable base URL.

    Supports ``git@host:owner/repo[.git][/]`` and
    ``https://host/owner/repo[.git][/]``. Anything else returns None.

    Args:
        url: Remote URL as configured in git

    Returns:
        RemoteInfo, or None if the URL form is not supported
    """
    if url.startswith("git@"):
        if ":" not in url:
            return None
        host_part, path_part = url.split(":", 1)
        host = host_part.removeprefix("git@")
        path = path_part.rstrip("/").removesuffix(".git")
        return RemoteInfo(base_url=f"https://{host}/{path}/")

    if url.startswith("https://"):
        base = url.rstrip("/").removesuffix(".git")
        return RemoteInfo(base_url=f"{base}/")

    return None


class GitRepository:
    """A git work tree.

    Args:
        path: Repository root or any directory inside it

    Raises:
        RepositoryNotFoundError: If no repository encloses ``path``
    """

    def __init__(self, path: Path | str = ".") -> None:
        self.path = self._discover(Path(path))

    @staticmethod
    def _discover(path: Path) -> Path:
        try:
            result = subprocess.run(
                ["git", "-C", str(path), "rev-parse", "--show-toplevel"],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise RepositoryNotFoundError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise RepositoryNotFoundError(
                f"Could not open git repository at {path}",
                stderr=e.stderr,
            ) from e
        return Path(result.stdout.strip())

    def _run(self, *args: str) -> str:
        """Run a git command in the repository and return its stdout."""
        logger.debug("Running git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=self.path,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"git {args[0]} failed", stderr=e.stderr) from e
        return result.stdout

    def _commit_of(self, ref: str) -> tuple[str, int]:
        """Return the sha and commit timestamp a ref points to."""
        output = self._run("log", "-1", "--format=%H%x1f%ct", f"{ref}^{{commit}}", "--")
        sha, timestamp = output.strip().split(_FIELD_SEP)
        return sha, int(timestamp)

    def find_latest_semver_tag(self, prefix: str = "v") -> tuple[str, str, Version] | None:
        """Find the release tag pointing at the most recent commit.

        Tags are ``<prefix><semver>``; tags whose remainder is not a
        valid version are skipped.

        Returns:
            ``(tag, commit_sha, version)``, or None if there are no release tags
        """
        best: tuple[str, str, Version] | None = None
        best_time = 0

        for name in self._run("tag", "--list", f"{prefix}*").splitlines():
            name = name.strip()
            if not name:
                continue
            try:
                version = parse_version(name, prefix)
            except InvalidVersionError:
                logger.debug("Skipping non-semver tag %s", name)
                continue

            sha, commit_time = self._commit_of(name)
            if best is None or commit_time > best_time:
                best = (name, sha, version)
                best_time = commit_time

        return best

    def resolve_tag(self, tag: str, prefix: str = "v") -> tuple[str, Version]:
        """Resolve a release tag to its commit and version.

        Raises:
            TagNotFoundError: If the tag does not exist
            InvalidVersionError: If the tag name is not a version
        """
        try:
            sha = self._run("rev-parse", "--verify", f"{tag}^{{commit}}").strip()
        except GitError as e:
            raise TagNotFoundError(f"Could not find tag {tag}", stderr=e.stderr) from e

        try:
            version = parse_version(tag, prefix)
        except InvalidVersionError as e:
            raise InvalidVersionError(f"Tag {tag} does not look like a semver version") from e

        return sha, version

    def get_commits_since(self, since: str | None = None) -> list[Commit]:
        """List commits reachable from HEAD, newest first.

        Args:
            since: Commit whose history is excluded; None for the full history

        Raises:
            GitError: If HEAD does not point to a commit or git fails
        """
        try:
            self._run("rev-parse", "--verify", "HEAD")
        except GitError as e:
            raise GitError("HEAD has no target commit", stderr=e.stderr) from e

        args = ["log", "--topo-order", f"--format={_LOG_FORMAT}", "HEAD"]
        if since:
            args.append(f"^{since}")
        args.append("--")

        commits = []
        for record in self._run(*args).split(_RECORD_SEP):
            record = record.lstrip("\n")
            if not record:
                continue
            sha, short_sha, summary, body = record.split(_FIELD_SEP, 3)
            commits.append(
                Commit(
                    sha=sha,
                    short_sha=short_sha,
                    summary=summary or "No summary",
                    body=body.strip(),
                )
            )

        logger.debug("Found %d commits since %s", len(commits), since or "the beginning")
        return commits

    def get_remote_url(self, name: str = "origin") -> str | None:
        """Return the URL of a remote, or None if it is not configured."""
        try:
            url = self._run("remote", "get-url", name).strip()
        except GitError:
            logger.debug("Remote %s is not configured", name)
            return None
        return url or None

    def get_remote_info(self, name: str = "origin") -> RemoteInfo | None:
        """Browsable base URL of a remote, if it has a supported form."""
        url = self.get_remote_url(name)
        if url is None:
            return None
        return parse_remote_url(url)
