"""Tests for git repository access."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from changelogger.core.version import Version
from changelogger.exceptions import (
    GitError,
    InvalidVersionError,
    RepositoryNotFoundError,
    TagNotFoundError,
)
from changelogger.vcs.git import GitRepository, RemoteInfo, parse_remote_url

if TYPE_CHECKING:
    from pathlib import Path


class TestParseRemoteUrl:
    """Tests for parse_remote_url()."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://github.com/user/repo.git", "https://github.com/user/repo/"),
            ("https://github.com/user/repo/", "https://github.com/user/repo/"),
            ("https://github.com/user/repo", "https://github.com/user/repo/"),
            ("https://github.com/user/repo.git/", "https://github.com/user/repo/"),
            ("git@github.com:user/repo.git", "https://github.com/user/repo/"),
            ("git@github.com:user/repo", "https://github.com/user/repo/"),
            ("git@github.com:user/repo.git/", "https://github.com/user/repo/"),
            ("git@gitlab.com:group/project.git", "https://gitlab.com/group/project/"),
            ("https://github.com:443/user/repo.git", "https://github.com:443/user/repo/"),
        ],
    )
    def test_supported_forms(self, url: str, expected: str):
        assert parse_remote_url(url) == RemoteInfo(base_url=expected)

    @pytest.mark.parametrize(
        "url",
        ["not a url", "http://github.com/user/repo", "", "ssh://git@github.com/user/repo.git"],
    )
    def test_unsupported_forms(self, url: str):
        assert parse_remote_url(url) is None


class TestGitRepositoryErrors:
    """Error handling of GitRepository without a real repository."""

    def test_not_a_repository(self, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = subprocess.CalledProcessError(
                128, "git", stderr="fatal: not a git repository"
            )

            with pytest.raises(RepositoryNotFoundError, match="not a git repository"):
                GitRepository(tmp_path)

    def test_git_not_installed(self, tmp_path: Path):
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("git")

            with pytest.raises(RepositoryNotFoundError, match="git executable not found"):
                GitRepository(tmp_path)

    def test_git_error_includes_stderr(self):
        error = GitError("git log failed", stderr="fatal: bad revision\n")
        assert str(error) == "git log failed: fatal: bad revision"


class TestGitRepository:
    """Tests against a real temporary repository."""

    def test_discover_from_subdirectory(self, temp_git_repo: Path, git_commit):
        git_commit(temp_git_repo, "initial")
        subdir = temp_git_repo / "src" / "pkg"
        subdir.mkdir(parents=True)

        repo = GitRepository(subdir)

        assert repo.path.resolve() == temp_git_repo.resolve()

    def test_commits_newest_first(self, temp_git_repo: Path, git_commit):
        first = git_commit(temp_git_repo, "feat: first")
        second = git_commit(temp_git_repo, "fix: second\n\nLonger description.")

        commits = GitRepository(temp_git_repo).get_commits_since()

        assert [c.sha for c in commits] == [second, first]
        assert commits[0].summary == "fix: second"
        assert commits[0].body == "Longer description."
        assert second.startswith(commits[0].short_sha)

    def test_commits_since(self, temp_git_repo: Path, git_commit):
        git_commit(temp_git_repo, "feat: old")
        marker = git_commit(temp_git_repo, "-> v1.0.0")
        newest = git_commit(temp_git_repo, "fix: new")

        commits = GitRepository(temp_git_repo).get_commits_since(marker)

        assert [c.sha for c in commits] == [newest]

    def test_commits_without_head(self, temp_git_repo: Path):
        with pytest.raises(GitError, match="HEAD has no target commit"):
            GitRepository(temp_git_repo).get_commits_since()

    def test_no_tags(self, temp_git_repo: Path, git_commit):
        git_commit(temp_git_repo, "initial")

        assert GitRepository(temp_git_repo).find_latest_semver_tag() is None

    def test_latest_tag_by_commit_time(self, temp_git_repo: Path, git_commit, git):
        first = git_commit(temp_git_repo, "first")
        git(temp_git_repo, "tag", "v2.0.0")
        second = git_commit(temp_git_repo, "second")
        git(temp_git_repo, "tag", "v1.5.0")
        git(temp_git_repo, "tag", "v-not-a-version")
        git_commit(temp_git_repo, "third")

        latest = GitRepository(temp_git_repo).find_latest_semver_tag()

        assert latest == ("v1.5.0", second, Version(1, 5, 0))
        assert first != second

    def test_annotated_tag(self, temp_git_repo: Path, git_commit, git):
        sha = git_commit(temp_git_repo, "release")
        git(temp_git_repo, "tag", "-a", "v0.2.0", "-m", "Release 0.2.0")

        latest = GitRepository(temp_git_repo).find_latest_semver_tag()

        assert latest == ("v0.2.0", sha, Version(0, 2, 0))

    def test_resolve_tag(self, temp_git_repo: Path, git_commit, git):
        sha = git_commit(temp_git_repo, "release")
        git(temp_git_repo, "tag", "v1.2.3")

        assert GitRepository(temp_git_repo).resolve_tag("v1.2.3") == (sha, Version(1, 2, 3))

    def test_resolve_missing_tag(self, temp_git_repo: Path, git_commit):
        git_commit(temp_git_repo, "initial")

        with pytest.raises(TagNotFoundError, match="Could not find tag v9.9.9"):
            GitRepository(temp_git_repo).resolve_tag("v9.9.9")

    def test_resolve_non_semver_tag(self, temp_git_repo: Path, git_commit, git):
        git_commit(temp_git_repo, "initial")
        git(temp_git_repo, "tag", "stable")

        with pytest.raises(InvalidVersionError, match="does not look like a semver"):
            GitRepository(temp_git_repo).resolve_tag("stable")

    def test_remote_info(self, temp_git_repo: Path, git):
        git(temp_git_repo, "remote", "add", "origin", "git@github.com:user/repo.git")

        remote = GitRepository(temp_git_repo).get_remote_info()

        assert remote == RemoteInfo(base_url="https://github.com/user/repo/")

    def test_missing_remote(self, temp_git_repo: Path):
        assert GitRepository(temp_git_repo).get_remote_info() is None

    def test_unsupported_remote(self, temp_git_repo: Path, git):
        git(temp_git_repo, "remote", "add", "origin", "/srv/git/repo.git")

        assert GitRepository(temp_git_repo).get_remote_info() is None
