"""Shared fixtures for changelogger tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from typing import TYPE_CHECKING

import pytest

from changelogger.core.commits import Commit

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _commit(summary: str, short_sha: str = "abc1234") -> Commit:
    return Commit(sha=short_sha.ljust(40, "0"), short_sha=short_sha, summary=summary)


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits with a fake sha."""
    return _commit


@pytest.fixture
def feat_commit() -> Commit:
    return _commit("feat: add user authentication", "feat123")


@pytest.fixture
def fix_commit() -> Commit:
    return _commit("fix(core): resolve memory leak (#12)", "fix4567")


@pytest.fixture
def breaking_commit() -> Commit:
    return _commit("breaking: drop python 3.10", "brk8901")


@pytest.fixture
def sample_commits() -> list[Commit]:
    """Commits of a typical release, newest first."""
    return [
        _commit("-> v1.2.0", "rel0001"),
        _commit("feat(api): add pagination", "aaa0001"),
        _commit("fix: handle empty response #7", "aaa0002"),
        _commit("docs: update README", "aaa0003"),
        _commit("chore: bump dependencies", "aaa0004"),
        _commit("perf: cache parsed templates", "aaa0005"),
        _commit("Tweaks", "aaa0006"),
        _commit("rework the internals", "aaa0007"),
    ]


# =============================================================================
# Git repositories
# =============================================================================


def _git_env() -> dict[str, str]:
    env = dict(os.environ)
    env.update(
        {
            "GIT_CONFIG_NOSYSTEM": "1",
            "GIT_CONFIG_GLOBAL": os.devnull,
            "GIT_AUTHOR_NAME": "Test",
            "GIT_AUTHOR_EMAIL": "test@test.com",
            "GIT_COMMITTER_NAME": "Test",
            "GIT_COMMITTER_EMAIL": "test@test.com",
        }
    )
    return env


def run_git(repo: Path, *args: str, timestamp: int | None = None) -> str:
    """Run a git command in ``repo`` with an isolated configuration."""
    env = _git_env()
    if timestamp is not None:
        env["GIT_AUTHOR_DATE"] = f"{timestamp} +0000"
        env["GIT_COMMITTER_DATE"] = f"{timestamp} +0000"
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git() -> Callable[..., str]:
    """Run git commands in a test repository."""
    return run_git


@pytest.fixture
def git_commit() -> Callable[..., str]:
    """Create an empty commit and return its sha.

    Each commit gets a later timestamp than the previous one.
    """
    clock = iter(range(1_700_000_000, 1_800_000_000, 60))

    def commit(repo: Path, message: str) -> str:
        run_git(repo, "commit", "--allow-empty", "-m", message, timestamp=next(clock))
        return run_git(repo, "rev-parse", "HEAD").strip()

    return commit


@pytest.fixture
def temp_git_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty git repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    return repo
