"""Shared pytest fixtures: throwaway git repositories."""

import subprocess
from pathlib import Path

import pytest

SAMPLE_SOURCE = """\
import os


def read_config(path):
    with open(path) as f:
        return f.read()


def main():
    config = read_config(os.environ["CONFIG"])
    print(config)
"""


def run_git(repo_path: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo_path), *args],
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_all(repo_path: Path, message: str) -> str:
    run_git(repo_path, "add", "-A")
    run_git(repo_path, "commit", "-m", message)
    return run_git(repo_path, "rev-parse", "HEAD")


@pytest.fixture
def git():
    """The `run_git` helper, for tests that need to poke at a repository."""
    return run_git


@pytest.fixture
def empty_repo(tmp_path):
    """A git repository on branch `main` with no commits and no remotes."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    run_git(repo_path, "init")
    run_git(repo_path, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(repo_path, "config", "user.email", "test@example.com")
    run_git(repo_path, "config", "user.name", "Test User")
    run_git(repo_path, "config", "commit.gpgsign", "false")
    return repo_path.resolve()


@pytest.fixture
def git_repo(empty_repo):
    """
    A repository with `src/app.py` committed on `main`, an `origin` remote on
    GitHub, and `origin/main` pointing at that commit (as if just pushed).
    """
    (empty_repo / "src").mkdir()
    (empty_repo / "src" / "app.py").write_text(SAMPLE_SOURCE)
    commit_all(empty_repo, "Initial commit")
    run_git(empty_repo, "remote", "add", "origin", "git@github.com:acme/widgets.git")
    run_git(empty_repo, "update-ref", "refs/remotes/origin/main", "HEAD")
    return empty_repo


@pytest.fixture
def published_commit(git_repo):
    return run_git(git_repo, "rev-parse", "refs/remotes/origin/main")
