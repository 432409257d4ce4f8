"""Shared test fixtures — conventions, config files, temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest

from convcheck.conventions.builtin import BRANCH, COMMIT
from convcheck.conventions.models import Convention


def git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def branch_convention() -> Convention:
    return BRANCH


@pytest.fixture
def commit_convention() -> Convention:
    return COMMIT


@pytest.fixture
def custom_toml() -> str:
    """A config adding one custom convention and exempting a branch."""
    return textwrap.dedent("""\
        version = "1.0"

        [[conventions.custom]]
        id = "release"
        name = "Release branch"
        description = "release branches look like release/1.2.3"
        target = "branch"
        pattern = '^release/\\d+\\.\\d+\\.\\d+$'
        checks = [{ pattern = '^release/', message = "missing release/ prefix" }]

        [branch]
        exempt = ["main", "staging"]

        [output]
        format = "text"
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    git(tmp_path, "config", "user.email", "test@test.com")
    git(tmp_path, "config", "user.name", "Test")
    git(tmp_path, "config", "commit.gpgsign", "false")
    git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    (tmp_path / "README.md").write_text("# Test\n")
    git(tmp_path, "add", ".")
    git(tmp_path, "commit", "-m", "chore: init")
    return tmp_path


@pytest.fixture
def commit_file(tmp_git_repo: Path):
    """Return a helper that writes a file and commits it with *message*."""
    counter = {"n": 0}

    def _commit(message: str) -> None:
        counter["n"] += 1
        path = tmp_git_repo / f"file{counter['n']}.txt"
        path.write_text(f"{counter['n']}\n")
        git(tmp_git_repo, "add", path.name)
        git(tmp_git_repo, "commit", "-m", message)

    return _commit
