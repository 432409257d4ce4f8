"""Git subprocess wrapper — repo root, branch name, commit messages."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# `git log` output separators, matching %x1f and %x1e in the format string
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


@dataclass(frozen=True)
class CommitMessage:
    sha: str
    message: str


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"git {' '.join(args)}: {stderr}")
    return result.stdout


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_hooks_dir(repo_root: Path) -> Path:
    """Return the directory git runs hooks from (honours core.hooksPath and worktrees)."""
    out = _run_git(["rev-parse", "--git-path", "hooks"], cwd=repo_root).strip()
    path = Path(out)
    return path if path.is_absolute() else repo_root / path


def get_current_branch(repo_root: Path) -> str:
    """Return the checked-out branch name. Raises GitError on a detached HEAD."""
    try:
        out = _run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=repo_root)
    except GitError as exc:
        raise GitError(f"HEAD is not on a branch ({exc})") from exc
    return out.strip()


def get_last_commit_message(repo_root: Path) -> str:
    """Return the full message of HEAD."""
    return _run_git(["log", "-1", "--format=%B"], cwd=repo_root).strip("\n")


def get_commit_messages(repo_root: Path, base: str, head: str = "HEAD") -> List[CommitMessage]:
    """Return messages of commits in ``base..head``, oldest first."""
    out = _run_git(
        ["log", "--reverse", "--format=%H%x1f%B%x1e", f"{base}..{head}"],
        cwd=repo_root,
    )
    commits: List[CommitMessage] = []
    for record in out.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, _, message = record.partition(_FIELD_SEP)
        commits.append(CommitMessage(sha=sha, message=message.strip("\n")))
    return commits
