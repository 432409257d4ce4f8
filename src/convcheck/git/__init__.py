"""Git interface layer."""

from convcheck.git.adapter import (
    CommitMessage,
    GitError,
    get_commit_messages,
    get_current_branch,
    get_hooks_dir,
    get_last_commit_message,
    get_repo_root,
)

__all__ = [
    "CommitMessage",
    "GitError",
    "get_commit_messages",
    "get_current_branch",
    "get_hooks_dir",
    "get_last_commit_message",
    "get_repo_root",
]
