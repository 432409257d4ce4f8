"""commit-msg hook management.

The hook is written to the directory git actually runs hooks from, so a
``core.hooksPath`` setting or a linked worktree is respected. A foreign
``commit-msg`` hook replaced with ``--force`` is kept next to it as
``commit-msg.pre-convcheck`` and put back by ``uninstall``.
"""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Tuple

from convcheck.git.adapter import GitError, get_hooks_dir

HOOK_NAME = "commit-msg"
BACKUP_SUFFIX = ".pre-convcheck"

_HOOK_MARKER = "# convcheck-hook"
_HOOK_SCRIPT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# $1 is the file holding the proposed message; a non-zero exit aborts the commit.
exec convcheck message "$1"
"""


def _is_ours(hook_path: Path) -> bool:
    return _HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def install_hook(repo_root: Path, *, force: bool = False) -> Tuple[bool, str]:
    """Install convcheck as the commit-msg hook. Returns (success, message)."""
    try:
        hooks_dir = get_hooks_dir(repo_root)
    except GitError as exc:
        return False, f"Cannot locate hooks directory: {exc}"

    hook_path = hooks_dir / HOOK_NAME
    backup_path = hooks_dir / (HOOK_NAME + BACKUP_SUFFIX)

    if hook_path.exists():
        if _is_ours(hook_path):
            return True, "convcheck hook is already installed."
        if not force:
            return (
                False,
                f"A {HOOK_NAME} hook already exists at {hook_path}. "
                "Use --force to replace it (it will be kept as a backup).",
            )
        hook_path.replace(backup_path)

    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path.write_text(_HOOK_SCRIPT, encoding="utf-8")
    _make_executable(hook_path)

    msg = f"Installed convcheck {HOOK_NAME} hook at {hook_path}"
    if backup_path.exists():
        msg += f" (previous hook saved as {backup_path.name})"
    return True, msg


def uninstall_hook(repo_root: Path) -> Tuple[bool, str]:
    """Remove the convcheck commit-msg hook, restoring any backup. Returns (success, message)."""
    try:
        hooks_dir = get_hooks_dir(repo_root)
    except GitError as exc:
        return False, f"Cannot locate hooks directory: {exc}"

    hook_path = hooks_dir / HOOK_NAME
    backup_path = hooks_dir / (HOOK_NAME + BACKUP_SUFFIX)

    if not hook_path.exists():
        return True, f"No {HOOK_NAME} hook found — nothing to remove."
    if not _is_ours(hook_path):
        return False, f"{HOOK_NAME} hook exists but was not installed by convcheck."

    hook_path.unlink()
    if backup_path.exists():
        backup_path.replace(hook_path)
        return True, f"Removed convcheck {HOOK_NAME} hook and restored the previous one"
    return True, f"Removed convcheck {HOOK_NAME} hook from {hook_path}"
