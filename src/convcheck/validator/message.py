"""Commit message helpers — comment stripping, header extraction, skip rules."""

from __future__ import annotations

import re
from typing import Iterable

# git's "cleanup=scissors" marker; everything below it is dropped
_SCISSORS = "# ------------------------ >8 ------------------------"


def clean_commit_message(text: str) -> str:
    """Strip ``#`` comment lines and anything below a scissors line, as git does."""
    kept = []
    for line in text.splitlines():
        if line.startswith(_SCISSORS):
            break
        if line.startswith("#"):
            continue
        kept.append(line.rstrip())
    return "\n".join(kept).strip("\n")


def commit_header(text: str) -> str:
    """Return the first non-blank line of a commit message ("" if none)."""
    for line in text.splitlines():
        if line.strip():
            return line
    return ""


def is_skipped(text: str, patterns: Iterable[str]) -> bool:
    """True if the commit header matches any of *patterns* (merge, revert, fixup...)."""
    header = commit_header(text)
    return any(re.search(p, header) for p in patterns)
