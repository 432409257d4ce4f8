"""Convention data model — patterns stored as strings, compiled at construction."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal, Tuple

from convcheck.config.loader import ConfigError

Target = Literal["branch", "commit"]

TARGETS = ("branch", "commit")

# Ids and reasons end up inside one-line text reports
_ID_RE = re.compile(r"[^\s\[\]]+")


def _compile(pattern: str, owner: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid pattern for {owner}: {pattern!r} ({exc})") from exc


@dataclass(frozen=True)
class Check:
    """A diagnostic sub-pattern. When it does not match, ``message`` is the failure reason."""

    pattern: str
    message: str
    owner: str = field(default="check", repr=False, compare=False)

    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.message, str) or not self.message.strip() or "\n" in self.message:
            raise ConfigError(f"{self.owner}: check messages must be a single non-empty line")
        object.__setattr__(self, "_compiled", _compile(self.pattern, self.owner))

    def matches(self, text: str) -> bool:
        return self._compiled.search(text) is not None


@dataclass(frozen=True)
class Convention:
    """A named formatting rule for branch names or commit messages.

    ``pattern`` must match the whole candidate (the commit header, for
    ``commit`` conventions). ``checks`` are tried in order before it and
    the first one that fails provides the failure reason; if they all
    pass, ``description`` is used instead.
    """

    id: str
    name: str
    description: str
    pattern: str
    target: Target = "branch"
    checks: Tuple[Check, ...] = ()
    enabled: bool = True

    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not _ID_RE.fullmatch(self.id):
            raise ConfigError(f"Invalid convention id {self.id!r}: no whitespace or brackets allowed")
        if not isinstance(self.description, str) or "\n" in self.description:
            raise ConfigError(f"Convention {self.id}: description must be a single line")
        if self.target not in TARGETS:
            raise ConfigError(
                f"Convention {self.id}: target must be one of {', '.join(TARGETS)}, "
                f"got {self.target!r}"
            )
        object.__setattr__(self, "_compiled", _compile(self.pattern, f"convention {self.id}"))

    @property
    def failure_reason(self) -> str:
        """Reason reported when every check passes but the pattern does not."""
        return self.description or f"does not match convention {self.id}"

    @property
    def compiled_pattern(self) -> re.Pattern[str]:
        return self._compiled

    def first_failed_check(self, text: str) -> Check | None:
        for check in self.checks:
            if not check.matches(text):
                return check
        return None
