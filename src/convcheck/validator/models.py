"""Validation result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking one string against one convention."""

    value: str
    convention_id: str
    passed: bool
    message: Optional[str] = None  # set only when the check failed


@dataclass
class CheckReport:
    """All results of one CLI run, in the order they were produced."""

    results: List[ValidationResult] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)  # values exempted before validation

    def add(self, result: ValidationResult) -> None:
        self.results.append(result)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if not r.passed]

    @property
    def passed(self) -> bool:
        return not self.failures
