"""Matching engine — a single pure step from (candidate, convention) to result."""

from __future__ import annotations

from typing import Iterable

from convcheck.conventions.models import Convention
from convcheck.validator.message import commit_header
from convcheck.validator.models import CheckReport, ValidationResult

EMPTY_INPUT = "empty input"


class ValidationFailure(Exception):
    """Raised by ensure_valid when a candidate does not match its convention."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result
        super().__init__(f"{result.convention_id}: {result.message}")


def _subject(candidate: str, convention: Convention) -> str:
    if convention.target == "commit":
        return commit_header(candidate)
    return candidate


def validate(candidate: str, convention: Convention) -> ValidationResult:
    """Check *candidate* against *convention*.

    Commit conventions only look at the header line. The failure message
    comes from the first failing check, falling back to the convention's
    description.
    """
    subject = _subject(candidate, convention)

    if not subject.strip():
        return ValidationResult(candidate, convention.id, False, EMPTY_INPUT)

    if convention.compiled_pattern.fullmatch(subject):
        return ValidationResult(candidate, convention.id, True)

    failed = convention.first_failed_check(subject)
    reason = failed.message if failed is not None else convention.failure_reason
    return ValidationResult(candidate, convention.id, False, reason)


def validate_all(candidate: str, conventions: Iterable[Convention]) -> CheckReport:
    """Check *candidate* against each convention in order."""
    report = CheckReport()
    for convention in conventions:
        report.add(validate(candidate, convention))
    return report


def ensure_valid(candidate: str, convention: Convention) -> ValidationResult:
    """Like validate, but raise ValidationFailure instead of returning a failed result."""
    result = validate(candidate, convention)
    if not result.passed:
        raise ValidationFailure(result)
    return result
