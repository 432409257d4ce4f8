"""Validator — result models, the matching engine, commit message helpers."""

from convcheck.validator.engine import (
    ValidationFailure,
    ensure_valid,
    validate,
    validate_all,
)
from convcheck.validator.message import clean_commit_message, commit_header, is_skipped
from convcheck.validator.models import CheckReport, ValidationResult

__all__ = [
    "CheckReport",
    "ValidationFailure",
    "ValidationResult",
    "clean_commit_message",
    "commit_header",
    "ensure_valid",
    "is_skipped",
    "validate",
    "validate_all",
]
