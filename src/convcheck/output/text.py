"""Plain-text reporter — one parseable line per result.

Line format::

    PASS [branch] "feat/CRM-100-add-new-application-form"
    FAIL [branch] "update-stuff": missing ticket prefix

The value is JSON-quoted, so multi-line commit messages stay on one line
and ``parse_line`` can recover every field exactly.
"""

from __future__ import annotations

import json
import re
from typing import List

from convcheck.validator.models import CheckReport, ValidationResult

_LINE_RE = re.compile(
    r'^(?P<status>PASS|FAIL) \[(?P<convention>[^\]]+)\] '
    r'(?P<value>"(?:[^"\\]|\\.)*")'
    r"(?:: (?P<message>.*))?$"
)


class ParseError(ValueError):
    """Raised when a line is not in reporter format."""


def format_result(result: ValidationResult) -> str:
    status = "PASS" if result.passed else "FAIL"
    line = f"{status} [{result.convention_id}] {json.dumps(result.value, ensure_ascii=False)}"
    if not result.passed and result.message:
        line += f": {result.message}"
    return line


def parse_line(line: str) -> ValidationResult:
    """Rebuild a ValidationResult from a line written by ``format_result``."""
    m = _LINE_RE.match(line.rstrip("\n"))
    if m is None:
        raise ParseError(f"Not a convcheck result line: {line!r}")
    return ValidationResult(
        value=json.loads(m.group("value")),
        convention_id=m.group("convention"),
        passed=m.group("status") == "PASS",
        message=m.group("message"),
    )


def render(report: CheckReport, *, show_summary: bool = True) -> str:
    lines: List[str] = [format_result(r) for r in report.results]
    if show_summary:
        lines.append(
            f"{report.total} checked, {len(report.failures)} failed, "
            f"{len(report.skipped)} skipped"
        )
    return "\n".join(lines)
