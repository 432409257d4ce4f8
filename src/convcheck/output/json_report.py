"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from convcheck import __version__
from convcheck.validator.models import CheckReport


def to_dict(report: CheckReport) -> Dict[str, Any]:
    """Convert a CheckReport to a JSON-serialisable dict."""
    return {
        "version": __version__,
        "passed": report.passed,
        "total": report.total,
        "failed": len(report.failures),
        "results": [
            {
                "value": r.value,
                "convention": r.convention_id,
                "passed": r.passed,
                **({"message": r.message} if r.message else {}),
            }
            for r in report.results
        ],
        "skipped": report.skipped,
    }


def render(report: CheckReport) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report), indent=2, ensure_ascii=False)
