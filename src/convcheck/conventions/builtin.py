"""Built-in conventions for branch names and commit headers."""

from convcheck.conventions.models import Check, Convention

BRANCH_TYPES = ("feat", "fix", "hotfix", "chore", "docs", "refactor", "test", "release")

COMMIT_TYPES = (
    "feat", "fix", "docs", "style", "refactor", "perf",
    "test", "build", "ci", "chore", "revert",
)

MAX_HEADER_LENGTH = 72

_BRANCH_TYPE_RE = "|".join(BRANCH_TYPES)
_COMMIT_TYPE_RE = "|".join(COMMIT_TYPES)
_TICKET_RE = r"[A-Z][A-Z0-9]*-[0-9]+"
_SLUG_RE = r"[a-z0-9]+(?:-[a-z0-9]+)*"

BRANCH = Convention(
    id="branch",
    name="Branch name",
    description="branch names look like <type>/<TICKET>-<slug>, e.g. feat/CRM-100-add-new-application-form",
    target="branch",
    pattern=rf"(?:{_BRANCH_TYPE_RE})/{_TICKET_RE}-{_SLUG_RE}",
    checks=(
        Check(rf"^[a-z]+/{_TICKET_RE}", "missing ticket prefix", owner="convention branch"),
        Check(rf"^(?:{_BRANCH_TYPE_RE})/", "unknown branch type", owner="convention branch"),
        Check(
            rf"^[a-z]+/{_TICKET_RE}-{_SLUG_RE}$",
            "slug must be lowercase words separated by hyphens",
            owner="convention branch",
        ),
    ),
)

COMMIT = Convention(
    id="commit",
    name="Commit header",
    description="commit headers look like <type>(<scope>): <subject>, e.g. feat(forms): add new application form",
    target="commit",
    pattern=(
        rf"(?=.{{1,{MAX_HEADER_LENGTH}}}$)"
        rf"(?:{_COMMIT_TYPE_RE})(?:\([\w./-]+\))?!?: \S(?:.*[^.\s])?"
    ),
    checks=(
        Check(r"^[a-z]+(?:\([^)]*\))?!?:", "missing type prefix", owner="convention commit"),
        Check(rf"^(?:{_COMMIT_TYPE_RE})[(!:]", "unknown commit type", owner="convention commit"),
        Check(r"^[^:]*: \S", "missing subject after colon", owner="convention commit"),
        Check(
            rf"^.{{1,{MAX_HEADER_LENGTH}}}$",
            f"header exceeds {MAX_HEADER_LENGTH} characters",
            owner="convention commit",
        ),
        Check(r"[^.]$", "subject must not end with a period", owner="convention commit"),
    ),
)

ALL_BUILTIN_CONVENTIONS: list[Convention] = [BRANCH, COMMIT]

__all__ = ["ALL_BUILTIN_CONVENTIONS", "BRANCH", "COMMIT"]
