"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

OutputFormat = Literal["terminal", "text", "json"]

OUTPUT_FORMATS = ("terminal", "text", "json")


@dataclass
class ConventionsConfig:
    enable: List[str] = field(default_factory=list)  # empty = all enabled
    disable: List[str] = field(default_factory=list)
    custom: List[Dict[str, Any]] = field(default_factory=list)  # [[conventions.custom]]


@dataclass
class BranchConfig:
    convention: str = "branch"
    exempt: List[str] = field(default_factory=lambda: ["main", "master", "develop"])


@dataclass
class CommitConfig:
    convention: str = "commit"
    skip_patterns: List[str] = field(
        default_factory=lambda: [r"^Merge ", r'^Revert "', r"^fixup! ", r"^squash! "]
    )


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class ConvCheckConfig:
    version: str = "1.0"
    conventions: ConventionsConfig = field(default_factory=ConventionsConfig)
    branch: BranchConfig = field(default_factory=BranchConfig)
    commit: CommitConfig = field(default_factory=CommitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
