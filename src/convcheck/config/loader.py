"""Load and merge configuration from .convcheck.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from convcheck.config.schema import (
    OUTPUT_FORMATS,
    BranchConfig,
    CommitConfig,
    ConvCheckConfig,
    ConventionsConfig,
    OutputConfig,
)

CONFIG_FILENAME = ".convcheck.toml"


class ConfigError(Exception):
    """Raised when config or a convention definition is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _split_list(val: str) -> list[str]:
    return [item.strip() for item in val.split(",") if item.strip()]


def _merge_env_overrides(cfg: ConvCheckConfig) -> None:
    """Apply CI_CONVCHECK_* environment variable overrides."""
    if val := os.environ.get("CI_CONVCHECK_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("CI_CONVCHECK_DISABLE"):
        cfg.conventions.disable.extend(_split_list(val))
    if val := os.environ.get("CI_CONVCHECK_BRANCH_EXEMPT"):
        cfg.branch.exempt.extend(_split_list(val))


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _require_str_list(value: Any, key: str, path: Path) -> None:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{path}: {key} must be a list of strings, got {value!r}")


def _validate(cfg: ConvCheckConfig, path: Path) -> None:
    """Type-check values read from *path*. Raises ConfigError."""
    _require_str_list(cfg.conventions.enable, "conventions.enable", path)
    _require_str_list(cfg.conventions.disable, "conventions.disable", path)
    _require_str_list(cfg.branch.exempt, "branch.exempt", path)
    _require_str_list(cfg.commit.skip_patterns, "commit.skip_patterns", path)
    if not isinstance(cfg.conventions.custom, list):
        raise ConfigError(f"{path}: conventions.custom must be an array of tables")
    for key, value in (
        ("branch.convention", cfg.branch.convention),
        ("commit.convention", cfg.commit.convention),
    ):
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{path}: {key} must be a non-empty string")
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"{path}: invalid output format {cfg.output.format!r}")
    if not isinstance(cfg.output.show_summary, bool):
        raise ConfigError(f"{path}: output.show_summary must be true or false")
    for pattern in cfg.commit.skip_patterns:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ConfigError(f"{path}: invalid commit skip pattern {pattern!r}: {exc}") from exc


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> ConvCheckConfig:
    """Load, validate, and return a ConvCheckConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = ConvCheckConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = ConvCheckConfig(
            version=raw.get("version", "1.0"),
            conventions=_build_section(raw, ConventionsConfig, "conventions"),
            branch=_build_section(raw, BranchConfig, "branch"),
            commit=_build_section(raw, CommitConfig, "commit"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        _validate(cfg, config_path)

    _merge_env_overrides(cfg)
    return cfg
