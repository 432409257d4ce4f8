"""Convention registry — loads built-in and custom conventions, applies config filters."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from convcheck.config.loader import ConfigError
from convcheck.config.schema import ConvCheckConfig
from convcheck.conventions.models import Check, Convention

CUSTOM_DIRNAME = ".convcheck-rules"


def _require_str(entry: Mapping[str, Any], key: str, source: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        ident = entry.get("id", "<unnamed>")
        raise ConfigError(f"{source}: convention {ident} needs a non-empty string '{key}'")
    return value


def convention_from_dict(entry: Mapping[str, Any], source: str = "<static>") -> Convention:
    """Build a Convention from a config mapping. Raises ConfigError when malformed."""
    if not isinstance(entry, Mapping):
        raise ConfigError(f"{source}: convention entries must be tables, got {type(entry).__name__}")

    conv_id = _require_str(entry, "id", source)
    pattern = _require_str(entry, "pattern", source)

    raw_checks = entry.get("checks") or []
    if not isinstance(raw_checks, list):
        raise ConfigError(f"{source}: convention {conv_id}: 'checks' must be a list")
    checks: List[Check] = []
    for raw in raw_checks:
        if not isinstance(raw, Mapping):
            raise ConfigError(f"{source}: convention {conv_id}: each check needs 'pattern' and 'message'")
        checks.append(
            Check(
                pattern=_require_str(raw, "pattern", source),
                message=_require_str(raw, "message", source),
                owner=f"convention {conv_id}",
            )
        )

    return Convention(
        id=conv_id,
        name=entry.get("name", conv_id),
        description=entry.get("description", f"does not match convention {conv_id}"),
        pattern=pattern,
        target=entry.get("target", "branch"),
        checks=tuple(checks),
        enabled=bool(entry.get("enabled", True)),
    )


def load_conventions(
    entries: Iterable[Mapping[str, Any]], source: str = "<static>"
) -> Tuple[Convention, ...]:
    """Turn a static list of mappings into an ordered tuple of conventions."""
    return tuple(convention_from_dict(entry, source) for entry in entries)


class ConventionRegistry:
    """Ordered store for all conventions."""

    def __init__(self) -> None:
        self._conventions: Dict[str, Convention] = {}

    # ---- registration ----

    def register(self, convention: Convention) -> None:
        """Add *convention*; an existing id is replaced in its original position."""
        self._conventions[convention.id] = convention

    def register_many(self, conventions: Iterable[Convention]) -> None:
        for c in conventions:
            self.register(c)

    # ---- queries ----

    @property
    def all_conventions(self) -> List[Convention]:
        return list(self._conventions.values())

    def get(self, convention_id: str) -> Optional[Convention]:
        return self._conventions.get(convention_id)

    def enabled_conventions(self) -> List[Convention]:
        return [c for c in self._conventions.values() if c.enabled]

    def __len__(self) -> int:
        return len(self._conventions)

    # ---- config filtering ----

    def apply_config(self, config: ConvCheckConfig) -> None:
        """Enable / disable conventions based on config.conventions."""
        enable_list = config.conventions.enable
        disable_list = config.conventions.disable

        for conv_id, conv in list(self._conventions.items()):
            enabled = conv.enabled
            # An explicit enable-list restricts to its members
            if enable_list:
                enabled = conv_id in enable_list
            if conv_id in disable_list:
                enabled = False
            if enabled != conv.enabled:
                self._conventions[conv_id] = dataclasses.replace(conv, enabled=enabled)

    # ---- custom convention loading ----

    def load_custom_conventions(self, directory: Path) -> int:
        """Load YAML convention files from *directory*. Returns count loaded."""
        if not directory.is_dir():
            return 0
        count = 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_conventions(path)
        return count

    def _load_yaml_conventions(self, path: Path) -> int:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        conventions = load_conventions(data, source=str(path))
        self.register_many(conventions)
        return len(conventions)


def build_registry(config: ConvCheckConfig, repo_root: Path) -> ConventionRegistry:
    """Create a fully populated, config-filtered convention registry."""
    from convcheck.conventions.builtin import ALL_BUILTIN_CONVENTIONS

    registry = ConventionRegistry()
    registry.register_many(ALL_BUILTIN_CONVENTIONS)

    # [[conventions.custom]] tables from .convcheck.toml
    registry.register_many(load_conventions(config.conventions.custom, source="config"))

    # YAML files from .convcheck-rules/
    registry.load_custom_conventions(repo_root / CUSTOM_DIRNAME)

    registry.apply_config(config)
    return registry
