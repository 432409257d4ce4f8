"""Conventions — models, registry, built-in conventions."""

from convcheck.conventions.models import Check, Convention
from convcheck.conventions.registry import (
    ConventionRegistry,
    build_registry,
    convention_from_dict,
    load_conventions,
)

__all__ = [
    "Check",
    "Convention",
    "ConventionRegistry",
    "build_registry",
    "convention_from_dict",
    "load_conventions",
]
