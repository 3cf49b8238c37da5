"""Diagnostics over resolved themes: rule conflicts and unresolved references."""

from .conflicts import (
    apply_conflict,
    detect_conflicts,
    filter_resolvable_conflicts,
    group_conflicts_by_variant,
)
from .unresolved import detect_unresolved, group_by_likely_cause, group_by_source

__all__ = [
    "apply_conflict",
    "detect_conflicts",
    "detect_unresolved",
    "filter_resolvable_conflicts",
    "group_by_likely_cause",
    "group_by_source",
    "group_conflicts_by_variant",
]
