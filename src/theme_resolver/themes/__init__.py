"""
Theme construction: reference resolution, building, baselines and overrides.
"""

from .builder import ThemeBuildResult, build_theme, build_themes
from .defaults import DefaultsOptions, merge_themes, theme_to_declarations
from .initial import (
    InitialExclusion,
    extract_initial_exclusions,
    filter_defaults_by_exclusions,
    filter_theme_by_exclusions,
    matches_exclusion,
)
from .overrides import apply_theme_overrides, inject_variable_overrides, resolve_variant_names
from .references import ReferenceResolver, build_forwarding_map

__all__ = [
    "DefaultsOptions",
    "InitialExclusion",
    "ReferenceResolver",
    "ThemeBuildResult",
    "apply_theme_overrides",
    "build_forwarding_map",
    "build_theme",
    "build_themes",
    "extract_initial_exclusions",
    "filter_defaults_by_exclusions",
    "filter_theme_by_exclusions",
    "inject_variable_overrides",
    "matches_exclusion",
    "merge_themes",
    "resolve_variant_names",
    "theme_to_declarations",
]
