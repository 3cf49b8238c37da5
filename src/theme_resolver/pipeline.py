"""
Top-level resolution entry points.

``resolve_nodes`` runs the core over an already parsed stylesheet tree;
``resolve_stylesheet`` and ``resolve_file`` add the tinycss2 and file
adapters. The base theme in the result is merged over the baseline (when
one is supplied) once ``initial`` exclusions have been removed from the
baseline.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import ResolverConfig
from .core.ir import (
    Conflict,
    Declaration,
    DeprecationNotice,
    RuleOverride,
    Theme,
    UnresolvedReference,
    VariantTheme,
)
from .core.strings import NameCache
from .parser.ast import Node
from .parser.css import parse_stylesheet, read_stylesheet
from .parser.extractor import extract_declarations
from .themes.baseline import load_baseline_theme
from .themes.builder import build_themes
from .themes.defaults import DefaultsOptions, merge_themes
from .themes.initial import extract_initial_exclusions, filter_theme_by_exclusions
from .themes.overrides import BASE_VARIANT

logger = logging.getLogger(__name__)

ROOT_SELECTOR = ":root"


@dataclass
class ResolutionResult:
    """Everything one resolution call produces."""

    theme: Theme
    variants: dict[str, VariantTheme]
    conflicts: list[Conflict]
    unresolved: list[UnresolvedReference]
    deprecations: list[DeprecationNotice]
    declarations: list[Declaration]
    rules: list[RuleOverride]

    @property
    def themes(self) -> dict[str, Theme]:
        """Base theme under ``default`` followed by every variant theme."""
        return {BASE_VARIANT: self.theme, **{name: v.theme for name, v in self.variants.items()}}

    @property
    def selectors(self) -> dict[str, str]:
        """Activating selector per theme; the base theme lives on ``:root``."""
        return {BASE_VARIANT: ROOT_SELECTOR, **{name: v.selector for name, v in self.variants.items()}}

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready view of the result."""
        return {
            "variants": {name: theme.to_dict() for name, theme in self.themes.items()},
            "selectors": self.selectors,
            "conflicts": [c.model_dump(mode="json") for c in self.conflicts],
            "unresolved": [u.model_dump(mode="json") for u in self.unresolved],
            "deprecations": [d.model_dump(mode="json") for d in self.deprecations],
        }


def resolve_nodes(
    nodes: Iterable[Node],
    default_theme: Theme | None = None,
    defaults_options: DefaultsOptions | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
    names: NameCache | None = None,
) -> ResolutionResult:
    """Resolve a parsed stylesheet into themes and diagnostics.

    Args:
        nodes: Top-level stylesheet nodes
        default_theme: Optional baseline used for resolution and as merge base
        defaults_options: Per-group merge switches for the baseline
        overrides: Override configuration keyed by target
        names: Name cache; defaults to the shared cache

    Returns:
        ResolutionResult with the merged base theme and every variant
    """
    extraction = extract_declarations(nodes)
    built = build_themes(
        extraction.declarations,
        extraction.keyframes,
        extraction.rules,
        default_theme=default_theme,
        overrides=overrides,
        names=names,
    )

    # The builder already applied initial in source order to the user theme
    theme = built.theme
    if default_theme is not None:
        exclusions = extract_initial_exclusions(extraction.declarations, names)
        baseline = filter_theme_by_exclusions(default_theme, exclusions, names)
        theme = merge_themes(baseline, built.theme, defaults_options)

    logger.info(
        "Resolved %d declarations into base theme and %d variants",
        len(built.declarations),
        len(built.variants),
    )
    return ResolutionResult(
        theme=theme,
        variants=built.variants,
        conflicts=built.conflicts,
        unresolved=built.unresolved,
        deprecations=built.deprecations,
        declarations=built.declarations,
        rules=extraction.rules,
    )


def resolve_stylesheet(css: str, **options: Any) -> ResolutionResult:
    """Parse CSS text with tinycss2 and resolve it. Options as for resolve_nodes."""
    return resolve_nodes(parse_stylesheet(css), **options)


def resolve_file(path: Path, config: ResolverConfig | None = None) -> ResolutionResult:
    """Resolve a stylesheet on disk using a ResolverConfig.

    Raises:
        StylesheetError: If the stylesheet or configured baseline cannot be read.
    """
    config = config or ResolverConfig()
    default_theme = None
    if config.defaults_enabled and config.baseline is not None:
        default_theme = load_baseline_theme(config.baseline)

    return resolve_nodes(
        read_stylesheet(path),
        default_theme=default_theme,
        defaults_options=config.defaults_options,
        overrides=config.overrides or None,
    )
