"""
User-declared theme overrides.

Overrides are keyed by target and hold dotted paths or nested mappings::

    {
        "*": {"radius.lg": "0"},
        "dark": {"colors": {"background": "#000"}},
        "[data-theme='ocean']": {"colors.primary": {"value": "teal", "resolve_vars": False}},
    }

Targets: ``*`` (base and every variant), ``default``/``base`` (base only),
a variant id, or a selector matched against each variant's selector.

Two phases use the same configuration. Before resolution, base-targeted
entries are injected as ``@theme`` declarations so other tokens can
reference them. After resolution, every entry overwrites an existing theme
path; paths are never created.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from pydantic import ValidationError

from ..core.ir import Declaration, DeclarationSource, OverrideValue, ParsedOverride, Theme, VariantTheme

logger = logging.getLogger(__name__)

MAX_NESTING_DEPTH = 10

BASE_VARIANT = "default"
ALL_TARGETS = "*"
BASE_TARGETS = frozenset({"default", "base"})
PRE_RESOLUTION_TARGETS = BASE_TARGETS | {ALL_TARGETS}


class OverrideOutcome(NamedTuple):
    applied: int
    skipped: int


# =============================================================================
# Parsing
# =============================================================================


def normalize_override_value(value: Any) -> OverrideValue | None:
    """Normalize an override leaf, or return None if ``value`` is not a leaf.

    A plain string becomes ``OverrideValue(value=...)``; a mapping must carry
    a string ``value`` plus optional ``force`` / ``resolve_vars`` flags.
    """
    if isinstance(value, str):
        return OverrideValue(value=value)
    if isinstance(value, Mapping) and isinstance(value.get("value"), str):
        try:
            return OverrideValue.model_validate(dict(value))
        except ValidationError as e:
            logger.debug("Ignoring malformed override value %r: %s", value, e)
    return None


def parse_override_config(
    config: Mapping[str, Any], path: tuple[str, ...] = (), depth: int = 0
) -> list[ParsedOverride]:
    """Flatten a nested override mapping into ParsedOverride records.

    Keys containing dots are full paths from the theme root and must map to
    a leaf. Other keys extend the current path. Nesting deeper than
    MAX_NESTING_DEPTH is ignored.
    """
    if depth > MAX_NESTING_DEPTH:
        return []

    parsed: list[ParsedOverride] = []
    for key, value in config.items():
        leaf = normalize_override_value(value)

        if "." in key:
            if leaf is not None:
                parsed.append(_parsed(tuple(key.split(".")), leaf))
            continue

        if leaf is not None:
            parsed.append(_parsed((*path, key), leaf))
        elif isinstance(value, Mapping):
            parsed.extend(parse_override_config(value, (*path, key), depth + 1))

    return parsed


def _parsed(path: tuple[str, ...], leaf: OverrideValue) -> ParsedOverride:
    return ParsedOverride(
        path=path, value=leaf.value, force=leaf.force, resolve_vars=leaf.resolve_vars
    )


def resolve_variant_names(target: str, variants: Mapping[str, VariantTheme]) -> list[str]:
    """Expand an override target into variant ids (``default`` is the base theme)."""
    if target == ALL_TARGETS:
        return [BASE_VARIANT, *variants]
    if target in BASE_TARGETS:
        return [BASE_VARIANT]
    if target in variants:
        return [target]
    return [
        name
        for name, variant in variants.items()
        if variant.selector == target or target in variant.selector
    ]


# =============================================================================
# Post-resolution application
# =============================================================================


def apply_override(theme: Theme, override: ParsedOverride) -> bool:
    """Overwrite an existing theme path. Returns False when any segment is missing."""
    if len(override.path) < 2:
        return False

    current = theme.group(override.path[0])
    if current is None:
        return False

    for segment in override.path[1:-1]:
        key = _existing_key(current, segment)
        if key is None or not isinstance(current[key], dict):
            return False
        current = current[key]

    key = _existing_key(current, override.path[-1])
    if key is None:
        return False
    current[key] = override.value
    return True


def _existing_key(mapping: dict[Any, Any], segment: str) -> Any:
    """Find ``segment`` in ``mapping``, matching numeric color-scale keys too."""
    if segment in mapping:
        return segment
    if segment.isdigit() and int(segment) in mapping:
        return int(segment)
    return None


def apply_theme_overrides(
    base_theme: Theme,
    variants: dict[str, VariantTheme],
    overrides: Mapping[str, Mapping[str, Any]],
) -> dict[str, OverrideOutcome]:
    """Apply every override to its targets, in place.

    Returns applied/skipped counts per variant id.
    """
    outcomes: dict[str, OverrideOutcome] = {}

    for target, config in overrides.items():
        variant_names = resolve_variant_names(target, variants)
        if not variant_names:
            logger.debug("[Overrides] No matching variants found for selector: %s", target)
            continue

        parsed = parse_override_config(config)
        if not parsed:
            logger.debug("[Overrides] No valid overrides in config for: %s", target)
            continue

        for variant_name in variant_names:
            theme = base_theme if variant_name == BASE_VARIANT else variants[variant_name].theme
            outcome = _apply_to_theme(theme, variant_name, parsed)
            previous = outcomes.get(variant_name, OverrideOutcome(0, 0))
            outcomes[variant_name] = OverrideOutcome(
                previous.applied + outcome.applied, previous.skipped + outcome.skipped
            )

    return outcomes


def _apply_to_theme(
    theme: Theme, variant_name: str, parsed: list[ParsedOverride]
) -> OverrideOutcome:
    applied = skipped = 0
    for override in parsed:
        if apply_override(theme, override):
            applied += 1
            logger.debug(
                "[Overrides] Applied to '%s': %s = %s", variant_name, override.dotted, override.value
            )
        else:
            skipped += 1
            logger.debug(
                "[Overrides] Skipped (path not found) in '%s': %s", variant_name, override.dotted
            )

    if applied or skipped:
        logger.debug(
            "[Overrides] Summary for '%s': %d applied, %d skipped", variant_name, applied, skipped
        )
    return OverrideOutcome(applied, skipped)


# =============================================================================
# Pre-resolution injection
# =============================================================================


def path_to_variable_name(path: tuple[str, ...]) -> str | None:
    """``("colors", "primary")`` -> ``--colors-primary``."""
    if len(path) < 2:
        return None
    return f"--{path[0]}-{'-'.join(path[1:])}"


def inject_variable_overrides(overrides: Mapping[str, Mapping[str, Any]]) -> list[Declaration]:
    """Synthesize ``@theme`` declarations for base-targeted overrides.

    Only ``*``, ``default`` and ``base`` targets qualify, and only entries
    whose ``resolve_vars`` flag is set.
    """
    injected: list[Declaration] = []
    counts: dict[str, int] = {}

    for target, config in overrides.items():
        if target not in PRE_RESOLUTION_TARGETS:
            continue
        for override in parse_override_config(config):
            if not override.resolve_vars:
                continue
            name = path_to_variable_name(override.path)
            if name is None:
                continue
            injected.append(Declaration(name=name, value=override.value, source=DeclarationSource.THEME))
            counts[target] = counts.get(target, 0) + 1
            logger.debug("[Overrides] Injected variable: %s = %s", name, override.value)

    for target, count in counts.items():
        logger.debug("[Overrides] Injected %d variables for '%s'", count, target)
    return injected
