"""
Conflict detection between literal variant rules and theme tokens.

``.theme-mono { .rounded-lg { border-radius: 0 } }`` silently overrides
``radius.lg`` for that variant. Each such pair is reported as a Conflict;
simple, unit-compatible ones are folded back into the variant's theme.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from collections.abc import Mapping

from ..core.ir import Confidence, Conflict, RuleComplexity, RuleOverride, VariantTheme
from ..core.namespaces import PROPERTY_MAPPINGS
from ..core.strings import DEFAULT_NAME_CACHE, NameCache

logger = logging.getLogger(__name__)

_UNIT = re.compile(r"(px|rem|em|%|vh|vw)$")


def detect_conflicts(
    rules: list[RuleOverride], variants: dict[str, VariantTheme]
) -> list[Conflict]:
    """Cross-reference extracted rules against the variant themes.

    A rule is skipped when its property has no theme mapping, no key can be
    read from its selector, no variant was declared by its parent selector,
    or the theme slot is missing or not a plain string.
    """
    conflicts: list[Conflict] = []

    for rule in rules:
        mapping = PROPERTY_MAPPINGS.get(rule.property)
        if mapping is None or mapping.key_pattern is None:
            continue

        key_match = mapping.key_pattern.search(rule.selector)
        if key_match is None:
            continue
        theme_key = key_match.group(1)

        variant = _find_variant_by_selector(variants, rule.original_selector)
        if variant is None:
            continue

        variable_value = getattr(variant.theme, mapping.group).get(theme_key)
        if not isinstance(variable_value, str):
            continue

        simple = rule.complexity == RuleComplexity.SIMPLE
        conflicts.append(
            Conflict(
                variant_name=rule.variant_name,
                theme_property=mapping.group,
                theme_key=theme_key,
                variable_value=variable_value,
                rule_value=rule.value,
                rule_selector=rule.selector,
                can_resolve=simple,
                confidence=_confidence(simple, variable_value, rule.value),
            )
        )

    return conflicts


def _find_variant_by_selector(
    variants: dict[str, VariantTheme], selector: str
) -> VariantTheme | None:
    for variant in variants.values():
        if variant.selector == selector:
            return variant
    return None


def _confidence(simple: bool, variable_value: str, rule_value: str) -> Confidence:
    if not simple:
        return Confidence.LOW
    if _units_differ(variable_value, rule_value):
        return Confidence.MEDIUM
    return Confidence.HIGH


def _units_differ(first: str, second: str) -> bool:
    first_unit = _UNIT.search(first.strip())
    second_unit = _UNIT.search(second.strip())
    if first_unit is None or second_unit is None:
        return False
    return first_unit.group(1) != second_unit.group(1)


def filter_resolvable_conflicts(conflicts: list[Conflict]) -> list[Conflict]:
    """Conflicts safe to auto-apply.

    Medium-confidence conflicts are resolvable but still excluded here; a
    unit change (``1rem`` -> ``8px``) is left for manual review.
    """
    return [c for c in conflicts if c.can_resolve and c.confidence == Confidence.HIGH]


def apply_conflict(
    variants: dict[str, VariantTheme],
    conflict: Conflict,
    names: NameCache | None = None,
    variant_ids: Mapping[str, str] | None = None,
) -> bool:
    """Write the rule's value into the variant theme. Returns True on success.

    ``variant_ids`` maps raw variant names to the ids used as keys of
    ``variants``; without it the camelCased name is used.
    """
    variant_id = (variant_ids or {}).get(conflict.variant_name)
    if variant_id is None:
        variant_id = (names or DEFAULT_NAME_CACHE).variant_name_to_camel(conflict.variant_name)
    variant = variants.get(variant_id)
    if variant is None:
        return False

    group = getattr(variant.theme, conflict.theme_property)
    group[conflict.theme_key] = conflict.rule_value
    logger.debug(
        "Applied rule %s to %s.%s in '%s'",
        conflict.rule_selector,
        conflict.theme_property,
        conflict.theme_key,
        variant_id,
    )
    return True


def group_conflicts_by_variant(conflicts: list[Conflict]) -> dict[str, list[Conflict]]:
    grouped: dict[str, list[Conflict]] = defaultdict(list)
    for conflict in conflicts:
        grouped[conflict.variant_name].append(conflict)
    return dict(grouped)
