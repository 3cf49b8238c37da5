"""
Literal style rules nested inside variant scopes.

A variant block such as ``.theme-mono { .rounded-lg { border-radius: 0 } }``
changes a utility's value without touching the token behind it. These rules
are lifted out as RuleOverride records and classified by how safely they
can be folded back into the variant's theme.
"""

from __future__ import annotations

import re
from collections import defaultdict

from ..core.ir import RuleComplexity, RuleOverride
from ..core.namespaces import PROPERTY_MAPPINGS
from .ast import AtRuleNode, DeclarationNode, RuleNode, walk_at_rules, walk_declarations

MAX_SIMPLE_DECLARATIONS = 3

_DYNAMIC_VALUE = re.compile(r"var\(|calc\(|min\(|max\(|clamp\(")
_PSEUDO_CLASS = re.compile(r":hover|:focus")
_PSEUDO_ELEMENT = re.compile(r"::(before|after)")
_WHITESPACE = re.compile(r"\s+")


def extract_rule_overrides(rule: RuleNode, variant_name: str) -> list[RuleOverride]:
    """Collect mapped literal declarations from a variant rule.

    Direct child rules are scanned first, then child rules of every
    ``@media`` block below the variant, which are always complex.
    """
    overrides = _scan_children(rule, variant_name, rule.selector)
    for media in walk_at_rules(rule, "media"):
        overrides.extend(
            _scan_children(media, variant_name, rule.selector, media_query=media.params)
        )
    return overrides


def _scan_children(
    container: RuleNode | AtRuleNode,
    variant_name: str,
    original_selector: str,
    media_query: str | None = None,
) -> list[RuleOverride]:
    overrides: list[RuleOverride] = []
    in_media = media_query is not None

    for child in container.children:
        if not isinstance(child, RuleNode):
            continue
        declarations = list(walk_declarations(child))
        for decl in declarations:
            if decl.is_custom or decl.property not in PROPERTY_MAPPINGS:
                continue
            complexity, reason = classify_rule_complexity(
                child.selector, decl, len(declarations), in_media
            )
            overrides.append(
                RuleOverride(
                    selector=child.selector,
                    property=decl.property,
                    value=decl.value,
                    variant_name=variant_name,
                    original_selector=original_selector,
                    complexity=complexity,
                    reason=reason,
                    in_media_query=in_media,
                    media_query=media_query,
                )
            )
    return overrides


def classify_rule_complexity(
    selector: str,
    decl: DeclarationNode,
    declaration_count: int,
    in_media_query: bool,
) -> tuple[RuleComplexity, str | None]:
    """Classify a literal declaration; the first matching reason wins."""
    if "@apply" in decl.value:
        return RuleComplexity.COMPLEX, "@apply directive requires Tailwind processing"
    if _PSEUDO_CLASS.search(selector):
        return RuleComplexity.COMPLEX, "Pseudo-class selectors"
    if _PSEUDO_ELEMENT.search(selector):
        return RuleComplexity.COMPLEX, "Pseudo-element selectors"
    if _DYNAMIC_VALUE.search(decl.value):
        return RuleComplexity.COMPLEX, "Dynamic CSS function values"
    if in_media_query:
        return RuleComplexity.COMPLEX, "Nested in media query"
    if declaration_count > MAX_SIMPLE_DECLARATIONS:
        return RuleComplexity.COMPLEX, "Multiple property declarations (>3)"

    combinator = _combinator_reason(selector)
    if combinator is not None:
        return RuleComplexity.COMPLEX, combinator
    return RuleComplexity.SIMPLE, None


def _combinator_reason(selector: str) -> str | None:
    for part in (s.strip() for s in selector.split(",")):
        if ">" in part:
            return "Child combinator"
        if "~" in part or "+" in part:
            return "Sibling combinator"
        if _WHITESPACE.search(part):
            return "Descendant selector"
    return None


def filter_resolvable_rules(rules: list[RuleOverride]) -> list[RuleOverride]:
    """Keep only rules simple enough to fold into a theme."""
    return [rule for rule in rules if rule.complexity == RuleComplexity.SIMPLE]


def group_rules_by_variant(rules: list[RuleOverride]) -> dict[str, list[RuleOverride]]:
    grouped: dict[str, list[RuleOverride]] = defaultdict(list)
    for rule in rules:
        grouped[rule.variant_name].append(rule)
    return dict(grouped)
