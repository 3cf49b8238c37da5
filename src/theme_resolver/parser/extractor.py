"""
Declaration extraction from a stylesheet tree.

Walks the top-level nodes once and sorts custom properties by scope:

- ``@theme { ... }``      -> source ``theme`` (plus nested ``@keyframes``)
- ``:root { ... }``       -> source ``root``
- ``.dark``, ``[data-theme=x]``, ``@media (prefers-color-scheme: dark)``
                          -> source ``variant`` with a derived variant name

Nested ``@variant`` blocks inside a variant rule produce compound variants
(``theme-mono.dark``) with a matching compound selector. Each helper returns
its own list; nothing is collected through shared mutable state.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..core.ir import Declaration, DeclarationSource, RuleOverride
from ..core.strings import is_self_referential
from .ast import AtRuleNode, DeclarationNode, Node, RuleNode, walk_at_rules, walk_declarations
from .rules import extract_rule_overrides

logger = logging.getLogger(__name__)

ROOT_SELECTOR = ":root"

_DATA_THEME = re.compile(r"""\[data-theme\s*=\s*['"]([^'"]+)['"]\]""")
_DATA_ATTRIBUTE = re.compile(r"""\[data-[\w-]+\s*=\s*['"]([^'"]+)['"]\]""")
_CLASS_NAME = re.compile(r"\.([a-z][\w-]*)", re.IGNORECASE)
_MEDIA_COLOR_SCHEME = re.compile(r"prefers-color-scheme:\s*(\w+)")
_COMBINATOR = re.compile(r"[\s>+~]")


@dataclass
class ExtractionResult:
    """Everything the theme builder needs from one stylesheet."""

    declarations: list[Declaration] = field(default_factory=list)
    keyframes: dict[str, str] = field(default_factory=dict)
    rules: list[RuleOverride] = field(default_factory=list)

    def extend(self, other: ExtractionResult) -> None:
        self.declarations.extend(other.declarations)
        self.keyframes.update(other.keyframes)
        self.rules.extend(other.rules)


# =============================================================================
# Variant naming
# =============================================================================


def extract_variant_name(selector: str) -> str | None:
    """Derive a variant name from a selector or media query.

    Only the first compound selector is inspected, so
    ``.theme-default .container`` yields ``theme-default``. Data-theme values
    come first, then class names, then a ``prefers-color-scheme`` value.

    Examples:
        '.dark' -> 'dark'
        '[data-theme="ocean"].compact' -> 'ocean.compact'
        '(prefers-color-scheme: dark)' -> 'dark'
        'body' -> None
    """
    first_part = _COMBINATOR.split(selector.strip(), maxsplit=1)[0]

    parts = _DATA_THEME.findall(first_part)
    if not parts:
        data_attribute = _DATA_ATTRIBUTE.search(first_part)
        if data_attribute is not None:
            parts.append(data_attribute.group(1))

    parts.extend(_CLASS_NAME.findall(first_part))

    color_scheme = _MEDIA_COLOR_SCHEME.search(selector)
    if color_scheme is not None:
        parts.append(color_scheme.group(1))

    return ".".join(parts) if parts else None


def apply_variant_to_selector(selector: str, variant_name: str) -> str:
    """Append ``.variant`` to the first compound of every selector in a list.

    '.theme-purple .container, .alt' + 'dark'
        -> '.theme-purple.dark .container, .alt.dark'
    """
    modified = []
    for sel in (s.strip() for s in selector.split(",")):
        parts = sel.split()
        if not parts:
            modified.append(sel)
            continue
        parts[0] = f"{parts[0]}.{variant_name}"
        modified.append(" ".join(parts))
    return ", ".join(modified)


# =============================================================================
# Extraction
# =============================================================================


def extract_declarations(nodes: Iterable[Node]) -> ExtractionResult:
    """Extract scoped declarations, keyframes and literal variant rules."""
    result = ExtractionResult()

    for node in nodes:
        if isinstance(node, AtRuleNode):
            result.extend(_extract_at_rule(node))
        elif isinstance(node, RuleNode):
            result.extend(_extract_rule(node))

    logger.debug(
        "Extracted %d declarations, %d keyframes, %d rule overrides",
        len(result.declarations),
        len(result.keyframes),
        len(result.rules),
    )
    return result


def _extract_at_rule(node: AtRuleNode) -> ExtractionResult:
    result = ExtractionResult()

    if node.name == "theme":
        result.declarations = _customs(walk_declarations(node), DeclarationSource.THEME)
        result.keyframes = {
            kf.params: kf.text for kf in walk_at_rules(node, "keyframes") if kf.params
        }
    elif node.name == "media":
        variant_name = extract_variant_name(node.params)
        if variant_name is not None:
            result.declarations = _customs(
                walk_declarations(node),
                DeclarationSource.VARIANT,
                selector=f"@media {node.params}",
                variant_name=variant_name,
            )
    elif node.name == "keyframes" and node.params:
        result.keyframes = {node.params: node.text}

    return result


def _extract_rule(node: RuleNode) -> ExtractionResult:
    result = ExtractionResult()

    if node.selector == ROOT_SELECTOR:
        result.declarations = _customs(walk_declarations(node), DeclarationSource.ROOT)
        return result

    variant_name = extract_variant_name(node.selector)
    if variant_name is None:
        return result

    result.declarations = _customs(
        node.declarations,
        DeclarationSource.VARIANT,
        selector=node.selector,
        variant_name=variant_name,
    )
    result.rules = extract_rule_overrides(node, variant_name)
    result.declarations.extend(_nested_variants(node, variant_name, node.selector))

    for media in walk_at_rules(node, "media"):
        result.declarations.extend(
            _customs(
                walk_declarations(media),
                DeclarationSource.VARIANT,
                selector=f"{node.selector} @media {media.params}",
                variant_name=variant_name,
            )
        )
    return result


def _nested_variants(
    container: RuleNode | AtRuleNode, base_name: str, base_selector: str
) -> list[Declaration]:
    """Collect declarations from ``@variant`` blocks, recursing per level."""
    declarations: list[Declaration] = []

    for block in _variant_blocks(container):
        child_name = block.params.strip()
        if not child_name:
            continue
        compound_name = f"{base_name}.{child_name}"
        compound_selector = apply_variant_to_selector(base_selector, child_name)

        declarations.extend(
            _customs(
                (c for c in block.children if isinstance(c, DeclarationNode)),
                DeclarationSource.VARIANT,
                selector=compound_selector,
                variant_name=compound_name,
            )
        )
        declarations.extend(_nested_variants(block, compound_name, compound_selector))

    return declarations


def _variant_blocks(container: RuleNode | AtRuleNode) -> Iterator[AtRuleNode]:
    """Yield the nearest ``@variant`` blocks below ``container``.

    Blocks nested inside another ``@variant`` are left for the recursive
    call on that block.
    """
    for child in container.children:
        if isinstance(child, AtRuleNode) and child.name == "variant":
            yield child
        elif isinstance(child, (AtRuleNode, RuleNode)):
            yield from _variant_blocks(child)


def _customs(
    declarations: Iterable[DeclarationNode],
    source: DeclarationSource,
    selector: str | None = None,
    variant_name: str | None = None,
) -> list[Declaration]:
    """Convert custom-property nodes, dropping direct self-references."""
    return [
        Declaration(
            name=decl.property,
            value=decl.value,
            source=source,
            selector=selector,
            variant_name=variant_name,
        )
        for decl in declarations
        if decl.is_custom and not is_self_referential(decl.property, decl.value)
    ]
