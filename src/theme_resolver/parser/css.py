"""
tinycss2 adapter producing the extractor's node tree.

Top-level rules come from ``tinycss2.parse_stylesheet``; block contents of
every rule and at-rule are re-parsed with ``parse_blocks_contents`` so
nested rules (``.dark { .card { ... } }``) and nested at-rules
(``@variant``, ``@media``) survive as child nodes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import tinycss2

from ..errors import StylesheetError
from .ast import AtRuleNode, DeclarationNode, Node, RuleNode

logger = logging.getLogger(__name__)

# ``--color-*: initial`` is not a valid CSS ident; escaping the star keeps it one
_WILDCARD_PROPERTY = re.compile(r"(?<![\w-])(--[\w-]*)\*(?=\s*:)")


def parse_stylesheet(css: str) -> list[Node]:
    """Parse stylesheet text into AtRuleNode / RuleNode / DeclarationNode trees."""
    css = _WILDCARD_PROPERTY.sub(r"\1\\*", css)
    items = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    return _convert_items(items)


def read_stylesheet(path: Path) -> list[Node]:
    """Read and parse a stylesheet from disk.

    Raises:
        StylesheetError: If the file cannot be read or decoded.
    """
    try:
        css = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise StylesheetError("Stylesheet not found", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise StylesheetError(f"Cannot read stylesheet: {e}", path) from e
    return parse_stylesheet(css)


def _convert_items(items: Iterable[Any]) -> list[Node]:
    nodes: list[Node] = []
    for item in items:
        node = _convert(item)
        if node is not None:
            nodes.append(node)
    return nodes


def _convert(item: Any) -> Node | None:
    if item.type == "qualified-rule":
        return RuleNode(
            selector=_serialize(item.prelude),
            children=_convert_block(item.content),
        )

    if item.type == "at-rule":
        return AtRuleNode(
            name=item.lower_at_keyword,
            params=_serialize(item.prelude),
            children=_convert_block(item.content) if item.content is not None else [],
            text=item.serialize().strip(),
        )

    if item.type == "declaration":
        # Custom property names are case-sensitive
        name = item.name if item.name.startswith("--") else item.lower_name
        return DeclarationNode(property=name, value=tinycss2.serialize(item.value).strip())

    if item.type == "error":
        logger.debug(
            "Skipping unparseable CSS at %s:%s: %s", item.source_line, item.source_column, item.message
        )
    return None


def _convert_block(content: list[Any] | None) -> list[Node]:
    if not content:
        return []
    items = tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)
    return _convert_items(items)


def _serialize(tokens: list[Any]) -> str:
    """Serialize a prelude with runs of whitespace collapsed."""
    return " ".join(tinycss2.serialize(tokens).split()) if tokens else ""
