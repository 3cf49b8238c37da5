"""
Minimal stylesheet tree consumed by the declaration extractor.

Any CSS tokenizer can feed the extractor by producing these three node
kinds; ``theme_resolver.parser.css`` builds them from tinycss2 output.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


@dataclass
class DeclarationNode:
    """A ``property: value`` pair."""

    property: str
    value: str

    @property
    def is_custom(self) -> bool:
        return self.property.startswith("--")


@dataclass
class RuleNode:
    """A qualified rule: ``selector { ... }``."""

    selector: str
    children: list[Node] = field(default_factory=list)

    @property
    def declarations(self) -> list[DeclarationNode]:
        """Direct declaration children."""
        return [child for child in self.children if isinstance(child, DeclarationNode)]


@dataclass
class AtRuleNode:
    """An at-rule: ``@name params { ... }`` or ``@name params;``."""

    name: str
    params: str = ""
    children: list[Node] = field(default_factory=list)
    text: str = ""


Node = Union[AtRuleNode, RuleNode, DeclarationNode]


def walk_declarations(node: AtRuleNode | RuleNode) -> Iterator[DeclarationNode]:
    """Yield every declaration below ``node``, depth first, in source order."""
    for child in node.children:
        if isinstance(child, DeclarationNode):
            yield child
        else:
            yield from walk_declarations(child)


def walk_at_rules(node: AtRuleNode | RuleNode, name: str) -> Iterator[AtRuleNode]:
    """Yield every at-rule named ``name`` below ``node``."""
    for child in node.children:
        if isinstance(child, AtRuleNode):
            if child.name == name:
                yield child
            yield from walk_at_rules(child, name)
        elif isinstance(child, RuleNode):
            yield from walk_at_rules(child, name)
