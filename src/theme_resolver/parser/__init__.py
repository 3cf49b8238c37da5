"""
Stylesheet parsing and declaration extraction.

``css`` adapts tinycss2 output to the node tree in ``ast``; ``extractor``
and ``rules`` walk that tree.
"""

from .ast import AtRuleNode, DeclarationNode, Node, RuleNode
from .css import parse_stylesheet, read_stylesheet
from .extractor import (
    ExtractionResult,
    apply_variant_to_selector,
    extract_declarations,
    extract_variant_name,
)
from .rules import extract_rule_overrides, filter_resolvable_rules, group_rules_by_variant

__all__ = [
    "AtRuleNode",
    "DeclarationNode",
    "ExtractionResult",
    "Node",
    "RuleNode",
    "apply_variant_to_selector",
    "extract_declarations",
    "extract_rule_overrides",
    "extract_variant_name",
    "filter_resolvable_rules",
    "group_rules_by_variant",
    "parse_stylesheet",
    "read_stylesheet",
]
