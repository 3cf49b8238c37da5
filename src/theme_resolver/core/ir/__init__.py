"""
Intermediate representation types for theme resolution.

All types are re-exported from this package.
"""

from .declarations import Declaration, DeclarationSource
from .diagnostics import (
    Confidence,
    Conflict,
    DeprecationNotice,
    LikelyCause,
    RuleComplexity,
    RuleOverride,
    UnresolvedReference,
)
from .overrides import OverrideValue, ParsedOverride
from .theme import ColorScale, ColorValue, FontSizeValue, Theme, VariantTheme

__all__ = [
    "ColorScale",
    "ColorValue",
    "Confidence",
    "Conflict",
    "Declaration",
    "DeclarationSource",
    "DeprecationNotice",
    "FontSizeValue",
    "LikelyCause",
    "OverrideValue",
    "ParsedOverride",
    "RuleComplexity",
    "RuleOverride",
    "Theme",
    "UnresolvedReference",
    "VariantTheme",
]
