"""
Static lookup tables for namespace and property dispatch.

Every mapping the pipeline relies on lives here as plain data: custom-property
namespace -> theme group, CSS property -> theme group plus utility-class key
pattern, and the legacy singular variable names. Extending support for a new
token family means adding a row, not a branch.
"""

from __future__ import annotations

import re
from enum import StrEnum
from typing import NamedTuple

# =============================================================================
# Namespace -> theme group
# =============================================================================


class Processor(StrEnum):
    """How a namespace's values are placed into its theme group."""

    PLAIN = "plain"
    COLOR = "color"
    FONT_SIZE = "font_size"
    CAMEL_KEY = "camel_key"


class NamespaceMapping(NamedTuple):
    group: str
    processor: Processor = Processor.PLAIN


NAMESPACE_MAP: dict[str, NamespaceMapping] = {
    "color": NamespaceMapping("colors", Processor.COLOR),
    "text": NamespaceMapping("font_size", Processor.FONT_SIZE),
    "default": NamespaceMapping("defaults", Processor.CAMEL_KEY),
    "spacing": NamespaceMapping("spacing"),
    "font": NamespaceMapping("fonts"),
    "font-weight": NamespaceMapping("font_weight"),
    "tracking": NamespaceMapping("tracking"),
    "leading": NamespaceMapping("leading"),
    "breakpoint": NamespaceMapping("breakpoints"),
    "container": NamespaceMapping("containers"),
    "radius": NamespaceMapping("radius"),
    "shadow": NamespaceMapping("shadows"),
    "inset-shadow": NamespaceMapping("inset_shadows"),
    "drop-shadow": NamespaceMapping("drop_shadows"),
    "text-shadow": NamespaceMapping("text_shadows"),
    "blur": NamespaceMapping("blur"),
    "perspective": NamespaceMapping("perspective"),
    "aspect": NamespaceMapping("aspect"),
    "ease": NamespaceMapping("ease"),
    "animate": NamespaceMapping("animations"),
}

# Checked before splitting at the first hyphen
MULTI_WORD_NAMESPACES: tuple[str, ...] = (
    "text-shadow",
    "inset-shadow",
    "drop-shadow",
    "font-weight",
)


class SingularMapping(NamedTuple):
    key: str
    replacement: str


# Bare names without a key suffix, deprecated in favour of explicit keys
SINGULAR_VARIABLE_MAPPINGS: dict[str, SingularMapping] = {
    "spacing": SingularMapping("base", "--spacing-base"),
    "blur": SingularMapping("default", "--blur-sm or --blur-md"),
    "shadow": SingularMapping("default", "--shadow-sm or --shadow-md"),
    "radius": SingularMapping("default", "--radius-sm or --radius-md"),
}

SINGULAR_DEFAULT_KEY = "default"

# Theme group -> namespace, for groups placed without a custom processor
GROUP_TO_NAMESPACE: dict[str, str] = {
    mapping.group: namespace
    for namespace, mapping in NAMESPACE_MAP.items()
    if mapping.processor is Processor.PLAIN
}

FONT_SIZE_LINE_HEIGHT_SUFFIX = "--line-height"

# =============================================================================
# CSS property -> theme group (conflict detection)
# =============================================================================


class PropertyMapping(NamedTuple):
    """Maps a literal CSS property to a theme group.

    ``key_pattern`` pulls the theme key out of a utility-class selector;
    ``None`` means the property maps to a group but no key can be derived.
    """

    group: str
    key_pattern: re.Pattern[str] | None


PROPERTY_MAPPINGS: dict[str, PropertyMapping] = {
    "border-radius": PropertyMapping("radius", re.compile(r"\.rounded-(xs|sm|md|lg|xl|2xl|3xl|full)")),
    "box-shadow": PropertyMapping("shadows", re.compile(r"\.shadow-(xs|sm|md|lg|xl|2xl)")),
    "text-shadow": PropertyMapping("text_shadows", re.compile(r"\.text-shadow-(xs|sm|md|lg|xl)")),
    "filter": PropertyMapping("blur", re.compile(r"\.blur-(xs|sm|md|lg|xl)")),
    "padding": PropertyMapping("spacing", None),
    "padding-block": PropertyMapping("spacing", None),
    "padding-inline": PropertyMapping("spacing", None),
    "gap": PropertyMapping("spacing", None),
}

# =============================================================================
# Reference conventions
# =============================================================================

# Internal variables of the utility framework itself, never declared by users
EXTERNAL_PREFIX = "--tw-"

# Math functions whose arguments may contain several var() references
CSS_FUNCTION_PATTERN = re.compile(
    r"(?:calc|min|max|clamp|abs|sign|round|mod|rem|sin|cos|tan|asin|acos|atan|atan2"
    r"|pow|sqrt|hypot|log|exp)\s*\("
)

VAR_REFERENCE_PATTERN = re.compile(r"var\((--[\w-]+)\)")

# Captures the optional fallback after the first comma
VAR_REFERENCE_WITH_FALLBACK_PATTERN = re.compile(r"var\((--[\w-]+)(?:,\s*([^)]+))?\)")

BARE_REFERENCE_PATTERN = re.compile(r"^var\((--[\w-]+)\)$")

MAX_VAR_RESOLUTION_ITERATIONS = 100
