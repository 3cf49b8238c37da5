"""
Diagnostic IR types produced alongside resolved themes.

Covers literal rules extracted from variant scopes, the rule/token conflicts
they cause, references that never resolved, and deprecated variable names.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from .declarations import DeclarationSource

# =============================================================================
# Enums
# =============================================================================


class RuleComplexity(StrEnum):
    """Whether a literal rule can be mapped back onto a token safely."""

    SIMPLE = "simple"
    COMPLEX = "complex"


class Confidence(StrEnum):
    """Confidence that a conflict can be auto-applied."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class LikelyCause(StrEnum):
    """Best guess at why a reference did not resolve."""

    EXTERNAL = "external"
    SELF_REFERENTIAL = "self_referential"
    UNKNOWN = "unknown"


# =============================================================================
# Rule overrides and conflicts
# =============================================================================


class RuleOverride(BaseModel):
    """A literal property declared inside a variant scope."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(description="Selector of the nested rule (e.g. '.rounded-lg')")
    property: str = Field(description="CSS property name")
    value: str = Field(description="Literal property value")
    variant_name: str = Field(description="Raw (un-camelCased) variant name")
    original_selector: str = Field(description="Selector of the enclosing variant rule")
    complexity: RuleComplexity
    reason: str | None = Field(default=None, description="Why the rule is complex")
    in_media_query: bool = False
    media_query: str | None = None


class Conflict(BaseModel):
    """A literal rule that overrides a value also expressed as a token."""

    model_config = ConfigDict(frozen=True)

    variant_name: str
    theme_property: str = Field(description="Theme group attribute (e.g. 'radius')")
    theme_key: str
    variable_value: str = Field(description="Value the token resolved to")
    rule_value: str = Field(description="Value the literal rule sets")
    rule_selector: str
    can_resolve: bool
    confidence: Confidence


# =============================================================================
# Unresolved references and deprecations
# =============================================================================


class UnresolvedReference(BaseModel):
    """A ``var()`` reference still present after resolution."""

    model_config = ConfigDict(frozen=True)

    variable_name: str
    original_value: str
    referenced_variable: str
    fallback_value: str | None = None
    source: DeclarationSource
    variant_name: str | None = None
    selector: str | None = None
    likely_cause: LikelyCause


class DeprecationNotice(BaseModel):
    """A legacy singular variable name and its replacement."""

    model_config = ConfigDict(frozen=True)

    variable: str
    message: str
    replacement: str
