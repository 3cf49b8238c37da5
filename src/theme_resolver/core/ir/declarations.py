"""
Declaration IR types.

A Declaration is one custom-property assignment lifted out of a stylesheet,
tagged with the scope it was found in. Declarations are immutable; the
resolution pass produces new instances with substituted values.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class DeclarationSource(StrEnum):
    """Scope a declaration was found in."""

    THEME = "theme"
    ROOT = "root"
    VARIANT = "variant"


class Declaration(BaseModel):
    """A single ``--name: value`` custom-property assignment."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Custom property name including the leading '--'")
    value: str = Field(description="Raw or resolved property value")
    source: DeclarationSource = Field(description="Scope the declaration belongs to")
    selector: str | None = Field(
        default=None, description="Activating selector for variant declarations"
    )
    variant_name: str | None = Field(
        default=None, description="Dot-joined compound variant name (e.g. 'compact.dark')"
    )

    @property
    def identity(self) -> str:
        """Name, scope and variant; pairs a declaration with its resolved counterpart."""
        return f"{self.name}:{self.source}:{self.variant_name or ''}"

    def with_value(self, value: str) -> Declaration:
        """Return a copy carrying a different value."""
        return self.model_copy(update={"value": value})
