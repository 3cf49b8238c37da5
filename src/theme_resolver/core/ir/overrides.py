"""
Override IR types.

User override configuration arrives as loosely shaped mappings. It is parsed
once into ParsedOverride records so the engine never re-inspects raw values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OverrideValue(BaseModel):
    """The ``{value, force?, resolve_vars?}`` form of an override leaf."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: str
    force: bool = False
    resolve_vars: bool = Field(default=True, alias="resolveVars")


class ParsedOverride(BaseModel):
    """A flattened override: theme path plus normalized value."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(description="Theme path segments (e.g. ('colors', 'primary'))")
    value: str
    force: bool = False
    resolve_vars: bool = True

    @property
    def dotted(self) -> str:
        return ".".join(self.path)
