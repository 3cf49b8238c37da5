"""
Theme IR types.

A Theme holds the fixed set of design-token groups. Every group is always
present, possibly empty. Groups are stored under snake_case attributes and
serialize under their camelCase aliases (``font_size`` -> ``fontSize``).

Unlike the other IR models, Theme and VariantTheme are mutable: the builder,
the conflict detector and the override engine update them in place within a
single resolution call.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Color scale: numeric or string variant -> value (e.g. {500: "#ef4444"})
ColorScale = dict[int | str, str]
ColorValue = str | ColorScale

# Font size entry: {"size": "1.125rem", "lineHeight": "1.75rem"}
FontSizeValue = dict[str, str]


class Theme(BaseModel):
    """Structured design tokens, one mapping per token group."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    colors: dict[str, ColorValue] = Field(default_factory=dict, description="Flat colors and scales")
    spacing: dict[str, str] = Field(default_factory=dict, description="--spacing-*")
    fonts: dict[str, str] = Field(default_factory=dict, description="--font-*")
    font_size: dict[str, FontSizeValue] = Field(
        default_factory=dict, description="--text-* with paired --text-*--line-height"
    )
    font_weight: dict[str, str] = Field(default_factory=dict, description="--font-weight-*")
    tracking: dict[str, str] = Field(default_factory=dict, description="--tracking-*")
    leading: dict[str, str] = Field(default_factory=dict, description="--leading-*")
    breakpoints: dict[str, str] = Field(default_factory=dict, description="--breakpoint-*")
    containers: dict[str, str] = Field(default_factory=dict, description="--container-*")
    radius: dict[str, str] = Field(default_factory=dict, description="--radius-*")
    shadows: dict[str, str] = Field(default_factory=dict, description="--shadow-*")
    inset_shadows: dict[str, str] = Field(default_factory=dict, description="--inset-shadow-*")
    drop_shadows: dict[str, str] = Field(default_factory=dict, description="--drop-shadow-*")
    text_shadows: dict[str, str] = Field(default_factory=dict, description="--text-shadow-*")
    blur: dict[str, str] = Field(default_factory=dict, description="--blur-*")
    perspective: dict[str, str] = Field(default_factory=dict, description="--perspective-*")
    aspect: dict[str, str] = Field(default_factory=dict, description="--aspect-*")
    ease: dict[str, str] = Field(default_factory=dict, description="--ease-*")
    animations: dict[str, str] = Field(default_factory=dict, description="--animate-*")
    defaults: dict[str, str] = Field(default_factory=dict, description="--default-*")
    keyframes: dict[str, str] = Field(default_factory=dict, description="Verbatim @keyframes blocks")

    @classmethod
    def group_names(cls) -> tuple[str, ...]:
        """Attribute names of every token group, in declaration order."""
        return tuple(cls.model_fields)

    @classmethod
    def group_attribute(cls, name: str) -> str | None:
        """Map a group name or its camelCase alias to the attribute name."""
        if name in cls.model_fields:
            return name
        for attr, info in cls.model_fields.items():
            if info.alias == name:
                return attr
        return None

    def group(self, name: str) -> dict[Any, Any] | None:
        """Return the live mapping for a group, accepting either spelling."""
        attr = self.group_attribute(name)
        if attr is None:
            return None
        group: dict[Any, Any] = getattr(self, attr)
        return group

    def to_dict(self) -> dict[str, Any]:
        """Serialize using camelCase group names."""
        return self.model_dump(by_alias=True)


class VariantTheme(BaseModel):
    """A theme activated by a selector (class, data attribute or media query)."""

    selector: str = Field(description="Selector that activates the variant")
    theme: Theme = Field(default_factory=Theme)
