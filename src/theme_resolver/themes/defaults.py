"""
Baseline (defaults) theme merging.

A baseline theme, usually the utility framework's own token set, serves two
purposes: its values seed reference resolution so ``var(--color-red-500)``
resolves even when the user never declares it, and it is the merge base
under the user's base theme.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..core.ir import Declaration, DeclarationSource, Theme
from ..core.namespaces import GROUP_TO_NAMESPACE
from ..core.strings import camel_to_kebab


class DefaultsOptions(BaseModel):
    """Per-group switches for merging baseline values (all on by default)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    colors: bool = True
    spacing: bool = True
    fonts: bool = True
    font_size: bool = Field(default=True, alias="fontSize")
    font_weight: bool = Field(default=True, alias="fontWeight")
    tracking: bool = True
    leading: bool = True
    breakpoints: bool = True
    containers: bool = True
    radius: bool = True
    shadows: bool = True
    inset_shadows: bool = Field(default=True, alias="insetShadows")
    drop_shadows: bool = Field(default=True, alias="dropShadows")
    text_shadows: bool = Field(default=True, alias="textShadows")
    blur: bool = True
    perspective: bool = True
    aspect: bool = True
    ease: bool = True
    animations: bool = True
    defaults: bool = True
    keyframes: bool = True


def merge_themes(
    default_theme: Theme, user_theme: Theme, options: DefaultsOptions | None = None
) -> Theme:
    """Merge ``user_theme`` over ``default_theme`` group by group.

    User values win per key. Color scales merge per variant, so a user
    ``red-500`` keeps the baseline's other reds. A disabled group takes the
    user's values only. Neither input is modified.
    """
    options = options or DefaultsOptions()
    merged: dict[str, Any] = {}

    for group in Theme.group_names():
        user_values = getattr(user_theme, group)
        if not getattr(options, group):
            merged[group] = _copy_group(user_values)
        elif group == "colors":
            merged[group] = _merge_colors(default_theme.colors, user_values)
        else:
            default_values = _copy_group(getattr(default_theme, group))
            merged[group] = {**default_values, **_copy_group(user_values)}

    return Theme(**merged)


def _copy_group(values: dict[Any, Any]) -> dict[Any, Any]:
    return {key: dict(value) if isinstance(value, dict) else value for key, value in values.items()}


def _merge_colors(default_colors: dict[str, Any], user_colors: dict[str, Any]) -> dict[str, Any]:
    merged = _copy_group(default_colors)
    for name, user_value in user_colors.items():
        default_value = default_colors.get(name)
        if isinstance(user_value, dict) and isinstance(default_value, dict):
            merged[name] = {**default_value, **user_value}
        elif isinstance(user_value, dict):
            merged[name] = dict(user_value)
        else:
            merged[name] = user_value
    return merged


def theme_to_declarations(theme: Theme) -> list[Declaration]:
    """Flatten a theme back into ``@theme`` declarations.

    Used to make baseline values visible to reference resolution.
    """
    declarations: list[Declaration] = []

    def add(name: str, value: Any) -> None:
        if isinstance(value, str):
            declarations.append(Declaration(name=name, value=value, source=DeclarationSource.THEME))

    for key, color in theme.colors.items():
        prefix = f"--color-{camel_to_kebab(key)}"
        if isinstance(color, dict):
            for variant, value in color.items():
                add(f"{prefix}-{variant}", value)
        else:
            add(prefix, color)

    for key, entry in theme.font_size.items():
        add(f"--text-{key}", entry.get("size"))
        add(f"--text-{key}--line-height", entry.get("lineHeight"))

    for key, value in theme.defaults.items():
        add(f"--default-{camel_to_kebab(key)}", value)

    for group, namespace in GROUP_TO_NAMESPACE.items():
        for key, value in getattr(theme, group).items():
            add(f"--{namespace}-{key}", value)

    return declarations
