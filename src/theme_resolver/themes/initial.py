"""
Handling of the ``initial`` keyword inside ``@theme``.

``--color-*: initial`` clears a whole namespace and ``--color-red-*: initial``
clears a prefix; ``--color-red-500: initial`` clears one key. Exclusions are
applied to the baseline before it seeds resolution and before merging; the
builder applies them in place when it meets ``initial`` mid-stream.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, NamedTuple

from ..core.ir import Declaration, DeclarationSource, Theme
from ..core.namespaces import NAMESPACE_MAP, Processor
from ..core.strings import DEFAULT_NAME_CACHE, NameCache, camel_to_kebab

INITIAL_KEYWORD = "initial"
WILDCARD = "*"
WILDCARD_SUFFIX = "-*"


class InitialExclusion(NamedTuple):
    pattern: str
    namespace: str
    key_pattern: str
    is_wildcard: bool


def is_initial(value: str) -> bool:
    return value.strip() == INITIAL_KEYWORD


def exclusion_for(variable_name: str, names: NameCache | None = None) -> InitialExclusion:
    """Build the exclusion an ``initial`` declaration of ``variable_name`` implies."""
    parsed = (names or DEFAULT_NAME_CACHE).parse_variable_name(variable_name)
    return InitialExclusion(
        pattern=variable_name,
        namespace=parsed.namespace,
        key_pattern=parsed.key,
        is_wildcard=parsed.key == WILDCARD or parsed.key.endswith(WILDCARD_SUFFIX),
    )


def extract_initial_exclusions(
    declarations: Iterable[Declaration], names: NameCache | None = None
) -> list[InitialExclusion]:
    """Collect exclusions from ``@theme`` declarations whose value is ``initial``."""
    return [
        exclusion_for(declaration.name, names)
        for declaration in declarations
        if declaration.source == DeclarationSource.THEME and is_initial(declaration.value)
    ]


def matches_exclusion(
    variable_name: str, exclusion: InitialExclusion, names: NameCache | None = None
) -> bool:
    parsed = (names or DEFAULT_NAME_CACHE).parse_variable_name(variable_name)
    if parsed.namespace != exclusion.namespace:
        return False
    if not exclusion.is_wildcard:
        return parsed.key == exclusion.key_pattern
    if exclusion.key_pattern == WILDCARD:
        return True
    return parsed.key.startswith(exclusion.key_pattern[: -len(WILDCARD_SUFFIX)])


def filter_defaults_by_exclusions(
    declarations: list[Declaration],
    exclusions: list[InitialExclusion],
    names: NameCache | None = None,
) -> list[Declaration]:
    """Drop baseline declarations cleared by an ``initial`` exclusion."""
    if not exclusions:
        return declarations
    return [
        declaration
        for declaration in declarations
        if not any(matches_exclusion(declaration.name, excl, names) for excl in exclusions)
    ]


def filter_theme_by_exclusions(
    theme: Theme, exclusions: list[InitialExclusion], names: NameCache | None = None
) -> Theme:
    """Return a copy of ``theme`` without excluded entries; the input is untouched."""
    if not exclusions:
        return theme
    filtered = theme.model_copy(deep=True)
    for exclusion in exclusions:
        remove_excluded(filtered, exclusion, names)
    return filtered


def remove_excluded(
    theme: Theme, exclusion: InitialExclusion, names: NameCache | None = None
) -> None:
    """Delete every entry of ``theme`` matched by ``exclusion``, in place."""
    mapping = NAMESPACE_MAP.get(exclusion.namespace)
    if mapping is None:
        return

    if mapping.processor is Processor.COLOR:
        _remove_colors(theme.colors, exclusion, names)
    elif mapping.processor is Processor.FONT_SIZE:
        _remove_keys(theme.font_size, "--text-{}", exclusion, names)
    else:
        group: dict[str, Any] = getattr(theme, mapping.group)
        _remove_keys(group, f"--{exclusion.namespace}-{{}}", exclusion, names)


def _remove_keys(
    group: dict[str, Any], template: str, exclusion: InitialExclusion, names: NameCache | None
) -> None:
    for key in [
        k for k in group if matches_exclusion(template.format(camel_to_kebab(k)), exclusion, names)
    ]:
        del group[key]


def _remove_colors(
    colors: dict[str, Any], exclusion: InitialExclusion, names: NameCache | None
) -> None:
    for color_name in list(colors):
        value = colors[color_name]
        prefix = f"--color-{camel_to_kebab(color_name)}"
        if isinstance(value, str):
            if matches_exclusion(prefix, exclusion, names):
                del colors[color_name]
            continue

        for variant in [
            v for v in value if matches_exclusion(f"{prefix}-{v}", exclusion, names)
        ]:
            del value[variant]
        if not value:
            del colors[color_name]
