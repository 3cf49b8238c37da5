"""
Theme construction from extracted declarations.

``build_theme`` turns one ordered declaration list into a Theme.
``build_themes`` runs the whole pass for a stylesheet:

1. Inject base-targeted overrides as ``@theme`` declarations
2. Deduplicate ``@theme`` and ``:root`` declarations (last wins)
3. Build the base theme, then one theme per variant seeded with base,
   root and ancestor-variant declarations
4. Detect rule/token conflicts and apply the safe ones
5. Resolve every declaration and report references that never resolved
6. Apply post-resolution overrides
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..analysis.conflicts import apply_conflict, detect_conflicts, filter_resolvable_conflicts
from ..analysis.unresolved import detect_unresolved
from ..core.ir import (
    Conflict,
    Declaration,
    DeclarationSource,
    DeprecationNotice,
    RuleOverride,
    Theme,
    UnresolvedReference,
    VariantTheme,
)
from ..core.namespaces import NAMESPACE_MAP, Processor
from ..core.strings import DEFAULT_NAME_CACHE, NameCache, parse_color_scale, parse_font_size_line_height
from .defaults import theme_to_declarations
from .initial import (
    exclusion_for,
    extract_initial_exclusions,
    filter_defaults_by_exclusions,
    is_initial,
    remove_excluded,
)
from .overrides import apply_theme_overrides, inject_variable_overrides
from .references import ForwardTarget, ReferenceResolver, build_forwarding_map

logger = logging.getLogger(__name__)


@dataclass
class VariantGroup:
    """Declarations sharing one variant name; the first selector seen wins."""

    selector: str
    declarations: list[Declaration] = field(default_factory=list)


@dataclass
class ThemeBuildResult:
    theme: Theme
    variants: dict[str, VariantTheme]
    deprecations: list[DeprecationNotice]
    conflicts: list[Conflict]
    declarations: list[Declaration]
    unresolved: list[UnresolvedReference]


# =============================================================================
# Single theme
# =============================================================================


def build_theme(
    declarations: Iterable[Declaration],
    resolver: ReferenceResolver,
    keyframes: Mapping[str, str] | None = None,
    forwards: Mapping[str, ForwardTarget] | None = None,
    names: NameCache | None = None,
) -> tuple[Theme, list[DeprecationNotice]]:
    """Build a Theme from declarations in precedence order.

    Args:
        declarations: Declarations, lowest precedence first
        resolver: Resolver holding every name visible in this context
        keyframes: Verbatim keyframe blocks to attach
        forwards: Un-namespaced names mapped onto theme slots
        names: Name cache; defaults to the shared cache

    Returns:
        The theme and any deprecation notices raised while building it
    """
    names = names or DEFAULT_NAME_CACHE
    forwards = forwards or {}
    theme = Theme()
    notices: list[DeprecationNotice] = []
    line_heights: dict[str, str] = {}

    for declaration in declarations:
        if is_initial(declaration.value):
            remove_excluded(theme, exclusion_for(declaration.name, names), names)
            continue

        value = resolver.resolve(declaration.value)

        forward = forwards.get(declaration.name)
        if forward is not None:
            _place(theme, forward.namespace, forward.key, value, line_heights, names)
            continue

        parsed = names.parse_variable_name(declaration.name)
        if parsed.deprecation is not None:
            notices.append(parsed.deprecation)
        if parsed.namespace not in NAMESPACE_MAP:
            logger.debug("Skipping %s: unknown namespace '%s'", declaration.name, parsed.namespace)
            continue
        _place(theme, parsed.namespace, parsed.key, value, line_heights, names)

    for key, line_height in line_heights.items():
        entry = theme.font_size.get(key)
        if entry is not None:
            entry["lineHeight"] = line_height

    theme.keyframes.update(keyframes or {})
    return theme, notices


def _place(
    theme: Theme,
    namespace: str,
    key: str,
    value: str,
    line_heights: dict[str, str],
    names: NameCache,
) -> None:
    mapping = NAMESPACE_MAP[namespace]

    if mapping.processor is Processor.COLOR:
        _place_color(theme.colors, key, value, names)
    elif mapping.processor is Processor.FONT_SIZE:
        base_key = parse_font_size_line_height(key)
        if base_key is not None:
            line_heights[base_key] = value
        else:
            theme.font_size.setdefault(key, {})["size"] = value
    elif mapping.processor is Processor.CAMEL_KEY:
        getattr(theme, mapping.group)[names.kebab_to_camel(key)] = value
    else:
        getattr(theme, mapping.group)[key] = value


def _place_color(colors: dict[str, Any], key: str, value: str, names: NameCache) -> None:
    scale = parse_color_scale(key, names)
    if scale is None:
        colors[names.kebab_to_camel(key)] = value
        return

    color_name, variant = scale
    if not isinstance(colors.get(color_name), dict):
        colors[color_name] = {}
    numeric = variant.isdigit() and str(int(variant)) == variant
    colors[color_name][int(variant) if numeric else variant] = value


# =============================================================================
# Full pass
# =============================================================================


def deduplicate_by_name(declarations: Iterable[Declaration]) -> list[Declaration]:
    """Keep the last declaration per name, in first-seen order."""
    by_name: dict[str, Declaration] = {}
    for declaration in declarations:
        by_name[declaration.name] = declaration
    return list(by_name.values())


def group_variant_declarations(declarations: Iterable[Declaration]) -> dict[str, VariantGroup]:
    groups: dict[str, VariantGroup] = {}
    for declaration in declarations:
        if declaration.variant_name is None or declaration.selector is None:
            continue
        group = groups.setdefault(declaration.variant_name, VariantGroup(declaration.selector))
        group.declarations.append(declaration)
    return groups


def assign_variant_ids(variant_names: Iterable[str], names: NameCache) -> dict[str, str]:
    """Map each raw variant name to a unique camelCase id.

    Distinct scopes can camelCase to the same id (``theme-mono.dark`` and
    ``theme-mono-dark``). The first one keeps it; later ones get a numeric
    suffix.
    """
    ids: dict[str, str] = {}
    taken: set[str] = set()
    for variant_name in variant_names:
        base = names.variant_name_to_camel(variant_name)
        variant_id = base
        suffix = 2
        while variant_id in taken:
            variant_id = f"{base}{suffix}"
            suffix += 1
        if variant_id != base:
            logger.warning(
                "Variant '%s' collides with id '%s'; using '%s'", variant_name, base, variant_id
            )
        taken.add(variant_id)
        ids[variant_name] = variant_id
    return ids


def collect_ancestor_declarations(
    variant_name: str, groups: Mapping[str, VariantGroup]
) -> list[Declaration]:
    """Declarations a compound variant inherits, lowest precedence first.

    For ``a.b.c``: standalone variants named after later segments (``b``,
    ``c``), then the true ancestors (``a``, ``a.b``).
    """
    segments = variant_name.split(".")
    if len(segments) == 1:
        return []

    prefixes = [".".join(segments[:i]) for i in range(1, len(segments))]
    standalone = [s for s in segments[1:] if s not in prefixes]

    inherited: list[Declaration] = []
    for name in dict.fromkeys([*standalone, *prefixes]):
        group = groups.get(name)
        if group is not None:
            inherited.extend(group.declarations)
    return inherited


def build_themes(
    declarations: list[Declaration],
    keyframes: Mapping[str, str] | None = None,
    rules: list[RuleOverride] | None = None,
    default_theme: Theme | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
    names: NameCache | None = None,
) -> ThemeBuildResult:
    """Build the base theme and every variant theme for one stylesheet."""
    names = names or DEFAULT_NAME_CACHE

    if overrides:
        declarations = [*declarations, *inject_variable_overrides(overrides)]

    theme_decls = deduplicate_by_name(d for d in declarations if d.source == DeclarationSource.THEME)
    root_decls = deduplicate_by_name(d for d in declarations if d.source == DeclarationSource.ROOT)
    variant_decls = [d for d in declarations if d.source == DeclarationSource.VARIANT]
    default_decls: list[Declaration] = []
    if default_theme is not None:
        default_decls = filter_defaults_by_exclusions(
            theme_to_declarations(default_theme),
            extract_initial_exclusions(theme_decls, names),
            names,
        )

    base_resolver = ReferenceResolver([*default_decls, *theme_decls, *root_decls])
    forwards = build_forwarding_map(theme_decls, names)

    theme, notices = build_theme(
        [*theme_decls, *root_decls], base_resolver, keyframes, forwards, names
    )

    groups = group_variant_declarations(variant_decls)
    variant_ids = assign_variant_ids(groups, names)
    variants: dict[str, VariantTheme] = {}
    resolvers: dict[str, ReferenceResolver] = {}

    for variant_name, group in groups.items():
        inherited = collect_ancestor_declarations(variant_name, groups)
        scoped = [*theme_decls, *root_decls, *inherited, *group.declarations]
        resolvers[variant_name] = ReferenceResolver([*default_decls, *scoped])

        variant_theme, variant_notices = build_theme(
            scoped, resolvers[variant_name], forwards=forwards, names=names
        )
        notices.extend(variant_notices)
        variants[variant_ids[variant_name]] = VariantTheme(
            selector=group.selector, theme=variant_theme
        )

    conflicts = detect_conflicts(rules or [], variants)
    for conflict in filter_resolvable_conflicts(conflicts):
        apply_conflict(variants, conflict, names, variant_ids)

    resolved = [
        d.with_value(resolvers.get(d.variant_name or "", base_resolver).resolve(d.value))
        for d in declarations
    ]
    unresolved = detect_unresolved(declarations, resolved)

    if overrides:
        apply_theme_overrides(theme, variants, overrides)

    logger.debug(
        "Built base theme and %d variants (%d conflicts, %d unresolved)",
        len(variants),
        len(conflicts),
        len(unresolved),
    )
    return ThemeBuildResult(
        theme=theme,
        variants=variants,
        deprecations=list({notice.variable: notice for notice in notices}.values()),
        conflicts=conflicts,
        declarations=resolved,
        unresolved=unresolved,
    )
