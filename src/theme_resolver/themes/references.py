"""
Reference resolution for ``var(--name)`` expressions.

A ReferenceResolver is built from the declarations visible in one context
(defaults, @theme, :root, ancestor variants, own variant) and substitutes
references recursively. Missing names leave the reference verbatim; names
already on the current chain stop substitution, so cycles terminate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NamedTuple

from ..core.ir import Declaration
from ..core.namespaces import (
    BARE_REFERENCE_PATTERN,
    MAX_VAR_RESOLUTION_ITERATIONS,
    NAMESPACE_MAP,
    VAR_REFERENCE_PATTERN,
)
from ..core.strings import DEFAULT_NAME_CACHE, NameCache

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolve ``var()`` references against a fixed name -> value map.

    Later declarations win, so callers order the input from lowest to
    highest precedence.
    """

    def __init__(self, declarations: Iterable[Declaration] = ()):
        self.values: dict[str, str] = {}
        for declaration in declarations:
            self.values[declaration.name] = declaration.value

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def resolve(self, value: str, visited: frozenset[str] = frozenset()) -> str:
        """Return ``value`` with every resolvable reference substituted.

        A value that is exactly one reference is replaced by the target's
        resolved value. Any other value (``calc(var(--a) - 1px)``,
        ``0 0 0 1px var(--ring)``) has each reference replaced in place.
        """
        if "var(" not in value:
            return value

        bare = BARE_REFERENCE_PATTERN.match(value.strip())
        if bare is not None:
            return self._resolve_bare(value, bare.group(1), visited)
        return self._substitute_all(value, visited)

    def _resolve_bare(self, value: str, name: str, visited: frozenset[str]) -> str:
        if name in visited or name not in self.values:
            return value
        return self.resolve(self.values[name], visited | {name})

    def _substitute_all(self, value: str, visited: frozenset[str]) -> str:
        result = value
        position = 0

        for _ in range(MAX_VAR_RESOLUTION_ITERATIONS):
            match = VAR_REFERENCE_PATTERN.search(result, position)
            if match is None:
                break
            name = match.group(1)
            if name in visited or name not in self.values:
                position = match.end()
                continue
            resolved = self.resolve(self.values[name], visited | {name})
            result = result[: match.start()] + resolved + result[match.end() :]
            position = match.start() + len(resolved)
        else:
            logger.debug(
                "Stopped substituting references after %d passes: %s",
                MAX_VAR_RESOLUTION_ITERATIONS,
                value,
            )

        return result


# =============================================================================
# Forwarding
# =============================================================================


class ForwardTarget(NamedTuple):
    """Where an un-namespaced variable's value lands in the theme."""

    namespace: str
    key: str
    group: str


def build_forwarding_map(
    theme_declarations: Iterable[Declaration], names: NameCache | None = None
) -> dict[str, ForwardTarget]:
    """Map un-namespaced variables to the token that forwards to them.

    ``@theme { --color-background: var(--background); }`` registers
    ``--background`` so that ``:root { --background: white; }`` and every
    variant's ``--background`` land in ``colors.background``. References to
    names that already have a namespace (``--radius-lg: var(--radius)``)
    are left alone.
    """
    names = names or DEFAULT_NAME_CACHE
    forwards: dict[str, ForwardTarget] = {}

    for declaration in theme_declarations:
        bare = BARE_REFERENCE_PATTERN.match(declaration.value.strip())
        if bare is None:
            continue

        parsed = names.parse_variable_name(declaration.name)
        mapping = NAMESPACE_MAP.get(parsed.namespace)
        if mapping is None:
            continue

        target = bare.group(1)
        if names.parse_variable_name(target).namespace in NAMESPACE_MAP:
            continue

        forwards[target] = ForwardTarget(parsed.namespace, parsed.key, mapping.group)

    return forwards
