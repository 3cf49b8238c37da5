"""
Variable-name parsing and case conversion with injectable memoization.

Name parsing runs once per declaration per theme build, so results are
memoized. The memo tables live on a NameCache instance instead of module
globals; callers that want isolation (tests, multi-tenant hosts) pass their
own instance, everyone else shares ``DEFAULT_NAME_CACHE``.
"""

from __future__ import annotations

import re
import threading
from collections import OrderedDict
from typing import Generic, NamedTuple, TypeVar

from .ir import DeprecationNotice
from .namespaces import (
    BARE_REFERENCE_PATTERN,
    FONT_SIZE_LINE_HEIGHT_SUFFIX,
    MULTI_WORD_NAMESPACES,
    SINGULAR_DEFAULT_KEY,
    SINGULAR_VARIABLE_MAPPINGS,
)

K = TypeVar("K")
V = TypeVar("V")

MAX_CACHE_SIZE = 1000

_KEBAB_PATTERN = re.compile(r"-([a-z0-9])")
_CAMEL_PATTERN = re.compile(r"([A-Z])")
_COLOR_SCALE_PATTERN = re.compile(r"^(.+?)-(\d+(?:-.+)?)$")


class LRUCache(Generic[K, V]):
    """Bounded mapping that evicts the least recently used entry."""

    def __init__(self, max_size: int = MAX_CACHE_SIZE):
        self.max_size = max_size
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: K) -> V | None:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.max_size:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data


class ParsedName(NamedTuple):
    """A custom property name split into namespace and key."""

    namespace: str
    key: str
    deprecation: DeprecationNotice | None = None


class NameCache:
    """Memo tables for variable-name parsing and camelCase conversion."""

    def __init__(self, max_size: int = MAX_CACHE_SIZE):
        self.parsed: LRUCache[str, ParsedName] = LRUCache(max_size)
        self.camel: LRUCache[str, str] = LRUCache(max_size)

    def clear(self) -> None:
        self.parsed.clear()
        self.camel.clear()

    def parse_variable_name(self, variable_name: str) -> ParsedName:
        """Split ``--namespace-key`` into its parts.

        Examples:
            --color-red-500 -> ("color", "red-500")
            --font-weight-bold -> ("font-weight", "bold")
            --spacing -> ("spacing", "base") plus a deprecation notice
            --foo -> ("foo", "default")
        """
        cached = self.parsed.get(variable_name)
        if cached is not None:
            return cached

        result = _parse_variable_name(variable_name)
        self.parsed.set(variable_name, result)
        return result

    def kebab_to_camel(self, value: str) -> str:
        """Convert ``primary-foreground`` to ``primaryForeground``."""
        cached = self.camel.get(value)
        if cached is not None:
            return cached

        result = _KEBAB_PATTERN.sub(lambda m: m.group(1).upper(), value)
        self.camel.set(value, result)
        return result

    def variant_name_to_camel(self, variant_name: str) -> str:
        """Convert a dot-joined compound variant name into one identifier.

        'theme-mono.dark' -> 'themeMonoDark'
        """
        parts = [self.kebab_to_camel(part) for part in variant_name.split(".")]
        head, tail = parts[0], parts[1:]
        return head + "".join(part[:1].upper() + part[1:] for part in tail)


DEFAULT_NAME_CACHE = NameCache()


def _parse_variable_name(variable_name: str) -> ParsedName:
    name = variable_name[2:] if variable_name.startswith("--") else variable_name

    if "-" not in name:
        singular = SINGULAR_VARIABLE_MAPPINGS.get(name)
        if singular is None:
            return ParsedName(name, SINGULAR_DEFAULT_KEY)
        notice = DeprecationNotice(
            variable=variable_name,
            message=f"Singular variable '{variable_name}' is deprecated in Tailwind v4",
            replacement=singular.replacement,
        )
        return ParsedName(name, singular.key, notice)

    for namespace in MULTI_WORD_NAMESPACES:
        if name.startswith(namespace + "-"):
            return ParsedName(namespace, name[len(namespace) + 1 :])

    namespace, _, key = name.partition("-")
    return ParsedName(namespace, key)


# =============================================================================
# Key helpers
# =============================================================================


def parse_color_scale(key: str, cache: NameCache | None = None) -> tuple[str, str] | None:
    """Split a color key like ``red-500`` into (camel name, variant).

    Returns None for flat colors such as ``primary`` or ``card-foreground``.
    """
    match = _COLOR_SCALE_PATTERN.match(key)
    if match is None:
        return None
    names = cache or DEFAULT_NAME_CACHE
    return names.kebab_to_camel(match.group(1)), match.group(2)


def camel_to_kebab(value: str) -> str:
    """Inverse of ``kebab_to_camel`` for theme keys: ``primaryForeground`` -> ``primary-foreground``."""
    return _CAMEL_PATTERN.sub(lambda m: "-" + m.group(1).lower(), value)


def parse_font_size_line_height(key: str) -> str | None:
    """Return the base key for ``xl--line-height`` style keys."""
    if key.endswith(FONT_SIZE_LINE_HEIGHT_SUFFIX) and len(key) > len(FONT_SIZE_LINE_HEIGHT_SUFFIX):
        return key[: -len(FONT_SIZE_LINE_HEIGHT_SUFFIX)]
    return None


def is_self_referential(name: str, value: str) -> bool:
    """True for ``--font-sans: var(--font-sans)``."""
    match = BARE_REFERENCE_PATTERN.match(value.strip())
    return match is not None and match.group(1) == name
