"""Tests for variable-name parsing, case conversion and the LRU memo tables."""

from __future__ import annotations

import pytest


class TestLRUCache:
    """Test the bounded memo table."""

    def test_get_missing_returns_none(self):
        from theme_resolver.core.strings import LRUCache

        cache: LRUCache[str, int] = LRUCache(max_size=2)
        assert cache.get("missing") is None

    def test_evicts_least_recently_used(self):
        from theme_resolver.core.strings import LRUCache

        cache: LRUCache[str, int] = LRUCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.get("a") == 1  # refresh a
        cache.set("c", 3)

        assert "b" not in cache
        assert "a" in cache
        assert "c" in cache
        assert len(cache) == 2

    def test_clear(self):
        from theme_resolver.core.strings import LRUCache

        cache: LRUCache[str, int] = LRUCache()
        cache.set("a", 1)
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_writers_and_readers(self):
        import threading

        from theme_resolver.core.strings import LRUCache

        cache: LRUCache[int, int] = LRUCache(max_size=50)
        sizes: list[int] = []

        def write(offset: int) -> None:
            for i in range(500):
                cache.set(offset + i, i)

        def read() -> None:
            for i in range(500):
                sizes.append(len(cache))
                _ = i in cache

        threads = [threading.Thread(target=write, args=(n * 1000,)) for n in range(4)]
        threads.append(threading.Thread(target=read))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 50
        assert max(sizes) <= 50


class TestParseVariableName:
    """Test splitting custom property names into namespace and key."""

    @pytest.mark.parametrize(
        "name,namespace,key",
        [
            ("--color-red-500", "color", "red-500"),
            ("--color-primary-foreground", "color", "primary-foreground"),
            ("--font-weight-bold", "font-weight", "bold"),
            ("--text-shadow-sm", "text-shadow", "sm"),
            ("--inset-shadow-xs", "inset-shadow", "xs"),
            ("--drop-shadow-md", "drop-shadow", "md"),
            ("--text-xl--line-height", "text", "xl--line-height"),
            ("--font-sans", "font", "sans"),
        ],
    )
    def test_namespaced_names(self, names, name, namespace, key):
        parsed = names.parse_variable_name(name)
        assert parsed.namespace == namespace
        assert parsed.key == key
        assert parsed.deprecation is None

    def test_singular_name_is_deprecated(self, names):
        parsed = names.parse_variable_name("--spacing")

        assert parsed.namespace == "spacing"
        assert parsed.key == "base"
        assert parsed.deprecation is not None
        assert parsed.deprecation.variable == "--spacing"
        assert parsed.deprecation.replacement == "--spacing-base"

    def test_singular_radius_maps_to_default_key(self, names):
        parsed = names.parse_variable_name("--radius")
        assert parsed.key == "default"
        assert parsed.deprecation is not None

    def test_unknown_bare_name_gets_default_key(self, names):
        parsed = names.parse_variable_name("--foo")
        assert parsed == ("foo", "default", None)

    def test_results_are_memoized(self, names):
        first = names.parse_variable_name("--color-red-500")
        second = names.parse_variable_name("--color-red-500")

        assert first is second
        assert "--color-red-500" in names.parsed

    def test_caches_are_isolated(self):
        from theme_resolver.core.strings import NameCache

        one, two = NameCache(), NameCache()
        one.parse_variable_name("--radius-lg")
        assert "--radius-lg" not in two.parsed


class TestCaseConversion:
    """Test kebab-case and variant-name conversion."""

    def test_kebab_to_camel(self, names):
        assert names.kebab_to_camel("primary-foreground") == "primaryForeground"
        assert names.kebab_to_camel("primary") == "primary"

    def test_compound_variant_name(self, names):
        assert names.variant_name_to_camel("theme-mono.dark") == "themeMonoDark"
        assert names.variant_name_to_camel("dark") == "dark"

    def test_clear_empties_both_tables(self, names):
        names.kebab_to_camel("card-foreground")
        names.parse_variable_name("--color-card")
        names.clear()

        assert len(names.camel) == 0
        assert len(names.parsed) == 0


class TestKeyHelpers:
    """Test color-scale, line-height and self-reference helpers."""

    def test_color_scale(self, names):
        from theme_resolver.core.strings import parse_color_scale

        assert parse_color_scale("red-500", names) == ("red", "500")
        assert parse_color_scale("light-blue-100", names) == ("lightBlue", "100")

    def test_flat_colors_are_not_scales(self, names):
        from theme_resolver.core.strings import parse_color_scale

        assert parse_color_scale("primary", names) is None
        assert parse_color_scale("card-foreground", names) is None

    def test_camel_to_kebab(self, names):
        from theme_resolver.core.strings import camel_to_kebab

        assert camel_to_kebab("primaryForeground") == "primary-foreground"
        assert camel_to_kebab(names.kebab_to_camel("card-foreground")) == "card-foreground"
        assert camel_to_kebab("red") == "red"

    def test_font_size_line_height(self):
        from theme_resolver.core.strings import parse_font_size_line_height

        assert parse_font_size_line_height("xl--line-height") == "xl"
        assert parse_font_size_line_height("xl") is None
        assert parse_font_size_line_height("--line-height") is None

    def test_self_referential(self):
        from theme_resolver.core.strings import is_self_referential

        assert is_self_referential("--font-sans", "var(--font-sans)")
        assert is_self_referential("--font-sans", "  var(--font-sans) ")
        assert not is_self_referential("--font-sans", "var(--font-serif)")
        assert not is_self_referential("--font-sans", "var(--font-sans, serif)")
