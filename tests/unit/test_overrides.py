"""Tests for the theme override engine."""

from __future__ import annotations

import pytest


def _themes():
    from theme_resolver.core.ir import Theme, VariantTheme

    def theme() -> Theme:
        return Theme(
            colors={"primary": "blue", "red": {500: "#ef4444"}},
            radius={"lg": "1rem"},
        )

    variants = {
        "dark": VariantTheme(selector=".dark", theme=theme()),
        "ocean": VariantTheme(selector='[data-theme="ocean"]', theme=theme()),
    }
    return theme(), variants


class TestParseOverrideConfig:
    """Test flattening of override configuration."""

    def test_dotted_and_nested_paths(self):
        from theme_resolver.themes.overrides import parse_override_config

        parsed = parse_override_config(
            {"radius.lg": "0", "colors": {"primary": "red", "red": {"500": "#f00"}}}
        )

        assert [(p.path, p.value) for p in parsed] == [
            (("radius", "lg"), "0"),
            (("colors", "primary"), "red"),
            (("colors", "red", "500"), "#f00"),
        ]

    def test_object_leaf(self):
        from theme_resolver.themes.overrides import parse_override_config

        (parsed,) = parse_override_config(
            {"colors.primary": {"value": "teal", "force": True, "resolveVars": False}}
        )

        assert parsed.value == "teal"
        assert parsed.force
        assert not parsed.resolve_vars
        assert parsed.dotted == "colors.primary"

    def test_dotted_key_requires_leaf(self):
        from theme_resolver.themes.overrides import parse_override_config

        assert parse_override_config({"colors.red": {"500": "#f00"}}) == []

    def test_non_leaf_values_are_ignored(self):
        from theme_resolver.themes.overrides import parse_override_config

        assert parse_override_config({"radius": {"lg": 4}, "colors": ["red"]}) == []

    def test_nesting_depth_is_bounded(self):
        from theme_resolver.themes.overrides import MAX_NESTING_DEPTH, parse_override_config

        config: dict = {"leaf": "x"}
        for i in range(MAX_NESTING_DEPTH + 2):
            config = {f"k{i}": config}
        assert parse_override_config(config) == []

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("red", ("red", False, True)),
            ({"value": "red", "resolve_vars": False}, ("red", False, False)),
            ({"value": "red", "force": "maybe"}, None),
            ({"force": True}, None),
            (3, None),
        ],
    )
    def test_normalize_override_value(self, value, expected):
        from theme_resolver.themes.overrides import normalize_override_value

        leaf = normalize_override_value(value)
        if expected is None:
            assert leaf is None
        else:
            assert (leaf.value, leaf.force, leaf.resolve_vars) == expected


class TestResolveVariantNames:
    """Test override target expansion."""

    def test_targets(self):
        from theme_resolver.themes.overrides import resolve_variant_names

        _, variants = _themes()

        assert resolve_variant_names("*", variants) == ["default", "dark", "ocean"]
        assert resolve_variant_names("base", variants) == ["default"]
        assert resolve_variant_names("default", variants) == ["default"]
        assert resolve_variant_names("dark", variants) == ["dark"]
        assert resolve_variant_names('[data-theme="ocean"]', variants) == ["ocean"]
        assert resolve_variant_names("data-theme", variants) == ["ocean"]
        assert resolve_variant_names(".missing", variants) == []


class TestApplyThemeOverrides:
    """Test post-resolution application."""

    def test_wildcard_mutates_base_and_every_variant(self):
        from theme_resolver.themes.overrides import apply_theme_overrides

        base, variants = _themes()
        outcomes = apply_theme_overrides(base, variants, {"*": {"radius.lg": "0"}})

        assert base.radius["lg"] == "0"
        assert variants["dark"].theme.radius["lg"] == "0"
        assert variants["ocean"].theme.radius["lg"] == "0"
        assert outcomes["default"] == (1, 0)

    def test_missing_paths_are_skipped(self):
        from theme_resolver.themes.overrides import apply_theme_overrides

        base, variants = _themes()
        outcomes = apply_theme_overrides(
            base,
            variants,
            {"dark": {"radius.xl": "0", "spacing": {"4": "1rem"}, "unknown.key": "x"}},
        )

        assert outcomes == {"dark": (0, 3)}
        assert "xl" not in variants["dark"].theme.radius
        assert variants["dark"].theme.spacing == {}

    def test_numeric_color_keys(self):
        from theme_resolver.themes.overrides import apply_theme_overrides

        base, variants = _themes()
        apply_theme_overrides(base, variants, {"ocean": {"colors.red.500": "#b91c1c"}})

        assert variants["ocean"].theme.colors["red"] == {500: "#b91c1c"}
        assert base.colors["red"] == {500: "#ef4444"}

    def test_camel_case_group_alias(self):
        from theme_resolver.core.ir import Theme
        from theme_resolver.themes.overrides import apply_theme_overrides

        base = Theme(font_size={"xl": {"size": "1.25rem"}})
        apply_theme_overrides(base, {}, {"base": {"fontSize.xl.size": "1.5rem"}})
        assert base.font_size["xl"]["size"] == "1.5rem"

    def test_unknown_target_is_noop(self):
        from theme_resolver.themes.overrides import apply_theme_overrides

        base, variants = _themes()
        before = base.model_copy(deep=True)

        assert apply_theme_overrides(base, variants, {".missing": {"radius.lg": "0"}}) == {}
        assert base == before

    def test_single_segment_path_is_rejected(self):
        from theme_resolver.core.ir import ParsedOverride, Theme
        from theme_resolver.themes.overrides import apply_override

        assert not apply_override(Theme(), ParsedOverride(path=("radius",), value="0"))


class TestInjectVariableOverrides:
    """Test pre-resolution injection."""

    def test_base_targets_only(self):
        from theme_resolver.core.ir import DeclarationSource
        from theme_resolver.themes.overrides import inject_variable_overrides

        injected = inject_variable_overrides(
            {
                "*": {"colors.primary": "red"},
                "base": {"radius": {"lg": "0"}},
                "dark": {"colors.primary": "black"},
                "default": {"colors.accent": {"value": "pink", "resolve_vars": False}},
            }
        )

        assert [(d.name, d.value) for d in injected] == [
            ("--colors-primary", "red"),
            ("--radius-lg", "0"),
        ]
        assert all(d.source == DeclarationSource.THEME for d in injected)

    def test_path_to_variable_name(self):
        from theme_resolver.themes.overrides import path_to_variable_name

        assert path_to_variable_name(("colors", "red", "500")) == "--colors-red-500"
        assert path_to_variable_name(("colors",)) is None
