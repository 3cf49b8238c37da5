"""Tests for unresolved reference detection."""

from __future__ import annotations

import pytest


def _decl(name: str, value: str, variant: str | None = None):
    from theme_resolver.core.ir import Declaration, DeclarationSource

    source = DeclarationSource.VARIANT if variant else DeclarationSource.THEME
    return Declaration(name=name, value=value, source=source, variant_name=variant)


class TestLikelyCause:
    """Test cause classification."""

    @pytest.mark.parametrize(
        "name,referenced,cause",
        [
            ("--color-primary", "--color-primary", "self_referential"),
            ("--shadow-sm", "--tw-shadow-color", "external"),
            ("--color-primary", "--external-tw-accent", "unknown"),
        ],
    )
    def test_determine_likely_cause(self, name, referenced, cause):
        from theme_resolver.analysis.unresolved import determine_likely_cause

        assert determine_likely_cause(name, referenced) == cause


class TestDetectUnresolved:
    """Test pairing original and resolved declarations."""

    def test_resolved_values_are_not_reported(self):
        from theme_resolver.analysis.unresolved import detect_unresolved

        original = [_decl("--color-primary", "var(--brand)")]
        resolved = [_decl("--color-primary", "blue")]
        assert detect_unresolved(original, resolved) == []

    def test_one_entry_per_remaining_reference(self):
        from theme_resolver.analysis.unresolved import detect_unresolved

        value = "calc(var(--a) + var(--b, 2px))"
        (first, second) = detect_unresolved([_decl("--spacing-x", value)], [_decl("--spacing-x", value)])

        assert first.referenced_variable == "--a"
        assert first.fallback_value is None
        assert second.referenced_variable == "--b"
        assert second.fallback_value == "2px"
        assert first.original_value == value

    def test_pairs_by_variant(self):
        from theme_resolver.analysis.unresolved import detect_unresolved

        original = [_decl("--brand", "var(--x)"), _decl("--brand", "var(--x)", "dark")]
        resolved = [_decl("--brand", "red"), _decl("--brand", "var(--x)", "dark")]

        (ref,) = detect_unresolved(original, resolved)
        assert ref.variant_name == "dark"

    def test_pairs_by_scope(self):
        from theme_resolver.analysis.unresolved import detect_unresolved
        from theme_resolver.core.ir import Declaration, DeclarationSource

        theme_decl = _decl("--font-sans", "var(--font-geist)")
        root_decl = Declaration(name="--font-sans", value="Inter", source=DeclarationSource.ROOT)

        (ref,) = detect_unresolved([theme_decl, root_decl], [theme_decl, root_decl])
        assert ref.source == DeclarationSource.THEME
        assert ref.referenced_variable == "--font-geist"

    def test_root_value_does_not_hide_theme_reference(self):
        from theme_resolver.pipeline import resolve_stylesheet

        result = resolve_stylesheet(
            "@theme { --font-sans: var(--font-geist); } :root { --font-sans: Inter; }"
        )

        (ref,) = result.unresolved
        assert ref.variable_name == "--font-sans"
        assert ref.referenced_variable == "--font-geist"
        assert ref.source == "theme"

    def test_grouping(self):
        from theme_resolver.analysis.unresolved import (
            detect_unresolved,
            group_by_likely_cause,
            group_by_source,
        )
        from theme_resolver.core.ir import DeclarationSource, LikelyCause

        declarations = [
            _decl("--shadow-sm", "0 1px var(--tw-shadow-color)"),
            _decl("--brand", "var(--missing)", "dark"),
        ]
        refs = detect_unresolved(declarations, declarations)

        by_cause = group_by_likely_cause(refs)
        assert len(by_cause[LikelyCause.EXTERNAL]) == 1
        assert len(by_cause[LikelyCause.UNKNOWN]) == 1
        assert by_cause[LikelyCause.SELF_REFERENTIAL] == []

        by_source = group_by_source(refs)
        assert set(by_source) == {DeclarationSource.THEME, DeclarationSource.VARIANT}
