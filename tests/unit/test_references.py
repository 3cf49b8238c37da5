"""Tests for var() reference resolution and the forwarding map."""

from __future__ import annotations


def _decl(name: str, value: str, source: str = "theme"):
    from theme_resolver.core.ir import Declaration, DeclarationSource

    return Declaration(name=name, value=value, source=DeclarationSource(source))


def _resolver(**values: str):
    from theme_resolver.themes.references import ReferenceResolver

    return ReferenceResolver(
        _decl("--" + name.replace("_", "-"), value) for name, value in values.items()
    )


class TestReferenceResolver:
    """Test substitution, missing names and cycles."""

    def test_plain_value_unchanged(self):
        resolver = _resolver(brand="red")
        assert resolver.resolve("1rem") == "1rem"

    def test_chain_resolves(self):
        resolver = _resolver(a="var(--b)", b="var(--c)", c="#fff")
        assert resolver.resolve("var(--a)") == "#fff"

    def test_missing_reference_stays_verbatim(self):
        resolver = _resolver(a="red")
        assert resolver.resolve("var(--missing)") == "var(--missing)"

    def test_cycle_terminates(self):
        resolver = _resolver(a="var(--b)", b="var(--a)")

        result = resolver.resolve("var(--a)")
        assert result == "var(--a)"

    def test_self_cycle_terminates(self):
        resolver = _resolver(a="var(--a)")
        assert resolver.resolve("var(--a)") == "var(--a)"

    def test_in_place_substitution_inside_function(self):
        resolver = _resolver(radius="0.5rem")
        assert resolver.resolve("calc(var(--radius) - 2px)") == "calc(0.5rem - 2px)"

    def test_shorthand_with_several_references(self):
        resolver = _resolver(ring="blue", width="1px")
        assert resolver.resolve("0 0 0 var(--width) var(--ring)") == "0 0 0 1px blue"

    def test_missing_name_does_not_stop_later_substitution(self):
        resolver = _resolver(b="2px")
        assert resolver.resolve("var(--a) var(--b)") == "var(--a) 2px"

    def test_nested_in_place_references(self):
        resolver = _resolver(a="calc(var(--b) * 2)", b="4px")
        assert resolver.resolve("max(var(--a), 1px)") == "max(calc(4px * 2), 1px)"

    def test_later_declaration_wins(self):
        from theme_resolver.themes.references import ReferenceResolver

        resolver = ReferenceResolver([_decl("--brand", "red"), _decl("--brand", "blue", "root")])
        assert resolver.resolve("var(--brand)") == "blue"
        assert "--brand" in resolver
        assert len(resolver) == 1

    def test_resolution_is_idempotent(self):
        resolver = _resolver(a="var(--b)", b="var(--a)", c="1px")
        for value in ("var(--a)", "calc(var(--c) + var(--missing))", "var(--c)"):
            once = resolver.resolve(value)
            assert resolver.resolve(once) == once


class TestForwardingMap:
    """Test mapping of un-namespaced variables onto theme slots."""

    def test_bare_forward_is_registered(self, names):
        from theme_resolver.themes.references import ForwardTarget, build_forwarding_map

        forwards = build_forwarding_map([_decl("--color-background", "var(--background)")], names)
        assert forwards == {"--background": ForwardTarget("color", "background", "colors")}

    def test_namespaced_targets_are_not_forwarded(self, names):
        from theme_resolver.themes.references import build_forwarding_map

        forwards = build_forwarding_map(
            [
                _decl("--radius-lg", "var(--radius)"),
                _decl("--color-primary", "var(--color-blue-500)"),
            ],
            names,
        )
        assert forwards == {}

    def test_non_bare_values_are_not_forwarded(self, names):
        from theme_resolver.themes.references import build_forwarding_map

        forwards = build_forwarding_map(
            [_decl("--shadow-sm", "0 1px var(--shadow-color)"), _decl("--foo-bar", "var(--x)")],
            names,
        )
        assert forwards == {}
