"""Tests for themeresolver.yaml loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest


class TestLoadConfig:
    """Test configuration loading."""

    def test_defaults_when_absent(self, tmp_path: Path):
        from theme_resolver.config import config_exists, load_config

        config = load_config(tmp_path)

        assert not config_exists(tmp_path)
        assert config.include_defaults is True
        assert config.defaults_enabled
        assert config.baseline is None
        assert config.overrides == {}
        assert not config.debug

    def test_full_config(self, tmp_path: Path):
        from theme_resolver.config import load_config

        (tmp_path / "themeresolver.yaml").write_text(
            """
baseline: styles/base.css
include_defaults:
  shadows: false
  fontSize: false
overrides:
  "*":
    radius.lg: "0"
  dark:
    colors:
      primary:
        value: black
        resolve_vars: false
debug: true
"""
        )
        config = load_config(tmp_path)

        assert config.baseline == tmp_path / "styles" / "base.css"
        assert config.defaults_enabled
        assert not config.defaults_options.shadows
        assert not config.defaults_options.font_size
        assert config.defaults_options.colors
        assert config.overrides["*"] == {"radius.lg": "0"}
        assert config.overrides["dark"]["colors"]["primary"]["value"] == "black"
        assert config.debug

    def test_defaults_disabled(self, tmp_path: Path):
        from theme_resolver.config import load_config

        (tmp_path / "themeresolver.yaml").write_text("include_defaults: false\n")
        config = load_config(tmp_path)

        assert not config.defaults_enabled
        assert config.defaults_options.colors

    def test_empty_file_uses_defaults(self, tmp_path: Path):
        from theme_resolver.config import ResolverConfig, load_config

        (tmp_path / "themeresolver.yaml").write_text("")
        assert load_config(tmp_path) == ResolverConfig()

    def test_absolute_baseline_is_kept(self, tmp_path: Path):
        from theme_resolver.config import load_config

        baseline = tmp_path / "elsewhere" / "theme.css"
        (tmp_path / "themeresolver.yaml").write_text(f"baseline: {baseline}\n")
        assert load_config(tmp_path).baseline == baseline

    @pytest.mark.parametrize(
        "content,fragment",
        [
            ("baseline: [unclosed\n", "Invalid YAML"),
            ("- just\n- a list\n", "Expected a mapping"),
            ("unknown_key: 1\n", "Invalid configuration"),
            ("debug: sometimes\n", "Invalid configuration"),
        ],
    )
    def test_invalid_config_raises(self, tmp_path: Path, content, fragment):
        from theme_resolver.config import load_config
        from theme_resolver.errors import ResolverConfigError

        (tmp_path / "themeresolver.yaml").write_text(content)

        with pytest.raises(ResolverConfigError) as exc_info:
            load_config(tmp_path)

        assert fragment in str(exc_info.value)
        assert exc_info.value.path == tmp_path / "themeresolver.yaml"

    def test_missing_explicit_file_raises(self, tmp_path: Path):
        from theme_resolver.config import load_config_file
        from theme_resolver.errors import ResolverConfigError

        with pytest.raises(ResolverConfigError):
            load_config_file(tmp_path / "nope.yaml")


class TestSaveConfig:
    """Test writing configuration back to disk."""

    def test_save_and_reload(self, tmp_path: Path):
        from theme_resolver.config import ResolverConfig, load_config, save_config
        from theme_resolver.themes.defaults import DefaultsOptions

        config = ResolverConfig(
            include_defaults=DefaultsOptions(shadows=False),
            overrides={"dark": {"colors.primary": "black"}},
        )
        path = save_config(tmp_path, config)

        assert path == tmp_path / "themeresolver.yaml"
        reloaded = load_config(tmp_path)
        assert not reloaded.defaults_options.shadows
        assert reloaded.overrides == {"dark": {"colors.primary": "black"}}

    def test_default_config_writes_nothing_but_braces(self, tmp_path: Path):
        from theme_resolver.config import ResolverConfig, save_config

        path = save_config(tmp_path, ResolverConfig())
        assert path.read_text().strip() == "{}"
