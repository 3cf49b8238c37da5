"""
Resolver configuration persistence.

Handles reading and writing themeresolver.yaml in the project root. The file
controls baseline merging, theme overrides and debug logging for the CLI
and for ``resolve_file``.

Default location: {project_root}/themeresolver.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ResolverConfigError
from .themes.defaults import DefaultsOptions

logger = logging.getLogger(__name__)

CONFIG_FILE = "themeresolver.yaml"


class ResolverConfig(BaseModel):
    """Options for one resolution run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    include_defaults: bool | DefaultsOptions = Field(
        default=True,
        description="Merge the baseline theme; per-group switches allowed",
    )
    baseline: Path | None = Field(
        default=None, description="Stylesheet providing baseline tokens"
    )
    overrides: dict[str, dict[str, Any]] = Field(
        default_factory=dict, description="Override target -> path config"
    )
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def defaults_enabled(self) -> bool:
        return self.include_defaults is not False

    @property
    def defaults_options(self) -> DefaultsOptions:
        if isinstance(self.include_defaults, DefaultsOptions):
            return self.include_defaults
        return DefaultsOptions()


# =============================================================================
# Path helpers
# =============================================================================


def get_config_path(project_root: Path) -> Path:
    """Get the themeresolver.yaml file path."""
    return project_root / CONFIG_FILE


def config_exists(project_root: Path) -> bool:
    """Check if a themeresolver.yaml exists in the project."""
    return get_config_path(project_root).exists()


# =============================================================================
# Loading and saving
# =============================================================================


def load_config(project_root: Path) -> ResolverConfig:
    """Load configuration from themeresolver.yaml, or defaults if absent.

    A relative ``baseline`` path is resolved against the project root.

    Raises:
        ResolverConfigError: If the file is not valid YAML or fails validation.
    """
    config_path = get_config_path(project_root)
    if not config_path.exists():
        logger.debug("No themeresolver.yaml found, using defaults")
        return ResolverConfig()
    return load_config_file(config_path)


def load_config_file(config_path: Path) -> ResolverConfig:
    """Load configuration from an explicit path.

    Raises:
        ResolverConfigError: If the file is missing, not valid YAML, or fails validation.
    """
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ResolverConfigError(f"Cannot read config: {e}", config_path) from e
    except yaml.YAMLError as e:
        raise ResolverConfigError(f"Invalid YAML: {e}", config_path) from e

    if not data:
        logger.warning(f"Empty {config_path.name} at {config_path}, using defaults")
        return ResolverConfig()
    if not isinstance(data, dict):
        raise ResolverConfigError("Expected a mapping at the top level", config_path)

    try:
        config = ResolverConfig.model_validate(data)
    except ValidationError as e:
        raise ResolverConfigError(f"Invalid configuration: {e}", config_path) from e

    if config.baseline is not None and not config.baseline.is_absolute():
        config = config.model_copy(update={"baseline": config_path.parent / config.baseline})
    return config


def save_config(project_root: Path, config: ResolverConfig) -> Path:
    """Write configuration to themeresolver.yaml.

    Returns:
        Path to the saved file.
    """
    config_path = get_config_path(project_root)
    data = config.model_dump(mode="json", by_alias=True, exclude_defaults=True)

    config_path.write_text(
        yaml.dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        ),
        encoding="utf-8",
    )

    logger.info(f"Saved resolver config to {config_path}")
    return config_path
