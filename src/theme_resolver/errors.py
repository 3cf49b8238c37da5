"""
Error types for loading stylesheets, baselines, and resolver configuration.

The resolution core itself never raises: unknown namespaces are dropped,
missing references stay verbatim, and override misses are logged. These
exceptions belong to the I/O adapters around it.
"""

from __future__ import annotations

from pathlib import Path


class ThemeResolverError(Exception):
    """Base exception for all theme resolver errors."""

    def __init__(self, message: str, path: Path | None = None):
        self.message = message
        self.path = path
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Prefix the message with the offending file when known."""
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class StylesheetError(ThemeResolverError):
    """
    Raised when a stylesheet cannot be read or tokenized.

    Examples:
    - Missing CSS file
    - Undecodable file contents
    """

    pass


class ResolverConfigError(ThemeResolverError):
    """
    Raised when themeresolver.yaml is malformed.

    Examples:
    - Invalid YAML syntax
    - Unknown or mistyped configuration keys
    """

    pass
