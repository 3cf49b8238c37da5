"""
Theme resolver: turn CSS custom-property design tokens into structured themes.

Parses ``@theme``, ``:root`` and variant blocks, resolves ``var()``
references per variant, maps tokens into a typed Theme, and reports
conflicts with literal rules and references that could not be resolved.
"""

__version__ = "0.4.0"

from .config import ResolverConfig, load_config  # noqa: E402
from .core.ir import Conflict, Declaration, Theme, UnresolvedReference, VariantTheme  # noqa: E402
from .errors import ResolverConfigError, StylesheetError, ThemeResolverError  # noqa: E402
from .pipeline import ResolutionResult, resolve_file, resolve_nodes, resolve_stylesheet  # noqa: E402

__all__ = [
    "Conflict",
    "Declaration",
    "ResolutionResult",
    "ResolverConfig",
    "ResolverConfigError",
    "StylesheetError",
    "Theme",
    "ThemeResolverError",
    "UnresolvedReference",
    "VariantTheme",
    "__version__",
    "load_config",
    "resolve_file",
    "resolve_nodes",
    "resolve_stylesheet",
]
