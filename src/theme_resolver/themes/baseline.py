"""
Baseline theme loading.

A baseline is an ordinary stylesheet (typically the utility framework's
``theme.css``) whose ``@theme`` tokens become the merge base for the user's
theme. Parsed baselines are cached per path and reloaded when the file's
modification time changes.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from ..core.ir import Theme
from ..errors import StylesheetError
from ..parser.css import read_stylesheet
from ..parser.extractor import extract_declarations
from .builder import build_themes

logger = logging.getLogger(__name__)


class BaselineCache:
    """Parsed baseline themes keyed by resolved path and mtime."""

    def __init__(self) -> None:
        self._entries: dict[Path, tuple[float, Theme]] = {}
        self._lock = threading.Lock()

    def load(self, path: Path) -> Theme:
        """Return the baseline theme at ``path``, parsing it if stale.

        Raises:
            StylesheetError: If the stylesheet cannot be read.
        """
        path = path.resolve()
        try:
            mtime = path.stat().st_mtime
        except OSError as e:
            raise StylesheetError(f"Cannot read baseline: {e}", path) from e

        with self._lock:
            cached = self._entries.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1].model_copy(deep=True)

        extraction = extract_declarations(read_stylesheet(path))
        theme = build_themes(extraction.declarations, extraction.keyframes, extraction.rules).theme
        logger.info("Loaded baseline theme from %s", path)

        with self._lock:
            self._entries[path] = (mtime, theme)
        return theme.model_copy(deep=True)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_default_cache = BaselineCache()


def load_baseline_theme(path: Path, cache: BaselineCache | None = None) -> Theme:
    """Load a baseline theme, sharing parsed results across calls by default."""
    return (cache or _default_cache).load(path)
