"""Shared pytest fixtures for theme resolver tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from theme_resolver.core.strings import NameCache

SAMPLE_CSS = """
@theme {
  --color-background: var(--background);
  --color-primary: var(--brand);
  --color-red-500: #ef4444;
  --radius-lg: 1rem;
  --font-sans: "Inter", sans-serif;
  --text-xl: 1.25rem;
  --text-xl--line-height: 1.75rem;
}

:root {
  --background: white;
  --brand: #2563eb;
}

.dark {
  --background: black;
  --brand: #60a5fa;
}

.theme-mono {
  --brand: #111111;
  .rounded-lg { border-radius: 0; }
}
"""


@pytest.fixture
def names() -> NameCache:
    """Isolated name cache so tests never share memoized parses."""
    return NameCache()


@pytest.fixture
def sample_css() -> str:
    return SAMPLE_CSS


@pytest.fixture
def write_css(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write CSS text into tmp_path and return the file path."""

    def _write(css: str, name: str = "theme.css") -> Path:
        path = tmp_path / name
        path.write_text(css, encoding="utf-8")
        return path

    return _write
