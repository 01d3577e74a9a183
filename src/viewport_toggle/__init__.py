"""Viewport toggle -- preview responsive breakpoints inside a container."""

from __future__ import annotations

from typing import Any

from viewport_toggle.config import ToggleOptions
from viewport_toggle.parser import ParseError, parse_css
from viewport_toggle.transforms import ViewportToContainerToggle, apply_transforms

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ToggleOptions",
    "ParseError",
    "parse_css",
    "ViewportToContainerToggle",
    "apply_transforms",
    "transform_css",
]


def transform_css(css: str, source: str | None = None, **options: Any) -> str:
    """Parse *css*, run the toggle transform over it and serialise the result."""
    root = parse_css(css, source=source)
    ViewportToContainerToggle(**options).apply(root)
    return root.to_css()
