"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol

from viewport_toggle.model.nodes import Root


class Transform(Protocol):
    """A tree-to-tree transformation step; may mutate *root* in place."""

    def apply(self, root: Root) -> Root: ...
