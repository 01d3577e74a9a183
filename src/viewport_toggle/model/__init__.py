"""CSS tree model -- public type re-exports."""

from viewport_toggle.model.nodes import (
    STOP,
    AtRule,
    Comment,
    Container,
    Declaration,
    Node,
    Root,
    Rule,
)

__all__ = [
    "STOP",
    "Node",
    "Container",
    "Root",
    "Rule",
    "AtRule",
    "Declaration",
    "Comment",
]
