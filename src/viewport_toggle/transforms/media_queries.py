"""Standalone media-query to container-query transform.

Unlike :class:`~viewport_toggle.transforms.toggle.ViewportToContainerToggle`
this leaves declarations alone: each screen ``@media`` block is copied as an
``@container`` block appended to the end of the stylesheet, and the rules of
the original block are limited to viewport mode with a zero-specificity
``:where()`` guard.
"""

from __future__ import annotations

from typing import Callable

from viewport_toggle.config import DEFAULT_MODIFIER_ATTR
from viewport_toggle.convert.media import MediaTranslator
from viewport_toggle.debug import DebugReporter
from viewport_toggle.model.nodes import AtRule, Root, Rule


def _nested_in_media(node: AtRule) -> bool:
    parent = node.parent
    while parent is not None:
        if isinstance(parent, AtRule) and parent.name == "media":
            return True
        parent = parent.parent
    return False


class MediaToContainerQueries:
    """Copy every screen ``@media`` block as an ``@container`` block."""

    def __init__(
        self,
        transform: Callable[[str], str] | None = None,
        debug: bool = False,
        modifier_attr: str = DEFAULT_MODIFIER_ATTR,
    ) -> None:
        self.translator = MediaTranslator(transform, DebugReporter(debug))
        self.guard = f":where(body:not([{modifier_attr}]))"

    def _guard_selector(self, selector: str) -> str:
        if selector.startswith("body"):
            return selector.replace("body", self.guard, 1)
        return f"{self.guard} {selector}"

    def apply(self, root: Root) -> Root:
        media_rules: list[AtRule] = []
        root.walk_at_rules(media_rules.append, name="media")

        for at_rule in media_rules:
            if _nested_in_media(at_rule):
                # Copied and guarded along with the outermost block.
                continue
            params = self.translator.translate(at_rule.params)
            if params is None:
                continue
            container = at_rule.clone(name="container", params=params)

            rules: list[Rule] = []
            at_rule.walk_rules(rules.append)
            for rule in rules:
                rule.selector = ", ".join(
                    self._guard_selector(s) for s in rule.selectors
                )

            root.append(container)
        return root
