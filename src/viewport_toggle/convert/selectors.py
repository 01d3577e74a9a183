"""Selector rewriting: guard selector lists for viewport or preview mode.

A guard is a selector for the container element, e.g.
``body:not([data-breakpoint-preview-mode])`` (viewport) or
``body[data-breakpoint-preview-mode]`` (preview). Guarding ``.a, .b`` gives
``<guard> .a, <guard> .b``.

Compound selectors anchored on ``body`` (``body``, ``html body``,
``html > body``) already target the container element, so the anchor is
replaced by the guard instead of prefixed:

    body            ->  <guard>
    body.my-body    ->  <guard>.my-body
    body > .foo     ->  <guard> > .foo
    body .foo       ->  <guard> .foo, <guard>.foo
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from viewport_toggle._text import split_top_level

__all__ = [
    "add_guard",
    "has_guard",
    "split_body_anchor",
    "update_body_selectors",
]

_BODY_ANCHOR_RE = re.compile(
    r"^(?:html(?:[.#\[:][^\s>+~]*)?(?:\s*>\s*|\s+))?body(?![\w-])",
    re.IGNORECASE,
)
_NO_TAG_PREFIXES = (".", "#", "[", ":")


def _split(selector_list: str) -> list[str]:
    return [part.strip() for part in split_top_level(selector_list) if part.strip()]


def _join(selectors: Iterable[str]) -> str:
    unique: list[str] = []
    for selector in selectors:
        if selector not in unique:
            unique.append(selector)
    return ", ".join(unique)


def _guards(guard: str | Sequence[str]) -> list[str]:
    return [guard] if isinstance(guard, str) else list(guard)


def split_body_anchor(selector: str) -> tuple[str, str] | None:
    """Split a body-anchored compound selector into (anchor, remainder).

    Returns None when *selector* is not anchored on ``body``.
    """
    match = _BODY_ANCHOR_RE.match(selector)
    if match is None:
        return None
    return match.group(0), selector[match.end():]


def _replace_anchor(rest: str, guard: str) -> list[str]:
    if not rest:
        return [guard]
    if rest.startswith(_NO_TAG_PREFIXES):
        return [f"{guard}{rest}"]
    rest = rest.strip()
    variants = [f"{guard} {rest}"]
    if rest.startswith(_NO_TAG_PREFIXES):
        # The following compound may sit on the container element itself.
        variants.append(f"{guard}{rest}")
    return variants


def add_guard(selector_list: str, guard: str | Sequence[str]) -> str:
    """Scope every selector in *selector_list* under *guard*.

    With several guards each selector fans out into one alternative per
    guard, in order. Identical results are kept once.
    """
    result: list[str] = []
    for selector in _split(selector_list):
        anchored = split_body_anchor(selector)
        for target in _guards(guard):
            if anchored is None:
                result.append(f"{target} {selector}")
            else:
                result.extend(_replace_anchor(anchored[1], target))
    return _join(result)


def update_body_selectors(selector_list: str, guard: str | Sequence[str]) -> str:
    """Rewrite only the body-anchored selectors of *selector_list*.

    Other selectors are returned unchanged, keeping their position.
    """
    result: list[str] = []
    for selector in _split(selector_list):
        anchored = split_body_anchor(selector)
        if anchored is None:
            result.append(selector)
            continue
        for target in _guards(guard):
            result.extend(_replace_anchor(anchored[1], target))
    return _join(result)


def has_guard(selector_list: str, guards: Iterable[str]) -> bool:
    """True if any of *guards* already appears in *selector_list*."""
    return any(guard in selector_list for guard in guards)
