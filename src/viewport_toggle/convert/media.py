"""Translate ``@media`` parameters into ``@container`` parameters.

Each comma-separated media query is handled on its own:

1. Queries that only target ``print`` are dropped.
2. The optional user ``transform`` hook rewrites the raw query.
3. Media types (``only``, ``all``, ``screen``, ``print``) and the ``and``
   that follows them are stripped.
4. Range syntax is rewritten: ``(240px <= width <= 1024px)`` becomes
   ``(min-width: 240px) and (max-width: 1024px)``.
5. Single comparisons are rewritten: ``(width <= 1024px)`` becomes
   ``(max-width: 1024px)``, ``(width >= 240px)`` becomes ``(min-width: 240px)``.
6. The result is wrapped in parentheses when it is not already.

Only innermost parenthesised groups are rewritten; anything the patterns do
not recognise is passed through untouched.

Negated queries (``not screen and (min-width: 500px)``,
``not (min-width: 500px)``) become ``(not (min-width: 500px))``. A negated
print query matches every screen, so it makes the block unconditional.
"""

from __future__ import annotations

import re
from typing import Callable

from viewport_toggle._text import find_closing_paren, split_top_level
from viewport_toggle.debug import DebugReporter

__all__ = ["MediaTranslator"]

# Media queries cannot mix these descriptors with comparison operators.
DESCRIPTORS = ("min-width", "max-width", "min-height", "max-height")
OPERATORS = (">=", "<=")

_TYPE_PREFIX_RE = re.compile(
    r"^\s*(?:only\s+)?(?:all|screen|print)\b\s*(?:and\b\s*)?",
    re.IGNORECASE,
)
_GROUP_RE = re.compile(r"\(([^()]*)\)")
_OP = r"(<=|>=|<|>)"
_FEATURE = r"([a-zA-Z][\w-]*)"
_VALUE = r"([^<>=]+?)"
_RANGE_RE = re.compile(rf"^\s*{_VALUE}\s*{_OP}\s*{_FEATURE}\s*{_OP}\s*{_VALUE}\s*$")
_FEATURE_FIRST_RE = re.compile(rf"^\s*{_FEATURE}\s*{_OP}\s*{_VALUE}\s*$")
_VALUE_FIRST_RE = re.compile(rf"^\s*{_VALUE}\s*{_OP}\s*{_FEATURE}\s*$")
_WORD_RE = re.compile(r"[a-z]+", re.IGNORECASE)
_NOT_RE = re.compile(r"^\s*not\s+", re.IGNORECASE)


def _media_types(query: str) -> set[str]:
    """Media type keywords appearing outside parentheses."""
    outside = re.sub(r"\([^()]*\)", " ", query)
    return {w.lower() for w in _WORD_RE.findall(outside)} & {"all", "screen", "print"}


def _min_max(op: str, feature_first: bool) -> str:
    is_upper = op.startswith("<") if feature_first else op.startswith(">")
    return "max" if is_upper else "min"


def _negate(condition: str) -> str:
    if condition.startswith("(") and find_closing_paren(condition, 0) == len(condition) - 1:
        return f"(not {condition})"
    return f"(not ({condition}))"


def _rewrite_group(match: re.Match[str]) -> str:
    inner = match.group(1)

    ranged = _RANGE_RE.match(inner)
    if ranged:
        low, op1, feature, op2, high = ranged.groups()
        if op1[0] != op2[0]:
            return match.group(0)
        if op1.startswith(">"):
            low, high = high, low
        return f"(min-{feature}: {low.strip()}) and (max-{feature}: {high.strip()})"

    single = _FEATURE_FIRST_RE.match(inner)
    if single:
        feature, op, value = single.groups()
        return f"({_min_max(op, True)}-{feature}: {value.strip()})"

    single = _VALUE_FIRST_RE.match(inner)
    if single:
        value, op, feature = single.groups()
        return f"({_min_max(op, False)}-{feature}: {value.strip()})"

    return match.group(0)


class MediaTranslator:
    """Parse ``@media`` params and render them as ``@container`` params."""

    def __init__(
        self,
        transform: Callable[[str], str] | None = None,
        reporter: DebugReporter | None = None,
    ) -> None:
        self.transform = transform
        self.reporter = reporter or DebugReporter()

    @staticmethod
    def split_queries(params: str) -> list[str]:
        return [q.strip() for q in split_top_level(params) if q.strip()]

    @staticmethod
    def applies_to_screen(query: str) -> bool:
        """False for queries that only target print."""
        if _NOT_RE.match(query):
            # Negation is resolved by get_conditions.
            return True
        types = _media_types(query)
        return "print" not in types or bool(types & {"all", "screen"})

    def is_print_only(self, params: str) -> bool:
        queries = self.split_queries(params)
        return bool(queries) and not any(self.applies_to_screen(q) for q in queries)

    def get_conditions(self, params: str) -> list[str] | None:
        """Translate every screen-applicable query of *params*.

        Returns None when no query has a container equivalent (print-only, or
        negated queries that never match a screen), and an empty list when a
        query is unconditional for screens (``screen``, ``all``,
        ``not print``), since the whole list then always matches.
        """
        conditions: list[str] = []
        for query in self.split_queries(params):
            if not self.applies_to_screen(query):
                continue
            if self.transform is not None:
                query = self.transform(query)
            if _NOT_RE.match(query):
                rest = _NOT_RE.sub("", query, count=1)
                if "print" in _media_types(rest):
                    return []
                negated = self.translate_query(rest)
                if not negated:
                    self.reporter.warn("Negated media query never matches a screen", query)
                    continue
                conditions.append(_negate(negated))
                continue
            translated = self.translate_query(query)
            if not translated:
                return []
            conditions.append(translated)
        return conditions or None

    def translate_query(self, query: str) -> str:
        """Translate a single media query; empty string if only types remain."""
        if any(d in query for d in DESCRIPTORS) and any(o in query for o in OPERATORS):
            self.reporter.warn("Unsupported media query", query)

        stripped = _TYPE_PREFIX_RE.sub("", query, count=1).strip()
        if not stripped:
            return ""
        translated = _GROUP_RE.sub(_rewrite_group, stripped)
        translated = re.sub(r"\s+", " ", translated).strip()
        if not translated.startswith("("):
            translated = f"({translated})"
        return translated

    def translate(self, params: str) -> str | None:
        """``@container`` params for *params*, or None if there are none."""
        conditions = self.get_conditions(params)
        if not conditions:
            return None
        return ", ".join(conditions)

    @staticmethod
    def combine(outer: list[str], inner: list[str]) -> list[str]:
        """AND-combine the conditions of a block with those of a nested block."""
        if not outer:
            return list(inner)
        if not inner:
            return list(outer)
        return [f"{a} and {b}" for a in outer for b in inner]
