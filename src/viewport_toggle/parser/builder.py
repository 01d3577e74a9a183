"""Build the CSS tree model from tinycss2 component values."""

from __future__ import annotations

from typing import Iterable

import tinycss2
from tinycss2 import ast

from viewport_toggle.model.nodes import AtRule, Comment, Declaration, Node, Root, Rule
from viewport_toggle.parser.errors import ParseError

__all__ = ["parse_css"]

# At-rules whose block holds rules rather than declarations.
_RULE_LIST_AT_RULES = {
    "media",
    "supports",
    "container",
    "layer",
    "document",
    "-moz-document",
    "scope",
    "starting-style",
    "keyframes",
    "-webkit-keyframes",
    "-moz-keyframes",
    "-o-keyframes",
}


def _error(item: ast.ParseError) -> ParseError:
    return ParseError(
        item.message,
        line=item.source_line,
        column=item.source_column,
        kind=item.kind,
    )


def _text(tokens: Iterable[ast.Node] | None) -> str:
    return tinycss2.serialize(tokens or []).strip()


def _build_at_rule(item: ast.AtRule, source: str | None) -> AtRule:
    name = item.lower_at_keyword
    params = _text(item.prelude)
    if item.content is None:
        return AtRule(name, params, has_block=False, source=source)
    if name in _RULE_LIST_AT_RULES:
        children = tinycss2.parse_rule_list(
            item.content, skip_comments=False, skip_whitespace=True
        )
        nodes = _build_rules(children, source)
    else:
        nodes = _build_declarations(item.content, source)
    return AtRule(name, params, nodes, source=source)


def _build_rules(items: Iterable[ast.Node], source: str | None) -> list[Node]:
    nodes: list[Node] = []
    for item in items:
        if isinstance(item, ast.ParseError):
            raise _error(item)
        if isinstance(item, ast.Comment):
            nodes.append(Comment(item.value, source=source))
        elif isinstance(item, ast.QualifiedRule):
            rule = Rule(
                _text(item.prelude),
                _build_declarations(item.content, source),
                source=source,
            )
            nodes.append(rule)
        elif isinstance(item, ast.AtRule):
            nodes.append(_build_at_rule(item, source))
    return nodes


def _build_declarations(content: list[ast.Node], source: str | None) -> list[Node]:
    items = tinycss2.parse_declaration_list(
        content, skip_comments=False, skip_whitespace=True
    )
    nodes: list[Node] = []
    for item in items:
        if isinstance(item, ast.ParseError):
            raise _error(item)
        if isinstance(item, ast.Comment):
            nodes.append(Comment(item.value, source=source))
        elif isinstance(item, ast.Declaration):
            # Custom properties are case-sensitive.
            prop = item.name if item.name.startswith("--") else item.lower_name
            nodes.append(
                Declaration(prop, _text(item.value), item.important, source=source)
            )
        elif isinstance(item, ast.AtRule):
            nodes.append(_build_at_rule(item, source))
    return nodes


def parse_css(text: str, source: str | None = None) -> Root:
    """Parse stylesheet *text* into a :class:`Root`.

    *source* is the file path recorded on every node; debug logging uses it.
    Raises :class:`ParseError` on input tinycss2 reports as invalid.
    """
    items = tinycss2.parse_stylesheet(text, skip_comments=False, skip_whitespace=True)
    root = Root(source=source)
    root.append(*_build_rules(items, source))
    return root
