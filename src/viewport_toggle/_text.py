"""Small text helpers shared by the parser, model and converters."""

from __future__ import annotations

_OPENERS = {"(": ")", "[": "]"}


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split *text* on *separator* outside parentheses, brackets and quotes.

    Unbalanced input never raises: a stray closer is kept as plain text and
    unclosed groups simply swallow the rest of the string.
    """
    parts: list[str] = []
    stack: list[str] = []
    quote = ""
    start = 0
    i = 0
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = ""
        elif char in ("'", '"'):
            quote = char
        elif char in _OPENERS:
            stack.append(_OPENERS[char])
        elif stack and char == stack[-1]:
            stack.pop()
        elif char == separator and not stack:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return parts


def find_closing_paren(text: str, open_index: int) -> int:
    """Return the index of the ``)`` matching the ``(`` at *open_index*, or -1."""
    depth = 0
    for i in range(open_index, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1
