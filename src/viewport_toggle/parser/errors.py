"""Errors raised while reading a stylesheet."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when tinycss2 reports a stylesheet as invalid.

    *kind* is the tinycss2 error kind (``invalid``, ``eof-in-string``, ...).
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        kind: str | None = None,
    ) -> None:
        self.line = line
        self.column = column
        self.kind = kind
        super().__init__(message)

    @property
    def location(self) -> str:
        """``line L, column C`` or an empty string when unknown."""
        if self.line is None:
            return ""
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line}, column {self.column}"
