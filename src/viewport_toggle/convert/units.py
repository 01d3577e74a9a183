"""Viewport-unit to container-unit conversion over declaration values.

Conversion is purely textual: a number immediately followed by a configured
unit (``2vw``, ``.5dvh``, ``-10svw``) has its unit swapped, everything else is
left byte-for-byte. Text inside ``url()`` and quoted strings is never touched. ``calc()`` and ``clamp()`` are descended into so that their
arguments can be normalised individually; the parenthesis structure and the
argument count are never changed.
"""

from __future__ import annotations

import re
from typing import Callable, Mapping

from viewport_toggle._text import find_closing_paren, split_top_level

__all__ = ["UnitConverter", "TYPOGRAPHY_PROPERTIES"]

TYPOGRAPHY_PROPERTIES = frozenset(
    {
        "font-size",
        "line-height",
        "letter-spacing",
        "word-spacing",
        "text-indent",
        "margin-top",
        "margin-bottom",
        "padding-top",
        "padding-bottom",
    }
)

_NUMBER = r"[+-]?\d*\.?\d+"
_FUNCTION_RE = re.compile(r"(?<![\w-])(calc|clamp)\(", re.IGNORECASE)
# Never rewritten: url() bodies and quoted strings.
_LITERAL_RE = re.compile(
    r"""(?<![\w-])url\([^)]*\)|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'""",
    re.IGNORECASE,
)


def _unit_alternation(units: Mapping[str, str]) -> str:
    # Longest first so "dvh" wins over "vh".
    return "|".join(re.escape(u) for u in sorted(units, key=len, reverse=True))


class UnitConverter:
    """Rewrite viewport units in CSS values.

    ``units`` is the generic mapping; ``typography_units`` is used for
    typographic properties (see :data:`TYPOGRAPHY_PROPERTIES`) where
    ``vmin``/``vmax`` follow the container's inline/block size.
    """

    def __init__(
        self,
        units: Mapping[str, str],
        typography_units: Mapping[str, str] | None = None,
    ) -> None:
        self.units = {k.lower(): v for k, v in units.items()}
        self.typography_units = {
            k.lower(): v for k, v in (typography_units or units).items()
        }
        self._token_re = self._compile(self.units)
        self._typography_re = self._compile(self.typography_units)
        self._fluid_re = self._compile(
            self.typography_units, rf"\s*\+\s*({_NUMBER})rem"
        )

    @staticmethod
    def _compile(units: Mapping[str, str], tail: str = "") -> re.Pattern[str]:
        if not units:
            # Matches nothing.
            return re.compile(r"(?!)")
        if tail:
            return re.compile(
                rf"({_NUMBER})({_unit_alternation(units)}){tail}", re.IGNORECASE
            )
        return re.compile(
            rf"(?<![\w.-])({_NUMBER})({_unit_alternation(units)})(?![\w-])",
            re.IGNORECASE,
        )

    # ---- queries ----

    @staticmethod
    def is_typography_property(prop: str) -> bool:
        return prop.lower() in TYPOGRAPHY_PROPERTIES

    def has_units(self, value: str) -> bool:
        """True if *value* contains a numeric token with a configured unit."""
        return self._token_re.search(_LITERAL_RE.sub(" ", value)) is not None

    def find_units(self, value: str) -> list[str]:
        """The viewport units used in *value*, lower-cased, in order."""
        return [
            m.group(2).lower()
            for m in self._token_re.finditer(_LITERAL_RE.sub(" ", value))
        ]

    # ---- conversion ----

    def convert(self, value: str) -> str:
        """Generic conversion, ``calc()``/``clamp()`` aware."""
        return self._outside_literals(
            value, lambda part: self._convert(part, self._token_re, self.units, fluid=False)
        )

    def convert_typography(self, value: str) -> str:
        """Typography conversion.

        Uses the typography unit map and normalises the fluid type pattern
        ``<N>vw + <M>rem`` to ``<M>rem + <N>cqw``.
        """
        return self._outside_literals(
            value,
            lambda part: self._convert(
                part, self._typography_re, self.typography_units, fluid=True
            ),
        )

    @staticmethod
    def _outside_literals(value: str, convert: Callable[[str], str]) -> str:
        out: list[str] = []
        pos = 0
        for match in _LITERAL_RE.finditer(value):
            out.append(convert(value[pos:match.start()]))
            out.append(match.group(0))
            pos = match.end()
        out.append(convert(value[pos:]))
        return "".join(out)

    def convert_for_property(self, prop: str, value: str) -> str:
        if self.is_typography_property(prop):
            return self.convert_typography(value)
        return self.convert(value)

    def _replace(
        self, text: str, pattern: re.Pattern[str], units: Mapping[str, str]
    ) -> str:
        return pattern.sub(
            lambda m: m.group(1) + units.get(m.group(2).lower(), m.group(2)), text
        )

    def _segment(
        self,
        text: str,
        pattern: re.Pattern[str],
        units: Mapping[str, str],
        fluid: bool,
    ) -> str:
        """Convert one argument or expression, keeping its outer whitespace."""
        if fluid:
            stripped = text.strip()
            match = self._fluid_re.fullmatch(stripped)
            if match:
                number, unit, rem = match.groups()
                target = units.get(unit.lower(), unit)
                converted = f"{rem}rem + {number}{target}"
                return text.replace(stripped, converted, 1)
        return self._convert(text, pattern, units, fluid)

    def _convert(
        self,
        text: str,
        pattern: re.Pattern[str],
        units: Mapping[str, str],
        fluid: bool,
    ) -> str:
        out: list[str] = []
        pos = 0
        while True:
            match = _FUNCTION_RE.search(text, pos)
            if match is None:
                break
            open_index = match.end() - 1
            close_index = find_closing_paren(text, open_index)
            if close_index == -1:
                # Unbalanced: fall back to plain token replacement below.
                break
            out.append(self._replace(text[pos:match.start()], pattern, units))
            inner = text[open_index + 1:close_index]
            if match.group(1).lower() == "clamp":
                args = split_top_level(inner)
                converted = ", ".join(
                    self._segment(arg.strip(), pattern, units, fluid) for arg in args
                )
            else:
                converted = self._segment(inner, pattern, units, fluid)
            out.append(f"{match.group(1)}({converted})")
            pos = close_index + 1
        rest = text[pos:]
        if fluid and pos == 0:
            match = self._fluid_re.fullmatch(rest.strip())
            if match:
                return self._segment(rest, pattern, units, fluid)
        out.append(self._replace(rest, pattern, units))
        return "".join(out)
