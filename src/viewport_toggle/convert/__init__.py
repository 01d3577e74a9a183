"""Text and tree converters used by the transforms."""

from viewport_toggle.convert.media import MediaTranslator
from viewport_toggle.convert.rules import ProcessResult, RuleProcessor
from viewport_toggle.convert.selectors import (
    add_guard,
    has_guard,
    split_body_anchor,
    update_body_selectors,
)
from viewport_toggle.convert.units import TYPOGRAPHY_PROPERTIES, UnitConverter

__all__ = [
    "UnitConverter",
    "TYPOGRAPHY_PROPERTIES",
    "MediaTranslator",
    "RuleProcessor",
    "ProcessResult",
    "add_guard",
    "has_guard",
    "split_body_anchor",
    "update_body_selectors",
]
