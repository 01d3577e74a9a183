"""Tests for copying viewport-unit declarations into container-scoped rules."""

import pytest

from viewport_toggle.parser import parse_css
from viewport_toggle.transforms import CopyViewportToContainerUnits

SELECTOR = ".preview"


def _run(css: str, **kwargs) -> str:
    return CopyViewportToContainerUnits(SELECTOR, **kwargs).apply(parse_css(css)).to_css()


def _css(css: str) -> str:
    return parse_css(css).to_css()


class TestCopyViewportUnits:
    def test_only_viewport_declarations_copied(self):
        assert _run(".a { width: 100vw; color: red; height: 50vh; }") == _css(
            """
            .a { width: 100vw; color: red; height: 50vh; }
            .preview .a { width: 100cqw; height: 50cqh; }
            """
        )

    def test_body_anchored_selectors_prefixed(self):
        assert _run("body .x, body { width: 10vw; }") == _css(
            """
            body .x, body { width: 10vw; }
            .preview body .x, .preview body { width: 10cqw; }
            """
        )

    def test_rules_without_units_untouched(self):
        assert _run(".a { color: red; }") == _css(".a { color: red; }")

    def test_default_map_only_covers_vw_and_vh(self):
        assert _run(".a { width: 1vmin; }") == _css(".a { width: 1vmin; }")

    def test_custom_units(self):
        output = _run(".a { width: 1vmin; }", units={"vmin": "cqmin"})
        assert ".preview .a {\n  width: 1cqmin;\n}" in output

    def test_already_scoped_rules_skipped(self):
        source = ".preview .a { width: 1vw; }"
        assert _run(source) == _css(source)

    def test_keyframes_skipped(self):
        source = "@keyframes grow { to { width: 100vw; } }"
        assert _run(source) == _css(source)

    def test_rules_inside_media(self):
        assert _run("@media (min-width: 1px) { .a { width: 1vw; } }") == _css(
            "@media (min-width: 1px) { .a { width: 1vw; } .preview .a { width: 1cqw; } }"
        )

    def test_empty_selector_rejected(self):
        with pytest.raises(ValueError):
            CopyViewportToContainerUnits("")
