"""Tests for the standalone media-to-container-query transform."""

from viewport_toggle.parser import parse_css
from viewport_toggle.transforms import MediaToContainerQueries

GUARD = ":where(body:not([data-breakpoint-preview-mode]))"


def _run(css: str, **kwargs) -> str:
    return MediaToContainerQueries(**kwargs).apply(parse_css(css)).to_css()


def _css(css: str) -> str:
    return parse_css(css).to_css()


class TestMediaToContainerQueries:
    def test_block_copied_and_original_guarded(self):
        assert _run("@media (min-width: 768px) { .a { width: 10vw; } }") == _css(
            f"""
            @media (min-width: 768px) {{ {GUARD} .a {{ width: 10vw; }} }}
            @container (min-width: 768px) {{ .a {{ width: 10vw; }} }}
            """
        )

    def test_container_blocks_appended_at_end(self):
        output = _run(
            """
            @media (min-width: 1px) { .a { color: red; } }
            .b { color: blue; }
            """
        )
        assert output == _css(
            f"""
            @media (min-width: 1px) {{ {GUARD} .a {{ color: red; }} }}
            .b {{ color: blue; }}
            @container (min-width: 1px) {{ .a {{ color: red; }} }}
            """
        )

    def test_leading_body_replaced(self):
        output = _run("@media (min-width: 1px) { body.x, .y { color: red; } }")
        assert f"{GUARD}.x, {GUARD} .y" in output

    def test_range_syntax_translated(self):
        output = _run("@media screen and (width <= 1024px) { .a { color: red; } }")
        assert "@container (max-width: 1024px)" in output

    def test_print_skipped(self):
        source = "@media print { .a { color: red; } }"
        assert _run(source) == _css(source)

    def test_nested_media_copied_with_outer_block(self):
        output = _run(
            "@media (min-width: 1px) { @media (max-width: 9px) { .a { color: red; } } }"
        )
        assert output.count("@container") == 1
        assert output.count(f"{GUARD} .a") == 1

    def test_custom_attribute_and_transform(self):
        output = _run(
            "@media (min-width: 1px) { .a { color: red; } }",
            modifier_attr="data-preview",
            transform=lambda params: f"{params} and (orientation: portrait)",
        )
        assert ":where(body:not([data-preview])) .a" in output
        assert "@container (min-width: 1px) and (orientation: portrait)" in output
