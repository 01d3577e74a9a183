"""Tests for the viewport-toggle CLI."""

from click.testing import CliRunner

from viewport_toggle import __version__
from viewport_toggle.cli.main import cli
from viewport_toggle.parser import parse_css

NOT_GUARD = "body:not([data-breakpoint-preview-mode])"
GUARD = "body[data-breakpoint-preview-mode]"

SOURCE = ".a { width: 10vw; }\n"


def _css(css: str) -> str:
    return parse_css(css).to_css() + "\n"


class TestGroup:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "convert" in result.output
        assert "units" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestConvert:
    def test_stdin_to_stdout(self):
        result = CliRunner().invoke(cli, ["convert", "-"], input=SOURCE)
        assert result.exit_code == 0
        assert result.output == _css(
            f"{NOT_GUARD} .a {{ width: 10vw; }} {GUARD} .a {{ width: 10cqw; }}"
        )

    def test_file_to_output_file(self, tmp_path):
        source = tmp_path / "site.css"
        source.write_text(SOURCE, encoding="utf-8")
        target = tmp_path / "out.css"
        result = CliRunner().invoke(cli, ["convert", str(source), "-o", str(target)])
        assert result.exit_code == 0
        assert result.output == ""
        assert f"{GUARD} .a" in target.read_text(encoding="utf-8")

    def test_container_options(self):
        result = CliRunner().invoke(
            cli,
            ["convert", "-", "--container-el", "html", "--modifier-attr", "data-preview"],
            input=SOURCE,
        )
        assert result.exit_code == 0
        assert "html:not([data-preview]) .a" in result.output
        assert "html[data-preview] .a" in result.output

    def test_unit_override(self):
        result = CliRunner().invoke(
            cli, ["convert", "-", "--unit", "vw=cqi"], input=SOURCE
        )
        assert result.exit_code == 0
        assert "width: 10cqi;" in result.output

    def test_bad_unit_override(self):
        result = CliRunner().invoke(cli, ["convert", "-", "--unit", "vw"], input=SOURCE)
        assert result.exit_code == 2
        assert "FROM=TO" in result.output

    def test_empty_container_rejected(self):
        result = CliRunner().invoke(
            cli, ["convert", "-", "--container-el", ""], input=SOURCE
        )
        assert result.exit_code == 2

    def test_parse_error(self):
        result = CliRunner().invoke(cli, ["convert", "-"], input=".a { color red; }")
        assert result.exit_code == 1
        assert "Parse error (line 1, column " in result.output

    def test_missing_input_file(self, tmp_path):
        result = CliRunner().invoke(cli, ["convert", str(tmp_path / "nope.css")])
        assert result.exit_code == 2


class TestUnits:
    def test_lists_maps(self):
        result = CliRunner().invoke(cli, ["units"])
        assert result.exit_code == 0
        assert "Units:" in result.output
        assert "  vw -> cqw" in result.output
        assert "Typography units:" in result.output
        assert "  vmax -> cqb" in result.output
