"""Tests for the debug reporter."""

import logging

from viewport_toggle.debug import PREFIX, DebugReporter, Stats
from viewport_toggle.model import Rule


def _node(source=None) -> Rule:
    return Rule(".a", source=source)


class TestCounters:
    def test_counters_kept_without_debug(self):
        reporter = DebugReporter()
        reporter.record_rule_processed()
        reporter.record_media_processed()
        reporter.record_fixed_position()
        reporter.record_unit_conversion("vw", "cqw")
        reporter.record_unit_conversion("vw", "cqw")
        assert reporter.stats == Stats(
            rules_processed=1,
            media_queries_processed=1,
            fixed_positions_converted=1,
            viewport_units_converted={"vw -> cqw"},
        )


class TestLog:
    def test_logs_with_prefix_and_source(self, caplog):
        reporter = DebugReporter(debug=True)
        with caplog.at_level(logging.INFO, logger="viewport_toggle"):
            reporter.log("Processing rule: .a", _node("site.css"))
        assert f"{PREFIX} Processing rule: .a (site.css)" in caplog.text
        assert reporter.stats.source_files == {"site.css"}

    def test_unknown_source(self, caplog):
        reporter = DebugReporter(debug=True)
        with caplog.at_level(logging.INFO, logger="viewport_toggle"):
            reporter.log("hello", _node())
        assert "(unknown source)" in caplog.text

    def test_silent_without_debug(self, caplog):
        reporter = DebugReporter()
        with caplog.at_level(logging.DEBUG, logger="viewport_toggle"):
            reporter.log("hello", _node("site.css"))
            reporter.warn("careful")
            reporter.print_summary()
        assert caplog.records == []
        assert reporter.stats.source_files == set()

    def test_filter_matches_substring(self, caplog):
        reporter = DebugReporter(debug=True, debug_filter="components/")
        with caplog.at_level(logging.INFO, logger="viewport_toggle"):
            reporter.log("kept", _node("src/components/nav.css"))
            reporter.log("dropped", _node("src/layout.css"))
        assert "kept" in caplog.text
        assert "dropped" not in caplog.text

    def test_custom_logger(self, caplog):
        custom = logging.getLogger("tests.custom")
        reporter = DebugReporter(debug=True, logger=custom)
        with caplog.at_level(logging.INFO, logger="tests.custom"):
            reporter.log("hello", _node())
        assert caplog.records[0].name == "tests.custom"


class TestWarn:
    def test_warning_with_detail(self, caplog):
        reporter = DebugReporter(debug=True)
        with caplog.at_level(logging.WARNING, logger="viewport_toggle"):
            reporter.warn("Unsupported media query", "(width <= 1px)")
        assert caplog.records[0].levelno == logging.WARNING
        assert f"{PREFIX} Unsupported media query: (width <= 1px)" in caplog.text


class TestSummary:
    def test_summary_lists_everything(self):
        reporter = DebugReporter(debug=True)
        reporter.record_rule_processed()
        reporter.record_unit_conversion("vw", "cqw")
        reporter.record_unit_conversion("dvh", "cqh")
        reporter.stats.source_files.add("site.css")
        summary = reporter.summary()
        assert summary.splitlines()[0] == f"{PREFIX} Processing Summary:"
        assert "Rules processed: 1" in summary
        assert "Media queries processed: 0" in summary
        assert "  dvh -> cqh\n  vw -> cqw" in summary
        assert summary.endswith("Processed files:\n  site.css")

    def test_print_summary_logs_in_debug(self, caplog):
        reporter = DebugReporter(debug=True)
        with caplog.at_level(logging.INFO, logger="viewport_toggle"):
            reporter.print_summary()
        assert "Processing Summary" in caplog.text
