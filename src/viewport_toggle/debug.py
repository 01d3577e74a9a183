"""Debug logging and per-pass processing statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from viewport_toggle.model.nodes import Node

PREFIX = "[viewport-toggle]"


@dataclass
class Stats:
    """Counters collected during one transform pass."""

    rules_processed: int = 0
    media_queries_processed: int = 0
    fixed_positions_converted: int = 0
    viewport_units_converted: set[str] = field(default_factory=set)
    source_files: set[str] = field(default_factory=set)


class DebugReporter:
    """Observer for a transform pass.

    Counters are always kept; log output only happens when *debug* is on and,
    if *debug_filter* is set, only for nodes whose source path contains it.
    """

    def __init__(
        self,
        debug: bool = False,
        debug_filter: str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.debug = debug
        self.debug_filter = debug_filter
        self.logger = logger or logging.getLogger("viewport_toggle")
        self.stats = Stats()

    # ---- counters ----

    def record_rule_processed(self) -> None:
        self.stats.rules_processed += 1

    def record_media_processed(self) -> None:
        self.stats.media_queries_processed += 1

    def record_fixed_position(self) -> None:
        self.stats.fixed_positions_converted += 1

    def record_unit_conversion(self, unit: str, target: str) -> None:
        self.stats.viewport_units_converted.add(f"{unit} -> {target}")

    # ---- output ----

    def log(self, message: str, node: Node | None = None) -> None:
        if not self.debug:
            return
        source = (node.source if node is not None else None) or "unknown source"
        if self.debug_filter and self.debug_filter not in source:
            return
        self.stats.source_files.add(source)
        self.logger.info("%s %s (%s)", PREFIX, message, source)

    def warn(self, message: str, detail: str = "") -> None:
        if not self.debug:
            return
        if detail:
            self.logger.warning("%s %s: %s", PREFIX, message, detail)
        else:
            self.logger.warning("%s %s", PREFIX, message)

    def summary(self) -> str:
        stats = self.stats
        lines = [
            f"{PREFIX} Processing Summary:",
            "----------------------------------------",
            f"Rules processed: {stats.rules_processed}",
            f"Media queries processed: {stats.media_queries_processed}",
            f"Fixed positions converted: {stats.fixed_positions_converted}",
            "Viewport unit conversions:",
        ]
        lines.extend(f"  {item}" for item in sorted(stats.viewport_units_converted))
        lines.append("Processed files:")
        lines.extend(f"  {item}" for item in sorted(stats.source_files))
        return "\n".join(lines)

    def print_summary(self) -> None:
        if self.debug:
            self.logger.info("%s", self.summary())
