"""Per-rule declaration processing for the container variant of a rule."""

from __future__ import annotations

from dataclasses import dataclass

from viewport_toggle.convert.units import UnitConverter
from viewport_toggle.debug import DebugReporter
from viewport_toggle.model.nodes import Container, Declaration

__all__ = ["RuleProcessor", "ProcessResult", "OFFSET_PROPERTIES"]

OFFSET_PROPERTIES = ("top", "right", "bottom", "left")


def _is_fixed(decl: Declaration) -> bool:
    return decl.value.strip().lower() == "fixed"


@dataclass(frozen=True)
class ProcessResult:
    """What :meth:`RuleProcessor.process_declarations` did to a rule."""

    has_fixed_position: bool = False
    converted: int = 0


class RuleProcessor:
    """Decide whether a rule needs a container variant and build its body."""

    def __init__(
        self, converter: UnitConverter, reporter: DebugReporter | None = None
    ) -> None:
        self.converter = converter
        self.reporter = reporter or DebugReporter()

    def has_fixed_position(self, node: Container) -> bool:
        found = False

        def check(decl: Declaration) -> bool | None:
            nonlocal found
            if _is_fixed(decl):
                found = True
                return False
            return None

        node.walk_decls(check, prop="position")
        return found

    def needs_processing(self, rule: Container) -> bool:
        """True if *rule* is ``position: fixed`` or uses a viewport unit."""
        if self.has_fixed_position(rule):
            return True
        uses_units = False

        def check(decl: Declaration) -> bool | None:
            nonlocal uses_units
            if self.converter.has_units(decl.value):
                uses_units = True
                return False
            return None

        rule.walk_decls(check)
        return uses_units

    def process_declarations(
        self, rule: Container, is_container: bool = False
    ) -> ProcessResult:
        """Rewrite *rule* in place for use inside the container.

        - ``position: fixed`` becomes ``position: sticky``;
        - offsets of a fixed rule move behind ``--container-<prop>``
          variables;
        - viewport units become container units, typography aware.

        Only container variants are rewritten; with ``is_container=False``
        the rule is inspected and left as-is.
        """
        has_fixed = self.has_fixed_position(rule)
        if not is_container:
            return ProcessResult(has_fixed_position=has_fixed)

        if has_fixed:
            rule.walk_decls(self._make_sticky, prop="position")
            for prop in OFFSET_PROPERTIES:
                offsets: list[Declaration] = []
                rule.walk_decls(offsets.append, prop=prop)
                for decl in offsets:
                    variable = f"--container-{prop}"
                    decl.before(
                        Declaration(variable, decl.value, decl.important, decl.source)
                    )
                    decl.value = f"var({variable})"

        skipped = ("position",) + OFFSET_PROPERTIES if has_fixed else ()
        converted = 0

        def convert(decl: Declaration) -> None:
            nonlocal converted
            if decl.prop in skipped:
                return
            value = self.converter.convert_for_property(decl.prop, decl.value)
            if value == decl.value:
                return
            self._record_units(decl)
            decl.value = value
            converted += 1

        rule.walk_decls(convert)
        return ProcessResult(has_fixed_position=has_fixed, converted=converted)

    @staticmethod
    def _make_sticky(decl: Declaration) -> None:
        if _is_fixed(decl):
            decl.value = "sticky"

    def _record_units(self, decl: Declaration) -> None:
        if self.converter.is_typography_property(decl.prop):
            mapping = self.converter.typography_units
        else:
            mapping = self.converter.units
        for unit in self.converter.find_units(decl.value):
            self.reporter.record_unit_conversion(unit, mapping.get(unit, unit))
