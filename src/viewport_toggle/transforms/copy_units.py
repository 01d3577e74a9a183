"""Copy viewport-unit declarations into container-scoped rules."""

from __future__ import annotations

from viewport_toggle.convert.units import UnitConverter
from viewport_toggle.model.nodes import AtRule, Declaration, Root, Rule

DEFAULT_COPY_UNITS = {"vh": "cqh", "vw": "cqw"}


class CopyViewportToContainerUnits:
    """For each rule using viewport units, add ``<selector> <rule>`` after it.

    The added rule holds only the declarations that used viewport units, with
    those units converted. Rules whose selector already contains *selector*
    are left alone.
    """

    def __init__(self, selector: str, units: dict[str, str] | None = None) -> None:
        if not selector:
            raise ValueError("selector must be a non-empty selector")
        self.selector = selector
        self.converter = UnitConverter(units or DEFAULT_COPY_UNITS)

    def apply(self, root: Root) -> Root:
        rules: list[Rule] = []
        root.walk_rules(rules.append)

        for rule in rules:
            if self.selector in rule.selector:
                continue
            if isinstance(rule.parent, AtRule) and rule.parent.name.endswith("keyframes"):
                continue
            copies: list[Declaration] = [
                decl.clone(value=self.converter.convert(decl.value))
                for decl in rule.iter_decls()
                if self.converter.has_units(decl.value)
            ]
            if not copies:
                continue
            scoped = ", ".join(f"{self.selector} {s}" for s in rule.selectors)
            rule.after(Rule(scoped, copies))
        return root
