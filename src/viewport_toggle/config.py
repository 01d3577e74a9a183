"""Options for the viewport-to-container toggle transform."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping

DEFAULT_UNITS: dict[str, str] = {
    "vh": "cqh",
    "vw": "cqw",
    "vmin": "cqmin",
    "vmax": "cqmax",
    "dvh": "cqh",
    "dvw": "cqw",
    "lvh": "cqh",
    "lvw": "cqw",
    "svh": "cqh",
    "svw": "cqw",
}

# Typography scales with the inline/block size of the container rather than
# its smaller/larger dimension.
TYPOGRAPHY_UNITS: dict[str, str] = {**DEFAULT_UNITS, "vmin": "cqi", "vmax": "cqb"}

DEFAULT_MODIFIER_ATTR = "data-breakpoint-preview-mode"

# camelCase names accepted for parity with the JavaScript option names.
_ALIASES = {
    "containerEl": "container_el",
    "modifierAttr": "modifier_attr",
    "debugFilter": "debug_filter",
    "typographyUnits": "typography_units",
}


@dataclass(frozen=True)
class ToggleOptions:
    """Read-only configuration resolved once per transform invocation."""

    units: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_UNITS))
    typography_units: dict[str, str] = field(
        default_factory=lambda: dict(TYPOGRAPHY_UNITS)
    )
    container_el: str = "body"
    modifier_attr: str = DEFAULT_MODIFIER_ATTR
    transform: Callable[[str], str] | None = None
    debug: bool = False
    debug_filter: str | None = None

    def __post_init__(self) -> None:
        if not self.container_el:
            raise ValueError("container_el must be a non-empty selector")
        if not self.modifier_attr:
            raise ValueError("modifier_attr must be a non-empty attribute name")
        if self.transform is not None and not callable(self.transform):
            raise ValueError("transform must be callable")

    @property
    def conditional_selector(self) -> str:
        """Selector matching the container element while preview mode is on."""
        return f"{self.container_el}[{self.modifier_attr}]"

    @property
    def conditional_not_selector(self) -> str:
        """Selector matching the container element outside preview mode."""
        return f"{self.container_el}:not([{self.modifier_attr}])"

    @classmethod
    def resolve(
        cls, mapping: Mapping[str, Any] | None = None, **overrides: Any
    ) -> "ToggleOptions":
        """Merge user supplied options over the defaults.

        A custom ``units`` map replaces the default one. The typography map is
        derived from it unless given explicitly: ``vmin``/``vmax`` switch to
        their inline/block counterparts, every other unit maps the same way.
        """
        raw: dict[str, Any] = dict(mapping or {})
        raw.update(overrides)

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: {key!r}")
            kwargs[name] = value

        if "units" in kwargs:
            units = dict(kwargs["units"])
            kwargs["units"] = units
            if "typography_units" not in kwargs:
                kwargs["typography_units"] = {
                    unit: TYPOGRAPHY_UNITS[unit] if unit in ("vmin", "vmax") else target
                    for unit, target in units.items()
                }
        return cls(**kwargs)
