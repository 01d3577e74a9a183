"""Tests for option resolution."""

import dataclasses

import pytest

from viewport_toggle.config import (
    DEFAULT_MODIFIER_ATTR,
    DEFAULT_UNITS,
    TYPOGRAPHY_UNITS,
    ToggleOptions,
)


class TestDefaults:
    def test_default_values(self):
        options = ToggleOptions()
        assert options.units == DEFAULT_UNITS
        assert options.typography_units == TYPOGRAPHY_UNITS
        assert options.container_el == "body"
        assert options.modifier_attr == DEFAULT_MODIFIER_ATTR == "data-breakpoint-preview-mode"
        assert options.transform is None
        assert options.debug is False
        assert options.debug_filter is None

    def test_default_maps(self):
        assert DEFAULT_UNITS["vw"] == "cqw"
        assert DEFAULT_UNITS["dvh"] == "cqh"
        assert DEFAULT_UNITS["vmin"] == "cqmin"
        assert TYPOGRAPHY_UNITS["vmin"] == "cqi"
        assert TYPOGRAPHY_UNITS["vmax"] == "cqb"

    def test_defaults_are_copies(self):
        ToggleOptions().units["vw"] = "cqi"
        assert DEFAULT_UNITS["vw"] == "cqw"

    def test_selectors(self):
        options = ToggleOptions(container_el="#app", modifier_attr="data-preview")
        assert options.conditional_selector == "#app[data-preview]"
        assert options.conditional_not_selector == "#app:not([data-preview])"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ToggleOptions().debug = True


class TestValidation:
    @pytest.mark.parametrize("field", ["container_el", "modifier_attr"])
    def test_empty_strings_rejected(self, field):
        with pytest.raises(ValueError):
            ToggleOptions(**{field: ""})

    def test_transform_must_be_callable(self):
        with pytest.raises(ValueError):
            ToggleOptions(transform="not callable")


class TestResolve:
    def test_mapping_and_overrides(self):
        options = ToggleOptions.resolve({"debug": True}, container_el="html")
        assert options.debug is True
        assert options.container_el == "html"

    def test_overrides_win(self):
        options = ToggleOptions.resolve({"container_el": "html"}, container_el="main")
        assert options.container_el == "main"

    def test_camel_case_aliases(self):
        options = ToggleOptions.resolve(
            {"containerEl": "html", "modifierAttr": "data-x", "debugFilter": "a.css"}
        )
        assert options.container_el == "html"
        assert options.modifier_attr == "data-x"
        assert options.debug_filter == "a.css"

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="colour"):
            ToggleOptions.resolve(colour="red")

    def test_custom_units_replace_defaults(self):
        options = ToggleOptions.resolve(units={"vw": "cqi", "vmin": "cqmin"})
        assert options.units == {"vw": "cqi", "vmin": "cqmin"}
        assert options.typography_units == {"vw": "cqi", "vmin": "cqi"}

    def test_explicit_typography_units_kept(self):
        options = ToggleOptions.resolve(units={"vw": "cqi"}, typography_units={"vw": "cqw"})
        assert options.typography_units == {"vw": "cqw"}

    def test_caller_units_not_aliased(self):
        units = {"vw": "cqi"}
        options = ToggleOptions.resolve(units=units)
        units["vh"] = "cqb"
        assert "vh" not in options.units
