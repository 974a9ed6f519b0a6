"""Tests for the pin registry."""

import pytest

from power_domains.exceptions import DuplicateIdError
from power_domains.pins import Pin, PinCollection, PinRole


class TestPin:
    def test_supply_is_normalized(self):
        pin = Pin("tdi", PinRole.SIGNAL, supply="VDD IO")
        assert pin.supply == "vdd_io"

    def test_role_from_string(self):
        assert Pin("gnd", "ground").role is PinRole.GROUND

    def test_unassigned(self):
        assert Pin("nc", PinRole.SIGNAL).supply is None

    def test_bad_role(self):
        with pytest.raises(ValueError):
            Pin("x", "analog")


class TestPinCollection:
    def test_roles_are_separate(self, pins):
        assert list(pins.signal_pins) == ["tdi", "tdo", "tck"]
        assert list(pins.ground_pins) == ["gnd", "gnd_io"]
        assert list(pins.power_pins) == ["vdd_1", "vdd_2", "vddio_1"]
        assert len(pins) == 8

    def test_add_returns_pin(self):
        pins = PinCollection()
        pin = pins.add("power", "vdd_1", supply="vdd", description="Core ball")
        assert pin.role is PinRole.POWER
        assert pin.description == "Core ball"
        assert pins.power_pins["vdd_1"] is pin

    def test_duplicate_in_same_role(self, pins):
        with pytest.raises(DuplicateIdError, match="Cannot add signal pin 'tdi'"):
            pins.add_pin("tdi", supply="vddio")
        assert pins.signal_pins["tdi"].supply == "vdd"

    def test_same_id_in_other_role(self, pins):
        pins.add_power_pin("tdi", supply="vdd")
        assert "tdi" in pins.power_pins

    def test_get(self, pins):
        assert pins.get("gnd").role is PinRole.GROUND
        assert pins.get("missing") is None

    def test_get_prefers_signal(self, pins):
        pins.add_power_pin("gnd", supply="vdd")
        assert pins.get("gnd").role is PinRole.GROUND
        assert pins.get("gnd", PinRole.POWER).role is PinRole.POWER
        assert pins.get("gnd", "signal") is None

    def test_supplies(self, pins):
        assert pins.supplies() == ["vdd", "vddio"]

    def test_iteration_order(self, pins):
        roles = [pin.role for pin in pins]
        assert roles == sorted(roles, key=list(PinRole).index)

    def test_repr(self, pins):
        assert repr(pins) == "PinCollection(signal=3, ground=2, power=3)"
