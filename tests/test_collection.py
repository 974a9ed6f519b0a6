"""Tests for the PowerDomains collection."""

import logging
import re

import pytest

from power_domains import DuplicateIdError, Interval, PinRole, PowerDomains, ValidationError


@pytest.fixture
def domains(pins):
    collection = PowerDomains(registry=pins)
    collection.add("vdd", voltage_range=Interval(1.0, 1.2, "V"), nominal_voltage=1.1)
    collection.add(
        "VDDIO",
        {"voltage_range": Interval(1.62, 3.6, "V"), "nominal_voltage": 1.8},
        description="IO supply",
    )
    return collection


class TestAdd:
    def test_ids_in_declaration_order(self, domains):
        assert domains.ids == ["vdd", "vddio"]
        assert list(domains) == ["vdd", "vddio"]
        assert len(domains) == 2

    def test_domains_share_registry(self, domains, pins):
        assert domains["vdd"].registry is pins
        assert domains["vddio"].signal_pins == ["tck"]

    def test_options_and_fields(self, domains):
        assert domains["vddio"].description == "IO supply"
        assert domains["vddio"].nominal_voltage == 1.8

    def test_configure_callback(self, domains):
        def configure(domain):
            domain.voltage_range = Interval(0.0, 0.0, "V")
            domain.nominal_voltage = 0.0

        vss = domains.add("vss", configure=configure)
        assert domains["vss"] is vss

    def test_duplicate_id(self, domains, caplog):
        caplog.set_level(logging.ERROR, logger="power_domains")
        with pytest.raises(DuplicateIdError) as exc_info:
            domains.add("VDD", voltage_range=Interval(1.0, 1.2, "V"), nominal_voltage=1.1)
        assert "Cannot create power domain 'vdd', it already exists!" in str(exc_info.value)
        assert "it already exists" in caplog.records[-1].getMessage()
        assert domains.ids == ["vdd", "vddio"]

    def test_invalid_domain_not_registered(self, domains):
        with pytest.raises(ValidationError):
            domains.add("vdd_aon", voltage_range=Interval(0.7, 0.9, "V"))
        assert "vdd_aon" not in domains

    def test_shared_logger(self, pins, caplog):
        log = logging.getLogger("chip.domains")
        caplog.set_level(logging.WARNING, logger="chip.domains")
        collection = PowerDomains(registry=pins, logger=log)
        vdd = collection.add("vdd", voltage_range=Interval(1.0, 1.2, "V"), nominal_voltage=1.1)
        vdd.setpoint = 2.0
        assert [r.name for r in caplog.records] == ["chip.domains"]


class TestLookup:
    def test_getitem_normalizes(self, domains):
        assert domains["VDDIO"] is domains["vddio"]
        assert domains["VDD"].id == "vdd"

    def test_missing_key(self, domains):
        with pytest.raises(KeyError):
            domains["vss"]
        with pytest.raises(KeyError):
            domains["()"]

    def test_contains(self, domains):
        assert "VDD" in domains
        assert "vss" not in domains
        assert "" not in domains

    def test_mapping_api(self, domains):
        assert domains.get("vss") is None
        assert [d.id for d in domains.values()] == ["vdd", "vddio"]
        assert dict(domains.items())["vdd"].nominal_voltage == 1.1

    def test_repr(self, domains):
        assert repr(domains) == "PowerDomains(['vdd', 'vddio'])"


class TestQueries:
    def test_find_glob(self, domains):
        assert [d.id for d in domains.find("vdd*")] == ["vdd", "vddio"]
        assert [d.id for d in domains.find("VDDIO")] == ["vddio"]
        assert domains.find("vss*") == []

    def test_find_normalizes_pattern(self, domains):
        domains.add("vdd_io", voltage_range=Interval(1.62, 3.6, "V"), nominal_voltage=3.3)
        assert [d.id for d in domains.find("VDD-IO*")] == ["vdd_io"]
        assert [d.id for d in domains.find("vdd io*")] == ["vdd_io"]
        assert [d.id for d in domains.find("vdd?io")] == ["vdd_io"]

    def test_find_regex(self, domains):
        assert [d.id for d in domains.find(re.compile(r"io$"))] == ["vddio"]

    def test_for_pin(self, domains):
        assert [d.id for d in domains.for_pin("tck")] == ["vddio"]
        assert [d.id for d in domains.for_pin("vdd_2")] == ["vdd"]
        assert domains.for_pin("missing") == []

    def test_unassigned_pins(self, pins):
        collection = PowerDomains(registry=pins)
        collection.add("vdd", voltage_range=Interval(1.0, 1.2, "V"), nominal_voltage=1.1)
        assert collection.unassigned_pins() == {
            PinRole.SIGNAL: ["tck"],
            PinRole.GROUND: ["gnd_io"],
            PinRole.POWER: ["vddio_1"],
        }

    def test_unassigned_pins_includes_pins_without_supply(self, domains, pins):
        pins.add_pin("nc")
        assert domains.unassigned_pins()[PinRole.SIGNAL] == ["nc"]

    def test_unassigned_pins_without_registry(self):
        collection = PowerDomains()
        assert collection.unassigned_pins() == {role: [] for role in PinRole}

    def test_out_of_range(self, domains, caplog):
        caplog.set_level(logging.CRITICAL, logger="power_domains")
        assert domains.out_of_range() == []
        domains["vdd"].setpoint = 1.05
        domains["vddio"].setpoint = 5.0
        assert [d.id for d in domains.out_of_range()] == ["vddio"]
