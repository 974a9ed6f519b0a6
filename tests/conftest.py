"""Pytest fixtures for power-domains tests."""

import pytest

from power_domains import Interval, PinCollection, PowerDomain

# Declaration file exercising every section
CHIP_TOML = """\
[power_domains.vdd]
description = "Core supply"
voltage_range = ["1.0V", "1.2V"]
nominal_voltage = "1.1V"
setpoint = "1.05V"
owner = "pmic"

[power_domains.vddio]
description = "IO supply"
voltage_range = { min = 1.62, max = 3.6 }
nominal_voltage = 1.8

[power_domains.vss]
voltage_range = [0, 0]
nominal_voltage = 0

[pins.signal]
tdi = "vddio"
tdo = { supply = "vddio", description = "JTAG data out" }

[pins.ground]
gnd = "vss"

[pins.power]
vdd_1 = "vdd"
vdd_2 = "vdd"
vddio_1 = "vddio"
"""

CHIP_YAML = """\
power_domains:
  vdd:
    description: Core supply
    voltage_range: [1.0V, 1.2V]
    nominal_voltage: 1.1V
  vddio:
    voltage_range: {min: 1.62, max: 3.6}
    nominal_voltage: 1.8
pins:
  signal:
    tdi: vddio
  power:
    vdd_1: vdd
"""


@pytest.fixture
def pins() -> PinCollection:
    """Pin registry with signal, ground and power pins on several supplies."""
    registry = PinCollection()
    registry.add_pin("tdi", supply="vdd")
    registry.add_pin("tdo", supply="vdd")
    registry.add_pin("tck", supply="vddio")
    registry.add_ground_pin("gnd", supply="vdd")
    registry.add_ground_pin("gnd_io", supply="vddio")
    registry.add_power_pin("vdd_1", supply="vdd")
    registry.add_power_pin("vdd_2", supply="VDD")
    registry.add_power_pin("vddio_1", supply="vddio")
    return registry


@pytest.fixture
def core_range() -> Interval:
    return Interval(1.0, 1.2, "V")


@pytest.fixture
def vdd(core_range, pins) -> PowerDomain:
    """Valid core supply attached to the pin registry."""
    return PowerDomain(
        "vdd",
        description="Core supply",
        voltage_range=core_range,
        nominal_voltage=1.1,
        registry=pins,
    )


@pytest.fixture
def chip_toml(tmp_path):
    path = tmp_path / "chip.toml"
    path.write_text(CHIP_TOML)
    return path


@pytest.fixture
def chip_yaml(tmp_path):
    path = tmp_path / "chip.yaml"
    path.write_text(CHIP_YAML)
    return path
