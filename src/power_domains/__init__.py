"""
power-domains: Power domain modeling for chip power architecture.

This package describes the supply rails of a device, validates their
configured voltages, and discovers which pins each rail powers, grounds
or signals.

Modules:
    domain: The PowerDomain entity
    collection: Device-level mapping of power domains
    pins: Pin registry protocol and in-memory implementation
    loader: TOML/YAML declaration files
    types: Unit-aware Interval used for voltage ranges
    units: Voltage parsing and formatting
    config: Tool configuration files

Quick Start::

    from power_domains import Interval, PinCollection, PowerDomains

    pins = PinCollection()
    pins.add_pin("tdi", supply="vddio")

    domains = PowerDomains(registry=pins)
    vddio = domains.add(
        "vddio",
        voltage_range=Interval(1.62, 3.6, "V"),
        nominal_voltage=1.8,
    )
    vddio.setpoint = 3.3
    vddio.signal_pins      # ['tdi']

    # Or load a declaration file
    from power_domains import load_design
    design = load_design("chip.toml")
"""

__version__ = "0.1.0"

from power_domains.collection import PowerDomains
from power_domains.domain import PowerDomain
from power_domains.exceptions import (
    AttributeTypeError,
    ConfigurationError,
    DuplicateIdError,
    ParseError,
    PowerDomainError,
    ValidationError,
)
from power_domains.ids import normalize_id
from power_domains.loader import Design, load_design
from power_domains.pins import Pin, PinCollection, PinRegistry, PinRole
from power_domains.types import Interval, UnitError
from power_domains.units import format_unit_value, parse_voltage

__all__ = [
    # Version
    "__version__",
    # Core
    "PowerDomain",
    "PowerDomains",
    "normalize_id",
    # Pins
    "Pin",
    "PinCollection",
    "PinRegistry",
    "PinRole",
    # Declaration files
    "Design",
    "load_design",
    # Types and units
    "Interval",
    "UnitError",
    "format_unit_value",
    "parse_voltage",
    # Exceptions
    "PowerDomainError",
    "ValidationError",
    "AttributeTypeError",
    "DuplicateIdError",
    "ParseError",
    "ConfigurationError",
]
