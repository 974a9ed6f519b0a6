"""
Declaration file loader for power domains and pins.

Reads a TOML (``.toml``) or YAML (``.yaml``/``.yml``) file describing a
device's power domains and the pins that reference them.

Example TOML declaration::

    [power_domains.vdd]
    description = "Core supply"
    voltage_range = ["1.0V", "1.2V"]
    nominal_voltage = "1.1V"
    setpoint = "1.05V"
    owner = "pmic"

    [power_domains.vddio]
    voltage_range = { min = 1.62, max = 3.6 }
    nominal_voltage = 1.8

    [pins.signal]
    tdi = "vddio"
    tdo = { supply = "vddio", description = "JTAG data out" }

    [pins.ground]
    gnd = "vss"

    [pins.power]
    vdd_1 = "vdd"

Usage::

    from power_domains.loader import load_design

    design = load_design("chip.toml")
    design.domains["vdd"].power_pins   # ['vdd_1']
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from power_domains.collection import PowerDomains
from power_domains.domain import LoggerLike
from power_domains.exceptions import (
    ConfigurationError,
    DuplicateIdError,
    ParseError,
    ValidationError,
)
from power_domains.pins import PinCollection, PinRole
from power_domains.types.interval import Interval
from power_domains.units import parse_voltage

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

__all__ = ["Design", "load_design", "build_design", "KNOWN_SECTIONS"]

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("power_domains", "pins")
YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class Design:
    """Power domains and pins loaded from one declaration file."""

    domains: PowerDomains
    pins: PinCollection
    source: Optional[Path] = None


def load_design(path: Path | str, domain_logger: Optional[LoggerLike] = None) -> Design:
    """Load a declaration file.

    Args:
        path: Path to a ``.toml``, ``.yaml`` or ``.yml`` file
        domain_logger: Logger handed to every created power domain

    Returns:
        The loaded design

    Raises:
        FileNotFoundError: If the file doesn't exist
        ParseError: If the file is not valid TOML/YAML
        ConfigurationError: If the content has the wrong shape
        ValidationError: If a power domain fails validation
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Declaration file not found: {path}")

    data = _read_file(path)
    return build_design(data, source=path, domain_logger=domain_logger)


def _read_file(path: Path) -> Dict[str, Any]:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise ParseError(
                f"Invalid YAML: {e}",
                file_path=path,
                line=mark.line + 1 if mark is not None else None,
            ) from e
    else:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(f"Invalid TOML: {e}", file_path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Declaration file must contain a mapping",
            context={"file": str(path), "got": type(data).__name__},
        )
    return data


def build_design(
    data: Dict[str, Any],
    source: Optional[Path] = None,
    domain_logger: Optional[LoggerLike] = None,
) -> Design:
    """Build a design from already-parsed declaration data.

    Pins are declared first so that domains see them immediately. A
    ``setpoint`` is applied after the domain is created, through the
    range-checked setter.
    """
    context = {"file": str(source)} if source is not None else {}

    unknown = [key for key in data if key not in KNOWN_SECTIONS]
    if unknown:
        raise ConfigurationError(
            f"Unknown section(s): {', '.join(map(str, unknown))}",
            context={**context, "known": list(KNOWN_SECTIONS)},
        )

    pins = _build_pins(_section(data, "pins", context), context)
    domains = PowerDomains(registry=pins, logger=domain_logger)

    for domain_id, decl in _section(data, "power_domains", context).items():
        if not isinstance(decl, dict):
            raise ConfigurationError(
                f"Power domain '{domain_id}' must be a table of fields",
                context=context,
            )
        if "id" in decl:
            raise ConfigurationError(
                f"Power domain '{domain_id}' cannot set 'id'; it is taken from the table name",
                context=context,
            )
        fields = dict(decl)
        setpoint = fields.pop("setpoint", None)
        if "voltage_range" in fields:
            fields["voltage_range"] = _voltage_range(domain_id, fields["voltage_range"], context)
        if "nominal_voltage" in fields:
            fields["nominal_voltage"] = _voltage(
                domain_id, "nominal_voltage", fields["nominal_voltage"], context
            )

        try:
            domain = domains.add(domain_id, fields)
        except (ValidationError, DuplicateIdError) as e:
            e.context.update(context)
            raise

        if setpoint is not None:
            domain.setpoint = _voltage(domain_id, "setpoint", setpoint, context)

    logger.debug(f"Loaded {len(domains)} power domain(s) and {len(pins)} pin(s)")
    return Design(domains=domains, pins=pins, source=source)


def _section(data: Dict[str, Any], name: str, context: Dict[str, Any]) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Section '{name}' must be a table", context=context)
    return section


def _build_pins(section: Dict[str, Any], context: Dict[str, Any]) -> PinCollection:
    pins = PinCollection()
    roles = [role.value for role in PinRole]

    for role_name, entries in section.items():
        if role_name not in roles:
            raise ConfigurationError(
                f"Unknown pin role '{role_name}'",
                context={**context, "known": roles},
            )
        if not isinstance(entries, dict):
            raise ConfigurationError(f"Section 'pins.{role_name}' must be a table", context=context)

        for pin_id, decl in entries.items():
            if isinstance(decl, dict):
                supply = decl.get("supply")
                description = decl.get("description", "")
            else:
                supply, description = decl, ""
            try:
                pins.add(role_name, pin_id, supply, description)
            except DuplicateIdError as e:
                e.context.update(context)
                raise
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid supply for {role_name} pin '{pin_id}': {e}", context=context
                ) from e
    return pins


def _voltage(domain_id: str, field: str, value: Any, context: Dict[str, Any]) -> Any:
    if value is None:
        return None
    try:
        return parse_voltage(value)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid {field} for power domain '{domain_id}': {e}",
            context=context,
        ) from e


def _voltage_range(domain_id: str, value: Any, context: Dict[str, Any]) -> Any:
    """Convert ``[lo, hi]`` or ``{min, max}`` to an Interval in volts.

    Any other shape is passed through unchanged so that power domain
    validation reports it.
    """
    if isinstance(value, (list, tuple)) and len(value) == 2:
        lo, hi = value
    elif isinstance(value, dict) and set(value) == {"min", "max"}:
        lo, hi = value["min"], value["max"]
    else:
        return value

    lo = _voltage(domain_id, "voltage_range", lo, context)
    hi = _voltage(domain_id, "voltage_range", hi, context)
    try:
        return Interval(lo, hi, "V")
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid voltage_range for power domain '{domain_id}': {e}",
            context=context,
        ) from e
