"""
Unit value parsing and formatting for supply voltages.

Parses string representations of electrical quantities like "1.1V",
"950mV", "3.3 volts" or "-0.3V", and renders numeric values back with
an SI prefix ("1.5V", "950mV") for log messages and CLI output.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from numbers import Number
from typing import Any

__all__ = [
    "SI_PREFIXES",
    "UnitValue",
    "is_number",
    "parse_unit_value",
    "parse_voltage",
    "format_unit_value",
]

# SI prefixes with their multipliers
SI_PREFIXES = {
    "f": 1e-15,  # femto
    "p": 1e-12,  # pico
    "n": 1e-9,  # nano
    "u": 1e-6,  # micro (also μ)
    "μ": 1e-6,  # micro (unicode)
    "m": 1e-3,  # milli
    "": 1,  # no prefix
    "k": 1e3,  # kilo
    "K": 1e3,  # kilo (alternate)
    "M": 1e6,  # mega
    "G": 1e9,  # giga
}

# Unit type mappings - base units and their aliases
UNIT_TYPES = {
    # Voltage
    "V": "V",
    "v": "V",
    "volt": "V",
    "volts": "V",
    # Current
    "A": "A",
    "a": "A",
    "amp": "A",
    "amps": "A",
    "ampere": "A",
    "amperes": "A",
    # Power
    "W": "W",
    "w": "W",
    "watt": "W",
    "watts": "W",
}


@dataclass
class UnitValue:
    """Parsed unit value with magnitude and unit.

    Attributes:
        raw: Original string representation
        value: Numeric value (with SI prefix applied)
        unit: Normalized unit string (e.g., "V", "A")
        prefix: SI prefix used (e.g., "m" for milli)
    """

    raw: str
    value: float
    unit: str
    prefix: str = ""

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"UnitValue({self.raw!r}, value={self.value}, unit={self.unit!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, UnitValue):
            return self.value == other.value and self.unit == other.unit
        return False


# Matches: "5V", "950mV", "1.8", "-0.3V", "3.3volts"
UNIT_PATTERN = re.compile(
    r"^"
    r"(?P<sign>[+-])?"  # Optional sign
    r"(?P<number>\d+(?:\.\d+)?)"  # Number (integer or decimal)
    r"(?P<prefix>[fpnuμmkKMG])?"  # Optional SI prefix
    r"(?P<unit>[a-zA-Z]+)?"  # Unit
    r"$"
)


def parse_unit_value(value: str) -> UnitValue:
    """Parse a string unit value into structured form.

    Args:
        value: String like "5V", "950mV", "1.8 V", "2A"

    Returns:
        UnitValue with parsed components

    Raises:
        ValueError: If the value cannot be parsed

    Examples:
        >>> parse_unit_value("5V")
        UnitValue('5V', value=5.0, unit='V')

        >>> parse_unit_value("950mV")
        UnitValue('950mV', value=0.95, unit='V')
    """
    raw = value.strip()
    match = UNIT_PATTERN.match(raw.replace(" ", ""))
    if not match:
        raise ValueError(f"Cannot parse unit value: {value!r}")

    sign = match.group("sign") or ""
    prefix = match.group("prefix") or ""
    unit_str = match.group("unit") or ""

    normalized_unit = UNIT_TYPES.get(unit_str) or UNIT_TYPES.get(unit_str.lower())
    if normalized_unit is None:
        if unit_str:
            raise ValueError(f"Unknown unit {unit_str!r} in {value!r}")
        normalized_unit = ""

    number = float(sign + match.group("number"))
    # Round away the binary noise introduced by the prefix multiplier
    calculated_value = round(number * SI_PREFIXES[prefix], 12)

    return UnitValue(
        raw=raw,
        value=calculated_value,
        unit=normalized_unit,
        prefix=prefix,
    )


def is_number(value: Any) -> bool:
    """Return True for real-valued numbers such as int, float and Decimal.

    ``bool`` and ``complex`` are not voltages and are rejected.
    """
    return isinstance(value, Number) and not isinstance(value, (bool, complex))


def parse_voltage(value: Any) -> float:
    """Coerce a number or a voltage string to a float in volts.

    Args:
        value: A real number, or a string such as "1.1V", "950mV" or "1.2"

    Returns:
        The value in volts

    Raises:
        ValueError: If the string is not a voltage or the value has the
            wrong type
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a voltage, got {value!r}")
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        parsed = parse_unit_value(value)
        if parsed.unit not in ("", "V"):
            raise ValueError(f"Expected a voltage, got {parsed.unit!r} in {value!r}")
        return parsed.value
    raise ValueError(f"Expected a voltage, got {type(value).__name__}")


# Prefixes used for display, largest first
DISPLAY_PREFIXES = [
    (1e9, "G"),
    (1e6, "M"),
    (1e3, "k"),
    (1, ""),
    (1e-3, "m"),
    (1e-6, "μ"),
    (1e-9, "n"),
    (1e-12, "p"),
]


def format_unit_value(value: Any, unit: str, precision: int = 3) -> str:
    """Format a numeric value with appropriate SI prefix.

    Args:
        value: Numeric value in base units
        unit: Unit string (e.g., "V", "A")
        precision: Significant digits for display

    Returns:
        Formatted string with SI prefix. Infinities and NaN are rendered
        without a prefix ("infV", "-infV", "nanV").

    Examples:
        >>> format_unit_value(0.95, "V")
        '950mV'

        >>> format_unit_value(1.0, "V")
        '1V'

        >>> format_unit_value(0.9995, "V")
        '1V'
    """
    value = float(value)
    if not math.isfinite(value):
        return f"{value}{unit}"
    if value == 0:
        return f"0{unit}"

    abs_value = abs(value)
    sign = "-" if value < 0 else ""

    for index, (threshold, prefix) in enumerate(DISPLAY_PREFIXES):
        if abs_value >= threshold:
            formatted = f"{abs_value / threshold:.{precision}g}"
            if float(formatted) >= 1000 and index > 0:
                # Rounding carried into the next prefix (999.5m -> 1)
                threshold, prefix = DISPLAY_PREFIXES[index - 1]
                formatted = f"{abs_value / threshold:.{precision}g}"
            if "e" not in formatted and float(formatted).is_integer():
                formatted = str(int(float(formatted)))
            return f"{sign}{formatted}{prefix}{unit}"

    # Very small value
    return f"{sign}{abs_value:.{precision}g}{unit}"
