"""Unit-aware interval type for voltage envelopes.

Provides an ``Interval`` dataclass representing an inclusive numeric
range with an optional unit string.  Set operations between intervals
check unit compatibility so that an accidental ``V`` vs ``A`` comparison
is caught at runtime rather than silently producing a wrong answer.

Example::

    from power_domains.types import Interval

    core = Interval(1.0, 1.2, "V")
    io = Interval.from_center_rel(3.3, 0.1, "V")   # 3.3 V +/- 10%

    core.contains(1.05)          # True
    1.5 in core                  # False
    core.overlaps(Interval(1.1, 1.5, "V"))  # True
    core.to_display()            # '1V..1.2V'
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from power_domains.units import format_unit_value, is_number


class UnitError(TypeError):
    """Raised when an operation mixes intervals with incompatible units."""


@dataclass(frozen=True)
class Interval:
    """A numeric interval ``[min, max]`` with an optional unit.

    Attributes:
        min: Lower bound (inclusive).
        max: Upper bound (inclusive).
        unit: Physical unit string (e.g. ``"V"``).
              An empty string means dimensionless.
    """

    min: float
    max: float
    unit: str = ""

    def __post_init__(self) -> None:
        if math.isnan(self.min) or math.isnan(self.max):
            msg = "Interval bounds must not be NaN"
            raise ValueError(msg)
        if self.min > self.max:
            msg = f"min ({self.min}) must be <= max ({self.max})"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Factory methods
    # ------------------------------------------------------------------

    @classmethod
    def from_center_rel(cls, center: float, tolerance: float, unit: str = "") -> Interval:
        """Create from a center value and relative tolerance.

        Args:
            center: Nominal value.
            tolerance: Fractional tolerance (e.g. 0.05 for +/- 5 %).
            unit: Physical unit string.

        Returns:
            Interval spanning ``center * (1 - tolerance)`` to
            ``center * (1 + tolerance)``.

        Example::

            Interval.from_center_rel(1.8, 0.05, "V")
            # Interval(min=1.71, max=1.89, unit='V')
        """
        delta = abs(center * tolerance)
        return cls(center - delta, center + delta, unit)

    @classmethod
    def from_center_abs(cls, center: float, delta: float, unit: str = "") -> Interval:
        """Create from a center value and absolute delta.

        Args:
            center: Nominal value.
            delta: Absolute half-width (always treated as positive).
            unit: Physical unit string.

        Returns:
            Interval spanning ``center - |delta|`` to ``center + |delta|``.
        """
        delta = abs(delta)
        return cls(center - delta, center + delta, unit)

    @classmethod
    def exact(cls, value: float, unit: str = "") -> Interval:
        """Create a single-point (degenerate) interval."""
        return cls(value, value, unit)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def center(self) -> float:
        """Midpoint of the interval."""
        return (self.min + self.max) / 2.0

    @property
    def width(self) -> float:
        """Width of the interval (``max - min``)."""
        return self.max - self.min

    @property
    def is_exact(self) -> bool:
        """True if this is a single-point interval."""
        return self.min == self.max

    # ------------------------------------------------------------------
    # Set operations
    # ------------------------------------------------------------------

    def contains(self, value: object) -> bool:
        """Return True if *value* is a real number within ``[min, max]``.

        ``int``, ``float``, ``Decimal`` and ``Fraction`` values are compared
        directly. Anything else (``None``, strings, ``bool``, ``complex``)
        is never contained, and neither is NaN.
        """
        if not is_number(value):
            return False
        try:
            return self.min <= value <= self.max
        except ArithmeticError:
            # Decimal NaN refuses ordered comparison
            return False

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def contains_interval(self, other: Interval) -> bool:
        """Return True if *other* is entirely within this interval."""
        self._check_same_unit(other, "contains_interval")
        return self.min <= other.min and other.max <= self.max

    def overlaps(self, other: Interval) -> bool:
        """Return True if this interval and *other* share any points."""
        self._check_same_unit(other, "overlaps")
        return self.min <= other.max and other.min <= self.max

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def to_display(self, precision: int = 3, unit: str | None = None) -> str:
        """Render the bounds with SI prefixes, e.g. ``'950mV..1.05V'``.

        Args:
            precision: Significant digits per bound.
            unit: Unit suffix to use instead of :attr:`unit` (useful for
                dimensionless intervals known to hold volts).
        """
        suffix = self.unit if unit is None else unit
        lo = format_unit_value(self.min, suffix, precision)
        hi = format_unit_value(self.max, suffix, precision)
        return f"{lo}..{hi}"

    def __repr__(self) -> str:
        if self.unit:
            return f"Interval({self.min}, {self.max}, unit={self.unit!r})"
        return f"Interval({self.min}, {self.max})"

    def __str__(self) -> str:
        if self.is_exact:
            return f"{self.min} {self.unit}".strip()
        suffix = f" {self.unit}" if self.unit else ""
        return f"[{self.min}, {self.max}]{suffix}"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_same_unit(self, other: Interval, op: str) -> None:
        if self.unit != other.unit:
            msg = (
                f"Cannot apply '{op}' to intervals with different units: "
                f"{self.unit!r} vs {other.unit!r}"
            )
            raise UnitError(msg)
