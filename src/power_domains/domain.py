"""
Power domain entity.

A power domain is a named supply rail with a declared voltage range, a
nominal voltage and an optional live setpoint. It validates its voltages
when it is created, range-checks every setpoint assignment, and finds the
pins it supplies by querying a pin registry.

Example::

    from power_domains import Interval, PinCollection, PowerDomain

    pins = PinCollection()
    pins.add_power_pin("vdd_1", supply="vdd")

    vdd = PowerDomain(
        "VDD",
        voltage_range=Interval(1.0, 1.2, "V"),
        nominal_voltage=1.1,
        registry=pins,
    )
    vdd.setpoint = 1.05
    vdd.power_pins        # ['vdd_1']
    vdd.owner = "pmic"    # open attribute, stored on this instance only
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple, Union

from power_domains.exceptions import AttributeTypeError, ValidationError
from power_domains.ids import normalize_id
from power_domains.pins import PinRegistry, PinRole
from power_domains.types.interval import Interval
from power_domains.units import format_unit_value, is_number

__all__ = ["PowerDomain"]

# Units a voltage range may be declared in
VOLTAGE_UNITS = ("", "V")

Configure = Callable[["PowerDomain"], Any]
LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class PowerDomain:
    """A supply rail with a validated voltage envelope.

    Core fields are ``id`` (read-only), ``description``, ``voltage_range``,
    ``nominal_voltage`` and ``setpoint``. Any other attribute name may be
    read or written at any time and is kept in a per-instance mapping;
    reading a name that was never written returns ``None``.

    Args:
        id: Domain identifier, normalized with :func:`normalize_id`.
        options: Field assignments applied in order after the defaults.
        configure: Called as ``configure(domain)`` after *options*, to set
            further fields before validation.
        registry: Pin registry used by the pin queries.
        logger: Sink for validation errors and setpoint warnings.
        **fields: Additional field assignments, applied after *options*.

    Raises:
        ValidationError: If the voltages or description are invalid.
        AttributeTypeError: If validation failed and an attribute had the
            wrong type (also a ``TypeError``).
    """

    __slots__ = (
        "_id",
        "_setpoint",
        "_extras",
        "description",
        "voltage_range",
        "nominal_voltage",
        "registry",
        "logger",
    )

    def __init__(
        self,
        id: Hashable,
        options: Optional[Mapping[str, Any]] = None,
        configure: Optional[Configure] = None,
        *,
        registry: Optional[PinRegistry] = None,
        logger: Optional[LoggerLike] = None,
        **fields: Any,
    ) -> None:
        self._extras: Dict[str, Any] = {}
        self._id = normalize_id(id)
        self._setpoint: Any = None
        self.description: Any = ""
        self.voltage_range: Any = None
        self.nominal_voltage: Any = None
        self.registry = registry
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        for name, value in {**(options or {}), **fields}.items():
            if name == "setpoint":
                # Construction never range-checks the setpoint
                self._setpoint = value
            else:
                setattr(self, name, value)

        if configure is not None:
            configure(self)

        errors, type_error = self._check_attrs()
        if errors:
            error_cls = AttributeTypeError if type_error else ValidationError
            raise error_cls(errors, context={"power_domain": self._id})

    # ------------------------------------------------------------------
    # Core fields
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._id

    @property
    def nominal(self) -> Any:
        return self.nominal_voltage

    nom = nominal

    @property
    def range(self) -> Any:
        return self.voltage_range

    @property
    def setpoint(self) -> Any:
        """Current operating voltage, ``None`` until set."""
        return self._setpoint

    @setpoint.setter
    def setpoint(self, value: Any) -> None:
        # Out-of-range values are still stored; clearing with None is silent
        if value is not None and not self.setpoint_ok(value):
            self.logger.warning(
                f"Setpoint ({self.setpoint_string(value)}) for power domain "
                f"'{self.name}' is not within the voltage range "
                f"({self.voltage_range_string()})!"
            )
        self._setpoint = value

    @property
    def curr_value(self) -> Any:
        return self._setpoint

    value = curr_value

    def setpoint_ok(self, value: Any = None) -> bool:
        """Check whether *value* (default: the current setpoint) is in range.

        Returns False for ``None``, for anything that is not a real
        number, and when the voltage range is missing or not an Interval.
        """
        if value is None:
            value = self._setpoint
        if not isinstance(self.voltage_range, Interval):
            return False
        return self.voltage_range.contains(value)

    value_ok = setpoint_ok
    val_ok = setpoint_ok

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def attrs_ok(self) -> bool:
        """Re-run construction validation, logging each failure as an error."""
        errors, _ = self._check_attrs()
        return not errors

    def _check_attrs(self) -> Tuple[List[str], bool]:
        """Evaluate every validation rule, logging failures in rule order.

        Returns:
            The failure messages, and whether any failure was a type error.
        """
        errors: List[str] = []
        type_error = False

        def fail(message: str, is_type: bool = False) -> None:
            nonlocal type_error
            self.logger.error(message)
            errors.append(message)
            type_error = type_error or is_type

        if not isinstance(self.description, str):
            fail("Power domain attribute 'description' must be a str!", is_type=True)

        if self.nominal_voltage is None:
            fail(f"Missing nominal voltage for power domain '{self.name}'!")

        range_ok = False
        if self.voltage_range is None:
            fail(f"Missing voltage range for power domain '{self.name}'!")
        elif not isinstance(self.voltage_range, Interval):
            fail(
                "Power domain attribute 'voltage_range' must be an Interval, "
                f"got {type(self.voltage_range).__name__}!",
                is_type=True,
            )
        elif self.voltage_range.unit not in VOLTAGE_UNITS:
            fail(
                "Power domain attribute 'voltage_range' must be in volts, "
                f"got {self.voltage_range.unit!r} for power domain '{self.name}'!"
            )
        else:
            range_ok = True

        nominal = self.nominal_voltage
        if nominal is not None:
            if not is_number(nominal):
                fail(
                    "Power domain attribute 'nominal_voltage' must be a number, "
                    f"got {type(nominal).__name__}!",
                    is_type=True,
                )
            elif range_ok and not self.voltage_range.contains(nominal):
                fail(
                    f"Nominal voltage {format_unit_value(nominal, 'V')} is not within "
                    f"the voltage range ({self.voltage_range_string()}) "
                    f"for power domain '{self.name}'!"
                )

        return errors, type_error

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    def setpoint_string(self, value: Any = None) -> str:
        """Render *value* (default: the current setpoint) in volts."""
        if value is None:
            value = self._setpoint
        if is_number(value):
            return format_unit_value(value, "V")
        return repr(value)

    def voltage_range_string(self) -> str:
        """Render the voltage range as ``'1V..1.2V'``."""
        if isinstance(self.voltage_range, Interval):
            return self.voltage_range.to_display(unit="V")
        return repr(self.voltage_range)

    # ------------------------------------------------------------------
    # Pin classification
    # ------------------------------------------------------------------

    @property
    def signal_pins(self) -> List[Hashable]:
        """Ids of the registry's signal pins that reference this domain."""
        if self.registry is None:
            return []
        return self._select(self.registry.signal_pins)

    @property
    def ground_pins(self) -> List[Hashable]:
        """Ids of the registry's ground pins that reference this domain."""
        if self.registry is None:
            return []
        return self._select(self.registry.ground_pins)

    @property
    def power_pins(self) -> List[Hashable]:
        """Ids of the registry's power pins that reference this domain."""
        if self.registry is None:
            return []
        return self._select(self.registry.power_pins)

    @property
    def pins(self) -> List[Hashable]:
        """All pins referencing this domain: signal, then ground, then power."""
        return self.signal_pins + self.ground_pins + self.power_pins

    def has_signal_pin(self, pin: Hashable) -> bool:
        return pin in self.signal_pins

    def has_ground_pin(self, pin: Hashable) -> bool:
        return pin in self.ground_pins

    def has_power_pin(self, pin: Hashable) -> bool:
        return pin in self.power_pins

    def has_pin(self, pin: Hashable) -> bool:
        return pin in self.pins

    def pin_type(self, pin: Hashable) -> Optional[PinRole]:
        """Classify *pin*, or return None if it does not reference this domain.

        A pin registered under more than one role resolves to the first
        of signal, ground, power.
        """
        checks = (
            (PinRole.SIGNAL, self.has_signal_pin),
            (PinRole.GROUND, self.has_ground_pin),
            (PinRole.POWER, self.has_power_pin),
        )
        for role, check in checks:
            if check(pin):
                return role
        return None

    def __contains__(self, pin: Hashable) -> bool:
        return self.has_pin(pin)

    def _select(self, pins: Mapping[Hashable, Any]) -> List[Hashable]:
        return [pin_id for pin_id, pin in pins.items() if self._supplies(pin)]

    def _supplies(self, pin: Any) -> bool:
        supply = getattr(pin, "supply", None)
        if supply is None:
            return False
        try:
            return normalize_id(supply) == self._id
        except ValueError:
            return False

    # ------------------------------------------------------------------
    # Open attributes
    # ------------------------------------------------------------------

    @property
    def extra_attributes(self) -> Dict[str, Any]:
        """Copy of the open attributes read or written so far."""
        return dict(self._extras)

    def get(self, name: str, default: Any = None) -> Any:
        """Return field *name*, or *default* if it was never set.

        Unlike attribute access this does not record *name*.
        """
        if name in self._extras:
            return self._extras[name]
        if hasattr(type(self), name):
            return getattr(self, name)
        return default

    def set(self, name: str, value: Any) -> None:
        """Assign field *name*, core or open."""
        setattr(self, name, value)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("_") or hasattr(type(self), name):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self._extras.setdefault(name, None)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self._extras[name] = value

    def __repr__(self) -> str:
        return (
            f"PowerDomain(id={self._id!r}, voltage_range={self.voltage_range!r}, "
            f"nominal_voltage={self.nominal_voltage!r}, setpoint={self._setpoint!r})"
        )
