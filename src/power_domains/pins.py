"""
Pin registry used to discover which pins a power domain supplies.

A power domain never owns pins. Each pin declares the id of the supply
it belongs to, and a domain finds its pins by filtering a registry.
Any object with ``signal_pins``, ``ground_pins`` and ``power_pins``
mappings satisfies :class:`PinRegistry`; :class:`PinCollection` is the
bundled in-memory implementation.

Example::

    from power_domains.pins import PinCollection

    pins = PinCollection()
    pins.add_pin("tdi", supply="vddio")
    pins.add_ground_pin("gnd", supply="vss")
    pins.add_power_pin("vdd_1", supply="vdd")
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, Mapping, Optional, Protocol

from power_domains.exceptions import DuplicateIdError
from power_domains.ids import normalize_id

__all__ = ["PinRole", "Pin", "PinLike", "PinRegistry", "PinCollection"]


class PinRole(str, Enum):
    """Electrical role of a pin, in pin-type priority order."""

    SIGNAL = "signal"
    GROUND = "ground"
    POWER = "power"


class PinLike(Protocol):
    """Anything exposing the id of the supply it belongs to."""

    @property
    def supply(self) -> Any: ...


class PinRegistry(Protocol):
    """Protocol for the externally owned pin collections.

    Each mapping is keyed by pin id and iterated in declaration order.
    Power domains only read from a registry, never mutate it.
    """

    @property
    def signal_pins(self) -> Mapping[Hashable, PinLike]: ...

    @property
    def ground_pins(self) -> Mapping[Hashable, PinLike]: ...

    @property
    def power_pins(self) -> Mapping[Hashable, PinLike]: ...


@dataclass
class Pin:
    """A declared pin and the supply it references.

    Attributes:
        id: Pin identifier, used as the registry key.
        role: Signal, ground or power.
        supply: Normalized id of the power domain, or None if unassigned.
        description: Free-form text.
    """

    id: Hashable
    role: PinRole
    supply: Optional[str] = None
    description: str = ""

    def __post_init__(self) -> None:
        self.role = PinRole(self.role)
        if self.supply is not None:
            self.supply = normalize_id(self.supply)


class PinCollection:
    """In-memory pin registry with one ordered mapping per role."""

    def __init__(self) -> None:
        self._pins: Dict[PinRole, Dict[Hashable, Pin]] = {role: {} for role in PinRole}

    @property
    def signal_pins(self) -> Dict[Hashable, Pin]:
        return self._pins[PinRole.SIGNAL]

    @property
    def ground_pins(self) -> Dict[Hashable, Pin]:
        return self._pins[PinRole.GROUND]

    @property
    def power_pins(self) -> Dict[Hashable, Pin]:
        return self._pins[PinRole.POWER]

    def add(
        self,
        role: PinRole | str,
        pin_id: Hashable,
        supply: Optional[Hashable] = None,
        description: str = "",
    ) -> Pin:
        """Declare a pin under *role*.

        The same id may appear under more than one role; power domains
        resolve that through their pin-type priority order.

        Raises:
            DuplicateIdError: If *pin_id* already exists for *role*
        """
        role = PinRole(role)
        pins = self._pins[role]
        if pin_id in pins:
            raise DuplicateIdError(
                f"Cannot add {role.value} pin '{pin_id}', it already exists!",
                context={"pin": pin_id, "role": role.value},
            )
        pin = Pin(id=pin_id, role=role, supply=supply, description=description)
        pins[pin_id] = pin
        return pin

    def add_pin(
        self, pin_id: Hashable, supply: Optional[Hashable] = None, description: str = ""
    ) -> Pin:
        """Declare a signal pin."""
        return self.add(PinRole.SIGNAL, pin_id, supply, description)

    def add_ground_pin(
        self, pin_id: Hashable, supply: Optional[Hashable] = None, description: str = ""
    ) -> Pin:
        """Declare a ground pin."""
        return self.add(PinRole.GROUND, pin_id, supply, description)

    def add_power_pin(
        self, pin_id: Hashable, supply: Optional[Hashable] = None, description: str = ""
    ) -> Pin:
        """Declare a power pin."""
        return self.add(PinRole.POWER, pin_id, supply, description)

    def get(self, pin_id: Hashable, role: PinRole | str | None = None) -> Optional[Pin]:
        """Return the pin with *pin_id*, or None.

        Without *role* the first match in signal, ground, power order wins.
        """
        if role is not None:
            return self._pins[PinRole(role)].get(pin_id)
        for role in PinRole:
            pin = self._pins[role].get(pin_id)
            if pin is not None:
                return pin
        return None

    def supplies(self) -> list[str]:
        """Return the sorted ids of every supply referenced by a pin."""
        return sorted({pin.supply for pin in self if pin.supply is not None})

    def __iter__(self) -> Iterator[Pin]:
        for role in PinRole:
            yield from self._pins[role].values()

    def __len__(self) -> int:
        return sum(len(pins) for pins in self._pins.values())

    def __repr__(self) -> str:
        return (
            f"PinCollection(signal={len(self.signal_pins)}, "
            f"ground={len(self.ground_pins)}, power={len(self.power_pins)})"
        )
