"""Device-level mapping from power domain id to :class:`PowerDomain`.

Example::

    from power_domains import Interval, PinCollection, PowerDomains

    domains = PowerDomains(registry=PinCollection())
    domains.add("vdd", voltage_range=Interval(1.0, 1.2, "V"), nominal_voltage=1.1)
    domains.add("vddio", voltage_range=Interval(1.62, 3.6, "V"), nominal_voltage=1.8)

    domains.find("vdd*")      # both domains
    domains["VDD"]            # ids are normalized on lookup
"""

from __future__ import annotations

import fnmatch
import logging
import re
from typing import Any, Dict, Hashable, Iterator, List, Mapping, Optional, Pattern, Union

from power_domains.domain import Configure, LoggerLike, PowerDomain
from power_domains.exceptions import DuplicateIdError
from power_domains.ids import normalize_id, normalize_pattern
from power_domains.pins import PinRegistry, PinRole

__all__ = ["PowerDomains"]

logger = logging.getLogger(__name__)


class PowerDomains(Mapping[str, PowerDomain]):
    """Ordered collection of the power domains declared for one device.

    Domains created through :meth:`add` share the collection's pin
    registry and logger. Ids are unique within a collection.
    """

    def __init__(
        self,
        registry: Optional[PinRegistry] = None,
        logger: Optional[LoggerLike] = None,
    ) -> None:
        self.registry = registry
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._domains: Dict[str, PowerDomain] = {}

    def add(
        self,
        id: Hashable,
        options: Optional[Mapping[str, Any]] = None,
        configure: Optional[Configure] = None,
        **fields: Any,
    ) -> PowerDomain:
        """Create a power domain and register it under its normalized id.

        Raises:
            DuplicateIdError: If a domain with the same id already exists
            ValidationError: If the domain attributes are invalid
        """
        domain_id = normalize_id(id)
        if domain_id in self._domains:
            message = f"Cannot create power domain '{domain_id}', it already exists!"
            self.logger.error(message)
            raise DuplicateIdError(message, context={"power_domain": domain_id})

        domain = PowerDomain(
            domain_id,
            options,
            configure,
            registry=self.registry,
            logger=self.logger,
            **fields,
        )
        self._domains[domain_id] = domain
        logger.debug(f"Added power domain '{domain_id}'")
        return domain

    @property
    def ids(self) -> List[str]:
        return list(self._domains)

    def find(self, pattern: Union[str, Pattern[str]]) -> List[PowerDomain]:
        """Return domains whose id matches a glob or a compiled regex.

        Args:
            pattern: Glob such as ``"vdd*"`` or ``re.compile(r"io$")``.
                Glob patterns are normalized like ids first, so
                ``"VDD-IO*"`` matches ``vdd_io``.
        """
        if isinstance(pattern, re.Pattern):
            return [d for i, d in self._domains.items() if pattern.search(i)]
        pattern = normalize_pattern(pattern)
        return [d for i, d in self._domains.items() if fnmatch.fnmatchcase(i, pattern)]

    def for_pin(self, pin: Hashable) -> List[PowerDomain]:
        """Return the domains that claim *pin* (normally zero or one)."""
        return [domain for domain in self._domains.values() if domain.has_pin(pin)]

    def unassigned_pins(self) -> Dict[PinRole, List[Hashable]]:
        """Return registry pins, by role, whose supply matches no domain."""
        result: Dict[PinRole, List[Hashable]] = {role: [] for role in PinRole}
        if self.registry is None:
            return result

        claimed = {role: set() for role in PinRole}
        for domain in self._domains.values():
            claimed[PinRole.SIGNAL].update(domain.signal_pins)
            claimed[PinRole.GROUND].update(domain.ground_pins)
            claimed[PinRole.POWER].update(domain.power_pins)

        collections = {
            PinRole.SIGNAL: self.registry.signal_pins,
            PinRole.GROUND: self.registry.ground_pins,
            PinRole.POWER: self.registry.power_pins,
        }
        for role, pins in collections.items():
            result[role] = [pin_id for pin_id in pins if pin_id not in claimed[role]]
        return result

    def out_of_range(self) -> List[PowerDomain]:
        """Return domains with a setpoint outside their voltage range."""
        return [
            domain
            for domain in self._domains.values()
            if domain.setpoint is not None and not domain.setpoint_ok()
        ]

    def __getitem__(self, key: Hashable) -> PowerDomain:
        try:
            return self._domains[normalize_id(key)]
        except ValueError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        try:
            return normalize_id(key) in self._domains  # type: ignore[arg-type]
        except (ValueError, TypeError):
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self._domains)

    def __len__(self) -> int:
        return len(self._domains)

    def __repr__(self) -> str:
        return f"PowerDomains({self.ids!r})"
