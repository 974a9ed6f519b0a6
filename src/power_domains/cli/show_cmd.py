"""Show command: summarize the power domains in a declaration file.

Usage:
    power-domains show chip.toml
    power-domains show chip.yaml --format json
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from power_domains.cli.utils import load_or_report
from power_domains.config import Config
from power_domains.domain import PowerDomain
from power_domains.types.interval import Interval
from power_domains.units import format_unit_value


def run_show(path: str, fmt: str = "table", config: Config | None = None) -> int:
    """Print every power domain declared in *path*."""
    design = load_or_report(path)
    if design is None:
        return 1

    precision = config.display.precision if config is not None else 3
    domains = list(design.domains.values())

    if fmt == "json":
        print(json.dumps([domain_to_dict(d) for d in domains], indent=2, default=str))
        return 0

    console = Console()
    if not domains:
        console.print(f"[yellow]No power domains declared in {path}[/yellow]")
        return 0

    table = Table(title=f"Power Domains ({len(domains)})", show_header=True, header_style="bold")
    table.add_column("Domain", style="cyan")
    table.add_column("Description")
    table.add_column("Range", justify="right")
    table.add_column("Nominal", justify="right")
    table.add_column("Setpoint", justify="right")
    table.add_column("Status")
    table.add_column("Pins (S/G/P)", justify="right")

    for domain in domains:
        table.add_row(
            domain.id,
            domain.description or "-",
            domain.voltage_range.to_display(precision, unit="V"),
            format_unit_value(domain.nominal_voltage, "V", precision),
            _setpoint_cell(domain, precision),
            _status_cell(domain),
            f"{len(domain.signal_pins)}/{len(domain.ground_pins)}/{len(domain.power_pins)}",
        )

    console.print(table)
    return 0


def domain_to_dict(domain: PowerDomain) -> dict[str, Any]:
    """JSON-friendly view of a power domain."""
    voltage_range: Interval = domain.voltage_range
    return {
        "id": domain.id,
        "description": domain.description,
        "voltage_range": {
            "min": voltage_range.min,
            "max": voltage_range.max,
            "unit": voltage_range.unit or "V",
        },
        "nominal_voltage": domain.nominal_voltage,
        "setpoint": domain.setpoint,
        "setpoint_ok": domain.setpoint_ok() if domain.setpoint is not None else None,
        "pins": {
            "signal": domain.signal_pins,
            "ground": domain.ground_pins,
            "power": domain.power_pins,
        },
        "attributes": domain.extra_attributes,
    }


def _setpoint_cell(domain: PowerDomain, precision: int) -> str:
    if domain.setpoint is None:
        return "-"
    return format_unit_value(domain.setpoint, "V", precision)


def _status_cell(domain: PowerDomain) -> str:
    if domain.setpoint is None:
        return "[dim]unset[/dim]"
    if domain.setpoint_ok():
        return "[green]ok[/green]"
    return "[red]out of range[/red]"
