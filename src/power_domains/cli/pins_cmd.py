"""Pins command: list the pins that reference one power domain.

Usage:
    power-domains pins chip.toml vddio
    power-domains pins chip.toml vddio --format json
"""

from __future__ import annotations

import json
import sys

from rich.console import Console
from rich.table import Table

from power_domains.cli.utils import load_or_report
from power_domains.pins import PinRole


def run_pins(path: str, domain_id: str, fmt: str = "table") -> int:
    """Print the pins of *domain_id* with their roles."""
    design = load_or_report(path)
    if design is None:
        return 1

    try:
        domain = design.domains[domain_id]
    except KeyError:
        known = ", ".join(design.domains.ids) or "none"
        print(f"Error: Unknown power domain '{domain_id}' (declared: {known})", file=sys.stderr)
        return 1

    rows = (
        [(pin_id, PinRole.SIGNAL) for pin_id in domain.signal_pins]
        + [(pin_id, PinRole.GROUND) for pin_id in domain.ground_pins]
        + [(pin_id, PinRole.POWER) for pin_id in domain.power_pins]
    )

    if fmt == "json":
        output = {
            "domain": domain.id,
            "pins": [{"id": pin_id, "type": role.value} for pin_id, role in rows],
        }
        print(json.dumps(output, indent=2, default=str))
        return 0

    console = Console()
    if not rows:
        console.print(f"[yellow]No pins reference power domain '{domain.id}'[/yellow]")
        return 0

    table = Table(title=f"Pins of {domain.id}", show_header=True, header_style="bold")
    table.add_column("Pin", style="cyan")
    table.add_column("Type")
    for pin_id, role in rows:
        table.add_row(str(pin_id), role.value)

    console.print(table)
    return 0
