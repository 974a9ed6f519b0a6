"""Check command: validate a declaration file.

Every power domain must construct (valid description and voltages) and
every declared setpoint must be inside its voltage range. Pins whose
supply matches no power domain are reported but do not fail the check.

Usage:
    power-domains check chip.toml

Exit Codes:
    0 - All power domains valid
    1 - Load or validation failure, or a setpoint out of range
"""

from __future__ import annotations

from rich.console import Console

from power_domains.cli.utils import load_or_report
from power_domains.config import Config


def run_check(path: str, config: Config | None = None) -> int:
    """Validate *path* and print a short report."""
    design = load_or_report(path)
    if design is None:
        return 1

    precision = config.display.precision if config is not None else 3
    console = Console()
    failed = False

    for domain in design.domains.out_of_range():
        failed = True
        setpoint = domain.setpoint_string(domain.setpoint)
        console.print(
            f"[red]FAIL[/red] {domain.id}: setpoint {setpoint} outside "
            f"{domain.voltage_range.to_display(precision, unit='V')}"
        )

    for role, pin_ids in design.domains.unassigned_pins().items():
        for pin_id in pin_ids:
            pin = design.pins.get(pin_id, role)
            if pin is not None and pin.supply is not None:
                reason = f"supply '{pin.supply}' is not a declared power domain"
            else:
                reason = "no supply declared"
            console.print(f"[yellow]WARN[/yellow] {role.value} pin {pin_id}: {reason}")

    count = len(design.domains)
    if failed:
        console.print(f"[red]Check failed[/red] ({count} power domain(s))")
        return 1

    console.print(f"[green]All {count} power domain(s) OK[/green]")
    return 0
