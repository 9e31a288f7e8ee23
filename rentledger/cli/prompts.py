from __future__ import annotations

import questionary
from rich.console import Console

from rentledger.models import parse_vnd
from rentledger.models.period import Period

console = Console()


def ask_period(message: str = "Billing period (MM/YYYY):") -> Period | None:
    default = Period.current()
    while True:
        raw = questionary.text(message, default=f"{default.month:02d}/{default.year}").ask()
        if raw is None:
            return None
        month, sep, year = raw.strip().partition("/")
        if sep:
            try:
                return Period(month=int(month), year=int(year))
            except ValueError:
                pass
        console.print("[red]Invalid period. Use MM/YYYY (e.g. 03/2025).[/red]")


def ask_amount(message: str, default: int | None = None, allow_zero: bool = True) -> int | None:
    while True:
        raw = questionary.text(message, default="" if default is None else str(default)).ask()
        if raw is None:
            return None
        parsed = parse_vnd(raw)
        if parsed is not None and (parsed > 0 or (allow_zero and parsed == 0)):
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def ask_reading(message: str, minimum: int, default: int | None = None) -> int | None:
    while True:
        raw = questionary.text(message, default=str(default if default is not None else minimum)).ask()
        if raw is None:
            return None
        try:
            value = int(raw.strip())
        except ValueError:
            console.print("[red]Enter a whole number.[/red]")
            continue
        if value < minimum:
            console.print(f"[red]Reading cannot be below the last billed value ({minimum}).[/red]")
            continue
        return value
