from __future__ import annotations

from rich.console import Console

from rentledger.cli.prompts import ask_amount
from rentledger.models import format_vnd
from rentledger.models.tariff import TariffSettings
from rentledger.services.tariff_service import TariffService

console = Console()


def tariff_menu(tariff_service: TariffService) -> None:
    current = tariff_service.get_settings()
    console.print()
    console.print("[bold]Tariff Settings[/bold]", style="cyan")
    console.print(f"  Electricity: {format_vnd(current.electricity_rate)}/kWh")
    console.print(f"  Water: {format_vnd(current.water_rate)}/m³")
    console.print(f"  Internet: {format_vnd(current.internet_fee)}  Trash: {format_vnd(current.trash_fee)}")
    console.print(f"  Other fees: {format_vnd(current.other_fees)}")
    console.print("  [dim]New rates only apply to invoices created from now on.[/dim]")

    electricity = ask_amount("Electricity rate (per kWh):", current.electricity_rate)
    water = ask_amount("Water rate (per m³):", current.water_rate)
    internet = ask_amount("Internet fee:", current.internet_fee)
    trash = ask_amount("Trash fee:", current.trash_fee)
    other = ask_amount("Other fees:", current.other_fees)
    if None in (electricity, water, internet, trash, other):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    tariff_service.update_settings(
        TariffSettings(
            electricity_rate=electricity,
            water_rate=water,
            internet_fee=internet,
            trash_fee=trash,
            other_fees=other,
        )
    )
    console.print("[green]Tariff saved.[/green]")
