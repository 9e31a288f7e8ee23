from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from rentledger.cli.prompts import ask_period, ask_reading
from rentledger.errors import BulkInvoiceFailed, CommitConflict, InvalidMeterReading, NothingToBill
from rentledger.models import format_vnd
from rentledger.models.invoice import Invoice
from rentledger.models.room import MeterReading, Room
from rentledger.services.invoice_service import InvoiceService
from rentledger.services.room_service import RoomService

console = Console()


def _show_invoice(invoice: Invoice) -> None:
    table = Table(title=f"{invoice.room_name} - T{invoice.month} / {invoice.year}")
    table.add_column("Item")
    table.add_column("Detail")
    table.add_column("Amount", justify="right")

    table.add_row("Rent", "", format_vnd(invoice.rent_amount))
    table.add_row(
        "Electricity",
        f"{invoice.old_electricity} → {invoice.new_electricity} "
        f"({invoice.electricity_usage} kWh × {invoice.electricity_rate})",
        format_vnd(invoice.electricity_cost),
    )
    table.add_row(
        "Water",
        f"{invoice.old_water} → {invoice.new_water} ({invoice.water_usage} m³ × {invoice.water_rate})",
        format_vnd(invoice.water_cost),
    )
    if invoice.internet_fee:
        table.add_row("Internet", "", format_vnd(invoice.internet_fee))
    if invoice.trash_fee:
        table.add_row("Trash", "", format_vnd(invoice.trash_fee))
    if invoice.other_fees:
        table.add_row("Other", "", format_vnd(invoice.other_fees))

    console.print(table)
    console.print(f"  [bold]Total: {format_vnd(invoice.total)}[/bold]  ({'paid' if invoice.paid else 'unpaid'})")


def create_invoice_menu(room_service: RoomService, invoice_service: InvoiceService) -> None:
    console.print()
    console.print("[bold]New Invoice[/bold]", style="cyan")

    rooms = room_service.list_occupied()
    if not rooms:
        console.print("[yellow]No occupied rooms.[/yellow]")
        return

    choice = questionary.select(
        "Room:",
        choices=[f"{room.id} - {room.name}" for room in rooms] + ["Back"],
    ).ask()
    if choice is None or choice == "Back":
        return
    room: Room | None = next((r for r in rooms if f"{r.id} - {r.name}" == choice), None)
    if room is None:
        return

    period = ask_period()
    if period is None:
        return

    reading = None
    if room.pending is not None:
        console.print(f"  Staged reading: {room.pending.electricity} kWh / {room.pending.water} m³")
    if room.pending is None or not questionary.confirm("Bill the staged reading?", default=True).ask():
        electricity = ask_reading("  New electricity reading:", room.current.electricity)
        water = ask_reading("  New water reading:", room.current.water)
        if electricity is None or water is None:
            return
        reading = MeterReading(electricity=electricity, water=water)

    try:
        invoice = invoice_service.create_invoice(room, period, reading)
    except (InvalidMeterReading, NothingToBill, CommitConflict) as exc:
        console.print(f"[red]{exc}[/red]")
        return

    console.print("[green bold]Invoice created.[/green bold]")
    _show_invoice(invoice)


def bulk_invoice_menu(room_service: RoomService, invoice_service: InvoiceService) -> None:
    console.print()
    console.print("[bold]Bill All Occupied Rooms[/bold]", style="cyan")

    occupied = room_service.list_occupied()
    if not occupied:
        console.print("[yellow]No occupied rooms.[/yellow]")
        return
    unstaged = [room.name for room in occupied if not room.is_staged]
    if unstaged:
        console.print(f"[yellow]No staged reading for: {', '.join(unstaged)} (billed with zero usage).[/yellow]")

    period = ask_period()
    if period is None:
        return
    if not questionary.confirm(f"Create {len(occupied)} invoice(s) for {period.label}?", default=True).ask():
        return

    try:
        result = invoice_service.bill_all_occupied(period)
    except BulkInvoiceFailed as exc:
        console.print(f"[red]{exc}[/red]")
        console.print("[red]Nothing was billed. Fix the problem and run the batch again.[/red]")
        return

    console.print(f"[green bold]{result.count} invoice(s) created:[/green bold] {', '.join(result.room_names)}")


def list_invoices_menu(invoice_service: InvoiceService) -> None:
    period = ask_period("Period to list (MM/YYYY):")
    if period is None:
        return

    while True:
        invoices = invoice_service.list_invoices(period)
        if not invoices:
            console.print("[yellow]No invoices for this period.[/yellow]")
            return

        table = Table(title=f"Invoices {period.label}")
        table.add_column("#", justify="right")
        table.add_column("Room")
        table.add_column("Total", justify="right")
        table.add_column("Status", justify="center")
        for invoice in invoices:
            table.add_row(
                str(invoice.id),
                invoice.room_name,
                format_vnd(invoice.total),
                "[green]paid[/green]" if invoice.paid else "[yellow]unpaid[/yellow]",
            )
        console.print(table)

        choices = [f"{invoice.id} - {invoice.room_name}" for invoice in invoices] + ["Back"]
        choice = questionary.select("Select an invoice:", choices=choices).ask()
        if choice is None or choice == "Back":
            return

        invoice = invoice_service.get_invoice(int(choice.split(" - ")[0]))
        if invoice is None:
            console.print("[red]Invoice not found.[/red]")
            continue
        _show_invoice(invoice)
        label = "Mark as unpaid" if invoice.paid else "Mark as paid"
        action = questionary.select("Action:", choices=[label, "Back"]).ask()
        if action == label:
            invoice_service.toggle_paid(invoice)


def invoices_menu(room_service: RoomService, invoice_service: InvoiceService) -> None:
    while True:
        choice = questionary.select(
            "Invoices",
            choices=["New invoice", "Bill all occupied rooms", "List invoices", "Back"],
        ).ask()
        if choice is None or choice == "Back":
            return
        if choice == "New invoice":
            create_invoice_menu(room_service, invoice_service)
        elif choice == "Bill all occupied rooms":
            bulk_invoice_menu(room_service, invoice_service)
        elif choice == "List invoices":
            list_invoices_menu(invoice_service)
