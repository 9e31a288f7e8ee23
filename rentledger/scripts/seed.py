"""Seed the database with demo data for local development.

Usage:
    python -m rentledger.scripts.seed
"""

from __future__ import annotations

import random
from datetime import date

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from rentledger.db import get_connection, initialize_db
from rentledger.logging import configure_logging, reconfigure
from rentledger.models import format_vnd
from rentledger.models.expense import Expense
from rentledger.models.period import Period
from rentledger.models.room import Room
from rentledger.models.tariff import TariffSettings
from rentledger.repositories.factory import (
    get_expense_repository,
    get_invoice_repository,
    get_room_repository,
    get_tariff_repository,
    get_unit_of_work,
)
from rentledger.services.expense_service import ExpenseService
from rentledger.services.invoice_service import InvoiceService
from rentledger.services.meter_service import MeterService
from rentledger.services.room_service import RoomService
from rentledger.services.tariff_service import TariffService
from rentledger.settings import settings

console = Console()
fake = Faker("vi_VN")

HISTORY_MONTHS = 6

TABLES_TO_CLEAR = ["invoices", "expenses", "rooms", "tariff_settings"]

# (name, type, monthly rent in dong)
ROOM_TEMPLATES = [
    ("P101", "Standard", 2_500_000),
    ("P102", "Standard", 2_500_000),
    ("P103", "Balcony", 3_000_000),
    ("P201", "Standard", 2_600_000),
    ("P202", "Balcony", 3_200_000),
    ("P203", "Studio", 3_800_000),
    ("P301", "Studio", 4_000_000),
    ("P302", "Attic", 2_200_000),
]

DEMO_TARIFF = TariffSettings(electricity_rate=3_500, water_rate=15_000, internet_fee=100_000, trash_fee=20_000)


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()


def _create_rooms(room_service: RoomService) -> list[Room]:
    console.print("[cyan]Creating rooms...[/cyan]")
    rooms = []
    for name, room_type, rent in ROOM_TEMPLATES:
        room = room_service.create_room(
            name,
            rent,
            room_type=room_type,
            deposit=rent,
            electricity_meter=random.randint(500, 3000),
            water_meter=random.randint(50, 300),
        )
        if random.random() > 0.2:
            room = room_service.check_in(room)
        rooms.append(room)
    console.print(f"[green]{len(rooms)} rooms created.[/green]\n")
    return rooms


def _bill_history(
    room_service: RoomService,
    meter_service: MeterService,
    invoice_service: InvoiceService,
    expense_service: ExpenseService,
) -> None:
    console.print("[cyan]Billing history...[/cyan]")
    table = Table(title="Months billed")
    table.add_column("Period", style="bold")
    table.add_column("Invoices", justify="right")
    table.add_column("Collected", justify="right")
    table.add_column("Expenses", justify="right")

    period = Period.current()
    periods = []
    for _ in range(HISTORY_MONTHS):
        period = period.previous()
        periods.append(period)
    periods.reverse()

    for index, period in enumerate(periods):
        for room in room_service.list_occupied():
            meter_service.stage_reading(
                room,
                room.current.electricity + random.randint(60, 250),
                room.current.water + random.randint(3, 15),
            )
        result = invoice_service.bill_all_occupied(period)

        collected = 0
        recent = index >= len(periods) - 1
        for invoice in result.invoices:
            if not recent or random.random() > 0.5:
                invoice_service.set_paid(invoice, True)
                collected += invoice.total

        spent = 0
        day = date(period.year, period.month, random.randint(1, 28)).isoformat()
        for title, category, amount in [
            ("Electricity bill", settings.electricity_supplier_category, random.randint(2_000_000, 4_000_000)),
            ("Water bill", settings.water_supplier_category, random.randint(500_000, 1_200_000)),
        ]:
            expense_service.save_expense(Expense(title=title, category=category, amount=amount, date=day))
            spent += amount
        if random.random() > 0.6:
            amount = random.randint(200_000, 2_000_000)
            expense_service.save_expense(
                Expense(title=fake.sentence(nb_words=3), category="Repair", amount=amount, date=day)
            )
            spent += amount

        table.add_row(period.label, str(result.count), format_vnd(collected), format_vnd(spent))

    console.print(table)


def main() -> None:
    configure_logging()
    initialize_db()
    reconfigure()

    conn = get_connection()
    _clear_all(conn)

    room_repo = get_room_repository()
    room_service = RoomService(room_repo)
    meter_service = MeterService(room_repo)
    tariff_service = TariffService(get_tariff_repository())
    invoice_service = InvoiceService(get_unit_of_work(), get_invoice_repository(), room_repo, tariff_service)
    expense_service = ExpenseService(get_expense_repository())

    tariff_service.update_settings(DEMO_TARIFF)
    _create_rooms(room_service)
    _bill_history(room_service, meter_service, invoice_service, expense_service)

    console.print("\n[bold green]Seed complete.[/bold green]")


if __name__ == "__main__":
    main()
