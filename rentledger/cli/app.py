import questionary
from rich.console import Console

from rentledger.cli.dashboard_menu import dashboard_menu
from rentledger.cli.expense_menu import expenses_menu
from rentledger.cli.invoice_menu import invoices_menu
from rentledger.cli.room_menu import rooms_menu, stage_readings_menu
from rentledger.cli.settings_menu import tariff_menu
from rentledger.repositories.factory import (
    get_expense_repository,
    get_invoice_repository,
    get_room_repository,
    get_tariff_repository,
    get_unit_of_work,
)
from rentledger.services.dashboard_service import DashboardService
from rentledger.services.expense_service import ExpenseService
from rentledger.services.invoice_service import InvoiceService
from rentledger.services.meter_service import MeterService
from rentledger.services.room_service import RoomService
from rentledger.services.tariff_service import TariffService

console = Console()


class Services:
    def __init__(self) -> None:
        room_repo = get_room_repository()
        invoice_repo = get_invoice_repository()
        expense_repo = get_expense_repository()
        self.rooms = RoomService(room_repo)
        self.meters = MeterService(room_repo)
        self.tariff = TariffService(get_tariff_repository())
        self.invoices = InvoiceService(get_unit_of_work(), invoice_repo, room_repo, self.tariff)
        self.expenses = ExpenseService(expense_repo)
        self.dashboard = DashboardService(room_repo, invoice_repo, expense_repo)


def main_menu() -> None:
    services = Services()

    console.print()
    console.print("[bold]Rent Ledger[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main menu",
            choices=[
                "Rooms",
                "Record meter readings",
                "Invoices",
                "Expenses",
                "Dashboard",
                "Tariff settings",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Bye![/bold]")
            break
        elif choice == "Rooms":
            rooms_menu(services.rooms, services.meters)
        elif choice == "Record meter readings":
            stage_readings_menu(services.rooms, services.meters)
        elif choice == "Invoices":
            invoices_menu(services.rooms, services.invoices)
        elif choice == "Expenses":
            expenses_menu(services.expenses)
        elif choice == "Dashboard":
            dashboard_menu(services.dashboard)
        elif choice == "Tariff settings":
            tariff_menu(services.tariff)
