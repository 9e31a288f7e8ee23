from __future__ import annotations

from datetime import datetime

import questionary
from rich.console import Console
from rich.table import Table

from rentledger.cli.prompts import ask_amount, ask_period
from rentledger.constants import VN_TZ
from rentledger.errors import AggregationInputError
from rentledger.models import format_vnd
from rentledger.models.expense import Expense
from rentledger.services.expense_service import ExpenseService
from rentledger.settings import settings

console = Console()


def create_expense_menu(expense_service: ExpenseService) -> None:
    console.print()
    console.print("[bold]New Expense[/bold]", style="cyan")

    title = questionary.text("Title:").ask()
    if not title:
        console.print("[yellow]Cancelled.[/yellow]")
        return
    amount = ask_amount("Amount:", allow_zero=False)
    if amount is None:
        return
    category = questionary.select(
        "Category:",
        choices=[settings.electricity_supplier_category, settings.water_supplier_category, "Repair", "Other"],
    ).ask()
    today = datetime.now(VN_TZ).date().isoformat()
    date = questionary.text("Date (YYYY-MM-DD):", default=today).ask() or today
    description = questionary.text("Description (optional):").ask() or ""

    try:
        expense = expense_service.save_expense(
            Expense(title=title, amount=amount, category=category or "Other", date=date, description=description)
        )
    except (ValueError, AggregationInputError) as exc:
        console.print(f"[red]{exc}[/red]")
        return
    console.print(f"[green]Expense saved for T{expense.month} / {expense.year}.[/green]")


def list_expenses_menu(expense_service: ExpenseService) -> None:
    period = ask_period("Period to list (MM/YYYY):")
    if period is None:
        return
    expenses = expense_service.list_expenses(period)
    if not expenses:
        console.print("[yellow]No expenses for this period.[/yellow]")
        return

    table = Table(title=f"Expenses {period.label}")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for expense in expenses:
        table.add_row(expense.date or "", expense.title, expense.category, format_vnd(expense.amount))
    console.print(table)
    console.print(f"  [bold]Total: {format_vnd(sum(e.amount for e in expenses))}[/bold]")


def expenses_menu(expense_service: ExpenseService) -> None:
    while True:
        choice = questionary.select(
            "Expenses",
            choices=["New expense", "List expenses", "Fix legacy periods", "Back"],
        ).ask()
        if choice is None or choice == "Back":
            return
        if choice == "New expense":
            create_expense_menu(expense_service)
        elif choice == "List expenses":
            list_expenses_menu(expense_service)
        elif choice == "Fix legacy periods":
            fixed = expense_service.normalize_legacy()
            console.print(f"[green]{fixed} expense(s) updated.[/green]")
