"""Roll invoices and expenses into monthly buckets.

Every function here takes an explicit snapshot and recomputes from scratch;
nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from rentledger.errors import AggregationInputError
from rentledger.models.analytics import MonthlyBucket, SeriesPoint
from rentledger.models.expense import Expense
from rentledger.models.invoice import Invoice
from rentledger.models.period import Period
from rentledger.models.room import Room, RoomStatus
from rentledger.settings import settings

logger = logging.getLogger(__name__)


def invoice_period(invoice: Invoice) -> Period:
    return Period.parse(invoice.month, invoice.year)


def expense_period(expense: Expense) -> Period:
    """Explicit month/year when present, else the calendar month of ``date``."""
    if expense.month not in (None, "") and expense.year not in (None, ""):
        return Period.parse(expense.month, expense.year)
    if expense.date:
        return Period.from_date(expense.date)
    raise AggregationInputError(f"Expense {expense.id} has neither a period nor a date")


def _invoices_in(invoices: Iterable[Invoice], period: Period) -> list[Invoice]:
    result = []
    for invoice in invoices:
        try:
            if invoice_period(invoice) == period:
                result.append(invoice)
        except AggregationInputError as exc:
            logger.warning("Skipping invoice %s: %s", invoice.id, exc)
    return result


def _expenses_in(expenses: Iterable[Expense], period: Period) -> list[Expense]:
    result = []
    for expense in expenses:
        try:
            if expense_period(expense) == period:
                result.append(expense)
        except AggregationInputError as exc:
            logger.warning("Skipping expense %s: %s", expense.id, exc)
    return result


def occupancy_rate(rooms: list[Room]) -> int:
    if not rooms:
        return 0
    occupied = sum(1 for room in rooms if room.status == RoomStatus.OCCUPIED)
    return round(occupied / len(rooms) * 100)


def aggregate(
    rooms: list[Room],
    invoices: list[Invoice],
    expenses: list[Expense],
    period: Period,
    electricity_category: str | None = None,
    water_category: str | None = None,
) -> MonthlyBucket:
    """Build the dashboard bucket for ``period``.

    Billed revenue counts every invoice of the period, collected revenue only
    paid ones. Utility usage and cost are summed from the invoice snapshots,
    never recomputed from the current tariff. Records whose period cannot be
    normalized are logged and skipped.
    """
    electricity_category = (electricity_category or settings.electricity_supplier_category).casefold()
    water_category = (water_category or settings.water_supplier_category).casefold()

    period_invoices = _invoices_in(invoices, period)
    period_expenses = _expenses_in(expenses, period)
    previous_invoices = _invoices_in(invoices, period.previous())

    total_billed = sum(invoice.total for invoice in period_invoices)
    collected = sum(invoice.total for invoice in period_invoices if invoice.paid)
    previous_revenue = sum(invoice.total for invoice in previous_invoices if invoice.paid)
    expense = sum(item.amount for item in period_expenses)
    profit = collected - expense

    return MonthlyBucket(
        period=period,
        occupancy_rate=occupancy_rate(rooms),
        total_billed=total_billed,
        collected_revenue=collected,
        previous_revenue=previous_revenue,
        expense=expense,
        profit=profit,
        profit_margin=profit / collected * 100 if collected > 0 else 0.0,
        electricity_usage=sum(invoice.electricity_usage for invoice in period_invoices),
        electricity_cost=sum(invoice.electricity_cost for invoice in period_invoices),
        water_usage=sum(invoice.water_usage for invoice in period_invoices),
        water_cost=sum(invoice.water_cost for invoice in period_invoices),
        electricity_supplier_bill=sum(
            item.amount for item in period_expenses if item.category.casefold() == electricity_category
        ),
        water_supplier_bill=sum(item.amount for item in period_expenses if item.category.casefold() == water_category),
    )


def build_history(
    invoices: list[Invoice],
    expenses: list[Expense],
    end_period: Period,
    months: int | None = None,
) -> list[SeriesPoint]:
    """Collected revenue and expense for ``months`` consecutive periods ending at ``end_period``, oldest first."""
    months = months or settings.history_months

    revenue: dict[Period, int] = {}
    for invoice in invoices:
        if not invoice.paid:
            continue
        try:
            key = invoice_period(invoice)
        except AggregationInputError as exc:
            logger.warning("Skipping invoice %s: %s", invoice.id, exc)
            continue
        revenue[key] = revenue.get(key, 0) + invoice.total

    spent: dict[Period, int] = {}
    for expense in expenses:
        try:
            key = expense_period(expense)
        except AggregationInputError as exc:
            logger.warning("Skipping expense %s: %s", expense.id, exc)
            continue
        spent[key] = spent.get(key, 0) + expense.amount

    points: list[SeriesPoint] = []
    period = end_period
    for _ in range(months):
        points.append(SeriesPoint(period=period, revenue=revenue.get(period, 0), expense=spent.get(period, 0)))
        period = period.previous()
    points.reverse()
    return points
