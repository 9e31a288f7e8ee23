from __future__ import annotations

from rich.console import Console
from rich.table import Table

from rentledger.cli.prompts import ask_period
from rentledger.models import format_vnd
from rentledger.models.analytics import ForecastResult, MonthlyBucket, Trend
from rentledger.services.dashboard_service import DashboardService

console = Console()

TREND_ARROWS = {Trend.UP: "▲", Trend.DOWN: "▼", Trend.STABLE: "■"}


def _show_summary(bucket: MonthlyBucket) -> None:
    table = Table(title=f"Summary {bucket.period.label}")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Occupancy", f"{bucket.occupancy_rate}%")
    table.add_row("Billed", format_vnd(bucket.total_billed))
    table.add_row("Collected", format_vnd(bucket.collected_revenue))
    table.add_row("Collected last month", format_vnd(bucket.previous_revenue))
    table.add_row("Expenses", format_vnd(bucket.expense))
    table.add_row("Profit", format_vnd(bucket.profit))
    table.add_row("Profit margin", f"{bucket.profit_margin:.1f}%")
    table.add_row("Electricity", f"{bucket.electricity_usage} kWh / {format_vnd(bucket.electricity_cost)}")
    table.add_row("Paid to electricity supplier", format_vnd(bucket.electricity_supplier_bill))
    table.add_row("Electricity margin", format_vnd(bucket.electricity_margin))
    table.add_row("Water", f"{bucket.water_usage} m³ / {format_vnd(bucket.water_cost)}")
    table.add_row("Paid to water supplier", format_vnd(bucket.water_supplier_bill))
    table.add_row("Water margin", format_vnd(bucket.water_margin))
    console.print(table)


def _show_forecast(result: ForecastResult) -> None:
    table = Table(title="Next month forecast")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Revenue", f"{format_vnd(result.predicted_revenue)} ({result.revenue_growth_percent:+.1f}%)")
    table.add_row("Expenses", f"{format_vnd(result.predicted_expense)} ({result.expense_growth_percent:+.1f}%)")
    table.add_row("Trend", f"{TREND_ARROWS[result.trend]} {result.trend.value}")
    table.add_row("Confidence", f"{result.confidence}%")
    table.add_row("Phase", result.analysis.phase.value)
    table.add_row("Quality", result.analysis.quality.value)
    table.add_row("Volatility", f"{result.analysis.volatility}%")
    console.print(table)
    console.print(f"  [italic]{result.analysis.explanation}[/italic]")


def dashboard_menu(dashboard_service: DashboardService) -> None:
    period = ask_period("Period (MM/YYYY):")
    if period is None:
        return
    console.print()
    _show_summary(dashboard_service.period_summary(period))

    history = dashboard_service.history(period)
    chart = Table(title="History")
    chart.add_column("Month")
    chart.add_column("Revenue", justify="right")
    chart.add_column("Expenses", justify="right")
    for point in history:
        chart.add_row(point.label, format_vnd(point.revenue), format_vnd(point.expense))
    console.print(chart)

    _show_forecast(dashboard_service.revenue_forecast(period))
