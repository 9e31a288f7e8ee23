from __future__ import annotations

import logging

from rentledger.models.analytics import ForecastResult, MonthlyBucket, SeriesPoint
from rentledger.models.period import Period
from rentledger.repositories.base import ExpenseRepository, InvoiceRepository, RoomRepository
from rentledger.services.aggregation import aggregate, build_history
from rentledger.services.forecast import forecast_history

logger = logging.getLogger(__name__)


class DashboardService:
    """Loads a fresh snapshot from the stores for every call."""

    def __init__(
        self,
        room_repo: RoomRepository,
        invoice_repo: InvoiceRepository,
        expense_repo: ExpenseRepository,
    ) -> None:
        self.room_repo = room_repo
        self.invoice_repo = invoice_repo
        self.expense_repo = expense_repo

    def period_summary(self, period: Period) -> MonthlyBucket:
        # Unfiltered reads: legacy expenses without a stored period are only
        # attributable after falling back to their date.
        bucket = aggregate(
            self.room_repo.list_all(),
            self.invoice_repo.list_all(),
            self.expense_repo.list_all(),
            period,
        )
        logger.debug(
            "Summary %s: billed=%d collected=%d expense=%d",
            period.label,
            bucket.total_billed,
            bucket.collected_revenue,
            bucket.expense,
        )
        return bucket

    def history(self, period: Period, months: int | None = None) -> list[SeriesPoint]:
        return build_history(self.invoice_repo.list_all(), self.expense_repo.list_all(), period, months)

    def revenue_forecast(self, period: Period, months: int | None = None) -> ForecastResult:
        points = self.history(period, months)
        result = forecast_history(points)
        logger.debug(
            "Forecast after %s over %d month(s): revenue=%d trend=%s confidence=%d",
            period.label,
            len(points),
            result.predicted_revenue,
            result.trend.value,
            result.confidence,
        )
        return result
