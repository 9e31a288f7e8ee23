from unittest.mock import MagicMock, patch

from rentledger.models.analytics import MonthlyBucket, SeriesPoint
from rentledger.models.period import Period
from rentledger.services.forecast import forecast

MARCH = Period(month=3, year=2025)


class TestDashboardMenu:
    @patch("rentledger.cli.dashboard_menu.ask_period", return_value=None)
    def test_cancel(self, mock_period):
        from rentledger.cli.dashboard_menu import dashboard_menu

        mock_service = MagicMock()
        dashboard_menu(mock_service)
        mock_service.period_summary.assert_not_called()

    @patch("rentledger.cli.dashboard_menu.ask_period", return_value=MARCH)
    def test_renders_summary_history_and_forecast(self, mock_period):
        from rentledger.cli.dashboard_menu import dashboard_menu

        mock_service = MagicMock()
        mock_service.period_summary.return_value = MonthlyBucket(period=MARCH, collected_revenue=2_870_000)
        mock_service.history.return_value = [SeriesPoint(period=MARCH, revenue=2_870_000)]
        mock_service.revenue_forecast.return_value = forecast([(2_870_000, 1_500_000)])

        dashboard_menu(mock_service)

        mock_service.period_summary.assert_called_once_with(MARCH)
        mock_service.history.assert_called_once_with(MARCH)
        mock_service.revenue_forecast.assert_called_once_with(MARCH)
