import pytest

from rentledger.models.analytics import Phase, Quality, SeriesPoint, Trend
from rentledger.models.period import Period
from rentledger.services.forecast import (
    _round_half_up,
    forecast,
    forecast_history,
    linear_regression,
    trend_weight,
    volatility,
    weighted_average,
)


class TestHelpers:
    def test_weighted_average_favours_recent(self):
        assert weighted_average([1, 2, 3]) == pytest.approx(14 / 6)

    def test_weighted_average_short(self):
        assert weighted_average([]) == 0.0
        assert weighted_average([7]) == 7.0

    def test_linear_regression_exact_line(self):
        regression = linear_regression([2, 4, 6])
        assert regression.slope == pytest.approx(2.0)
        assert regression.intercept == pytest.approx(2.0)
        assert regression.r2 == pytest.approx(1.0)

    def test_linear_regression_flat(self):
        regression = linear_regression([5, 5, 5])
        assert regression.slope == 0
        assert regression.r2 == 0.0

    def test_volatility(self):
        assert volatility([1000, 1600, 900, 1700]) == pytest.approx(0.272, abs=1e-3)
        assert volatility([10]) == 0.0
        assert volatility([0, 0]) == 0.0

    @pytest.mark.parametrize("n, weight", [(0, 0.0), (1, 0.0), (2, 0.2), (3, 0.2), (4, 0.4), (12, 0.4)])
    def test_trend_weight(self, n, weight):
        assert trend_weight(n) == weight

    def test_round_half_up(self):
        assert _round_half_up(2.5) == 3
        assert _round_half_up(1.25, 1) == 1.3


class TestForecast:
    def test_empty_series(self):
        result = forecast([])
        assert result.predicted_revenue == 0
        assert result.predicted_expense == 0
        assert result.confidence == 10
        assert result.trend == Trend.STABLE
        assert result.analysis.phase == Phase.STABLE

    def test_single_point(self):
        result = forecast([(1000, 500)])
        assert result.predicted_revenue == 1000
        assert result.predicted_expense == 500
        assert result.trend == Trend.STABLE
        assert result.confidence == 35
        assert "Not enough history" in result.analysis.explanation

    def test_flat_series(self):
        result = forecast([(1000, 400)] * 3)
        assert result.predicted_revenue == 1000
        assert result.revenue_growth_percent == 0.0
        assert result.trend == Trend.STABLE
        assert result.analysis.volatility == 0
        assert result.confidence == 65

    def test_rising_series(self):
        result = forecast([(1000, 500), (1100, 500), (1200, 500), (1201, 500)])
        assert result.predicted_revenue == 1217
        assert result.revenue_growth_percent == 1.3
        assert result.trend == Trend.UP
        assert result.confidence == 89
        assert result.analysis.volatility == 7
        assert result.analysis.phase == Phase.STABLE
        assert result.analysis.quality == Quality.HEALTHY

    def test_falling_series(self):
        result = forecast([(1000, 500), (900, 500), (800, 500), (799, 500)])
        assert result.predicted_revenue == 783
        assert result.revenue_growth_percent == -2.0
        assert result.trend == Trend.DOWN
        assert "trending down" in result.analysis.explanation

    def test_volatile_series(self):
        result = forecast([(1000, 300), (1600, 300), (900, 300), (1700, 300)])
        assert result.analysis.phase == Phase.VOLATILE
        assert result.analysis.volatility == 27
        assert "swing" in result.analysis.explanation

    def test_steady_growth_beats_noisy_series_on_confidence(self):
        steady = forecast([(1000, 500), (1100, 500), (1200, 500), (1201, 500)])
        noisy = forecast([(1000, 500), (1600, 500), (900, 500), (1700, 500)])
        assert steady.trend == Trend.UP
        assert noisy.confidence == 39
        assert steady.confidence > noisy.confidence

    def test_zero_last_revenue_is_risk(self):
        result = forecast([(1000, 100), (0, 100)])
        assert result.analysis.phase == Phase.RISK

    def test_expense_above_revenue_is_critical(self):
        result = forecast([(1000, 1200)])
        assert result.analysis.quality == Quality.CRITICAL

    def test_expenses_outgrowing_revenue_is_warning(self):
        result = forecast([(1000, 100), (1100, 300), (1200, 400), (1201, 410)])
        assert result.predicted_expense == 436
        assert result.analysis.quality == Quality.WARNING

    def test_prediction_never_negative(self):
        result = forecast([(3000, 900), (2000, 600), (1000, 300), (0, 0)])
        assert result.predicted_revenue >= 0
        assert result.predicted_expense >= 0

    @pytest.mark.parametrize(
        "series",
        [
            [(5, 5)],
            [(1, 0), (1_000_000, 0)],
            [(1000, 0), (1600, 0), (900, 0), (1700, 0), (300, 0), (2500, 0)],
            [(100_000, 50_000)] * 12,
        ],
    )
    def test_confidence_bounds(self, series):
        assert 10 <= forecast(series).confidence <= 95


class TestForecastHistory:
    def test_uses_series_points(self):
        points = [
            SeriesPoint(period=Period(month=1, year=2025), revenue=1000, expense=500),
            SeriesPoint(period=Period(month=2, year=2025), revenue=1000, expense=500),
        ]
        result = forecast_history(points)
        assert result.predicted_revenue == 1000
        assert result.predicted_expense == 500
