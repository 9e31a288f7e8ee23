"""Next-period revenue/expense projection.

A hybrid of a linear-regression trend and a recency-weighted moving average,
blended more towards the trend as history grows. Every function is total:
short or flat series degrade to a flat prediction with low confidence.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple

from rentledger.models.analytics import ForecastAnalysis, ForecastResult, Phase, Quality, SeriesPoint, Trend

MIN_CONFIDENCE = 10
MAX_CONFIDENCE = 95
VOLATILE_THRESHOLD = 0.2

EXPLANATIONS = {
    "insufficient": "Not enough history to analyse a trend yet.",
    "volatile": "Figures swing strongly month to month; treat this forecast as high risk.",
    "growth": "Positive growth trend driven by recent increases.",
    "decline": "Warning: revenue has been trending down in recent months.",
    "stable": "Business is steady with no significant swings.",
}


class Regression(NamedTuple):
    slope: float
    intercept: float
    r2: float


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def weighted_average(values: Sequence[float]) -> float:
    """Month ``i`` (oldest = 0) weighs ``i + 1``."""
    n = len(values)
    if n == 0:
        return 0.0
    if n == 1:
        return float(values[0])
    weighted = sum(value * (i + 1) for i, value in enumerate(values))
    return weighted / (n * (n + 1) / 2)


def linear_regression(values: Sequence[float]) -> Regression:
    """Ordinary least squares of value against index."""
    n = len(values)
    if n < 2:
        return Regression(0.0, float(values[0]) if n else 0.0, 0.0)

    sum_x = sum(range(n))
    sum_y = sum(values)
    sum_xy = sum(i * value for i, value in enumerate(values))
    sum_x2 = sum(i * i for i in range(n))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return Regression(0.0, sum_y / n, 0.0)

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n

    mean = sum_y / n
    ss_total = sum((value - mean) ** 2 for value in values)
    ss_residual = sum((value - (slope * i + intercept)) ** 2 for i, value in enumerate(values))
    r2 = 0.0 if ss_total == 0 else 1 - ss_residual / ss_total
    return Regression(slope, intercept, r2)


def volatility(values: Sequence[float]) -> float:
    """Coefficient of variation (population standard deviation over mean)."""
    n = len(values)
    if n < 2:
        return 0.0
    mean = sum(values) / n
    if mean == 0:
        return 0.0
    variance = sum((value - mean) ** 2 for value in values) / n
    return math.sqrt(variance) / mean


def trend_weight(n: int) -> float:
    if n >= 4:
        return 0.4
    if n >= 2:
        return 0.2
    return 0.0


def _growth(predicted: int, last: float) -> float:
    return (predicted - last) / last * 100 if last > 0 else 0.0


def _predict(values: Sequence[float]) -> tuple[int, float, float]:
    """Return (prediction, regression extrapolation, weighted average)."""
    n = len(values)
    regression = linear_regression(values)
    trend_value = max(0.0, regression.slope * n + regression.intercept)
    average = weighted_average(values)
    weight = trend_weight(n)
    predicted = int(_round_half_up(trend_value * weight + average * (1 - weight)))
    return max(0, predicted), trend_value, average


def _confidence(revenues: Sequence[float], vol: float, trend_value: float, average: float) -> int:
    n = len(revenues)
    base = min(n * 15, 60)
    penalty = min(vol * 100, 40)
    r2_bonus = max(0.0, linear_regression(revenues).r2 * 30) if n >= 3 else 0.0

    diff = abs(trend_value - average) / average if average > 0 else 0.0
    if diff < 0.1:
        consistency = 20
    elif diff < 0.2:
        consistency = 10
    else:
        consistency = 0

    score = int(_round_half_up(base - penalty + r2_bonus + consistency))
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, score))


def _phase(n: int, last_revenue: float, vol: float, revenue_growth: float, trend: Trend) -> Phase:
    if last_revenue == 0 and n > 1:
        return Phase.RISK
    if vol > VOLATILE_THRESHOLD:
        return Phase.VOLATILE
    if revenue_growth > 5 and trend == Trend.UP:
        return Phase.GROWTH
    if revenue_growth < -5 and trend == Trend.DOWN:
        return Phase.DECLINE
    return Phase.STABLE


def _quality(last_revenue: float, last_expense: float, revenue_growth: float, expense_growth: float) -> Quality:
    if last_expense > last_revenue:
        return Quality.CRITICAL
    if revenue_growth > 0 and expense_growth >= revenue_growth * 1.5:
        return Quality.WARNING
    return Quality.HEALTHY


def _explanation(n: int, vol: float, revenue_growth: float, trend: Trend) -> str:
    if n < 2:
        return EXPLANATIONS["insufficient"]
    if vol > VOLATILE_THRESHOLD:
        return EXPLANATIONS["volatile"]
    if trend == Trend.UP and revenue_growth > 5:
        return EXPLANATIONS["growth"]
    if trend == Trend.DOWN:
        return EXPLANATIONS["decline"]
    return EXPLANATIONS["stable"]


def forecast(series: Sequence[tuple[float, float]]) -> ForecastResult:
    """Project next period from ``(revenue, expense)`` pairs, oldest first."""
    n = len(series)
    if n == 0:
        return ForecastResult(
            confidence=MIN_CONFIDENCE,
            analysis=ForecastAnalysis(
                phase=Phase.STABLE,
                quality=Quality.HEALTHY,
                volatility=0,
                explanation=EXPLANATIONS["insufficient"],
            ),
        )

    revenues = [float(revenue) for revenue, _ in series]
    expenses = [float(expense) for _, expense in series]

    predicted_revenue, revenue_trend, revenue_average = _predict(revenues)
    predicted_expense, _, _ = _predict(expenses)

    last_revenue = revenues[-1]
    last_expense = expenses[-1]
    revenue_growth = _growth(predicted_revenue, last_revenue)
    expense_growth = _growth(predicted_expense, last_expense)

    if revenue_growth > 1:
        trend = Trend.UP
    elif revenue_growth < -1:
        trend = Trend.DOWN
    else:
        trend = Trend.STABLE

    vol = volatility(revenues)

    return ForecastResult(
        predicted_revenue=predicted_revenue,
        predicted_expense=predicted_expense,
        revenue_growth_percent=_round_half_up(revenue_growth, 1),
        expense_growth_percent=_round_half_up(expense_growth, 1),
        trend=trend,
        confidence=_confidence(revenues, vol, revenue_trend, revenue_average),
        analysis=ForecastAnalysis(
            phase=_phase(n, last_revenue, vol, revenue_growth, trend),
            quality=_quality(last_revenue, last_expense, revenue_growth, expense_growth),
            volatility=int(_round_half_up(vol * 100)),
            explanation=_explanation(n, vol, revenue_growth, trend),
        ),
    )


def forecast_history(points: Sequence[SeriesPoint]) -> ForecastResult:
    return forecast([(point.revenue, point.expense) for point in points])
