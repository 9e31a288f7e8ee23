from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from rentledger.models.period import Period


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class Phase(str, Enum):
    GROWTH = "growth"
    STABLE = "stable"
    DECLINE = "decline"
    VOLATILE = "volatile"
    RISK = "risk"


class Quality(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


class MonthlyBucket(BaseModel):
    period: Period
    occupancy_rate: int = 0
    total_billed: int = 0
    collected_revenue: int = 0
    previous_revenue: int = 0
    expense: int = 0
    profit: int = 0
    profit_margin: float = 0.0
    electricity_usage: int = 0
    electricity_cost: int = 0
    water_usage: int = 0
    water_cost: int = 0
    electricity_supplier_bill: int = 0
    water_supplier_bill: int = 0

    @property
    def electricity_margin(self) -> int:
        return self.electricity_cost - self.electricity_supplier_bill

    @property
    def water_margin(self) -> int:
        return self.water_cost - self.water_supplier_bill


class SeriesPoint(BaseModel):
    period: Period
    revenue: int = 0
    expense: int = 0

    @property
    def label(self) -> str:
        return f"T{self.period.month}"


class ForecastAnalysis(BaseModel):
    phase: Phase
    quality: Quality
    volatility: int  # coefficient of variation, percent
    explanation: str


class ForecastResult(BaseModel):
    predicted_revenue: int = 0
    predicted_expense: int = 0
    revenue_growth_percent: float = 0.0
    expense_growth_percent: float = 0.0
    trend: Trend = Trend.STABLE
    confidence: int = 10
    analysis: ForecastAnalysis
