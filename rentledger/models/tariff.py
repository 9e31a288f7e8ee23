from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class TariffSettings(BaseModel):
    electricity_rate: int = Field(default=0, ge=0)  # dong per kWh
    water_rate: int = Field(default=0, ge=0)  # dong per m³
    internet_fee: int = Field(default=0, ge=0)
    trash_fee: int = Field(default=0, ge=0)
    other_fees: int = Field(default=0, ge=0)
    updated_at: datetime | None = None


class UtilityCharges(BaseModel):
    """Itemized result of pricing one pair of meter readings."""

    electricity_usage: int
    electricity_cost: int
    water_usage: int
    water_cost: int
    rent: int = 0
    internet_fee: int = 0
    trash_fee: int = 0
    other_fees: int = 0
    total: int
