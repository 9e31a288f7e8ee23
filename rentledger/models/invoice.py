from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Invoice(BaseModel):
    """Snapshot of one room's charges for one period.

    Rates and costs are frozen at creation time; later tariff changes never
    touch an existing invoice.
    """

    id: int | None = None
    uuid: str = ""
    room_id: int
    room_name: str = ""
    # Legacy rows may carry the period as text; see Period.parse.
    month: int | str
    year: int | str
    rent_amount: int = 0
    old_electricity: int = 0
    new_electricity: int = 0
    electricity_rate: int = 0
    electricity_usage: int = 0
    electricity_cost: int = 0
    old_water: int = 0
    new_water: int = 0
    water_rate: int = 0
    water_usage: int = 0
    water_cost: int = 0
    internet_fee: int = 0
    trash_fee: int = 0
    other_fees: int = 0
    total: int = 0
    paid: bool = False
    created_at: datetime | None = None


class BulkResult(BaseModel):
    count: int = 0
    room_names: list[str] = []
    invoices: list[Invoice] = []
