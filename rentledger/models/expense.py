from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Expense(BaseModel):
    id: int | None = None
    uuid: str = ""
    title: str = ""
    amount: int = 0
    category: str = ""
    date: str | None = None  # ISO date the money was actually spent
    # Accounting period; older records may lack it or carry it as text.
    month: int | str | None = None
    year: int | str | None = None
    description: str = ""
    created_at: datetime | None = None
