from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from rentledger.constants import VN_TZ, format_period
from rentledger.errors import AggregationInputError


def _to_int(raw: object, name: str) -> int:
    if isinstance(raw, bool):
        raise AggregationInputError(f"Invalid {name}: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not raw.is_integer():
            raise AggregationInputError(f"Invalid {name}: {raw!r}")
        return int(raw)
    if isinstance(raw, str):
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise AggregationInputError(f"Invalid {name}: {raw!r}") from None
            if not value.is_integer():
                raise AggregationInputError(f"Invalid {name}: {raw!r}")
            return int(value)
    raise AggregationInputError(f"Invalid {name}: {raw!r}")


class Period(BaseModel):
    """A (month, year) billing bucket."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1)

    @classmethod
    def parse(cls, raw_month: object, raw_year: object) -> Period:
        """Normalize month/year that may arrive as strings, floats or ints.

        Raises AggregationInputError for anything that is not a whole number
        or falls outside the calendar.
        """
        month = _to_int(raw_month, "month")
        year = _to_int(raw_year, "year")
        if not 1 <= month <= 12:
            raise AggregationInputError(f"Month out of range: {raw_month!r}")
        if year < 1:
            raise AggregationInputError(f"Year out of range: {raw_year!r}")
        return cls(month=month, year=year)

    @classmethod
    def from_date(cls, value: str | date | datetime) -> Period:
        if isinstance(value, str):
            try:
                value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                raise AggregationInputError(f"Invalid date: {value!r}") from None
        return cls(month=value.month, year=value.year)

    @classmethod
    def current(cls) -> Period:
        return cls.from_date(datetime.now(VN_TZ))

    def previous(self) -> Period:
        if self.month == 1:
            return Period(month=12, year=self.year - 1)
        return Period(month=self.month - 1, year=self.year)

    def next(self) -> Period:
        if self.month == 12:
            return Period(month=1, year=self.year + 1)
        return Period(month=self.month + 1, year=self.year)

    @property
    def label(self) -> str:
        return format_period(self.month, self.year)

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.month)
