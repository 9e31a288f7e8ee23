from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class MeterReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    electricity: int = Field(ge=0)
    water: int = Field(ge=0)


class LiveMeter(BaseModel):
    """Only the last-billed reading exists."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["live"] = "live"
    current: MeterReading


class StagedMeter(BaseModel):
    """A reading has been captured but not billed yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["staged"] = "staged"
    current: MeterReading
    pending: MeterReading


MeterState = Annotated[Union[LiveMeter, StagedMeter], Field(discriminator="kind")]


class Room(BaseModel):
    id: int | None = None
    uuid: str = ""
    name: str
    room_type: str = ""
    status: RoomStatus = RoomStatus.AVAILABLE
    rent: int = 0  # dong per month
    deposit: int = 0
    meter: MeterState = LiveMeter(current=MeterReading(electricity=0, water=0))
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def current(self) -> MeterReading:
        return self.meter.current

    @property
    def pending(self) -> MeterReading | None:
        if isinstance(self.meter, StagedMeter):
            return self.meter.pending
        return None

    @property
    def is_staged(self) -> bool:
        return isinstance(self.meter, StagedMeter)

    @property
    def is_occupied(self) -> bool:
        return self.status == RoomStatus.OCCUPIED
