from __future__ import annotations

import logging

from rentledger.errors import RoomNotFound
from rentledger.models.room import LiveMeter, MeterReading, Room, StagedMeter
from rentledger.repositories.base import RoomRepository
from rentledger.services.tariff import check_meter_progress

logger = logging.getLogger(__name__)


def stage(room: Room, reading: MeterReading) -> Room:
    """Live/Staged -> Staged. The proposed reading may not be below ``current``."""
    check_meter_progress(room.name, "electricity", room.current.electricity, reading.electricity)
    check_meter_progress(room.name, "water", room.current.water, reading.water)
    return room.model_copy(update={"meter": StagedMeter(current=room.current, pending=reading)})


def discard(room: Room) -> Room:
    """Staged -> Live without touching ``current``."""
    return room.model_copy(update={"meter": LiveMeter(current=room.current)})


class MeterService:
    def __init__(self, room_repo: RoomRepository) -> None:
        self.room_repo = room_repo

    def stage_reading(self, room: Room, electricity: int, water: int) -> Room:
        """Stage a reading against the room's stored meter, not the caller's copy."""
        if room.id is None:
            raise ValueError("Cannot stage a reading for a room without an id")
        stored = self.room_repo.get_by_id(room.id)
        if stored is None:
            raise RoomNotFound(room.id)
        reading = MeterReading(electricity=electricity, water=water)
        staged = stage(stored, reading)
        self.room_repo.set_pending(room.id, reading)
        logger.info(
            "Reading staged: room=%s electricity=%d->%d water=%d->%d",
            stored.name,
            stored.current.electricity,
            electricity,
            stored.current.water,
            water,
        )
        return staged

    def discard_staging(self, room: Room) -> Room:
        if not room.is_staged:
            return room
        if room.id is None:
            raise ValueError("Cannot discard staging for a room without an id")
        self.room_repo.set_pending(room.id, None)
        logger.info("Staged reading discarded: room=%s", room.name)
        return discard(room)

    def list_staged(self) -> list[Room]:
        result = [room for room in self.room_repo.list_all() if room.is_staged]
        logger.debug("Listed %d staged rooms", len(result))
        return result
