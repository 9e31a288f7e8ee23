from __future__ import annotations

import logging

from rentledger.errors import RoomNotFound
from rentledger.models.room import LiveMeter, MeterReading, Room, RoomStatus
from rentledger.repositories.base import RoomRepository

logger = logging.getLogger(__name__)


class RoomService:
    def __init__(self, repo: RoomRepository) -> None:
        self.repo = repo

    def create_room(
        self,
        name: str,
        rent: int,
        room_type: str = "",
        deposit: int = 0,
        electricity_meter: int = 0,
        water_meter: int = 0,
    ) -> Room:
        if not name.strip():
            raise ValueError("Room name is required")
        if rent < 0 or deposit < 0:
            raise ValueError("Rent and deposit cannot be negative")
        room = Room(
            name=name.strip(),
            room_type=room_type,
            rent=rent,
            deposit=deposit,
            meter=LiveMeter(current=MeterReading(electricity=electricity_meter, water=water_meter)),
        )
        result = self.repo.create(room)
        logger.info("Room created: id=%s, name=%s", result.id, result.name)
        return result

    def list_rooms(self) -> list[Room]:
        result = self.repo.list_all()
        logger.debug("Listed %d rooms", len(result))
        return result

    def list_occupied(self) -> list[Room]:
        return [room for room in self.repo.list_all() if room.is_occupied]

    def get_room(self, room_id: int) -> Room:
        room = self.repo.get_by_id(room_id)
        logger.debug("get_room id=%s found=%s", room_id, room is not None)
        if room is None:
            raise RoomNotFound(room_id)
        return room

    def update_room(self, room: Room) -> Room:
        result = self.repo.update(room)
        logger.info("Room updated: id=%s, name=%s", result.id, result.name)
        return result

    def _set_status(self, room: Room, status: RoomStatus) -> Room:
        if room.id is None:
            raise ValueError("Cannot change status of a room without an id")
        self.repo.update_status(room.id, status)
        logger.info("Room %s status: %s -> %s", room.name, room.status.value, status.value)
        return room.model_copy(update={"status": status})

    def check_in(self, room: Room) -> Room:
        if room.status != RoomStatus.AVAILABLE:
            logger.warning("Check-in refused: room %s is %s", room.name, room.status.value)
            raise ValueError(f"Room {room.name} is not available")
        return self._set_status(room, RoomStatus.OCCUPIED)

    def check_out(self, room: Room) -> Room:
        if room.status != RoomStatus.OCCUPIED:
            logger.warning("Check-out refused: room %s is %s", room.name, room.status.value)
            raise ValueError(f"Room {room.name} is not occupied")
        return self._set_status(room, RoomStatus.AVAILABLE)

    def set_maintenance(self, room: Room, on: bool) -> Room:
        if on and room.status == RoomStatus.OCCUPIED:
            raise ValueError(f"Room {room.name} is occupied")
        return self._set_status(room, RoomStatus.MAINTENANCE if on else RoomStatus.AVAILABLE)
