"""Exception taxonomy for billing, metering and aggregation."""

from __future__ import annotations


class RentLedgerError(Exception):
    pass


class InvalidMeterReading(RentLedgerError, ValueError):
    """A meter would run backward (new reading below the old one)."""

    def __init__(self, room_name: str, meter: str, old: int, new: int) -> None:
        self.room_name = room_name
        self.meter = meter
        self.old = old
        self.new = new
        super().__init__(f"Room {room_name!r}: new {meter} reading {new} is below the previous reading {old}")


class NothingToBill(RentLedgerError):
    """No staged reading and no explicit reading was supplied."""

    def __init__(self, room_name: str) -> None:
        self.room_name = room_name
        super().__init__(f"Room {room_name!r} has no staged or explicit reading to bill")


class CommitConflict(RentLedgerError):
    """The store refused a conditional write; the caller should retry from a fresh read."""


class BulkInvoiceFailed(RentLedgerError):
    def __init__(self, attempted: int, cause: BaseException) -> None:
        self.attempted = attempted
        self.committed = 0
        self.cause = cause
        super().__init__(f"Bulk invoicing of {attempted} room(s) failed, nothing committed: {cause}")


class AggregationInputError(RentLedgerError, ValueError):
    """A record carries a period that cannot be normalized."""


class RoomNotFound(RentLedgerError, LookupError):
    def __init__(self, room_id: int) -> None:
        self.room_id = room_id
        super().__init__(f"Room {room_id} not found")
