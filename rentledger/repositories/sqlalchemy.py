from __future__ import annotations

from datetime import datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from rentledger.constants import VN_TZ
from rentledger.errors import CommitConflict, RoomNotFound
from rentledger.models.expense import Expense
from rentledger.models.invoice import Invoice
from rentledger.models.period import Period
from rentledger.models.room import LiveMeter, MeterReading, Room, RoomStatus, StagedMeter
from rentledger.models.tariff import TariffSettings
from rentledger.repositories.base import (
    ExpenseRepository,
    InvoiceRepository,
    RoomRepository,
    TariffRepository,
    Transaction,
    UnitOfWork,
)


def _now() -> datetime:
    return datetime.now(VN_TZ)


class SQLAlchemyRoomRepository(RoomRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_room(row: RowMapping) -> Room:
        current = MeterReading(electricity=row["electricity_meter"], water=row["water_meter"])
        if row["pending_electricity"] is not None and row["pending_water"] is not None:
            meter: LiveMeter | StagedMeter = StagedMeter(
                current=current,
                pending=MeterReading(electricity=row["pending_electricity"], water=row["pending_water"]),
            )
        else:
            meter = LiveMeter(current=current)
        return Room(
            id=row["id"],
            uuid=row["uuid"],
            name=row["name"],
            room_type=row["room_type"],
            status=RoomStatus(row["status"]),
            rent=row["rent"],
            deposit=row["deposit"],
            meter=meter,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def create(self, room: Room) -> Room:
        now = _now()
        pending = room.pending
        result = self.conn.execute(
            text(
                "INSERT INTO rooms (uuid, name, room_type, status, rent, deposit, electricity_meter, water_meter, "
                "pending_electricity, pending_water, created_at, updated_at) "
                "VALUES (:uuid, :name, :room_type, :status, :rent, :deposit, :electricity_meter, :water_meter, "
                ":pending_electricity, :pending_water, :created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "name": room.name,
                "room_type": room.room_type,
                "status": room.status.value,
                "rent": room.rent,
                "deposit": room.deposit,
                "electricity_meter": room.current.electricity,
                "water_meter": room.current.water,
                "pending_electricity": pending.electricity if pending else None,
                "pending_water": pending.water if pending else None,
                "created_at": now,
                "updated_at": now,
            },
        )
        room_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(room_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve room after create (id={room_id})")
        return created

    def get_by_id(self, room_id: int) -> Room | None:
        row = self.conn.execute(text("SELECT * FROM rooms WHERE id = :id"), {"id": room_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_room(row)

    def get_by_uuid(self, uuid: str) -> Room | None:
        row = (
            self.conn.execute(text("SELECT * FROM rooms WHERE uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_room(row)

    def list_all(self) -> list[Room]:
        rows = self.conn.execute(text("SELECT * FROM rooms ORDER BY name")).mappings().fetchall()
        return [self._row_to_room(row) for row in rows]

    def update(self, room: Room) -> Room:
        if room.id is None:
            raise ValueError("Cannot update room without an id")
        self.conn.execute(
            text(
                "UPDATE rooms SET name = :name, room_type = :room_type, status = :status, rent = :rent, "
                "deposit = :deposit, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "name": room.name,
                "room_type": room.room_type,
                "status": room.status.value,
                "rent": room.rent,
                "deposit": room.deposit,
                "updated_at": _now(),
                "id": room.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(room.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve room after update (id={room.id})")
        return result

    def update_status(self, room_id: int, status: RoomStatus) -> None:
        self.conn.execute(
            text("UPDATE rooms SET status = :status, updated_at = :updated_at WHERE id = :id"),
            {"status": status.value, "updated_at": _now(), "id": room_id},
        )
        self.conn.commit()

    def set_pending(self, room_id: int, reading: MeterReading | None) -> None:
        result = self.conn.execute(
            text(
                "UPDATE rooms SET pending_electricity = :pending_electricity, pending_water = :pending_water, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {
                "pending_electricity": reading.electricity if reading else None,
                "pending_water": reading.water if reading else None,
                "updated_at": _now(),
                "id": room_id,
            },
        )
        self.conn.commit()
        if result.rowcount == 0:
            raise RoomNotFound(room_id)


_INVOICE_SELECT = (
    "SELECT invoices.*, COALESCE(rooms.name, '') AS room_name FROM invoices "
    "LEFT JOIN rooms ON rooms.id = invoices.room_id"
)


class SQLAlchemyInvoiceRepository(InvoiceRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_invoice(row: RowMapping) -> Invoice:
        data = dict(row)
        data["paid"] = bool(data["paid"])
        return Invoice.model_validate(data)

    def get_by_id(self, invoice_id: int) -> Invoice | None:
        row = (
            self.conn.execute(text(f"{_INVOICE_SELECT} WHERE invoices.id = :id"), {"id": invoice_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_invoice(row)

    def get_by_uuid(self, uuid: str) -> Invoice | None:
        row = (
            self.conn.execute(text(f"{_INVOICE_SELECT} WHERE invoices.uuid = :uuid"), {"uuid": uuid})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_invoice(row)

    def list_all(self, period: Period | None = None) -> list[Invoice]:
        if period is None:
            rows = (
                self.conn.execute(text(f"{_INVOICE_SELECT} ORDER BY invoices.year, invoices.month, invoices.id"))
                .mappings()
                .fetchall()
            )
        else:
            rows = (
                self.conn.execute(
                    text(
                        f"{_INVOICE_SELECT} WHERE invoices.month = :month AND invoices.year = :year "
                        "ORDER BY invoices.id"
                    ),
                    {"month": period.month, "year": period.year},
                )
                .mappings()
                .fetchall()
            )
        return [self._row_to_invoice(row) for row in rows]

    def list_by_room(self, room_id: int) -> list[Invoice]:
        rows = (
            self.conn.execute(
                text(
                    f"{_INVOICE_SELECT} WHERE invoices.room_id = :room_id "
                    "ORDER BY invoices.year DESC, invoices.month DESC"
                ),
                {"room_id": room_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_invoice(row) for row in rows]

    def set_paid(self, invoice_id: int, paid: bool) -> None:
        self.conn.execute(
            text("UPDATE invoices SET paid = :paid WHERE id = :id"),
            {"paid": 1 if paid else 0, "id": invoice_id},
        )
        self.conn.commit()


class SQLAlchemyExpenseRepository(ExpenseRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_expense(row: RowMapping) -> Expense:
        return Expense.model_validate(dict(row))

    def create(self, expense: Expense) -> Expense:
        result = self.conn.execute(
            text(
                "INSERT INTO expenses (uuid, title, amount, category, date, month, year, description, created_at) "
                "VALUES (:uuid, :title, :amount, :category, :date, :month, :year, :description, :created_at)"
            ),
            {
                "uuid": str(ULID()),
                "title": expense.title,
                "amount": expense.amount,
                "category": expense.category,
                "date": expense.date,
                "month": expense.month,
                "year": expense.year,
                "description": expense.description,
                "created_at": _now(),
            },
        )
        expense_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(expense_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve expense after create (id={expense_id})")
        return created

    def get_by_id(self, expense_id: int) -> Expense | None:
        row = (
            self.conn.execute(text("SELECT * FROM expenses WHERE id = :id"), {"id": expense_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_expense(row)

    def list_all(self, period: Period | None = None) -> list[Expense]:
        if period is None:
            rows = self.conn.execute(text("SELECT * FROM expenses ORDER BY date, id")).mappings().fetchall()
        else:
            rows = (
                self.conn.execute(
                    text("SELECT * FROM expenses WHERE month = :month AND year = :year ORDER BY date, id"),
                    {"month": period.month, "year": period.year},
                )
                .mappings()
                .fetchall()
            )
        return [self._row_to_expense(row) for row in rows]

    def update(self, expense: Expense) -> Expense:
        if expense.id is None:
            raise ValueError("Cannot update expense without an id")
        self.conn.execute(
            text(
                "UPDATE expenses SET title = :title, amount = :amount, category = :category, date = :date, "
                "month = :month, year = :year, description = :description WHERE id = :id"
            ),
            {
                "title": expense.title,
                "amount": expense.amount,
                "category": expense.category,
                "date": expense.date,
                "month": expense.month,
                "year": expense.year,
                "description": expense.description,
                "id": expense.id,
            },
        )
        self.conn.commit()
        result = self.get_by_id(expense.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve expense after update (id={expense.id})")
        return result

    def update_period(self, expense_id: int, period: Period) -> None:
        self.conn.execute(
            text("UPDATE expenses SET month = :month, year = :year WHERE id = :id"),
            {"month": period.month, "year": period.year, "id": expense_id},
        )
        self.conn.commit()

    def delete(self, expense_id: int) -> None:
        self.conn.execute(text("DELETE FROM expenses WHERE id = :id"), {"id": expense_id})
        self.conn.commit()


class SQLAlchemyTariffRepository(TariffRepository):
    # Single-row table
    ROW_ID = 1

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def get(self) -> TariffSettings | None:
        row = (
            self.conn.execute(text("SELECT * FROM tariff_settings WHERE id = :id"), {"id": self.ROW_ID})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return TariffSettings.model_validate(dict(row))

    def save(self, tariff: TariffSettings) -> TariffSettings:
        params = {
            "id": self.ROW_ID,
            "electricity_rate": tariff.electricity_rate,
            "water_rate": tariff.water_rate,
            "internet_fee": tariff.internet_fee,
            "trash_fee": tariff.trash_fee,
            "other_fees": tariff.other_fees,
            "updated_at": _now(),
        }
        result = self.conn.execute(
            text(
                "UPDATE tariff_settings SET electricity_rate = :electricity_rate, water_rate = :water_rate, "
                "internet_fee = :internet_fee, trash_fee = :trash_fee, other_fees = :other_fees, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            params,
        )
        if result.rowcount == 0:
            self.conn.execute(
                text(
                    "INSERT INTO tariff_settings (id, electricity_rate, water_rate, internet_fee, trash_fee, "
                    "other_fees, updated_at) VALUES (:id, :electricity_rate, :water_rate, :internet_fee, "
                    ":trash_fee, :other_fees, :updated_at)"
                ),
                params,
            )
        self.conn.commit()
        saved = self.get()
        if saved is None:
            raise RuntimeError("Failed to retrieve tariff settings after save")
        return saved


class SQLAlchemyTransaction(Transaction):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn
        # Close the implicit read transaction left open by earlier SELECTs.
        if conn.in_transaction():
            conn.commit()
        self._txn = conn.begin()

    def add_invoice(self, invoice: Invoice) -> Invoice:
        invoice_uuid = str(ULID())
        created_at = invoice.created_at or _now()
        result = self.conn.execute(
            text(
                "INSERT INTO invoices (uuid, room_id, month, year, rent_amount, "
                "old_electricity, new_electricity, electricity_rate, electricity_usage, electricity_cost, "
                "old_water, new_water, water_rate, water_usage, water_cost, "
                "internet_fee, trash_fee, other_fees, total, paid, created_at) "
                "VALUES (:uuid, :room_id, :month, :year, :rent_amount, "
                ":old_electricity, :new_electricity, :electricity_rate, :electricity_usage, :electricity_cost, "
                ":old_water, :new_water, :water_rate, :water_usage, :water_cost, "
                ":internet_fee, :trash_fee, :other_fees, :total, :paid, :created_at)"
            ),
            {
                **invoice.model_dump(exclude={"id", "uuid", "room_name", "paid", "created_at"}),
                "uuid": invoice_uuid,
                "paid": 1 if invoice.paid else 0,
                "created_at": created_at,
            },
        )
        return invoice.model_copy(update={"id": result.lastrowid, "uuid": invoice_uuid, "created_at": created_at})

    def advance_meter(self, room: Room, reading: MeterReading) -> None:
        result = self.conn.execute(
            text(
                "UPDATE rooms SET electricity_meter = :electricity, water_meter = :water, "
                "pending_electricity = NULL, pending_water = NULL, updated_at = :updated_at "
                "WHERE id = :id AND electricity_meter = :old_electricity AND water_meter = :old_water "
                "AND (pending_electricity = :old_pending_electricity "
                "OR (pending_electricity IS NULL AND :old_pending_electricity IS NULL)) "
                "AND (pending_water = :old_pending_water "
                "OR (pending_water IS NULL AND :old_pending_water IS NULL))"
            ),
            {
                "electricity": reading.electricity,
                "water": reading.water,
                "updated_at": _now(),
                "id": room.id,
                "old_electricity": room.current.electricity,
                "old_water": room.current.water,
                "old_pending_electricity": room.pending.electricity if room.pending else None,
                "old_pending_water": room.pending.water if room.pending else None,
            },
        )
        if result.rowcount != 1:
            raise CommitConflict(f"Meter of room {room.name!r} (id={room.id}) changed since it was read")

    def commit(self) -> None:
        self._txn.commit()

    def rollback(self) -> None:
        if self._txn.is_active:
            self._txn.rollback()


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def begin(self) -> SQLAlchemyTransaction:
        return SQLAlchemyTransaction(self.conn)
