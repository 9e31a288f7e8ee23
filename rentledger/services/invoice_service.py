from __future__ import annotations

import logging
from datetime import datetime

from rentledger.constants import VN_TZ
from rentledger.errors import BulkInvoiceFailed, NothingToBill
from rentledger.models.invoice import BulkResult, Invoice
from rentledger.models.period import Period
from rentledger.models.room import MeterReading, Room
from rentledger.models.tariff import TariffSettings
from rentledger.repositories.base import InvoiceRepository, RoomRepository, UnitOfWork
from rentledger.services.tariff import calculate_charges
from rentledger.services.tariff_service import TariffService

logger = logging.getLogger(__name__)

# (room as read, invoice to insert, reading the meter advances to)
CommitEntry = tuple[Room, Invoice, MeterReading]


def build_invoice(room: Room, period: Period, reading: MeterReading, tariff: TariffSettings) -> Invoice:
    """Price ``reading`` against the room's current meter and return an unsaved invoice."""
    if room.id is None:
        raise ValueError("Cannot bill a room without an id")
    charges = calculate_charges(
        room.current.electricity,
        reading.electricity,
        room.current.water,
        reading.water,
        tariff,
        rent=room.rent,
        room_name=room.name,
    )
    return Invoice(
        room_id=room.id,
        room_name=room.name,
        month=period.month,
        year=period.year,
        rent_amount=room.rent,
        old_electricity=room.current.electricity,
        new_electricity=reading.electricity,
        electricity_rate=tariff.electricity_rate,
        electricity_usage=charges.electricity_usage,
        electricity_cost=charges.electricity_cost,
        old_water=room.current.water,
        new_water=reading.water,
        water_rate=tariff.water_rate,
        water_usage=charges.water_usage,
        water_cost=charges.water_cost,
        internet_fee=charges.internet_fee,
        trash_fee=charges.trash_fee,
        other_fees=charges.other_fees,
        total=charges.total,
        paid=False,
        created_at=datetime.now(VN_TZ),
    )


def resolve_reading(room: Room, override: MeterReading | None = None) -> MeterReading:
    """Reading to bill for a single room: explicit override, else the staged one."""
    if override is not None:
        return override
    if room.pending is not None:
        return room.pending
    raise NothingToBill(room.name)


def resolve_bulk_reading(room: Room) -> MeterReading:
    """Staged reading if any, else the live one (zero usage)."""
    return room.pending if room.pending is not None else room.current


class InvoiceService:
    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        room_repo: RoomRepository,
        tariff_service: TariffService,
    ) -> None:
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.room_repo = room_repo
        self.tariff_service = tariff_service

    def _warn_duplicates(self, period: Period, rooms: list[Room]) -> None:
        billed = {invoice.room_id for invoice in self.invoice_repo.list_all(period)}
        for room in rooms:
            if room.id in billed:
                logger.warning("Room %s already has an invoice for %s", room.name, period.label)

    def _commit(self, entries: list[CommitEntry]) -> list[Invoice]:
        try:
            with self.uow.begin() as txn:
                created = []
                for room, invoice, reading in entries:
                    created.append(txn.add_invoice(invoice))
                    txn.advance_meter(room, reading)
                txn.commit()
        except Exception:
            logger.exception("Invoice commit rolled back (%d room(s))", len(entries))
            raise
        return created

    def commit_invoice_and_advance_meter(self, room: Room, invoice: Invoice, reading: MeterReading) -> Invoice:
        return self._commit([(room, invoice, reading)])[0]

    def commit_bulk(self, entries: list[CommitEntry]) -> list[Invoice]:
        return self._commit(entries)

    def create_invoice(
        self,
        room: Room,
        period: Period,
        reading: MeterReading | None = None,
        tariff: TariffSettings | None = None,
    ) -> Invoice:
        """Bill one room and advance its meter in a single atomic commit.

        ``reading`` overrides the staged reading (ad-hoc billing). Raises
        NothingToBill when neither is available, InvalidMeterReading when a
        meter would go backward, CommitConflict when the room changed since
        it was read. On any failure nothing is written.
        """
        to_bill = resolve_reading(room, reading)
        tariff = tariff or self.tariff_service.get_settings()
        invoice = build_invoice(room, period, to_bill, tariff)

        self._warn_duplicates(period, [room])
        created = self.commit_invoice_and_advance_meter(room, invoice, to_bill)
        logger.info(
            "Invoice created: id=%s, room=%s, period=%s, total=%d",
            created.id,
            room.name,
            period.label,
            created.total,
        )
        return created

    def bill_all_occupied(self, period: Period, tariff: TariffSettings | None = None) -> BulkResult:
        """Invoice every occupied room in one all-or-nothing commit.

        Any failure, validation included, is raised as BulkInvoiceFailed with
        nothing committed; retry the whole batch.
        """
        rooms = [room for room in self.room_repo.list_all() if room.is_occupied]
        if not rooms:
            logger.info("Bulk invoicing for %s: no occupied rooms", period.label)
            return BulkResult()

        try:
            tariff = tariff or self.tariff_service.get_settings()
            entries: list[CommitEntry] = []
            for room in rooms:
                reading = resolve_bulk_reading(room)
                entries.append((room, build_invoice(room, period, reading, tariff), reading))
            self._warn_duplicates(period, rooms)
            created = self.commit_bulk(entries)
        except Exception as exc:
            raise BulkInvoiceFailed(len(rooms), exc) from exc

        names = [room.name for room in rooms]
        logger.info("Bulk invoicing for %s: %d invoice(s) committed", period.label, len(created))
        return BulkResult(count=len(created), room_names=names, invoices=created)

    def list_invoices(self, period: Period | None = None) -> list[Invoice]:
        result = self.invoice_repo.list_all(period)
        logger.debug("Listed %d invoices (period=%s)", len(result), period.label if period else "all")
        return result

    def list_room_invoices(self, room_id: int) -> list[Invoice]:
        return self.invoice_repo.list_by_room(room_id)

    def get_invoice(self, invoice_id: int) -> Invoice | None:
        result = self.invoice_repo.get_by_id(invoice_id)
        logger.debug("get_invoice id=%s found=%s", invoice_id, result is not None)
        return result

    def set_paid(self, invoice: Invoice, paid: bool) -> Invoice:
        if invoice.id is None:
            raise ValueError("Cannot mark an invoice without an id")
        self.invoice_repo.set_paid(invoice.id, paid)
        logger.info("Invoice %s marked as %s", invoice.id, "paid" if paid else "unpaid")
        return invoice.model_copy(update={"paid": paid})

    def toggle_paid(self, invoice: Invoice) -> Invoice:
        return self.set_paid(invoice, not invoice.paid)

    def get_room(self, room_id: int) -> Room | None:
        return self.room_repo.get_by_id(room_id)
