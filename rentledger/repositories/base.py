from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from rentledger.models.expense import Expense
from rentledger.models.invoice import Invoice
from rentledger.models.period import Period
from rentledger.models.room import MeterReading, Room, RoomStatus
from rentledger.models.tariff import TariffSettings


class RoomRepository(ABC):
    @abstractmethod
    def create(self, room: Room) -> Room: ...

    @abstractmethod
    def get_by_id(self, room_id: int) -> Room | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Room | None: ...

    @abstractmethod
    def list_all(self) -> list[Room]: ...

    @abstractmethod
    def update(self, room: Room) -> Room: ...

    @abstractmethod
    def update_status(self, room_id: int, status: RoomStatus) -> None: ...

    @abstractmethod
    def set_pending(self, room_id: int, reading: MeterReading | None) -> None: ...


class InvoiceRepository(ABC):
    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Invoice | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Invoice | None: ...

    @abstractmethod
    def list_all(self, period: Period | None = None) -> list[Invoice]: ...

    @abstractmethod
    def list_by_room(self, room_id: int) -> list[Invoice]: ...

    @abstractmethod
    def set_paid(self, invoice_id: int, paid: bool) -> None: ...


class ExpenseRepository(ABC):
    @abstractmethod
    def create(self, expense: Expense) -> Expense: ...

    @abstractmethod
    def get_by_id(self, expense_id: int) -> Expense | None: ...

    @abstractmethod
    def list_all(self, period: Period | None = None) -> list[Expense]: ...

    @abstractmethod
    def update(self, expense: Expense) -> Expense: ...

    @abstractmethod
    def update_period(self, expense_id: int, period: Period) -> None: ...

    @abstractmethod
    def delete(self, expense_id: int) -> None: ...


class TariffRepository(ABC):
    @abstractmethod
    def get(self) -> TariffSettings | None: ...

    @abstractmethod
    def save(self, tariff: TariffSettings) -> TariffSettings: ...


class Transaction(ABC):
    """A set of writes applied all together or not at all.

    Used as a context manager, any exception raised inside the block rolls
    the transaction back before propagating. ``commit()`` must be called
    explicitly.
    """

    @abstractmethod
    def add_invoice(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def advance_meter(self, room: Room, reading: MeterReading) -> None:
        """Set the room's current reading and clear any pending one.

        Conditional on the stored current reading still matching
        ``room.current``; raises CommitConflict otherwise.
        """

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def __enter__(self) -> Transaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            self.rollback()


class UnitOfWork(ABC):
    @abstractmethod
    def begin(self) -> Transaction: ...
