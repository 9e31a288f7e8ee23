from rentledger.repositories.base import (
    ExpenseRepository,
    InvoiceRepository,
    RoomRepository,
    TariffRepository,
    UnitOfWork,
)


def get_room_repository() -> RoomRepository:
    from rentledger.db import get_connection
    from rentledger.repositories.sqlalchemy import SQLAlchemyRoomRepository

    return SQLAlchemyRoomRepository(get_connection())


def get_invoice_repository() -> InvoiceRepository:
    from rentledger.db import get_connection
    from rentledger.repositories.sqlalchemy import SQLAlchemyInvoiceRepository

    return SQLAlchemyInvoiceRepository(get_connection())


def get_expense_repository() -> ExpenseRepository:
    from rentledger.db import get_connection
    from rentledger.repositories.sqlalchemy import SQLAlchemyExpenseRepository

    return SQLAlchemyExpenseRepository(get_connection())


def get_tariff_repository() -> TariffRepository:
    from rentledger.db import get_connection
    from rentledger.repositories.sqlalchemy import SQLAlchemyTariffRepository

    return SQLAlchemyTariffRepository(get_connection())


def get_unit_of_work() -> UnitOfWork:
    from rentledger.db import get_connection
    from rentledger.repositories.sqlalchemy import SQLAlchemyUnitOfWork

    return SQLAlchemyUnitOfWork(get_connection())
