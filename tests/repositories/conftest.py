import pytest
from sqlalchemy import Connection

from rentledger.repositories.sqlalchemy import (
    SQLAlchemyExpenseRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyRoomRepository,
    SQLAlchemyTariffRepository,
    SQLAlchemyUnitOfWork,
)


@pytest.fixture()
def room_repo(db_connection: Connection) -> SQLAlchemyRoomRepository:
    return SQLAlchemyRoomRepository(db_connection)


@pytest.fixture()
def invoice_repo(db_connection: Connection) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(db_connection)


@pytest.fixture()
def expense_repo(db_connection: Connection) -> SQLAlchemyExpenseRepository:
    return SQLAlchemyExpenseRepository(db_connection)


@pytest.fixture()
def tariff_repo(db_connection: Connection) -> SQLAlchemyTariffRepository:
    return SQLAlchemyTariffRepository(db_connection)


@pytest.fixture()
def uow(db_connection: Connection) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(db_connection)
