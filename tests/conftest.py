"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from rentledger.models.expense import Expense
from rentledger.models.invoice import Invoice
from rentledger.models.room import LiveMeter, MeterReading, Room, RoomStatus, StagedMeter
from rentledger.models.tariff import TariffSettings

# Matches Alembic head: 3f1c2a9b7d10 (initial schema)
SCHEMA_DDL = """
CREATE TABLE rooms (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    name TEXT NOT NULL,
    room_type TEXT NOT NULL DEFAULT '',
    status VARCHAR(20) NOT NULL DEFAULT 'available',
    rent BIGINT NOT NULL DEFAULT 0,
    deposit BIGINT NOT NULL DEFAULT 0,
    electricity_meter INTEGER NOT NULL DEFAULT 0,
    water_meter INTEGER NOT NULL DEFAULT 0,
    pending_electricity INTEGER,
    pending_water INTEGER,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    CHECK ((pending_electricity IS NULL AND pending_water IS NULL)
        OR (pending_electricity IS NOT NULL AND pending_water IS NOT NULL)),
    CHECK (pending_electricity IS NULL OR pending_electricity >= electricity_meter),
    CHECK (pending_water IS NULL OR pending_water >= water_meter)
);

CREATE TABLE invoices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    room_id INTEGER NOT NULL REFERENCES rooms(id),
    month INTEGER NOT NULL,
    year INTEGER NOT NULL,
    rent_amount BIGINT NOT NULL DEFAULT 0,
    old_electricity INTEGER NOT NULL,
    new_electricity INTEGER NOT NULL,
    electricity_rate BIGINT NOT NULL,
    electricity_usage INTEGER NOT NULL,
    electricity_cost BIGINT NOT NULL,
    old_water INTEGER NOT NULL,
    new_water INTEGER NOT NULL,
    water_rate BIGINT NOT NULL,
    water_usage INTEGER NOT NULL,
    water_cost BIGINT NOT NULL,
    internet_fee BIGINT NOT NULL DEFAULT 0,
    trash_fee BIGINT NOT NULL DEFAULT 0,
    other_fees BIGINT NOT NULL DEFAULT 0,
    total BIGINT NOT NULL,
    paid BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL
);

CREATE TABLE expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    title TEXT NOT NULL,
    amount BIGINT NOT NULL DEFAULT 0,
    category VARCHAR(100) NOT NULL DEFAULT '',
    date VARCHAR(32),
    month INTEGER,
    year INTEGER,
    description TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL
);

CREATE TABLE tariff_settings (
    id INTEGER PRIMARY KEY,
    electricity_rate BIGINT NOT NULL DEFAULT 0,
    water_rate BIGINT NOT NULL DEFAULT 0,
    internet_fee BIGINT NOT NULL DEFAULT 0,
    trash_fee BIGINT NOT NULL DEFAULT 0,
    other_fees BIGINT NOT NULL DEFAULT 0,
    updated_at DATETIME NOT NULL
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_room(**overrides) -> Room:
    defaults = dict(
        name="P101",
        room_type="Standard",
        status=RoomStatus.OCCUPIED,
        rent=2_500_000,
        deposit=2_500_000,
        meter=LiveMeter(current=MeterReading(electricity=100, water=20)),
    )
    defaults.update(overrides)
    return Room(**defaults)


def _staged_room(electricity: int = 150, water: int = 25, **overrides) -> Room:
    room = _sample_room(**overrides)
    return room.model_copy(
        update={"meter": StagedMeter(current=room.current, pending=MeterReading(electricity=electricity, water=water))}
    )


def _sample_invoice(**overrides) -> Invoice:
    defaults = dict(
        room_id=1,
        room_name="P101",
        month=3,
        year=2025,
        rent_amount=2_500_000,
        old_electricity=100,
        new_electricity=150,
        electricity_rate=3_500,
        electricity_usage=50,
        electricity_cost=175_000,
        old_water=20,
        new_water=25,
        water_rate=15_000,
        water_usage=5,
        water_cost=75_000,
        internet_fee=100_000,
        trash_fee=20_000,
        total=2_870_000,
        paid=False,
    )
    defaults.update(overrides)
    return Invoice(**defaults)


def _sample_expense(**overrides) -> Expense:
    defaults = dict(
        title="Electricity bill",
        amount=1_500_000,
        category="Electricity",
        date="2025-03-10",
        month=3,
        year=2025,
    )
    defaults.update(overrides)
    return Expense(**defaults)


@pytest.fixture()
def sample_room():
    return _sample_room


@pytest.fixture()
def staged_room():
    return _staged_room


@pytest.fixture()
def sample_invoice():
    return _sample_invoice


@pytest.fixture()
def sample_expense():
    return _sample_expense


@pytest.fixture()
def tariff() -> TariffSettings:
    return TariffSettings(electricity_rate=3_500, water_rate=15_000, internet_fee=100_000, trash_fee=20_000)
