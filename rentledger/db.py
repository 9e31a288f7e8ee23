import logging
import os

from alembic.config import Config
from sqlalchemy import Connection, create_engine, event, make_url
from sqlalchemy.engine import Engine

from alembic import command
from rentledger.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))

_engine: Engine | None = None
_connection: Connection | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def get_engine() -> Engine:
    """Create the ledger engine once.

    SQLite enforces ``invoices.room_id`` only with the foreign_keys pragma,
    so it is switched on for every new DBAPI connection.
    """
    global _engine
    if _engine is None:
        url = make_url(settings.db_url)
        _engine = create_engine(url, pool_pre_ping=True)
        if url.get_backend_name() == "sqlite":
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Opened ledger database at %s", url.render_as_string(hide_password=True))
    return _engine


def get_connection() -> Connection:
    """Shared connection for the CLI; every repository and unit of work uses it."""
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Ledger connection opened")
    return _connection


def _get_alembic_config() -> Config:
    ini_path = os.path.join(PROJECT_ROOT, "alembic.ini")
    if not os.path.exists(ini_path):
        ini_path = os.path.join(os.getcwd(), "alembic.ini")
    cfg = Config(ini_path)
    # Installed copies run from anywhere, so the script directory is pinned.
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "alembic"))
    return cfg


def initialize_db(revision: str = "head") -> None:
    """Bring the ledger schema up to ``revision`` (latest by default)."""
    logger.info("Upgrading ledger schema to %s", revision)
    command.upgrade(_get_alembic_config(), revision)
    logger.info("Ledger schema up to date")
