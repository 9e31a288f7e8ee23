import logging
import sys

from rentledger.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
TEXT_DATEFMT = "%H:%M:%S"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are noisy at INFO while the ledger CLI is running.
QUIET_LOGGERS = ("alembic", "sqlalchemy.engine")


def _formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(fmt=JSON_FORMAT, rename_fields={"asctime": "timestamp", "levelname": "level"})
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def configure_logging() -> None:
    """Send ledger logs to stderr, leaving stdout to the interactive menus.

    Level and JSON output come from ``RENTLEDGER_LOG_LEVEL`` and
    ``RENTLEDGER_LOG_JSON``.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_formatter(settings.log_json))

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# alembic's env.py runs fileConfig during upgrades, which replaces our handlers.
reconfigure = configure_logging
