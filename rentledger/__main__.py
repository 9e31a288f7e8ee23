from rentledger.cli.app import main_menu
from rentledger.db import initialize_db
from rentledger.logging import configure_logging, reconfigure


def main() -> None:
    configure_logging()
    initialize_db()
    reconfigure()
    main_menu()


if __name__ == "__main__":
    main()
