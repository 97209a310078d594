"""Allow running Tomatodo as a module: python -m tomatodo."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import TomatodoApp


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure root logging for the app."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    return logging.getLogger("tomatodo")


def main() -> None:
    logger = setup_logging(os.environ.get("TOMATODO_LOG_LEVEL", "INFO").upper())
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("Tomatodo")
    app.setOrganizationName("Tomatodo")
    app.setQuitOnLastWindowClosed(False)

    tomatodo = TomatodoApp()
    logger.info(
        "Tomatodo ready (%s)",
        "signed in" if tomatodo.authenticated else "local storage",
    )

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
