"""Allow running IntervalFlow as a module: python -m intervalflow."""

import sys

from loguru import logger
from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .logging_setup import configure_logging
from .app import IntervalFlowWindow


def main() -> None:
    configure_logging()
    init_db()
    logger.info("IntervalFlow ready")

    app = QApplication(sys.argv)
    app.setApplicationName("IntervalFlow")
    app.setOrganizationName("IntervalFlow")

    window = IntervalFlowWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
