"""Logging setup for the service."""

import logging
import os
from logging.handlers import RotatingFileHandler

from src.core.config import settings


def setup_logging() -> None:
    """Configure root logger with console and rotating file handlers."""
    formatter = logging.Formatter(
        f"%(asctime)s [{settings.SERVICE_NAME}] %(levelname)s %(name)s: %(message)s"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # Avoid duplicate handlers when the app is reloaded
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    try:
        os.makedirs(settings.LOG_DIRECTORY, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(settings.LOG_DIRECTORY, f"{settings.SERVICE_NAME}.log"),
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    except OSError as e:
        root_logger.warning(f"File logging disabled, cannot write to {settings.LOG_DIRECTORY}: {e}")

    # SQL statements are logged through SQL_ECHO only
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
