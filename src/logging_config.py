"""Logging setup for the API process."""

import logging

from src.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger from settings."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
