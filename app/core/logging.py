"""Logging configuration applied once when the application starts."""

from __future__ import annotations

import logging
import sys

from app.core.config import Settings

_HANDLER_NAME = "wallet-ledger-console"


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.logging.level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # create_app() may run several times (tests), keep a single console handler
    if not any(handler.get_name() == _HANDLER_NAME for handler in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setFormatter(
            logging.Formatter(settings.logging.format, settings.logging.date_format)
        )
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
