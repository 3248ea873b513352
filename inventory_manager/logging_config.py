"""Logging configuration."""

from __future__ import annotations

import logging
from flask import Flask


def configure_logging(app: Flask) -> None:
    """Configure plain-text logs at the configured LOG_LEVEL."""

    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app.logger.setLevel(level)

    # The driver logs every heartbeat and pool event at DEBUG.
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    if not app.debug:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
