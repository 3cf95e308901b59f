# sentinel/backend/core/logging.py
from __future__ import annotations

import logging
import sys

from pythonjsonlogger import jsonlogger

CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s  %(message)s"


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s"
        )
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)
    handler.setFormatter(formatter)

    # Avoid duplicate handlers on reload
    root.handlers = [handler]
