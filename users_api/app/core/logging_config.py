"""
Logging configuration for the Users API.

``setup_logging`` attaches a console handler (and a file handler when
``settings.log_file`` is set) to the root logger, using one format for
application and server records.  The uvicorn loggers started by
``run.py`` follow the configured level, except that per‑request access
lines are only shown in debug mode.
"""

import logging
from pathlib import Path

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging(settings: Settings) -> None:
    """Configure the root and uvicorn loggers from ``settings``.

    The root logger is configured only once per process; calling this
    again (``create_app`` runs per test) only re‑applies levels.
    """
    level = _level(settings.log_level)
    root = logging.getLogger()
    root.setLevel(level)

    logging.getLogger("uvicorn").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(
        logging.DEBUG if settings.debug else max(level, logging.WARNING)
    )

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if settings.log_file:
        file_handler = logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
