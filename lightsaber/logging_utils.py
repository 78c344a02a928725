from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .constants import LOG_DIR

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"
# Externe Bibliotheken, die pro Frame zu gesprächig sind
QUIET_LOGGERS = ("pygame", "PIL")


def setup_logging(
    level: int = logging.INFO,
    log_dir: Path = LOG_DIR,
    console_level: int = logging.WARNING,
) -> Path:
    """Datei-Log mit Rotation plus Konsole; liefert den Pfad der Logdatei.

    Die Konsole zeigt nur Warnungen, damit der Frame-Loop sie nicht flutet.
    """

    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "saber.log"
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, console_level))
    console_handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=[file_handler, console_handler], force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return log_file
