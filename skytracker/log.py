"""
Logging setup — stdout handler plus optional rotating file, configured once.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler

from skytracker.config import LOG_LEVEL, LOG_TO_FILE, LOG_FILE, LOG_MAX_BYTES, LOG_BACKUPS

_configured = False


def setup_logging() -> None:
    global _configured
    if _configured:
        return

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    root = logging.getLogger("skytracker")
    root.setLevel(level)

    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    # Avoid duplicate handlers
    if not root.handlers:
        ch = logging.StreamHandler(sys.stdout)
        ch.setLevel(level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        if LOG_TO_FILE:
            try:
                LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
                fh = RotatingFileHandler(LOG_FILE, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS)
                fh.setLevel(level)
                fh.setFormatter(formatter)
                root.addHandler(fh)
            except OSError as e:
                root.warning("Failed to initialize file logging: %s", e)

    _configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
