# booking_portal/logging_config.py
import logging
from typing import Optional

from booking_portal.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure application-wide logging (console only).

    Safe to call more than once: existing root handlers are replaced.
    """
    if level is None:
        level = get_settings().LOG_LEVEL

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()
    root.addHandler(console_handler)
