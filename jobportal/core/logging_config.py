import logging
import sys
from typing import Optional

from jobportal.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once; later calls only adjust the level."""
    log_level = (level or get_settings().log_level).upper()

    logger = logging.getLogger("jobportal")
    logger.setLevel(log_level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)
        logger.propagate = False

    if log_level == "DEBUG":
        logger.debug("Debug logging enabled")

    return logger
