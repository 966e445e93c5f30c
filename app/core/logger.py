import logging
import sys
from app.core.config import settings

def setup_logging():
    """
    Configure the application logger.

    Everything goes to stdout; the level comes from ``LOG_LEVEL``.
    """
    logger = logging.getLogger("privafed")
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger

logger = setup_logging()
