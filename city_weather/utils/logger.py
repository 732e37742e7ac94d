import logging
import sys

from pythonjsonlogger import jsonlogger

from city_weather.config import get_settings

settings = get_settings()


def setup_logger(name: str) -> logging.Logger:
    """
    Set up a JSON logger for structured event logging.

    Each logger gets a single stdout handler; calling this twice for the same
    name returns the already configured logger.

    Args:
        name: The name of the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logger.addHandler(handler)
    logger.propagate = False

    return logger
