import sys
import os
from loguru import logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<cyan>{name}</cyan> | "
    "{message}"
)


def configure_logging(
    *,
    level: str = "INFO",
    colorize: bool = True,
    sink=None,
    format=DEFAULT_FORMAT,
):
    """
    Route loguru output for one entrypoint.

    The pipeline logs to stdout; the proxy passes `sink=sys.stderr` and a
    quieter level so request handling only reports feed failures.

    Environment overrides:
    - APP_LOG_LEVEL, APP_LOG_COLORIZE, APP_LOG_FORMAT replace the arguments.
    - APP_LOG_FILE adds a plain-text file sink, rotated weekly and kept for a month.
    """
    env_level = os.getenv("APP_LOG_LEVEL", "").upper()
    env_colorize = os.getenv("APP_LOG_COLORIZE", "").lower()
    env_format = os.getenv("APP_LOG_FORMAT", "")
    log_file = os.getenv("APP_LOG_FILE", "")

    effective_level = env_level if env_level else (level or "INFO")
    effective_colorize = env_colorize in ("1", "true", "yes") if env_colorize else colorize
    effective_format = env_format if env_format else format

    logger.remove()

    logger.add(
        sink or sys.stdout,
        level=effective_level,
        colorize=effective_colorize,
        format=effective_format,
    )
    if log_file:
        logger.add(
            log_file,
            level=effective_level,
            format=effective_format,
            colorize=False,
            rotation="1 week",
            retention="1 month",
            encoding="utf-8",
        )
