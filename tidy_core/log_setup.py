"""
log_setup.py - Logging Configuration

Every module logs through logging.getLogger(__name__); front ends call
configure_logging() once at startup.
"""

from typing import Optional, Union
import logging

from .rename_options import Settings

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[Union[int, str]] = None) -> int:
    """
    Configure root logging

    Args:
        level: Log level (name or number); TIDY_LOG_LEVEL when None

    Returns:
        Numeric level actually applied
    """
    if level is None:
        level = Settings.from_env().log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger("tidy_core").setLevel(level)
    return level
