"""
Logging Configuration

Sets up stdlib logging for the file hosting service from the environment.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging.

    Args:
        level: Level name; falls back to LOG_LEVEL, then INFO
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))

    # Redis client chatter is only useful when debugging connections
    logging.getLogger("redis").setLevel(logging.WARNING)
