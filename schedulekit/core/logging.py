# schedulekit/core/logging.py
"""Logging setup for processes embedding the scheduling engine."""

import logging
from typing import Optional

from .config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Apply the project log format to the root logger.

    Library code only creates module loggers; the embedding process decides
    whether to call this.
    """
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
