"""
Logging setup.

The library logs through loguru but stays silent until an application
opts in; the CLI calls setup_logging() at startup.
"""

import sys
from typing import Optional

from loguru import logger

from smfreader.config import LOG_FORMAT, LOG_LEVEL


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send smfreader log records to stderr.

    Args:
        level: Minimum level name (defaults to SMFREADER_LOG_LEVEL)
    """
    logger.remove()
    logger.add(sys.stderr, level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
    logger.enable("smfreader")
