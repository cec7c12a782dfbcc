"""Logger module for the component batch test simulator

Usage:
    from comptest.logger import Logger, ConsoleLogger, session_logger

    # Use the shared logger
    session_logger.info("sim.batch_start", event="sim.batch_start", components=4)

    # Or implement your own
    class MyCustomLogger(Logger):
        def info(self, message: str, **kwargs):
            # Your custom implementation
            pass
"""

import logging
import os

from .base import Logger
from .console_logger import ConsoleLogger


def _level_from_env(default: int = logging.INFO) -> int:
    raw = os.environ.get("BATCHSIM_LOG_LEVEL", "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


# Shared logger instance for modules that just need basic console logging
session_logger: Logger = ConsoleLogger(level=_level_from_env())

__all__ = [
    "Logger",
    "ConsoleLogger",
    "session_logger",
]
