"""Console logger backed by the standard ``logging`` module.

Output goes to stderr so the text report on stdout is never interleaved
with log lines.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

from .base import Logger

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


def format_context(message: str, context: dict[str, Any]) -> str:
    """Render ``message key=value ...`` with keys in call order.

    ``event`` is skipped when it just repeats the message.
    """
    parts = [message]
    for key, value in context.items():
        if key == "event" and value == message:
            continue
        parts.append(f"{key}={value!r}" if isinstance(value, str) and " " in value else f"{key}={value}")
    return " ".join(parts)


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self) -> TextIO:
        return sys.stderr

    @stream.setter
    def stream(self, value: TextIO) -> None:
        pass


class ConsoleLogger(Logger):
    def __init__(
        self,
        name: str = "batchsim",
        *,
        level: int = logging.INFO,
        stream: TextIO | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Re-creating a logger with the same name must not duplicate output.
        if not self._logger.handlers:
            handler = logging.StreamHandler(stream) if stream is not None else _StderrHandler()
            handler.setFormatter(logging.Formatter(_FORMAT))
            self._logger.addHandler(handler)

    @property
    def level(self) -> int:
        return self._logger.level

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, format_context(message, context))
