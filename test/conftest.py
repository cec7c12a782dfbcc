"""Pytest configuration and fixtures

Provides shared fixtures for all tests: a quiet logger, fast executor
settings and a deterministic random source.
"""

import io
import logging
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from comptest.logger import ConsoleLogger  # noqa: E402 - after sys.path setup
from batchsim.core.models import ExecutorConfig  # noqa: E402 - after sys.path setup


class FixedRandom(random.Random):
    """Random source returning a fixed deviation fraction.

    Delay draws return the lower bound of the requested range.
    """

    def __init__(self, fraction: float = 0.0, fractions: list[float] | None = None) -> None:
        super().__init__(0)
        self._fractions = list(fractions) if fractions is not None else None
        self._fraction = fraction

    def uniform(self, a: float, b: float) -> float:
        if (a, b) != (-1.0, 1.0):
            return a
        if self._fractions:
            return self._fractions.pop(0)
        return self._fraction


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def test_logger(request, log_stream):
    """A DEBUG logger writing to an in-memory stream, unique per test."""
    return ConsoleLogger(f"batchsim.test.{request.node.nodeid}", level=logging.DEBUG, stream=log_stream)


@pytest.fixture
def fast_config():
    """Executor settings with delays shrunk to a few milliseconds."""
    return ExecutorConfig(min_delay_ms=5.0, max_delay_ms=20.0, timeout_seconds=2.0)


@pytest.fixture
def fixed_random():
    return FixedRandom
