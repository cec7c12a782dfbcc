"""Custom exceptions for the component batch test simulator.

All exceptions include a code, a message and optional details so that
failures can be logged as structured events and mapped to recovery hints.
"""

from comptest.exceptions.base import (
    ComponentTestError,
    ConfigurationError,
    ValidationError,
)
from comptest.exceptions.batch import (
    ComponentTimeoutError,
    EmptyBatchError,
    InvalidComponentStateError,
)

__all__ = [
    # Base exceptions
    "ComponentTestError",
    "ValidationError",
    "ConfigurationError",
    # Batch exceptions
    "InvalidComponentStateError",
    "EmptyBatchError",
    "ComponentTimeoutError",
]
