"""Batch-testing exceptions.

These exceptions provide typed, structured errors for executor and
analyzer operations.
"""

from __future__ import annotations

from .base import ComponentTestError, ValidationError


class InvalidComponentStateError(ValidationError):
    """Raised when a component is tested twice or analyzed before testing."""

    pass


class EmptyBatchError(ValidationError):
    """Raised when strict analysis is requested on a batch with no components."""

    def __init__(self, message: str = "batch contains no components", details=None) -> None:
        super().__init__("EMPTY_BATCH", message, details)


class ComponentTimeoutError(ComponentTestError):
    """Raised when a single component test exceeds its timeout."""

    def __init__(self, message: str, details=None) -> None:
        super().__init__("COMPONENT_TIMEOUT", message, details)
