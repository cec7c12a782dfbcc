"""Base exception classes for the component batch test simulator.

Every error carries a machine-readable ``code``, a human-readable
``message`` and an optional ``details`` dict so the entry point can log
it as a structured event.
"""

from __future__ import annotations

from typing import Any


class ComponentTestError(Exception):
    """Base class for all simulator errors."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        if not self.details:
            return f"{self.code}: {self.message}"
        rendered = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.code}: {self.message} ({rendered})"


class ValidationError(ComponentTestError):
    """Raised when an input is well-formed but not acceptable in its current state."""

    pass


class ConfigurationError(ComponentTestError):
    """Raised for invalid component parameters, executor settings or batch files."""

    pass


__all__ = [
    "ComponentTestError",
    "ValidationError",
    "ConfigurationError",
]
