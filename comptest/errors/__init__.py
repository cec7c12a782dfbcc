"""Error handling utilities for the component batch test simulator."""

from comptest.errors.mapper import (
    error_to_dict,
    exit_code_for,
    get_error_code,
    get_recovery_strategy,
)

__all__ = [
    "error_to_dict",
    "exit_code_for",
    "get_error_code",
    "get_recovery_strategy",
]
