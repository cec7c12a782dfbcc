"""Component batch test simulator.

This package simulates testing a batch of electronic components
concurrently and reports a pass/fail summary with the batch yield.
"""

from __future__ import annotations

__all__ = []
