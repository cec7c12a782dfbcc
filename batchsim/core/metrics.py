from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from typing import Any

from comptest.logger import Logger, session_logger


def _percentile(sorted_values: list[float], p: float) -> float | None:
    """Compute percentile using linear interpolation.

    Expects sorted_values sorted ascending.
    """

    if not sorted_values:
        return None

    if p <= 0:
        return float(sorted_values[0])
    if p >= 1:
        return float(sorted_values[-1])

    k = (len(sorted_values) - 1) * p
    f = int(math.floor(k))
    c = int(math.ceil(k))
    if f == c:
        return float(sorted_values[f])
    return float(sorted_values[f] * (c - k) + sorted_values[c] * (k - f))


@dataclass
class _LatencyAgg:
    count: int = 0
    error_count: int = 0
    values_ms: list[float] = field(default_factory=list)
    error_types: dict[str, int] = field(default_factory=dict)


class MetricsCollector:
    """Collects simulated instrument latency per component kind.

    Batches are bounded so every observation is kept; percentiles are
    exact.
    """

    def __init__(self, *, logger: Logger | None = None) -> None:
        self._logger = logger or session_logger
        self._lock = asyncio.Lock()
        self._overall = _LatencyAgg()
        self._by_kind: dict[str, _LatencyAgg] = {}

    async def record(
        self,
        *,
        kind: str,
        duration_ms: float,
        success: bool,
        error_type: str | None = None,
    ) -> None:
        """Record a single component measurement."""

        duration_ms = max(0.0, float(duration_ms))

        async with self._lock:
            self._observe(self._overall, duration_ms, success, error_type)
            agg = self._by_kind.setdefault(kind, _LatencyAgg())
            self._observe(agg, duration_ms, success, error_type)

        if not success:
            self._logger.debug(
                "sim.metric_error_recorded",
                event="sim.metric_error_recorded",
                kind=kind,
                error_type=error_type,
            )

    async def build_report(self) -> dict[str, Any]:
        async with self._lock:
            return {
                "overall": self._agg_to_report(self._overall),
                "by_kind": {kind: self._agg_to_report(agg) for kind, agg in self._by_kind.items()},
            }

    @staticmethod
    def _observe(agg: _LatencyAgg, duration_ms: float, success: bool, error_type: str | None) -> None:
        agg.count += 1
        if not success:
            agg.error_count += 1
            et = error_type or "unknown"
            agg.error_types[et] = agg.error_types.get(et, 0) + 1
        agg.values_ms.append(duration_ms)

    @staticmethod
    def _agg_to_report(agg: _LatencyAgg) -> dict[str, Any]:
        values = sorted(agg.values_ms)
        total = sum(values)
        return {
            "count": agg.count,
            "error_count": agg.error_count,
            "error_types": dict(agg.error_types),
            "min_ms": values[0] if values else None,
            "max_ms": values[-1] if values else None,
            "mean_ms": (total / len(values)) if values else None,
            "sum_ms": total,
            "p50_ms": _percentile(values, 0.50),
            "p95_ms": _percentile(values, 0.95),
        }
