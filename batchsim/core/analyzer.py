"""Tolerance analysis and the text report.

A component passes when its measured deviation does not exceed
``tolerance * nominal_value``; the boundary itself passes.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Sequence, TextIO

from comptest.exceptions import EmptyBatchError, InvalidComponentStateError
from comptest.logger import Logger, session_logger

from batchsim.core.models import Component


@dataclass(frozen=True)
class ComponentResult:
    component: Component
    passed: bool

    @property
    def actual_value(self) -> float:
        assert self.component.actual_value is not None
        return self.component.actual_value

    @property
    def deviation(self) -> float:
        return self.actual_value - self.component.nominal_value

    @property
    def deviation_pct(self) -> float | None:
        nominal = self.component.nominal_value
        return (self.deviation / nominal * 100) if nominal else None


@dataclass(frozen=True)
class KindSummary:
    total: int = 0
    passed: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.passed


@dataclass(frozen=True)
class BatchAnalysis:
    results: list[ComponentResult]
    by_kind: dict[str, KindSummary] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def yield_pct(self) -> float | None:
        """Percentage of components that passed; ``None`` for an empty batch."""
        return (self.passed / self.total * 100) if self.total else None


def is_within_tolerance(component: Component) -> bool:
    if component.actual_value is None:
        raise InvalidComponentStateError(
            "COMPONENT_NOT_TESTED",
            "component has no measured value",
            details={"kind": component.kind.value, "nominal_value": component.nominal_value},
        )
    return abs(component.actual_value - component.nominal_value) <= component.tolerance * component.nominal_value


def format_nominal(value: float) -> str:
    """Shortest form that round-trips to the same float: 100, 2200000, 1e-05."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def format_result_line(result: ComponentResult) -> str:
    component = result.component
    return (
        f"Component: {component.kind.value}, "
        f"Nominal: {format_nominal(component.nominal_value)}, "
        f"Actual: {result.actual_value:.2f}, "
        f"Result: {'PASS' if result.passed else 'FAIL'}"
    )


def format_yield(yield_pct: float | None) -> str:
    return "N/A" if yield_pct is None else f"{yield_pct:.2f}%"


class ResultAnalyzer:
    """Classifies a tested batch and renders the pass/fail report."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        self._logger = logger or session_logger

    def analyze(self, tested_batch: Sequence[Component], *, strict: bool = False) -> BatchAnalysis:
        """Classify every component in ``tested_batch``.

        With ``strict=True`` an empty batch raises EmptyBatchError instead of
        producing a summary with an undefined yield.
        """
        if not tested_batch:
            if strict:
                raise EmptyBatchError()
            self._logger.warning("sim.empty_batch", event="sim.empty_batch")

        results = [ComponentResult(component=c, passed=is_within_tolerance(c)) for c in tested_batch]

        counts: dict[str, list[int]] = {}
        for r in results:
            entry = counts.setdefault(r.component.kind.value, [0, 0])
            entry[0] += 1
            entry[1] += int(r.passed)
        by_kind = {kind: KindSummary(total=t, passed=p) for kind, (t, p) in counts.items()}

        analysis = BatchAnalysis(results=results, by_kind=by_kind)
        self._logger.info(
            "sim.batch_analyzed",
            event="sim.batch_analyzed",
            total=analysis.total,
            passed=analysis.passed,
            failed=analysis.failed,
            yield_pct=analysis.yield_pct,
        )
        return analysis

    def render(self, analysis: BatchAnalysis) -> list[str]:
        lines = [format_result_line(r) for r in analysis.results]
        lines += [
            "",
            "Batch Summary:",
            f"Total: {analysis.total}, Pass: {analysis.passed}, Fail: {analysis.failed}",
            f"Yield: {format_yield(analysis.yield_pct)}",
        ]
        return lines

    def report(
        self,
        tested_batch: Sequence[Component],
        *,
        stream: TextIO | None = None,
        strict: bool = False,
    ) -> BatchAnalysis:
        """Analyze ``tested_batch`` and write the report to ``stream`` (stdout by default)."""
        analysis = self.analyze(tested_batch, strict=strict)
        self.write(analysis, stream=stream)
        return analysis

    def write(self, analysis: BatchAnalysis, *, stream: TextIO | None = None) -> None:
        out = stream or sys.stdout
        for line in self.render(analysis):
            print(line, file=out)
