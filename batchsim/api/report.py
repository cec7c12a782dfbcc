from __future__ import annotations

from typing import Any

from batchsim.core.models import BatchRunConfig, BatchRunResult


def build_run_report(config: BatchRunConfig, result: BatchRunResult) -> dict[str, Any]:
    analysis = result.analysis
    config_payload = {
        "seed": config.seed,
        "batch_file": config.batch_file,
        "min_delay_ms": config.executor.min_delay_ms,
        "max_delay_ms": config.executor.max_delay_ms,
        "timeout_seconds": config.executor.timeout_seconds,
    }
    components = [
        {
            "kind": r.component.kind.value,
            "unit": r.component.kind.unit,
            "nominal_value": r.component.nominal_value,
            "tolerance": r.component.tolerance,
            "actual_value": r.actual_value,
            "deviation": r.deviation,
            "deviation_pct": r.deviation_pct,
            "passed": r.passed,
        }
        for r in analysis.results
    ]
    by_kind = {
        kind: {"total": s.total, "passed": s.passed, "failed": s.failed}
        for kind, s in analysis.by_kind.items()
    }
    yield_pct = analysis.yield_pct
    return {
        "config": config_payload,
        "result": {
            "duration_seconds": result.duration_seconds,
            "total": analysis.total,
            "passed": analysis.passed,
            "failed": analysis.failed,
            "yield_pct": round(yield_pct, 2) if yield_pct is not None else None,
        },
        "components": components,
        "by_kind": by_kind,
        "metrics": result.metrics_report,
    }
