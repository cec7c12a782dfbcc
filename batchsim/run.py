from __future__ import annotations

import argparse
import asyncio
import json
import os
from pathlib import Path

from comptest.errors import error_to_dict, exit_code_for
from comptest.errors.mapper import EXIT_OK, EXIT_USAGE
from comptest.exceptions import ComponentTestError
from comptest.logger import session_logger as logger

from batchsim.api.report import build_run_report
from batchsim.core.analyzer import ResultAnalyzer
from batchsim.core.engine import BatchRunner
from batchsim.core.models import BatchRunConfig, ExecutorConfig
from batchsim.core.timeparse import parse_duration_to_ms, parse_duration_to_seconds

BANNER = "Starting Automated Component Test..."


def _seed_from_env() -> int | None:
    raw = os.environ.get("BATCHSIM_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Simulated electronic component batch tester")
    parser.add_argument(
        "--batch-file",
        type=str,
        default=None,
        help="JSON batch definition (default: built-in sample batch of four components)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=_seed_from_env(),
        help="Seed for the delay/deviation draws (default: $BATCHSIM_SEED, else random)",
    )
    parser.add_argument(
        "--min-delay",
        type=str,
        default="100ms",
        help="Lower bound of the simulated instrument delay (e.g. 100ms)",
    )
    parser.add_argument(
        "--max-delay",
        type=str,
        default="500ms",
        help="Upper bound of the simulated instrument delay (e.g. 500ms)",
    )
    parser.add_argument(
        "--timeout",
        type=str,
        default="5s",
        help="Per-component test timeout (e.g. 5s); exceeding it aborts the batch",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the run report as JSON to this path",
    )
    return parser


def _build_config(args) -> BatchRunConfig:
    executor = ExecutorConfig(
        min_delay_ms=parse_duration_to_ms(args.min_delay),
        max_delay_ms=parse_duration_to_ms(args.max_delay),
        timeout_seconds=parse_duration_to_seconds(args.timeout),
    )
    return BatchRunConfig(
        executor=executor,
        seed=args.seed,
        batch_file=(args.batch_file.strip() if args.batch_file else None),
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = _build_config(args)
    except ValueError as exc:
        logger.error(
            "sim.invalid_duration",
            event="sim.invalid_duration",
            min_delay=args.min_delay,
            max_delay=args.max_delay,
            timeout=args.timeout,
            error=str(exc),
            recovery="Use durations like 100ms, 2s or 1m",
        )
        return EXIT_USAGE
    except ComponentTestError as exc:
        logger.error("sim.invalid_config", event="sim.invalid_config", **error_to_dict(exc))
        return exit_code_for(exc)

    runner = BatchRunner(config, logger=logger)
    analyzer = ResultAnalyzer(logger=logger)

    try:
        batch = runner.load_batch()
        print(BANNER)
        result = asyncio.run(runner.run(batch, strict=True))
    except ComponentTestError as exc:
        logger.error("sim.run_failed", event="sim.run_failed", **error_to_dict(exc))
        return exit_code_for(exc)

    analyzer.write(result.analysis)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = build_run_report(config, result)
        output_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

        logger.info(
            "sim.report_written",
            event="sim.report_written",
            path=str(output_path),
        )

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
