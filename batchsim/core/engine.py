from __future__ import annotations

import random
import time
from typing import Sequence

from comptest.logger import Logger, session_logger

from batchsim.core.analyzer import ResultAnalyzer
from batchsim.core.batch import load_batch_file, sample_batch
from batchsim.core.executor import BatchExecutor
from batchsim.core.metrics import MetricsCollector
from batchsim.core.models import BatchRunConfig, BatchRunResult, Component


class BatchRunner:
    """Runs one batch end to end: test concurrently, then analyze.

    The runner does not print; callers decide where the report goes.
    """

    def __init__(
        self,
        config: BatchRunConfig | None = None,
        *,
        logger: Logger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or BatchRunConfig()
        self._logger = logger or session_logger
        self._rng = rng if rng is not None else random.Random(self._config.seed)

    def load_batch(self) -> list[Component]:
        if self._config.batch_file:
            return load_batch_file(self._config.batch_file)
        return sample_batch()

    async def run(self, batch: Sequence[Component] | None = None, *, strict: bool = False) -> BatchRunResult:
        components = list(batch) if batch is not None else self.load_batch()

        metrics = MetricsCollector(logger=self._logger)
        executor = BatchExecutor(
            self._config.executor,
            rng=self._rng,
            logger=self._logger,
            metrics=metrics,
        )
        analyzer = ResultAnalyzer(logger=self._logger)

        executor_config = self._config.executor
        self._logger.info(
            "sim.batch_start",
            event="sim.batch_start",
            components=len(components),
            seed=self._config.seed,
            batch_file=self._config.batch_file,
            min_delay_ms=executor_config.min_delay_ms,
            max_delay_ms=executor_config.max_delay_ms,
            timeout_seconds=executor_config.timeout_seconds,
        )

        started = time.monotonic()
        tested = await executor.test_batch(components)
        ended = time.monotonic()

        analysis = analyzer.analyze(tested, strict=strict)
        metrics_report = await metrics.build_report()

        result = BatchRunResult(
            started_at_monotonic=started,
            ended_at_monotonic=ended,
            tested=tested,
            analysis=analysis,
            metrics_report=metrics_report,
        )

        self._logger.info(
            "sim.batch_end",
            event="sim.batch_end",
            total=analysis.total,
            passed=analysis.passed,
            failed=analysis.failed,
            duration_seconds=round(result.duration_seconds, 3),
            simulated_delay_sum_ms=round(metrics_report["overall"]["sum_ms"], 1),
        )

        return result
