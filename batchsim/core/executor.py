from __future__ import annotations

import asyncio
import random
import time
from typing import Sequence

from comptest.exceptions import ComponentTimeoutError, InvalidComponentStateError
from comptest.logger import Logger, session_logger

from batchsim.core.metrics import MetricsCollector
from batchsim.core.models import Component, ExecutorConfig


def simulate_measurement(component: Component, deviation_fraction: float) -> Component:
    """Return the measured copy of ``component`` for a given deviation draw.

    The fraction is clamped to [-1, 1], so the deviation magnitude never
    exceeds ``tolerance * nominal_value``.
    """
    fraction = max(-1.0, min(1.0, deviation_fraction))
    deviation = fraction * component.allowed_deviation
    return component.with_measurement(component.nominal_value + deviation)


class BatchExecutor:
    """Tests a batch of components concurrently, one asyncio task each.

    Random draws come from the executor's own ``random.Random``. Both the
    delay and the deviation for every component are drawn up front in
    input order, so a seeded run is reproducible whatever order the tasks
    complete in.

    Failure policy is fail-fast: the first failing component test cancels
    the rest of the batch and its error is raised to the caller.
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
        logger: Logger | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if rng is not None and seed is not None:
            raise ValueError("pass either rng or seed, not both")

        self._config = config or ExecutorConfig()
        self._rng = rng if rng is not None else random.Random(seed)
        self._logger = logger or session_logger
        self._metrics = metrics

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    async def test_batch(self, batch: Sequence[Component]) -> list[Component]:
        components = list(batch)
        draws = [(self._draw_delay_ms(), self._draw_deviation()) for _ in components]
        slots: list[Component | None] = [None] * len(components)

        tasks = [
            asyncio.create_task(
                self._test_into_slot(slots, index, component, delay_ms, fraction),
                name=f"component-test-{index}",
            )
            for index, (component, (delay_ms, fraction)) in enumerate(zip(components, draws))
        ]

        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        tested: list[Component] = []
        for slot in slots:
            assert slot is not None  # every task completed without raising
            tested.append(slot)
        return tested

    async def _test_into_slot(
        self,
        slots: list[Component | None],
        index: int,
        component: Component,
        delay_ms: float,
        fraction: float,
    ) -> None:
        if component.is_tested:
            raise InvalidComponentStateError(
                "COMPONENT_ALREADY_TESTED",
                "component was already tested in an earlier run",
                details={"index": index, "kind": component.kind.value},
            )

        start = time.monotonic()
        try:
            measured = await asyncio.wait_for(
                self._measure(component, delay_ms, fraction),
                timeout=self._config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            elapsed_ms = (time.monotonic() - start) * 1000
            if self._metrics is not None:
                await self._metrics.record(
                    kind=component.kind.value,
                    duration_ms=elapsed_ms,
                    success=False,
                    error_type="timeout",
                )
            self._logger.error(
                "sim.component_timeout",
                event="sim.component_timeout",
                index=index,
                kind=component.kind.value,
                delay_ms=round(delay_ms, 1),
                timeout_seconds=self._config.timeout_seconds,
            )
            raise ComponentTimeoutError(
                "component test exceeded its timeout",
                details={
                    "index": index,
                    "kind": component.kind.value,
                    "timeout_seconds": self._config.timeout_seconds,
                },
            ) from None

        slots[index] = measured

        if self._metrics is not None:
            await self._metrics.record(kind=component.kind.value, duration_ms=delay_ms, success=True)

        self._logger.debug(
            "sim.component_measured",
            event="sim.component_measured",
            index=index,
            kind=component.kind.value,
            nominal_value=component.nominal_value,
            actual_value=measured.actual_value,
            delay_ms=round(delay_ms, 1),
        )

    async def _measure(self, component: Component, delay_ms: float, fraction: float) -> Component:
        # Simulated instrument latency; the only suspension point.
        await asyncio.sleep(delay_ms / 1000.0)
        return simulate_measurement(component, fraction)

    def _draw_delay_ms(self) -> float:
        return self._rng.uniform(self._config.min_delay_ms, self._config.max_delay_ms)

    def _draw_deviation(self) -> float:
        return self._rng.uniform(-1.0, 1.0)
