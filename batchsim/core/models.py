from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from comptest.exceptions import ConfigurationError, InvalidComponentStateError

if TYPE_CHECKING:
    from batchsim.core.analyzer import BatchAnalysis


class ComponentKind(str, Enum):
    """Kind of device under test.

    The value is the display name used in the text report.
    """

    RESISTOR = "Resistor"
    CAPACITOR = "Capacitor"
    INDUCTOR = "Inductor"
    TRANSISTOR = "Transistor"

    @property
    def unit(self) -> str:
        return _UNITS[self]

    @classmethod
    def parse(cls, raw: "ComponentKind | str") -> "ComponentKind":
        if isinstance(raw, ComponentKind):
            return raw
        if isinstance(raw, str):
            for kind in cls:
                if raw.strip().lower() in (kind.value.lower(), kind.name.lower()):
                    return kind
        raise ConfigurationError(
            "INVALID_KIND",
            f"unknown component kind: {raw!r}",
            details={"allowed": [k.value for k in cls]},
        )


_UNITS = {
    ComponentKind.RESISTOR: "ohm",
    ComponentKind.CAPACITOR: "F",
    ComponentKind.INDUCTOR: "H",
    ComponentKind.TRANSISTOR: "",  # current gain, dimensionless
}


@dataclass(frozen=True)
class Component:
    """A single device under test.

    ``actual_value`` stays ``None`` until the executor measures the
    component; the measured copy is produced by ``with_measurement``.
    """

    kind: ComponentKind
    nominal_value: float
    tolerance: float
    actual_value: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", ComponentKind.parse(self.kind))

        if not _is_finite_number(self.nominal_value) or self.nominal_value < 0:
            raise ConfigurationError(
                "INVALID_NOMINAL",
                "nominal value must be a finite, non-negative number",
                details={"kind": self.kind.value, "nominal_value": self.nominal_value},
            )
        if not _is_finite_number(self.tolerance) or not 0.0 <= self.tolerance < 1.0:
            raise ConfigurationError(
                "INVALID_TOLERANCE",
                "tolerance must be a fraction in [0, 1)",
                details={"kind": self.kind.value, "tolerance": self.tolerance},
            )

    @property
    def is_tested(self) -> bool:
        return self.actual_value is not None

    @property
    def allowed_deviation(self) -> float:
        return self.tolerance * self.nominal_value

    def with_measurement(self, actual_value: float) -> "Component":
        if self.is_tested:
            raise InvalidComponentStateError(
                "COMPONENT_ALREADY_TESTED",
                "component already has a measured value",
                details={"kind": self.kind.value, "actual_value": self.actual_value},
            )
        return replace(self, actual_value=float(actual_value))


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class ExecutorConfig:
    """Simulated instrument timing.

    Delays are in milliseconds; ``timeout_seconds=None`` disables the
    per-component timeout.
    """

    min_delay_ms: float = 100.0
    max_delay_ms: float = 500.0
    timeout_seconds: float | None = 5.0

    def __post_init__(self) -> None:
        for name in ("min_delay_ms", "max_delay_ms"):
            value = getattr(self, name)
            if not _is_finite_number(value) or value < 0:
                raise ConfigurationError(
                    "INVALID_DELAY_RANGE",
                    f"{name} must be a non-negative number",
                    details={name: value},
                )
        if self.min_delay_ms > self.max_delay_ms:
            raise ConfigurationError(
                "INVALID_DELAY_RANGE",
                "min_delay_ms must be <= max_delay_ms",
                details={"min_delay_ms": self.min_delay_ms, "max_delay_ms": self.max_delay_ms},
            )
        if self.timeout_seconds is not None and (
            not _is_finite_number(self.timeout_seconds) or self.timeout_seconds <= 0
        ):
            raise ConfigurationError(
                "INVALID_TIMEOUT",
                "timeout_seconds must be > 0",
                details={"timeout_seconds": self.timeout_seconds},
            )


@dataclass(frozen=True)
class BatchRunConfig:
    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    seed: int | None = None
    batch_file: str | None = None


@dataclass
class BatchRunResult:
    started_at_monotonic: float
    ended_at_monotonic: float
    tested: list[Component]
    analysis: BatchAnalysis
    metrics_report: dict[str, Any] | None = None

    @property
    def duration_seconds(self) -> float:
        return max(0.0, self.ended_at_monotonic - self.started_at_monotonic)
