from __future__ import annotations

import json
from pathlib import Path

from comptest.exceptions import ConfigurationError

from batchsim.core.models import Component, ComponentKind


def sample_batch() -> list[Component]:
    """The built-in demonstration batch, one component of each kind."""
    return [
        Component(ComponentKind.RESISTOR, nominal_value=100, tolerance=0.05),
        Component(ComponentKind.CAPACITOR, nominal_value=10e-6, tolerance=0.1),
        Component(ComponentKind.INDUCTOR, nominal_value=1e-3, tolerance=0.05),
        Component(ComponentKind.TRANSISTOR, nominal_value=50, tolerance=0.1),
    ]


def load_batch_file(path: str) -> list[Component]:
    """Load a batch definition.

    Expected shape:
      {
        "components": [
          {"kind": "Resistor", "nominal": 100, "tolerance": 0.05},
          {"kind": "Capacitor", "nominal": 10e-6, "tolerance": 0.1, "count": 3}
        ]
      }

    ``count`` is optional (default 1) and repeats the entry in place.
    An empty ``components`` list is accepted here; whether an empty batch
    is an error is decided when the batch is analyzed.
    """

    batch_path = Path(path)
    try:
        text = batch_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            "BATCH_FILE_NOT_FOUND", f"batch file not found: {path}", details={"path": path}
        ) from None
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            "INVALID_BATCH_FILE",
            "batch file is not valid UTF-8",
            details={"path": path, "position": exc.start},
        ) from None
    except OSError as exc:
        raise ConfigurationError(
            "INVALID_BATCH_FILE",
            f"batch file cannot be read: {exc.strerror or type(exc).__name__}",
            details={"path": path},
        ) from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "INVALID_BATCH_FILE",
            f"batch file is not valid JSON: {exc.msg}",
            details={"path": path, "line": exc.lineno},
        ) from None

    entries = data.get("components") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ConfigurationError(
            "INVALID_BATCH_FILE",
            "batch file must contain a 'components' list",
            details={"path": path},
        )

    batch: list[Component] = []
    for position, raw in enumerate(entries):
        if not isinstance(raw, dict):
            raise ConfigurationError(
                "INVALID_BATCH_FILE",
                f"component entry {position} must be an object",
                details={"path": path, "position": position},
            )

        missing = [key for key in ("kind", "nominal", "tolerance") if key not in raw]
        if missing:
            raise ConfigurationError(
                "INVALID_BATCH_FILE",
                f"component entry {position} is missing: {', '.join(missing)}",
                details={"path": path, "position": position},
            )

        count = raw.get("count", 1)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ConfigurationError(
                "INVALID_BATCH_FILE",
                f"component entry {position} has invalid count: {count!r}",
                details={"path": path, "position": position},
            )

        # Component validates kind, nominal and tolerance itself.
        component = Component(raw["kind"], nominal_value=raw["nominal"], tolerance=raw["tolerance"])
        batch.extend([component] * count)

    return batch
