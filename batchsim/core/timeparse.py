from __future__ import annotations

import re


_DURATION_RE = re.compile(r"^(?P<value>\d+(?:\.\d+)?)(?P<unit>ms|s|m)$")


def parse_duration_to_seconds(raw: str) -> float:
    """Parse duration strings like '250ms', '2s', '1m' into seconds.

    The unit is required.
    """
    match = _DURATION_RE.match(raw.strip())
    if not match:
        raise ValueError("duration must match <number><unit> where unit is ms|s|m")

    value = float(match.group("value"))
    unit = match.group("unit")

    if unit == "ms":
        return value / 1000.0
    if unit == "s":
        return value
    return value * 60.0


def parse_duration_to_ms(raw: str) -> float:
    return parse_duration_to_seconds(raw) * 1000.0
