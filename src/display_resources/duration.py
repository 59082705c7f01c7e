"""Duration parsing utilities."""

import re

from display_resources.types import Duration

_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)$")
_UNITS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60_000,
    "h": 3_600_000,
    "d": 86_400_000,
}


def parse_duration(duration: Duration) -> int:
    """Parse a duration to whole milliseconds.

    Numbers are taken as milliseconds. Strings carry a unit suffix,
    e.g. ``"30s"``, ``"1.5m"`` or ``"250ms"``.
    """
    if isinstance(duration, bool):
        raise ValueError(f"Invalid duration: {duration!r}")
    if isinstance(duration, int | float):
        if duration < 0:
            raise ValueError(f"Invalid duration: {duration!r}")
        return int(duration)

    match = _DURATION_PATTERN.match(duration.strip())
    if not match:
        raise ValueError(f"Invalid duration: {duration!r}")

    value, unit = match.groups()
    return int(float(value) * _UNITS[unit])


def to_seconds(duration: Duration) -> float:
    """Convert a duration to seconds, as expected by socket timeouts."""
    return parse_duration(duration) / 1000
