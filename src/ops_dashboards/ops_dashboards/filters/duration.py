from __future__ import annotations

import math
from typing import Optional


def _to_float(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_duration_hours(text: Optional[str]) -> float:
    """Convert a free-text duration ("8:30", "8.5", "8,5") into hours.

    `H:MM` is read as hours and minutes; the minute part is taken as a
    literal number, so "8:3" is 8h03m. Anything unparsable counts as 0.
    """
    if text is None:
        return 0.0
    value = str(text).strip()
    if not value:
        return 0.0

    if ":" in value:
        hours_text, _, rest = value.partition(":")
        minutes_text = rest.split(":", 1)[0]
        hours = _to_float(hours_text.strip() or "0")
        minutes = _to_float(minutes_text.strip() or "0")
        if hours is None or minutes is None:
            return 0.0
        return hours + minutes / 60

    parsed = _to_float(value.replace(",", "."))
    return parsed if parsed is not None else 0.0


def total_hours(values) -> float:
    return sum(parse_duration_hours(v) for v in values)
