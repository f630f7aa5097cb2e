"""Static holiday lookup keyed by ISO date string."""

from __future__ import annotations

import logging
from datetime import date
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Holiday(NamedTuple):
    name: str
    type: str = "holiday"


# Adding a holiday only needs a new entry here (or in the settings file).
HOLIDAYS: dict[str, Holiday] = {
    "2025-01-01": Holiday("元旦"),
    "2025-01-28": Holiday("春节"),
    "2025-01-29": Holiday("春节"),
    "2025-01-30": Holiday("春节"),
    "2025-01-31": Holiday("春节"),
    "2025-02-01": Holiday("春节"),
    "2025-02-02": Holiday("春节"),
    "2025-02-03": Holiday("春节"),
    "2025-02-04": Holiday("春节"),
}


def holiday_for(d: date | None,
                table: dict[str, Holiday] | None = None) -> Holiday | None:
    """Return the holiday on *d*, or None."""
    if d is None:
        return None
    if table is None:
        table = HOLIDAYS
    return table.get(d.strftime("%Y-%m-%d"))


def merge_holidays(extra: dict[str, str],
                   base: dict[str, Holiday] | None = None) -> dict[str, Holiday]:
    """Return a new table with *extra* ``{YYYY-MM-DD: name}`` laid over *base*.

    Keys that are not valid ISO dates are skipped.
    """
    merged = dict(HOLIDAYS if base is None else base)
    for key, name in extra.items():
        try:
            if len(key) != 10:
                raise ValueError(key)
            date.fromisoformat(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring holiday with bad date %r", key)
            continue
        merged[key] = Holiday(str(name))
    return merged
