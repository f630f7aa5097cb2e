"""Pure calendar calculations — no UI dependencies."""

from __future__ import annotations

import calendar
from datetime import date
from typing import NamedTuple

from holiday_table import HOLIDAYS, Holiday, holiday_for

# Weeks start on Sunday
DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Colours
DEFAULT_BG = "white"
TODAY_BG = "#e6f3ff"
WEEKEND_BG = "#f8f8f8"
HOLIDAY_BG = "#ffe6e6"
TEXT_FG = "black"
TODAY_FG = "#007AFF"
HOLIDAY_FG = "#ff4d4d"


class DayCell(NamedTuple):
    date: date
    is_today: bool
    is_weekend: bool
    holiday: Holiday | None


class DayStyle(NamedTuple):
    bg: str
    fg: str
    bold: bool


# ------------------------------------------------------------------
# Date helpers
# ------------------------------------------------------------------
def day_of_week(d: date) -> int:
    """Weekday index with 0 = Sunday."""
    return (d.weekday() + 1) % 7


def days_in_month(d: date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def add_months(d: date, n: int) -> date:
    """Return *d* moved by *n* months (negative goes back).

    The day is clamped to the length of the target month.
    """
    y, m = divmod(d.year * 12 + (d.month - 1) + n, 12)
    month = m + 1
    day = min(d.day, calendar.monthrange(y, month)[1])
    return date(y, month, day)


def format_date(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def month_title(d: date) -> str:
    return f"{calendar.month_name[d.month]} {d.year}"


# ------------------------------------------------------------------
# Grid
# ------------------------------------------------------------------
def start_offset(month: date) -> int:
    """Number of leading blank cells before the 1st."""
    return day_of_week(start_of_month(month))


def month_rows(month: date) -> int:
    """Rows needed for *month*: ceil((start offset + days) / 7), i.e. 4–6."""
    return -(-(start_offset(month) + days_in_month(month)) // 7)


def month_grid(year: int, month: int) -> list[list[int | None]]:
    """Return the grid for the given month, Sunday first.

    Each cell is a day number (1–31) or None for empty slots.
    The grid has exactly as many rows as the month needs.
    """
    first = date(year, month, 1)
    lead = start_offset(first)
    n_days = days_in_month(first)
    rows = month_rows(first)

    grid: list[list[int | None]] = []
    for r in range(rows):
        row: list[int | None] = []
        for c in range(7):
            day = r * 7 + c - lead + 1
            row.append(day if 1 <= day <= n_days else None)
        grid.append(row)
    return grid


def month_cells(month: date, today: date,
                holidays: dict[str, Holiday] | None = None,
                ) -> list[list[DayCell | None]]:
    """Classify every populated cell of *month*'s grid."""
    table = HOLIDAYS if holidays is None else holidays
    first = start_of_month(month)
    cells: list[list[DayCell | None]] = []
    for row in month_grid(first.year, first.month):
        out: list[DayCell | None] = []
        for day in row:
            if day is None:
                out.append(None)
                continue
            d = first.replace(day=day)
            out.append(DayCell(d, is_today(d, today), is_weekend(d),
                               holiday_for(d, table)))
        cells.append(out)
    return cells


# ------------------------------------------------------------------
# Day classifier
# ------------------------------------------------------------------
def is_today(d: date | None, today: date) -> bool:
    if d is None:
        return False
    return d == today


def is_weekend(d: date | None) -> bool:
    if d is None:
        return False
    return day_of_week(d) in (0, 6)


def day_style(cell: DayCell | None) -> DayStyle:
    """Colours for a day cell.

    Background: holiday > weekend > today > default.  Today's text colour
    and weight apply whatever the background is.
    """
    if cell is None:
        return DayStyle(DEFAULT_BG, DEFAULT_BG, False)
    if cell.holiday is not None:
        bg = HOLIDAY_BG
    elif cell.is_weekend:
        bg = WEEKEND_BG
    elif cell.is_today:
        bg = TODAY_BG
    else:
        bg = DEFAULT_BG
    if cell.is_today:
        return DayStyle(bg, TODAY_FG, True)
    return DayStyle(bg, TEXT_FG, False)
