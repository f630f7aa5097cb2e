"""Tests for calendar_logic."""

from datetime import date

import pytest

from calendar_logic import (
    DEFAULT_BG,
    HOLIDAY_BG,
    TEXT_FG,
    TODAY_BG,
    TODAY_FG,
    WEEKEND_BG,
    DayCell,
    add_months,
    day_of_week,
    day_style,
    days_in_month,
    format_date,
    is_today,
    is_weekend,
    month_cells,
    month_grid,
    month_key,
    month_rows,
    month_title,
    start_of_month,
    start_offset,
)
from holiday_table import Holiday


def _all_months(first_year=1999, last_year=2031):
    for y in range(first_year, last_year + 1):
        for m in range(1, 13):
            yield date(y, m, 1)


class TestDateHelpers:
    def test_day_of_week_is_sunday_based(self):
        assert day_of_week(date(2025, 1, 5)) == 0   # Sunday
        assert day_of_week(date(2025, 1, 1)) == 3   # Wednesday
        assert day_of_week(date(2025, 1, 4)) == 6   # Saturday

    def test_days_in_month(self):
        assert days_in_month(date(2025, 1, 20)) == 31
        assert days_in_month(date(2024, 2, 1)) == 29
        assert days_in_month(date(2025, 2, 1)) == 28
        assert days_in_month(date(2025, 4, 1)) == 30

    def test_start_of_month(self):
        assert start_of_month(date(2025, 3, 17)) == date(2025, 3, 1)

    def test_add_months_crosses_years(self):
        assert add_months(date(2025, 1, 1), -1) == date(2024, 12, 1)
        assert add_months(date(2024, 12, 1), 1) == date(2025, 1, 1)
        assert add_months(date(2025, 1, 1), -12) == date(2024, 1, 1)
        assert add_months(date(2025, 6, 1), 30) == date(2027, 12, 1)

    def test_add_months_clamps_day(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)

    def test_formats(self):
        d = date(2025, 1, 1)
        assert format_date(d) == "2025-01-01"
        assert month_key(d) == "2025-01"
        assert month_title(d) == "January 2025"


class TestMonthGrid:
    def test_january_2025(self):
        jan = date(2025, 1, 1)
        assert start_offset(jan) == 3
        assert month_rows(jan) == 5
        grid = month_grid(2025, 1)
        assert len(grid) == 5
        assert grid[0] == [None, None, None, 1, 2, 3, 4]
        assert grid[-1] == [26, 27, 28, 29, 30, 31, None]

    def test_four_row_month(self):
        # February 2015 starts on a Sunday and has 28 days
        assert month_rows(date(2015, 2, 1)) == 4
        assert month_grid(2015, 2)[0] == [1, 2, 3, 4, 5, 6, 7]

    def test_six_row_month(self):
        # August 2025 starts on a Friday and has 31 days
        assert month_rows(date(2025, 8, 1)) == 6
        assert len(month_grid(2025, 8)) == 6

    def test_rows_formula_for_every_month(self):
        for m in _all_months():
            rows = month_rows(m)
            assert rows in (4, 5, 6)
            assert rows * 7 >= start_offset(m) + days_in_month(m) > (rows - 1) * 7

    def test_grid_contains_each_day_once(self):
        for m in _all_months(2024, 2026):
            days = [d for row in month_grid(m.year, m.month) for d in row if d]
            assert days == list(range(1, days_in_month(m) + 1))
            assert all(len(row) == 7 for row in month_grid(m.year, m.month))

    def test_month_cells_classifies_days(self):
        table = {"2025-01-01": Holiday("元旦")}
        cells = month_cells(date(2025, 1, 1), date(2025, 1, 15), table)
        assert cells[0][0] is None
        first = cells[0][3]
        assert first.date == date(2025, 1, 1)
        assert first.holiday == Holiday("元旦", "holiday")
        assert first.is_weekend is False
        assert cells[0][4].holiday is None
        assert cells[0][6].is_weekend is True     # Saturday the 4th
        today = [c for row in cells for c in row if c and c.is_today]
        assert [c.date for c in today] == [date(2025, 1, 15)]


class TestDayClassifier:
    def test_is_today(self):
        assert is_today(date(2025, 1, 1), date(2025, 1, 1))
        assert not is_today(date(2025, 1, 2), date(2025, 1, 1))
        assert not is_today(None, date(2025, 1, 1))

    def test_is_weekend_matches_day_of_week(self):
        d = date(2025, 1, 1)
        for i in range(14):
            day = date.fromordinal(d.toordinal() + i)
            assert is_weekend(day) == (day_of_week(day) in (0, 6))
        assert not is_weekend(None)

    def test_new_year_2025_is_not_weekend(self):
        assert not is_weekend(date(2025, 1, 1))


class TestDayStyle:
    def _cell(self, today=False, weekend=False, holiday=None):
        return DayCell(date(2025, 1, 1), today, weekend, holiday)

    def test_placeholder(self):
        assert day_style(None).bg == DEFAULT_BG

    def test_plain_day(self):
        assert day_style(self._cell()) == (DEFAULT_BG, TEXT_FG, False)

    def test_today(self):
        assert day_style(self._cell(today=True)) == (TODAY_BG, TODAY_FG, True)

    def test_weekend_background_wins_over_today(self):
        style = day_style(self._cell(today=True, weekend=True))
        assert style == (WEEKEND_BG, TODAY_FG, True)

    @pytest.mark.parametrize("today", [True, False])
    def test_holiday_background_wins(self, today):
        style = day_style(self._cell(today=today, weekend=True, holiday=Holiday("x")))
        assert style.bg == HOLIDAY_BG
        assert style.fg == (TODAY_FG if today else TEXT_FG)
