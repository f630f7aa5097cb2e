"""Tests for the holiday lookup table."""

from datetime import date

from holiday_table import HOLIDAYS, Holiday, holiday_for, merge_holidays


def test_new_year_2025():
    h = holiday_for(date(2025, 1, 1))
    assert h == Holiday("元旦", "holiday")
    assert h.name == "元旦"


def test_spring_festival_range():
    for day in range(28, 32):
        assert holiday_for(date(2025, 1, day)).name == "春节"
    for day in range(1, 5):
        assert holiday_for(date(2025, 2, day)).name == "春节"
    assert holiday_for(date(2025, 2, 5)) is None


def test_lookup_matches_table_keys():
    d = date(2024, 12, 20)
    for i in range(60):
        day = date.fromordinal(d.toordinal() + i)
        found = holiday_for(day)
        assert (found is not None) == (day.isoformat() in HOLIDAYS)


def test_placeholder_has_no_holiday():
    assert holiday_for(None) is None


def test_merge_adds_entries_without_mutating_table():
    merged = merge_holidays({"2025-05-01": "劳动节", "not-a-date": "x", "2025-5-1": "y"})
    assert merged["2025-05-01"] == Holiday("劳动节")
    assert "not-a-date" not in merged
    assert "2025-5-1" not in merged
    assert "2025-05-01" not in HOLIDAYS
    assert holiday_for(date(2025, 5, 1), merged).name == "劳动节"


def test_merge_overrides_existing_name():
    merged = merge_holidays({"2025-01-01": "New Year"})
    assert merged["2025-01-01"].name == "New Year"
    assert HOLIDAYS["2025-01-01"].name == "元旦"
