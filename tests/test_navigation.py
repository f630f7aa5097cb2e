"""Tests for the paginated navigation controller."""

from datetime import date

from navigation import NavigationController

TODAY = date(2025, 1, 15)


def test_starts_on_current_month():
    nav = NavigationController(today=TODAY)
    assert nav.offset == 0
    assert nav.displayed_months() == (date(2025, 1, 1), date(2025, 2, 1))


def test_previous_and_next():
    nav = NavigationController(today=TODAY)
    nav.previous()
    assert nav.offset == -1
    assert nav.displayed_months() == (date(2024, 12, 1), date(2025, 1, 1))
    nav.next()
    nav.next()
    assert nav.displayed_months() == (date(2025, 2, 1), date(2025, 3, 1))


def test_next_twice_then_today_returns_to_current_month():
    nav = NavigationController(today=TODAY)
    nav.next()
    nav.next()
    nav.today()
    assert nav.offset == 0
    assert nav.displayed_months()[0] == date(2025, 1, 1)


def test_offset_is_unbounded():
    nav = NavigationController(today=TODAY)
    for _ in range(25):
        nav.previous()
    assert nav.displayed_months() == (date(2022, 12, 1), date(2023, 1, 1))


def test_title():
    nav = NavigationController(today=TODAY)
    nav.previous()
    assert nav.title() == "December 2024 – January 2025"
