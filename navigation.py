"""Month offset state for the two-month paginated calendar."""

from __future__ import annotations

from datetime import date

from calendar_logic import add_months, month_title, start_of_month


class NavigationController:
    """Signed month offset from the current month, changed by ±1 or reset."""

    def __init__(self, today: date | None = None) -> None:
        self._today = today
        self.offset = 0

    def previous(self) -> None:
        self.offset -= 1

    def next(self) -> None:
        self.offset += 1

    def today(self) -> None:
        self.offset = 0

    def displayed_months(self) -> tuple[date, date]:
        first = add_months(start_of_month(self._today or date.today()), self.offset)
        return first, add_months(first, 1)

    def title(self) -> str:
        a, b = self.displayed_months()
        return f"{month_title(a)} – {month_title(b)}"
