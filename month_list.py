"""Month sequence and scroll bookkeeping for the infinite-scroll calendar."""

from __future__ import annotations

import bisect
import logging
import time
from datetime import date
from typing import Callable, NamedTuple, Protocol

from calendar_logic import add_months, month_key, month_rows, start_of_month

logger = logging.getLogger(__name__)

# Pixel heights of a month block
HEADER_HEIGHT = 60
WEEKDAY_ROW_HEIGHT = 30
DAY_ROW_HEIGHT = 50
PADDING = 24

INITIAL_MONTHS = 24
CURRENT_INDEX = 12
BATCH_MONTHS = 6

PREPEND_THRESHOLD = 200          # px from the top
END_REACHED_THRESHOLD = 0.5      # fraction of the viewport from the bottom
LOAD_COOLDOWN = 0.5              # seconds

# Virtualization hints
INITIAL_NUM_TO_RENDER = 5
MAX_TO_RENDER_PER_BATCH = 3
WINDOW_SIZE = 7                  # viewports kept rendered


def month_height(month: date) -> int:
    return HEADER_HEIGHT + WEEKDAY_ROW_HEIGHT + month_rows(month) * DAY_ROW_HEIGHT + PADDING


class ItemLayout(NamedTuple):
    length: int
    offset: int
    index: int


class ScrollResult(NamedTuple):
    prepended: int = 0
    appended: int = 0
    adjustment: int = 0


class ScrollableView(Protocol):
    def scroll_to(self, offset: int, animated: bool = False) -> None: ...
    def current_offset(self) -> int: ...
    def content_changed(self) -> None: ...
    def after_layout(self, callback: Callable[[], None]) -> None: ...


class Cooldown:
    """Single in-flight guard that frees itself *interval* seconds after use.

    Release is checked lazily against *clock*, so no UI timer is needed.
    """

    __slots__ = ("interval", "_clock", "_started")

    def __init__(self, interval: float = LOAD_COOLDOWN,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self.interval = interval
        self._clock = clock
        self._started: float | None = None

    @property
    def busy(self) -> bool:
        if self._started is None:
            return False
        if self._clock() - self._started >= self.interval:
            self._started = None
            return False
        return True

    def try_acquire(self) -> bool:
        if self.busy:
            return False
        self._started = self._clock()
        return True

    def release(self) -> None:
        self._started = None


class MonthListController:
    """Owns the month sequence behind the infinite-scroll view."""

    def __init__(self, today: date | None = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        self._today = today
        self._months: list[date] = []
        # _offsets[i] is the top of month i; _offsets[-1] the total height
        self._offsets: list[int] = [0]
        self._view: ScrollableView | None = None
        self._initial_scroll_done = False
        self._loading_previous = Cooldown(LOAD_COOLDOWN, clock)

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------
    @property
    def months(self) -> tuple[date, ...]:
        return tuple(self._months)

    def __len__(self) -> int:
        return len(self._months)

    def month_at(self, index: int) -> date:
        if not 0 <= index < len(self._months):
            raise IndexError(f"month index {index} out of range 0..{len(self._months) - 1}")
        return self._months[index]

    def index_of(self, month: date) -> int | None:
        """Index of the month containing *month*, or None if not loaded."""
        if not self._months:
            return None
        first = self._months[0]
        i = (month.year - first.year) * 12 + month.month - first.month
        return i if 0 <= i < len(self._months) else None

    @property
    def loading_previous(self) -> bool:
        return self._loading_previous.busy

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def total_height(self) -> int:
        return self._offsets[-1]

    def offset_of(self, index: int) -> int:
        """Top pixel of month *index*; ``len(self)`` gives the total height."""
        if not self._months:
            return 0
        index = max(0, min(index, len(self._months)))
        return self._offsets[index]

    def item_layout(self, index: int) -> ItemLayout:
        if not self._months:
            return ItemLayout(0, 0, index)
        month = self.month_at(index)
        return ItemLayout(month_height(month), self._offsets[index], index)

    def index_at(self, offset: int) -> int | None:
        """Index of the month under pixel *offset*."""
        if not self._months:
            return None
        i = bisect.bisect_right(self._offsets, offset) - 1
        return max(0, min(i, len(self._months) - 1))

    def render_window(self, offset: int, viewport_height: int,
                      window_size: int = WINDOW_SIZE) -> tuple[int, int]:
        """Index range ``[first, last)`` to keep drawn around *offset*."""
        if not self._months:
            return 0, 0
        if offset == 0 and viewport_height <= 0:
            return 0, min(INITIAL_NUM_TO_RENDER, len(self._months))
        spare = (window_size - 1) // 2 * viewport_height
        top = offset - spare
        bottom = offset + viewport_height + spare
        first = max(0, bisect.bisect_right(self._offsets, top) - 1)
        last = min(len(self._months), bisect.bisect_left(self._offsets, bottom))
        return first, max(first + 1, last)

    def _rebuild_offsets(self) -> None:
        offsets = [0]
        for m in self._months:
            offsets.append(offsets[-1] + month_height(m))
        self._offsets = offsets

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        current = start_of_month(self._today or date.today())
        self._months = [add_months(current, i - CURRENT_INDEX)
                        for i in range(INITIAL_MONTHS)]
        self._rebuild_offsets()
        logger.debug("Seeded months %s .. %s",
                     month_key(self._months[0]), month_key(self._months[-1]))
        self._maybe_initial_scroll()

    def append_forward(self) -> list[date]:
        if not self._months:
            return []
        last = self._months[-1]
        new = [add_months(last, i + 1) for i in range(BATCH_MONTHS)]
        self._months.extend(new)
        for m in new:
            self._offsets.append(self._offsets[-1] + month_height(m))
        logger.debug("Appended %s .. %s", month_key(new[0]), month_key(new[-1]))
        return new

    def prepend_backward(self) -> int:
        """Prepend a batch before the first month; return its total height."""
        if not self._months:
            return 0
        first = self._months[0]
        new = [add_months(first, i - BATCH_MONTHS) for i in range(BATCH_MONTHS)]
        added = sum(month_height(m) for m in new)
        self._months[:0] = new
        self._rebuild_offsets()
        logger.debug("Prepended %s .. %s (+%dpx)",
                     month_key(new[0]), month_key(new[-1]), added)
        return added

    # ------------------------------------------------------------------
    # View wiring
    # ------------------------------------------------------------------
    def attach(self, view: ScrollableView) -> None:
        """Called once the scrollable view exists and has a size."""
        self._view = view
        self._maybe_initial_scroll()

    def detach(self) -> None:
        self._view = None

    @property
    def initial_scroll_done(self) -> bool:
        return self._initial_scroll_done

    def _maybe_initial_scroll(self) -> None:
        if self._initial_scroll_done or not self._months or self._view is None:
            return
        self._initial_scroll_done = True
        self._view.scroll_to(self.offset_of(CURRENT_INDEX), animated=False)

    def scroll_to_month(self, month: date) -> bool:
        """Jump to *month* if loaded; no-op without a view."""
        i = self.index_of(month)
        if i is None or self._view is None:
            return False
        self._view.scroll_to(self.offset_of(i), animated=False)
        return True

    def on_scroll(self, offset: int, viewport_height: int) -> ScrollResult:
        """Extend the sequence when *offset* nears either end."""
        view = self._view
        prepended = appended = adjustment = 0

        if offset < PREPEND_THRESHOLD and self._loading_previous.try_acquire():
            adjustment = self.prepend_backward()
            prepended = BATCH_MONTHS if adjustment else 0
            if view is not None and adjustment:
                view.content_changed()
                view.after_layout(lambda: view.scroll_to(
                    view.current_offset() + adjustment, animated=False))
            offset += adjustment

        remaining = self.total_height - (offset + viewport_height)
        if self._months and remaining < viewport_height * END_REACHED_THRESHOLD:
            appended = len(self.append_forward())
            if view is not None:
                view.content_changed()

        return ScrollResult(prepended, appended, adjustment)
