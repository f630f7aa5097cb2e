"""Calendar window (tkinter): infinite month scroll or two-month pages."""

from __future__ import annotations

import logging
import tkinter as tk
from datetime import date
from tkinter import font as tkfont
from typing import Callable

from calendar_logic import (
    DAY_ABBR,
    DEFAULT_BG,
    HOLIDAY_FG,
    add_months,
    day_style,
    month_cells,
    month_key,
    month_title,
)
from holiday_table import Holiday, merge_holidays
from month_list import (
    DAY_ROW_HEIGHT,
    HEADER_HEIGHT,
    MAX_TO_RENDER_PER_BATCH,
    WEEKDAY_ROW_HEIGHT,
    MonthListController,
    month_height,
)
from navigation import NavigationController
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#007AFF"
GRID_BG = DEFAULT_BG
TITLE_FG = "#111111"
WEEKDAY_FG = "#666666"

SCROLL_WIDTH = 380
PAGED_MONTH_WIDTH = 300
H_PADDING = 16
WHEEL_STEP = 60
# Screen margins kept clear of the window (title bar / taskbar)
INSET_TOP = 24
INSET_BOTTOM = 56


def truncate_text(text: str, measure: Callable[[str], int], max_px: int) -> str:
    """Shorten *text* with an ellipsis until ``measure`` says it fits."""
    if measure(text) <= max_px:
        return text
    for end in range(len(text) - 1, 0, -1):
        candidate = text[:end] + "…"
        if measure(candidate) <= max_px:
            return candidate
    return ""


class MonthPainter:
    """Draws one month block (title, weekday row, day grid) onto a canvas."""

    __slots__ = ("_fonts", "_holidays")

    def __init__(self, fonts: dict, holidays: dict[str, Holiday]) -> None:
        self._fonts = fonts
        self._holidays = holidays

    def draw(self, canvas: tk.Canvas, month: date, y: int, x: int,
             width: int, today: date, tag: str) -> None:
        fonts = self._fonts
        cell_w = width / 7
        canvas.create_text(
            x, y + HEADER_HEIGHT / 2, anchor="w", text=month_title(month),
            font=fonts["title"], fill=TITLE_FG, tags=tag,
        )

        top = y + HEADER_HEIGHT
        for col, abbr in enumerate(DAY_ABBR):
            canvas.create_text(
                x + col * cell_w + cell_w / 2, top + WEEKDAY_ROW_HEIGHT / 2,
                text=abbr[0], font=fonts["weekday"], fill=WEEKDAY_FG, tags=tag,
            )

        top += WEEKDAY_ROW_HEIGHT
        caption_px = int(cell_w) - 4
        for r, row in enumerate(month_cells(month, today, self._holidays)):
            for c, cell in enumerate(row):
                # Blank slots draw nothing
                if cell is None:
                    continue
                style = day_style(cell)
                x1 = x + c * cell_w + 2
                y1 = top + r * DAY_ROW_HEIGHT + 2
                x2 = x1 + cell_w - 4
                y2 = y1 + DAY_ROW_HEIGHT - 4
                if style.bg != GRID_BG:
                    canvas.create_rectangle(x1, y1, x2, y2, fill=style.bg,
                                            outline="", tags=tag)
                cx = (x1 + x2) / 2
                canvas.create_text(
                    cx, (y1 + y2) / 2, text=str(cell.date.day), fill=style.fg,
                    font=fonts["day_bold" if style.bold else "day"], tags=tag,
                )
                if cell.holiday is not None:
                    caption = truncate_text(cell.holiday.name,
                                            fonts["caption"].measure, caption_px)
                    canvas.create_text(
                        cx, y2 - 7, text=caption, fill=HOLIDAY_FG,
                        font=fonts["caption"], tags=tag,
                    )


class ScrollView:
    """Virtualized vertical list of months on a canvas."""

    def __init__(self, parent: tk.Misc, fonts: dict,
                 holidays: dict[str, Holiday]) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)
        self.canvas = tk.Canvas(
            self.frame, bg=GRID_BG, highlightthickness=0, borderwidth=0,
            width=SCROLL_WIDTH,
        )
        self.scrollbar = tk.Scrollbar(self.frame, orient="vertical",
                                      command=self._on_scrollbar)
        self.canvas.configure(yscrollcommand=self.scrollbar.set)
        self.scrollbar.pack(side="right", fill="y")
        self.canvas.pack(side="left", fill="both", expand=True)

        self._painter = MonthPainter(fonts, holidays)
        self._drawn: dict[date, int] = {}
        self._width = 0
        self._redraw_id: str | None = None
        self._after_ids: set[str] = set()

        self.controller = MonthListController()
        self.controller.initialize()

        self.canvas.bind("<Configure>", self._on_configure)
        for seq in ("<MouseWheel>", "<Button-4>", "<Button-5>"):
            self.canvas.bind(seq, self._on_wheel)

    # ------------------------------------------------------------------
    # Scrollable-view protocol used by MonthListController
    # ------------------------------------------------------------------
    def scroll_to(self, offset: int, animated: bool = False) -> None:
        total = self.controller.total_height
        if total <= 0 or not self.canvas.winfo_exists():
            return
        self.canvas.yview_moveto(max(0, offset) / total)
        self._redraw()

    def current_offset(self) -> int:
        return int(self.canvas.canvasy(0))

    def content_changed(self) -> None:
        self._update_scrollregion()
        self._redraw()

    def after_layout(self, callback: Callable[[], None]) -> None:
        def run() -> None:
            self._after_ids.discard(after_id)
            callback()
        after_id = self.canvas.after_idle(run)
        self._after_ids.add(after_id)

    # ------------------------------------------------------------------
    # Common view interface
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._clear()
        self._redraw()

    def destroy(self) -> None:
        # Idle callbacks must not outlive the canvas they belong to
        for after_id in self._after_ids:
            self.canvas.after_cancel(after_id)
        self._after_ids.clear()
        self._redraw_id = None
        self.controller.detach()
        self.frame.destroy()

    def go_today(self) -> None:
        if self.controller.scroll_to_month(date.today()):
            return
        # Scrolled too far away: start over around today
        view_ready = self._width > 0
        self.controller.detach()
        self.controller = MonthListController()
        self.controller.initialize()
        self._clear()
        self._update_scrollregion()
        if view_ready:
            self.controller.attach(self)

    def step(self, direction: int) -> None:
        offset = self.current_offset()
        index = self.controller.index_at(offset)
        if index is None:
            return
        month = self.controller.month_at(index)
        # Going back from mid-month first snaps to that month's top
        if direction > 0 or self.controller.offset_of(index) == offset:
            month = add_months(month, direction)
        if not self.controller.scroll_to_month(month):
            return
        self._on_scrolled()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.width <= 1:
            return
        if event.width != self._width:
            self._width = event.width
            self._clear()
            self._update_scrollregion()
        # The canvas has a real size now, so the one-time initial scroll can run
        if not self.controller.initial_scroll_done:
            self.controller.attach(self)
        else:
            self._redraw()

    def _on_scrollbar(self, *args) -> None:
        self.canvas.yview(*args)
        self._on_scrolled()

    def _on_wheel(self, event: tk.Event) -> None:
        if getattr(event, "num", None) == 4 or getattr(event, "delta", 0) > 0:
            self.scroll_to(self.current_offset() - WHEEL_STEP)
        else:
            self.scroll_to(self.current_offset() + WHEEL_STEP)
        self._on_scrolled()

    def _on_scrolled(self) -> None:
        self._redraw()
        self.controller.on_scroll(self.current_offset(), self.canvas.winfo_height())

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _update_scrollregion(self) -> None:
        self.canvas.configure(
            scrollregion=(0, 0, self._width, self.controller.total_height))

    def _clear(self) -> None:
        self.canvas.delete("all")
        self._drawn.clear()

    def _redraw(self) -> None:
        if self._redraw_id is not None:
            # No-op when this call is the idle callback itself
            self.canvas.after_cancel(self._redraw_id)
            self._after_ids.discard(self._redraw_id)
            self._redraw_id = None
        if self._width <= 0:
            return
        ctl = self.controller
        offset = self.current_offset()
        first, last = ctl.render_window(offset, self.canvas.winfo_height())
        wanted = {ctl.month_at(i): ctl.offset_of(i) for i in range(first, last)}

        for month, y in list(self._drawn.items()):
            if wanted.get(month) != y:
                self.canvas.delete(month_key(month))
                del self._drawn[month]

        missing = sorted((m for m in wanted if m not in self._drawn),
                         key=lambda m: abs(wanted[m] - offset))
        today = date.today()
        width = self._width - 2 * H_PADDING
        for month in missing[:MAX_TO_RENDER_PER_BATCH]:
            self._painter.draw(self.canvas, month, wanted[month], H_PADDING,
                               width, today, month_key(month))
            self._drawn[month] = wanted[month]

        if len(missing) > MAX_TO_RENDER_PER_BATCH and self._redraw_id is None:
            self._redraw_id = self.canvas.after_idle(self._redraw)
            self._after_ids.add(self._redraw_id)


class PagedView:
    """Two consecutive months side by side with prev / today / next."""

    def __init__(self, parent: tk.Misc, fonts: dict,
                 holidays: dict[str, Holiday]) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)
        self.nav = NavigationController()
        self._painter = MonthPainter(fonts, holidays)

        # Navigation row: ◀  Today  title  ▶
        bar = tk.Frame(self.frame, bg=GRID_BG)
        bar.pack(fill="x", padx=H_PADDING, pady=(8, 2))

        btn_prev = tk.Label(bar, text="◀", font=fonts["nav"], bg=GRID_BG,
                            cursor="hand2")
        btn_prev.pack(side="left", padx=6)
        btn_prev.bind("<Button-1>", lambda _e: self.step(-1))

        btn_today = tk.Label(bar, text="Today", font=fonts["day_bold"], bg=GRID_BG,
                             fg=ACCENT, cursor="hand2")
        btn_today.pack(side="left", padx=6)
        btn_today.bind("<Button-1>", lambda _e: self.go_today())

        btn_next = tk.Label(bar, text="▶", font=fonts["nav"], bg=GRID_BG,
                            cursor="hand2")
        btn_next.pack(side="right", padx=6)
        btn_next.bind("<Button-1>", lambda _e: self.step(1))

        self._title = tk.Label(bar, font=fonts["day"], bg=GRID_BG, fg=WEEKDAY_FG)
        self._title.pack(side="right", padx=6)

        months = tk.Frame(self.frame, bg=GRID_BG)
        months.pack(padx=H_PADDING, pady=(0, 8))
        self._canvases: list[tk.Canvas] = []
        for col in range(2):
            canvas = tk.Canvas(months, bg=GRID_BG, highlightthickness=0,
                               borderwidth=0, width=PAGED_MONTH_WIDTH)
            canvas.grid(row=0, column=col, padx=6, sticky="n")
            self._canvases.append(canvas)
        self.refresh()

    def step(self, direction: int) -> None:
        if direction < 0:
            self.nav.previous()
        else:
            self.nav.next()
        self.refresh()

    def go_today(self) -> None:
        self.nav.today()
        self.refresh()

    def refresh(self) -> None:
        today = date.today()
        self._title.configure(text=self.nav.title())
        for canvas, month in zip(self._canvases, self.nav.displayed_months()):
            canvas.delete("all")
            # Exact height for this month's row count, never a fixed 6 rows
            canvas.configure(height=month_height(month))
            self._painter.draw(canvas, month, 0, 0, PAGED_MONTH_WIDTH, today,
                               month_key(month))

    def destroy(self) -> None:
        self.frame.destroy()


class CalendarWindow:
    """Calendar window docked to the right edge of the screen."""

    def __init__(self, settings_path: str | None = None) -> None:
        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        self._settings_path = settings_path
        settings = load_settings(settings_path)
        self.view_kind: str = settings["view"]
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]
        self._holidays = merge_holidays(settings["holidays"])

        self._setup_fonts()
        self._view: ScrollView | PagedView | None = None
        self._build_view()

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Left>", lambda _e: self._view.step(-1))
        self.root.bind("<Right>", lambda _e: self._view.step(1))
        self.root.bind("<Home>", lambda _e: self._view.go_today())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self._fonts = {
            "title": tkfont.Font(family=base, size=18, weight="bold"),
            "weekday": tkfont.Font(family=base, size=10, weight="bold"),
            "day": tkfont.Font(family=base, size=10),
            "day_bold": tkfont.Font(family=base, size=10, weight="bold"),
            "caption": tkfont.Font(family=base, size=7),
            "nav": tkfont.Font(family=base, size=12, weight="bold"),
        }

    @staticmethod
    def _title() -> str:
        return f"Calendar  {date.today().strftime('%d.%m.%Y')}"

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def _build_view(self) -> None:
        if self._view is not None:
            self._view.destroy()
        cls = ScrollView if self.view_kind == "scroll" else PagedView
        self._view = cls(self.root, self._fonts, self._holidays)
        self._view.frame.pack(fill="both", expand=True)
        logger.info("Showing %s view", self.view_kind)

    def switch_view(self) -> None:
        self.view_kind = "paged" if self.view_kind == "scroll" else "scroll"
        self._saved_width = None
        self._saved_height = None
        settings = load_settings(self._settings_path)
        settings["view"] = self.view_kind
        settings["window_width"] = None
        settings["window_height"] = None
        self._save(settings)
        visible = self.root.state() != "withdrawn"
        self._build_view()
        if visible:
            self.show()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.root.title(self._title())
        self._view.refresh()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self.root.state() != "withdrawn":
            self._saved_width = self.root.winfo_width()
            self._saved_height = self.root.winfo_height()
            self._persist_size()
        self.root.withdraw()

    def _persist_size(self) -> None:
        settings = load_settings(self._settings_path)
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        self._save(settings)

    def _save(self, settings: dict) -> None:
        try:
            save_settings(settings, self._settings_path)
        except OSError as exc:
            logger.warning("Could not save settings: %s", exc)

    # ------------------------------------------------------------------
    # Position at the right screen edge, inside the top/bottom insets
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        self.root.update_idletasks()
        screen_w = self.root.winfo_screenwidth()
        screen_h = self.root.winfo_screenheight()
        usable_h = screen_h - INSET_TOP - INSET_BOTTOM

        if self._saved_width and self._saved_height:
            win_w, win_h = self._saved_width, self._saved_height
        elif self.view_kind == "scroll":
            win_w = self.root.winfo_reqwidth()
            win_h = usable_h
        else:
            win_w = self.root.winfo_reqwidth()
            win_h = self.root.winfo_reqheight()
        win_h = min(win_h, usable_h)

        x = screen_w - win_w - 12
        y = screen_h - INSET_BOTTOM - win_h
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
