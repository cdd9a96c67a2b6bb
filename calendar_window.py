"""Scrollable month-list calendar window (tkinter)."""

import logging
from datetime import date
from tkinter import font as tkfont
import tkinter as tk

from calendar_logic import (
    DAY_ABBR,
    MonthGroup,
    cell_key,
    day_of_year,
    group_by_month,
    month_title,
    pad_to_weeks,
    weeks,
)
from date_range import DateRange, EmptyRangeError, InvalidDateError
from lunar import LunarConverter
from scroll_target import (
    TODAY_ANCHOR,
    ScrollPlan,
    ScrollScheduler,
    nearest_month_anchor,
    plan_today_scroll,
)
from settings import load_settings, save_settings

logger = logging.getLogger(__name__)

# Colours
TODAY_BG = "#E53935"
FLASH_BG = "#FFCDD2"
HEADER_BG = "#F3F3F3"
GRID_BG = "white"
SUNDAY_FG = "#CC0000"
DAY_FG = "#333333"
ADD_BG = "#43A047"
TODAY_BTN_BG = "#1E88E5"

MAX_WEEKS = 6


class _MonthPanel:
    """Pre-allocated widget pool for a single month (header + 6 weeks max)."""

    __slots__ = ("frame", "header", "day_cells")

    def __init__(self, parent: tk.Frame, fonts: dict) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.header = tk.Label(
            self.frame, font=fonts["header"], bg=HEADER_BG, fg=DAY_FG, anchor="w",
        )
        self.header.grid(row=0, column=0, columnspan=7, sticky="we", pady=(0, 4))

        self.day_cells: list[list[tk.Label]] = []
        for r in range(MAX_WEEKS):
            row_cells: list[tk.Label] = []
            for c in range(7):
                cell = tk.Label(
                    self.frame, font=fonts["normal"], bg=GRID_BG,
                    width=5, height=2, justify="center",
                )
                cell.grid(row=r + 1, column=c, padx=1, pady=1)
                row_cells.append(cell)
            self.day_cells.append(row_cells)


class CalendarWindow:
    """Vertical list of months over a DateRange, scrolled a month at a time.

    Only ``visible_months`` panels exist; scrolling re-fills them from the
    grouped range, so a range spanning two centuries costs no more widgets
    than one spanning three years.
    """

    def __init__(self, date_range: DateRange, settings: dict | None = None,
                 lunar: LunarConverter | None = None) -> None:
        settings = settings if settings is not None else load_settings()
        self.date_range = date_range
        self.lunar = lunar
        self.visible_months: int = settings["visible_months"]
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]

        self.root = tk.Tk()
        self.root.title(self._title())
        self.root.resizable(True, True)
        self.root.configure(bg=GRID_BG)
        self._setup_fonts()
        self._panel_fonts = {"header": self.font_header, "normal": self.font_normal}

        # Derived from date_range on every refresh
        self._groups: list[MonthGroup] = []
        self._index_by_key: dict[str, int] = {}
        self._first = 0

        # Scroll anchors of rendered cells (cell keys and TODAY_ANCHOR)
        self._anchors: dict[str, tk.Label] = {}
        self._flash_after_id: str | None = None
        self._scroller = ScrollScheduler(self._scroll_to_anchor)

        self._month_height = 0
        self._chrome_height = 0
        self._resize_after_id: str | None = None

        self._panels: list[_MonthPanel] = []
        self._build_shell()
        if not self.date_range:
            self._add_btn.configure(state="disabled")
        self.go_today()

        self.root.bind("<MouseWheel>", self._on_wheel)
        self.root.bind("<Button-4>", self._on_wheel)
        self.root.bind("<Button-5>", self._on_wheel)
        self.root.bind("<Prior>", lambda _e: self._scroll_months(-self.visible_months))
        self.root.bind("<Next>", lambda _e: self._scroll_months(self.visible_months))
        self.root.bind("<Home>", lambda _e: self.go_today())
        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self.root)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_normal = tkfont.Font(family=base, size=9)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")
        self.font_header = tkfont.Font(family=base, size=11, weight="bold")
        self.font_footer = tkfont.Font(family=base, size=9)

    @staticmethod
    def _title() -> str:
        return f"Scroll Calendar  Day: {day_of_year(date.today())}"

    # ------------------------------------------------------------------
    # Build shell (once) — weekday row + month list + buttons + footer
    # ------------------------------------------------------------------
    def _build_shell(self) -> None:
        self._outer = tk.Frame(self.root, bg=GRID_BG)
        self._outer.pack(fill="both", expand=True, padx=6, pady=4)

        weekday_row = tk.Frame(self._outer, bg=GRID_BG)
        weekday_row.pack(fill="x", pady=(0, 4))
        for col, abbr in enumerate(DAY_ABBR):
            tk.Label(
                weekday_row, text=abbr, font=self.font_bold, bg=GRID_BG, width=5,
                fg=SUNDAY_FG if col == 0 else DAY_FG,
            ).grid(row=0, column=col, padx=1)

        body = tk.Frame(self._outer, bg=GRID_BG)
        body.pack(fill="both", expand=True)
        self._months_frame = tk.Frame(body, bg=GRID_BG)
        self._months_frame.pack(side="left", fill="both", expand=True)
        self._scrollbar = tk.Scrollbar(body, orient="vertical", command=self._on_scrollbar)
        self._scrollbar.pack(side="right", fill="y")

        buttons = tk.Frame(self._outer, bg=GRID_BG)
        buttons.pack(fill="x", pady=(6, 0))
        self._today_btn = tk.Button(
            buttons, text="Today", font=self.font_bold, bg=TODAY_BTN_BG, fg="white",
            command=self.go_today,
        )
        self._today_btn.pack(side="right", padx=4)
        self._add_btn = tk.Button(
            buttons, text="Add Next Year", font=self.font_bold, bg=ADD_BG, fg="white",
            command=self.add_next_year,
        )
        self._add_btn.pack(side="right", padx=4)

        self._footer_label = tk.Label(
            self._outer, font=self.font_footer, bg=GRID_BG, fg="#555555",
        )
        self._footer_label.pack(pady=(4, 0))

    # ------------------------------------------------------------------
    # Regroup + render; pending scrolls run once the render is committed
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._groups = group_by_month(self.date_range.days)
        self._index_by_key = {g.key: i for i, g in enumerate(self._groups)}
        self._first = self._clamp_first(self._first)
        self._render()
        self.root.after_idle(self._scroller.render_complete)

    def _render(self) -> None:
        self._anchors.clear()
        today = date.today()
        count = min(self.visible_months, len(self._groups))

        while len(self._panels) < count:
            self._panels.append(_MonthPanel(self._months_frame, self._panel_fonts))

        for slot in range(count):
            panel = self._panels[slot]
            panel.frame.grid(row=slot, column=0, sticky="nw", pady=(0, 12))
            self._fill_panel(panel, self._groups[self._first + slot], today)

        for panel in self._panels[count:]:
            panel.frame.grid_forget()

        self._update_scrollbar()
        self._footer_label.configure(text=self._footer_text(today))

        # Measure panel height once (it never changes)
        if self._month_height == 0 and count:
            self.root.update_idletasks()
            self._month_height = self._panels[0].frame.winfo_reqheight() + 12
            self._chrome_height = (self._outer.winfo_reqheight()
                                   - self._months_frame.winfo_reqheight())

    def _fill_panel(self, panel: _MonthPanel, group: MonthGroup, today: date) -> None:
        """Reconfigure an existing panel's labels — no widget creation."""
        panel.header.configure(text=month_title(group))
        rows = weeks(pad_to_weeks(group, self.lunar, today))

        for r in range(MAX_WEEKS):
            for c in range(7):
                widget = panel.day_cells[r][c]
                cell = rows[r][c] if r < len(rows) else None
                if cell is None:
                    widget.configure(text="", bg=GRID_BG, relief="flat")
                    continue
                text = cell.label if cell.lunar is None else f"{cell.label}\n{cell.lunar}"
                if cell.is_today:
                    widget.configure(text=text, bg=TODAY_BG, fg="white",
                                     font=self.font_bold, relief="flat")
                    self._anchors[TODAY_ANCHOR] = widget
                else:
                    widget.configure(text=text, bg=GRID_BG,
                                     fg=SUNDAY_FG if c == 0 else DAY_FG,
                                     font=self.font_normal, relief="flat")
                self._anchors[cell_key(group, r * 7 + c)] = widget

    def _footer_text(self, today: date) -> str:
        today_str = f"Today: {today.strftime('%d.%m.%Y')}"
        if not self.date_range:
            return today_str
        return (f"{today_str}     Range: {self.date_range.first_year}"
                f"–{self.date_range.last_year}")

    # ------------------------------------------------------------------
    # Scroll anchors
    # ------------------------------------------------------------------
    def _scroll_to_anchor(self, anchor: str) -> None:
        index = self._index_by_key.get(anchor)
        if index is not None:
            self._first = self._clamp_first(index - (self.visible_months - 1) // 2)
            self._render()
            return
        widget = self._anchors.get(anchor)
        if widget is None:
            logger.debug("Scroll anchor %s is not rendered", anchor)
            return
        self._flash(widget)

    def _flash(self, widget: tk.Label) -> None:
        if self._flash_after_id is not None:
            self.root.after_cancel(self._flash_after_id)
        widget.configure(relief="solid", borderwidth=2)
        self._flash_after_id = self.root.after(
            1200, lambda: self._end_flash(widget))

    def _end_flash(self, widget: tk.Label) -> None:
        self._flash_after_id = None
        widget.configure(relief="flat", borderwidth=0)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def go_today(self) -> None:
        days = self.date_range.days
        today = date.today()
        plan = plan_today_scroll(days, today)
        if plan.month is None:
            fallback = nearest_month_anchor(days, today)
            logger.info("Today %s is outside the loaded range, showing %s", today, fallback)
            plan = ScrollPlan(fallback)
        self.root.title(self._title())
        self._scroller.request(plan)
        self.refresh()

    def add_next_year(self) -> None:
        try:
            self.date_range.extend_by_one_year()
        except (EmptyRangeError, InvalidDateError) as exc:
            logger.warning("Cannot add next year: %s", exc)
            self._add_btn.configure(state="disabled")
            return
        self.refresh()

    # ------------------------------------------------------------------
    # Month-wise scrolling
    # ------------------------------------------------------------------
    def _clamp_first(self, index: int) -> int:
        return max(0, min(index, len(self._groups) - self.visible_months))

    def _scroll_months(self, delta: int) -> None:
        first = self._clamp_first(self._first + delta)
        if first != self._first:
            self._first = first
            self._render()

    def _on_scrollbar(self, *args: str) -> None:
        total = len(self._groups)
        if not total:
            return
        if args[0] == "moveto":
            first = self._clamp_first(round(float(args[1]) * total))
            if first != self._first:
                self._first = first
                self._render()
        elif args[0] == "scroll":
            step = int(args[1])
            if args[2] == "pages":
                step *= self.visible_months
            self._scroll_months(step)

    def _on_wheel(self, event: tk.Event) -> None:
        if event.num == 4:
            self._scroll_months(-1)
        elif event.num == 5:
            self._scroll_months(1)
        elif event.delta:
            self._scroll_months(-1 if event.delta > 0 else 1)

    def _update_scrollbar(self) -> None:
        total = len(self._groups)
        if not total:
            self._scrollbar.set(0.0, 1.0)
            return
        lo = self._first / total
        hi = min(1.0, (self._first + self.visible_months) / total)
        self._scrollbar.set(lo, hi)

    # ------------------------------------------------------------------
    # Resize handling — fit month count to window height
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root:
            return
        if self._month_height <= 0:
            return
        # Track size (persisted on hide)
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()
        # Debounce (30ms) to batch rapid configure events
        if self._resize_after_id is not None:
            self.root.after_cancel(self._resize_after_id)
        self._resize_after_id = self.root.after(30, self._handle_resize)

    def _handle_resize(self) -> None:
        self._resize_after_id = None
        visible = max(1, (self._saved_height - self._chrome_height) // self._month_height)
        if visible != self.visible_months:
            self.visible_months = visible
            self._first = self._clamp_first(self._first)
            self._render()

    # ------------------------------------------------------------------
    # Persist window size
    # ------------------------------------------------------------------
    def _persist_size(self) -> None:
        settings = load_settings()
        settings["window_width"] = self._saved_width
        settings["window_height"] = self._saved_height
        settings["visible_months"] = self.visible_months
        save_settings(settings)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        if self._saved_width is not None and self._saved_height is not None:
            self.root.geometry(f"{self._saved_width}x{self._saved_height}")
        self.root.deiconify()
        self.go_today()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self._saved_width is not None and self._saved_height is not None:
            self._persist_size()
        self.root.withdraw()
