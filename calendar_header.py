"""Calendar header widget (tkinter): month title, expandable month grid."""

import logging
import math
import tkinter as tk
from datetime import date
from tkinter import font as tkfont
from typing import Callable

from animation import AnimationController, ease_in, icon_turns
from header_model import (
    STYLE_DISPLAY,
    STYLE_OUTSIDE,
    STYLE_TODAY,
    SWIPE_NEXT,
    SWIPE_PREV,
    DayCell,
    HeaderModel,
)
from shared_state import SharedCalendarState

logger = logging.getLogger(__name__)

# Colours
ACCENT = "#0078D4"
DISPLAY_BG = "#EEEEEE"
HEADER_BG = "white"
GRID_BG = "white"
TEXT_FG = "#222222"

CELL_SIZE = 40
WEEKDAY_ROW_H = 20
MAX_ROWS = 6
PANEL_PAD = 10
DOT_SIZE = 4
DOT_GAP = 2
MAX_DOTS = 5
SWIPE_THRESHOLD = 40  # px of horizontal drag before it counts as a swipe


class _MonthPanel:
    """Weekday labels plus a fixed pool of day-cell canvases."""

    __slots__ = ("frame", "day_headers", "day_cells")

    def __init__(self, parent: tk.Widget, font_bold, on_press, on_release, on_wheel) -> None:
        self.frame = tk.Frame(parent, bg=GRID_BG)

        self.day_headers: list[tk.Label] = []
        for col in range(7):
            lbl = tk.Label(self.frame, font=font_bold, bg=GRID_BG, fg=TEXT_FG)
            lbl.grid(row=0, column=col, sticky="nsew")
            self.day_headers.append(lbl)
        self.frame.grid_rowconfigure(0, minsize=WEEKDAY_ROW_H)

        self.day_cells: list[list[tk.Canvas]] = []
        for r in range(MAX_ROWS):
            row_cells: list[tk.Canvas] = []
            for c in range(7):
                cell = tk.Canvas(
                    self.frame, width=CELL_SIZE, height=CELL_SIZE,
                    bg=GRID_BG, highlightthickness=0, borderwidth=0,
                )
                cell.grid(row=r + 1, column=c)
                cell.bind("<ButtonPress-1>", on_press)
                cell.bind("<ButtonRelease-1>", on_release)
                cell.bind("<MouseWheel>", on_wheel)
                cell.bind("<Button-4>", on_wheel)
                cell.bind("<Button-5>", on_wheel)
                row_cells.append(cell)
            self.day_cells.append(row_cells)
        for c in range(7):
            self.frame.grid_columnconfigure(c, minsize=CELL_SIZE, weight=1)

    @staticmethod
    def full_height(rows: int) -> int:
        return WEEKDAY_ROW_H + rows * CELL_SIZE + PANEL_PAD


class CalendarHeader(tk.Frame):
    """Title row that opens into a month grid with event dots.

    Looks up its shared state by *calendar_key*.  *persist_expanded* is
    called with the new flag whenever the user toggles the header.
    """

    def __init__(
        self,
        parent: tk.Widget,
        calendar_key: str,
        persist_expanded: Callable[[bool], None] | None = None,
        today: Callable[[], date] | None = None,
    ) -> None:
        super().__init__(parent, bg=HEADER_BG, bd=0, highlightthickness=0)
        self.state = SharedCalendarState.get(calendar_key)
        self.model = HeaderModel(self.state, today=today, persist_expanded=persist_expanded)
        self._setup_fonts()

        self._cell_dates: dict[int, DayCell] = {}
        self._press_x: int | None = None
        self._rows = MAX_ROWS

        self._controller = AnimationController(self.after, self.after_cancel)
        self._controller.add_listener(self._on_tick)

        self._build_title()
        self._clip = tk.Frame(self, bg=GRID_BG, width=7 * CELL_SIZE, height=0,
                              bd=0, highlightthickness=0)
        self._clip.pack(fill="x")
        self._clip.pack_propagate(False)
        self._panel = _MonthPanel(
            self._clip, self.font_bold, self._on_press, self._on_release, self._on_wheel)
        self._panel.frame.place(x=0, y=0, relwidth=1.0)
        # Drop shadow standing in for elevation
        tk.Frame(self, bg="#D0D0D0", height=2).pack(fill="x")

        if self.model.expanded:
            self._controller.set_value(1.0)
        self.model.add_listener(self.refresh)
        self.refresh()
        self.bind("<Destroy>", self._on_destroy, add="+")

    # ------------------------------------------------------------------
    # Fonts / build
    # ------------------------------------------------------------------
    def _setup_fonts(self) -> None:
        families = tkfont.families(self)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_title = tkfont.Font(family=base, size=18)
        self.font_normal = tkfont.Font(family=base, size=10)
        self.font_bold = tkfont.Font(family=base, size=9, weight="bold")

    def _build_title(self) -> None:
        row = tk.Frame(self, bg=HEADER_BG, cursor="hand2")
        row.pack(fill="x", padx=(5, 0), pady=8)
        self._title = tk.Label(row, font=self.font_title, bg=HEADER_BG, fg=TEXT_FG)
        self._title.pack(side="left")
        self._arrow = tk.Canvas(row, width=25, height=25, bg=HEADER_BG,
                                highlightthickness=0, borderwidth=0)
        self._arrow.pack(side="left", padx=(2, 0))
        for w in (row, self._title, self._arrow):
            w.bind("<Button-1>", lambda _e: self.toggle())

    # ------------------------------------------------------------------
    # Expand / collapse
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        self.model.toggle()

    def _run_animation(self) -> None:
        if self.model.expanded:
            self._controller.forward()
        else:
            self._controller.reverse(on_done=self.refresh)

    def _on_tick(self, value: float) -> None:
        height = round(ease_in(value) * _MonthPanel.full_height(self._rows))
        self._clip.configure(height=height)
        self._draw_arrow(icon_turns(value))

    def _draw_arrow(self, turns: float) -> None:
        """Draw an expand chevron rotated by *turns* around the canvas centre."""
        c = self._arrow
        c.delete("all")
        cx, cy = 12.5, 12.5
        angle = turns * 2 * math.pi
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        points = []
        for px, py in ((-6, -3), (0, 3), (6, -3)):
            points.extend((cx + px * cos_a - py * sin_a, cy + px * sin_a + py * cos_a))
        c.create_line(*points, width=2.5, fill=TEXT_FG, capstyle="round", joinstyle="round")

    # ------------------------------------------------------------------
    # Refresh from the model
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        self._title.configure(text=self.model.title())
        want = 1.0 if self.model.expanded else 0.0
        if self._controller.target != want or (
                self._controller.value != want and not self._controller.is_animating):
            self._run_animation()
        self._draw_arrow(icon_turns(self._controller.value))
        self._fill_panel()

    def _fill_panel(self) -> None:
        self._cell_dates.clear()
        for col, text in enumerate(self.model.weekday_labels()):
            self._panel.day_headers[col].configure(text=text)

        rows = self.model.cells()
        self._rows = len(rows)
        for r in range(MAX_ROWS):
            for c in range(7):
                canvas = self._panel.day_cells[r][c]
                if r < len(rows):
                    cell = rows[r][c]
                    self._draw_cell(canvas, cell)
                    if cell.clickable:
                        self._cell_dates[id(canvas)] = cell
                    canvas.grid()
                else:
                    canvas.delete("all")
                    canvas.grid_remove()
        if not self._controller.is_animating:
            self._on_tick(self._controller.value)

    def _draw_cell(self, canvas: tk.Canvas, cell: DayCell) -> None:
        canvas.delete("all")
        if cell.style == STYLE_OUTSIDE:
            canvas.configure(cursor="")
        else:
            fill, fg = None, TEXT_FG
            if cell.style == STYLE_TODAY:
                fill, fg = ACCENT, "white"
            elif cell.style == STYLE_DISPLAY:
                fill = DISPLAY_BG
            if fill:
                canvas.create_oval(4, 3, CELL_SIZE - 4, CELL_SIZE - 5, fill=fill, outline="")
            canvas.create_text(CELL_SIZE // 2, CELL_SIZE // 2 - 1, text=cell.label,
                               fill=fg, font=self.font_normal)
            canvas.configure(cursor="hand2")
        self._draw_dots(canvas, cell.event_colors)

    @staticmethod
    def _draw_dots(canvas: tk.Canvas, colors: tuple[str, ...]) -> None:
        """One small dot per event, centred along the bottom edge."""
        colors = colors[:MAX_DOTS]
        if not colors:
            return
        n = len(colors)
        width = n * DOT_SIZE + (n - 1) * DOT_GAP
        x = (CELL_SIZE - width) / 2
        y = CELL_SIZE - DOT_SIZE - 1
        for color in colors:
            canvas.create_oval(x, y, x + DOT_SIZE, y + DOT_SIZE, fill=color, outline="")
            x += DOT_SIZE + DOT_GAP

    # ------------------------------------------------------------------
    # Gestures: click a day, drag sideways or wheel to change month
    # ------------------------------------------------------------------
    def _on_press(self, event: tk.Event) -> None:
        self._press_x = event.x_root

    def _on_release(self, event: tk.Event) -> None:
        if self._press_x is None:
            return
        dx = event.x_root - self._press_x
        self._press_x = None
        if dx <= -SWIPE_THRESHOLD:
            self.model.swipe(SWIPE_NEXT)
        elif dx >= SWIPE_THRESHOLD:
            self.model.swipe(SWIPE_PREV)
        else:
            cell = self._cell_dates.get(id(event.widget))
            if cell is not None:
                self.model.select_day(cell.day)

    def _on_wheel(self, event: tk.Event) -> None:
        if getattr(event, "num", None) == 5 or getattr(event, "delta", 0) < 0:
            self.model.swipe(SWIPE_NEXT)
        else:
            self.model.swipe(SWIPE_PREV)

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is not self:
            return
        self._controller.dispose()
        self.model.dispose()
