"""Scrollable day-by-day agenda shown below the header."""

import logging
import tkinter as tk
from datetime import date
from tkinter import font as tkfont
from typing import Callable

from calendar_logic import date_from_day_index, day_index
from shared_state import SharedCalendarState

logger = logging.getLogger(__name__)

DAYS_AROUND = 366
ROW_BG = "white"
TODAY_BG = "#B3D7F2"
EMPTY_FG = "#888888"


def agenda_lines(state: SharedCalendarState, first: int, last: int) -> list[tuple[int, str]]:
    """Return (day index, text) rows for the inclusive day-index range."""
    lines: list[tuple[int, str]] = []
    for idx in range(first, last + 1):
        d = date_from_day_index(idx)
        events = state.events_for_day(idx)
        head = d.strftime("%a %d %b %Y")
        if events:
            titles = "; ".join(ev.title for ev in events)
            lines.append((idx, f"{head}   {titles}"))
        else:
            lines.append((idx, head))
    return lines


class Agenda(tk.Frame):
    """A Listbox with one row per day; the top row drives the header title."""

    def __init__(self, parent: tk.Widget, calendar_key: str,
                 today: Callable[[], date] | None = None) -> None:
        super().__init__(parent, bg=ROW_BG)
        self.state = SharedCalendarState.get(calendar_key)
        self._today = today or date.today
        start = day_index(self._today())
        self._first = start - DAYS_AROUND
        self._last = start + DAYS_AROUND

        families = tkfont.families(self)
        base = "Segoe UI" if "Segoe UI" in families else "TkDefaultFont"
        self.font_row = tkfont.Font(family=base, size=10)

        self._scrollbar = tk.Scrollbar(self, orient="vertical")
        self._list = tk.Listbox(
            self, font=self.font_row, bg=ROW_BG, activestyle="none",
            highlightthickness=0, borderwidth=0, selectmode="browse",
            yscrollcommand=self._on_yscroll,
        )
        self._scrollbar.configure(command=self._list.yview)
        self._scrollbar.pack(side="right", fill="y")
        self._list.pack(side="left", fill="both", expand=True)

        self._unsubscribe = self.state.on_events_change(lambda _e: self.refresh())
        self.state.source = self
        self.refresh()
        self.scroll_to_day(self._today())
        self.bind("<Destroy>", self._on_destroy, add="+")

    def refresh(self) -> None:
        """Rebuild the rows, re-reading today for the highlight."""
        top = self.state.current_top_index
        self._list.delete(0, "end")
        today_idx = day_index(self._today())
        for row, (idx, text) in enumerate(agenda_lines(self.state, self._first, self._last)):
            self._list.insert("end", text)
            if idx == today_idx:
                self._list.itemconfigure(row, bg=TODAY_BG)
            elif not self.state.events.get(idx):
                self._list.itemconfigure(row, fg=EMPTY_FG)
        if self._first <= top <= self._last:
            self._list.yview(top - self._first)

    def scroll_to_day(self, day: date) -> None:
        idx = day_index(day)
        if not self._first <= idx <= self._last:
            # Re-centre the window of days on the target
            self._first = idx - DAYS_AROUND
            self._last = idx + DAYS_AROUND
            logger.debug("Agenda re-centred on %s", day)
            self.refresh()
        self._list.yview(idx - self._first)
        self.state.current_top_index = idx

    def _on_yscroll(self, first: str, last: str) -> None:
        self._scrollbar.set(first, last)
        top_row = self._list.nearest(0)
        if top_row >= 0:
            self.state.current_top_index = self._first + top_row

    def _on_destroy(self, event: tk.Event) -> None:
        if event.widget is not self:
            return
        self._unsubscribe()
        if self.state.source is self:
            self.state.source = None
