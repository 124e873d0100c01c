"""View state of the calendar header, kept free of any toolkit import."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

from calendar_logic import (
    day_index,
    format_month_year,
    month_grid,
    month_index_from_date,
    month_to_show,
    next_month_index,
    prev_month_index,
    weekday_headers,
)
from shared_state import SharedCalendarState

logger = logging.getLogger(__name__)

# Cell styles
STYLE_TODAY = "today"
STYLE_DISPLAY = "display"
STYLE_PLAIN = "plain"
STYLE_OUTSIDE = "outside"

SWIPE_NEXT = "next"    # right-to-left drag
SWIPE_PREV = "prev"


@dataclass(frozen=True)
class DayCell:
    day: date
    label: str
    style: str
    event_colors: tuple[str, ...]

    @property
    def clickable(self) -> bool:
        return self.style != STYLE_OUTSIDE


class HeaderModel:
    """Month shown by the header, its expanded state and the grid cells."""

    def __init__(
        self,
        state: SharedCalendarState,
        today: Callable[[], date] | None = None,
        persist_expanded: Callable[[bool], None] | None = None,
    ) -> None:
        self.state = state
        self._today = today or (lambda: datetime.now(state.location).date())
        self._persist_expanded = persist_expanded
        self.month_index = month_index_from_date(self._today())
        self.expanded = state.header_expanded
        self._listeners: list[Callable[[], None]] = []
        self._unsubscribe = [
            state.on_header_expanded_change(self._on_expanded_change),
            state.on_index_change(lambda _i: self._notify()),
            state.on_events_change(lambda _e: self._notify()),
        ]

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def dispose(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        self._listeners.clear()

    def _notify(self) -> None:
        for cb in list(self._listeners):
            cb()

    def _on_expanded_change(self, expanded: bool) -> None:
        if expanded != self.expanded:
            self.expanded = expanded
            self._notify()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def toggle(self) -> bool:
        """Flip the shared expanded flag and return the new value."""
        self.expanded = not self.state.header_expanded
        self.state.header_expanded = self.expanded
        if self._persist_expanded is not None:
            self._persist_expanded(self.expanded)
        self._notify()
        return self.expanded

    def swipe(self, direction: str) -> date:
        """Move one month on and scroll the agenda to its first day."""
        if direction == SWIPE_NEXT:
            self.month_index = next_month_index(self.month_index)
        elif direction == SWIPE_PREV:
            self.month_index = prev_month_index(self.month_index)
        else:
            raise ValueError(f"unknown swipe direction {direction!r}")
        shown = self.display_date
        logger.debug("Header swiped %s to %s", direction, shown)
        self.state.scroll_to_day(shown)
        self._notify()
        return shown

    def go_to(self, d: date) -> None:
        self.month_index = month_index_from_date(d)
        self._notify()

    def select_day(self, d: date) -> bool:
        """Scroll the agenda to *d* if it belongs to the displayed month."""
        if (d.year, d.month) != (self.display_date.year, self.display_date.month):
            return False
        self.state.scroll_to_day(d)
        return True

    # ------------------------------------------------------------------
    # Derived view data
    # ------------------------------------------------------------------
    @property
    def display_date(self) -> date:
        return month_to_show(self.month_index)

    def title(self) -> str:
        if self.expanded:
            return format_month_year(self.display_date)
        return format_month_year(self.state.current_top_day)

    def weekday_labels(self) -> list[str]:
        return weekday_headers(self.state.first_weekday)

    def cells(self) -> list[list[DayCell]]:
        display = self.display_date
        today = self._today()
        rows: list[list[DayCell]] = []
        for week in month_grid(display, self.state.first_weekday, weeks=None):
            row = []
            for d in week:
                # Only days of the displayed month are shown.
                if d.month != display.month:
                    style, label = STYLE_OUTSIDE, ""
                elif d == today:
                    style, label = STYLE_TODAY, str(d.day)
                elif d == display:
                    style, label = STYLE_DISPLAY, str(d.day)
                else:
                    style, label = STYLE_PLAIN, str(d.day)
                colors = tuple(ev.color for ev in self.state.events_for_day(day_index(d)))
                row.append(DayCell(d, label, style, colors))
            rows.append(row)
        return rows
