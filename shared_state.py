"""State shared between the calendar header and the agenda it sits above.

Each calendar is identified by a key; widgets look the state up with
``SharedCalendarState.get(key)`` instead of passing it down explicitly.
Changes are announced through plain callback lists.
"""

from __future__ import annotations

import logging
from datetime import date, tzinfo
from typing import Callable, ClassVar, Iterable, Protocol

from calendar_event import CalendarEvent, group_by_day
from calendar_logic import SUNDAY, date_from_day_index

logger = logging.getLogger(__name__)


class DaySource(Protocol):
    """Anything the header can ask to show a particular day."""

    def scroll_to_day(self, day: date) -> None: ...


class _Listeners:
    __slots__ = ("_callbacks",)

    def __init__(self) -> None:
        self._callbacks: list[Callable] = []

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
        return unsubscribe

    def emit(self, value) -> None:
        for cb in list(self._callbacks):
            cb(value)

    def __len__(self) -> int:
        return len(self._callbacks)


class SharedCalendarState:
    _registry: ClassVar[dict[str, "SharedCalendarState"]] = {}

    def __init__(self, location: tzinfo, first_weekday: int = SUNDAY) -> None:
        self.location = location
        self.first_weekday = first_weekday
        self.source: DaySource | None = None
        self.events: dict[int, list[CalendarEvent]] = {}
        self._current_top_index = 0
        self._header_expanded = False
        self._index_listeners = _Listeners()
        self._expanded_listeners = _Listeners()
        self._events_listeners = _Listeners()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    @classmethod
    def get(cls, key: str) -> "SharedCalendarState":
        """Return the state registered under *key*; KeyError if there is none."""
        return cls._registry[key]

    @classmethod
    def register(cls, key: str, state: "SharedCalendarState") -> "SharedCalendarState":
        if key in cls._registry:
            logger.debug("Replacing shared calendar state %r", key)
        cls._registry[key] = state
        return state

    @classmethod
    def unregister(cls, key: str) -> None:
        cls._registry.pop(key, None)

    # ------------------------------------------------------------------
    # Observable values
    # ------------------------------------------------------------------
    @property
    def current_top_index(self) -> int:
        """Day index of the first day visible in the agenda."""
        return self._current_top_index

    @current_top_index.setter
    def current_top_index(self, value: int) -> None:
        if value == self._current_top_index:
            return
        self._current_top_index = value
        self._index_listeners.emit(value)

    @property
    def current_top_day(self) -> date:
        return date_from_day_index(self._current_top_index)

    @property
    def header_expanded(self) -> bool:
        return self._header_expanded

    @header_expanded.setter
    def header_expanded(self, value: bool) -> None:
        value = bool(value)
        if value == self._header_expanded:
            return
        self._header_expanded = value
        self._expanded_listeners.emit(value)

    def on_index_change(self, callback: Callable[[int], None]) -> Callable[[], None]:
        return self._index_listeners.subscribe(callback)

    def on_header_expanded_change(self, callback: Callable[[bool], None]) -> Callable[[], None]:
        return self._expanded_listeners.subscribe(callback)

    def on_events_change(self, callback: Callable[[dict], None]) -> Callable[[], None]:
        return self._events_listeners.subscribe(callback)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def set_events(self, events: Iterable[CalendarEvent]) -> None:
        self.events = group_by_day(events, self.location)
        logger.debug("Shared state now holds events on %d days", len(self.events))
        self._events_listeners.emit(self.events)

    def events_for_day(self, index: int) -> list[CalendarEvent]:
        return list(self.events.get(index, ()))

    def scroll_to_day(self, day: date) -> None:
        if self.source is None:
            logger.debug("No day source attached; ignoring scroll to %s", day)
            return
        self.source.scroll_to_day(day)
