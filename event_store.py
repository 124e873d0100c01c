"""JSON-file persistence for user calendar events."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime, time, tzinfo
from pathlib import Path

from calendar_event import CalendarEvent
from settings import write_json_atomic

logger = logging.getLogger(__name__)

DEFAULT_EVENTS_PATH = Path.home() / ".calendar-header-events.json"


class EventStore:
    """User events kept in a single JSON list on disk."""

    def __init__(self, file_path: Path | str | None = None) -> None:
        self.file_path = Path(file_path) if file_path else DEFAULT_EVENTS_PATH
        self._events: list[CalendarEvent] = []
        self.load()

    def load(self) -> None:
        """Read events from disk; a missing or corrupt file yields no events."""
        self._events = []
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except FileNotFoundError:
            return
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read events from %s: %s", self.file_path, exc)
            return
        if not isinstance(stored, list):
            logger.warning("Ignoring %s: expected a list of events", self.file_path)
            return
        for item in stored:
            if not isinstance(item, dict):
                continue
            try:
                self._events.append(CalendarEvent.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.debug("Skipping malformed event %r: %s", item, exc)
        logger.info("Loaded %d events from %s", len(self._events), self.file_path)

    def save(self) -> None:
        """Write all events atomically (temp file + replace)."""
        self._write(self._events)

    def _write(self, events: list[CalendarEvent]) -> None:
        write_json_atomic(str(self.file_path), [ev.as_dict() for ev in events])

    @property
    def events(self) -> list[CalendarEvent]:
        return list(self._events)

    def add_event(self, title: str, start: datetime, end: datetime | None = None,
                  color: str = "black") -> CalendarEvent:
        title = title.strip()
        if not title:
            raise ValueError("event title must not be empty")
        if end is not None and end < start:
            raise ValueError("event end is before its start")
        ev = CalendarEvent(title=title, start=start, end=end, color=color,
                           uid=uuid.uuid4().hex[:12])
        # Only take the new list once it is on disk
        events = self._events + [ev]
        self._write(events)
        self._events = events
        return ev

    def remove_event(self, uid: str) -> bool:
        events = [ev for ev in self._events if ev.uid != uid]
        if len(events) == len(self._events):
            return False
        self._write(events)
        self._events = events
        return True

    def events_between(self, start: date, end: date, tz: tzinfo) -> list[CalendarEvent]:
        """Return events whose local start date lies in [start, end]."""
        lo = datetime.combine(start, time.min, tz)
        hi = datetime.combine(end, time.max, tz)
        result = []
        for ev in self._events:
            ev_start = ev.start if ev.start.tzinfo else ev.start.replace(tzinfo=tz)
            if lo <= ev_start <= hi:
                result.append(ev)
        return result
