"""Calendar event value type and day-index grouping."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable

from calendar_logic import day_index_from_datetime


@dataclass(frozen=True)
class CalendarEvent:
    title: str
    start: datetime
    end: datetime | None = None
    color: str = "black"
    source: str = "user"
    uid: str = field(default="", compare=False)

    def day_index(self, tz: tzinfo) -> int:
        """Return the day index this event is shown on in *tz*."""
        return day_index_from_datetime(self.start, tz)

    def as_dict(self) -> dict:
        return {
            "uid": self.uid,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
            "color": self.color,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CalendarEvent":
        """Build an event from its stored form; raises ValueError/KeyError if malformed."""
        end = data.get("end")
        return cls(
            title=str(data["title"]),
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(end) if end else None,
            color=str(data.get("color") or "black"),
            source=str(data.get("source") or "user"),
            uid=str(data.get("uid") or ""),
        )


def group_by_day(events: Iterable[CalendarEvent], tz: tzinfo) -> dict[int, list[CalendarEvent]]:
    """Return {day index: [events sorted by start]} for *events* in *tz*."""
    result: dict[int, list[CalendarEvent]] = {}
    for ev in events:
        result.setdefault(ev.day_index(tz), []).append(ev)
    for day_events in result.values():
        day_events.sort(key=_sort_key)
    return result


def _sort_key(ev: CalendarEvent):
    # Naive and aware datetimes don't compare; order on wall-clock time.
    return ev.start.replace(tzinfo=None), ev.title
