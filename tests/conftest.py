from datetime import date, datetime, timezone

import pytest

from shared_state import SharedCalendarState


class RecordingSource:
    def __init__(self):
        self.days = []

    def scroll_to_day(self, day):
        self.days.append(day)


class FakeLoop:
    """Stands in for tk's after/after_cancel plus a clock."""

    def __init__(self):
        self.now = 0.0
        self.pending = {}
        self._next_id = 0

    def schedule(self, ms, fn):
        self._next_id += 1
        self.pending[self._next_id] = fn
        return self._next_id

    def cancel(self, handle):
        self.pending.pop(handle, None)

    def clock(self):
        return self.now

    def run_at(self, t):
        self.now = t
        for handle, fn in list(self.pending.items()):
            del self.pending[handle]
            fn()


@pytest.fixture
def source():
    return RecordingSource()


@pytest.fixture
def state(source):
    s = SharedCalendarState(timezone.utc)
    s.source = source
    SharedCalendarState.register("test", s)
    yield s
    SharedCalendarState.unregister("test")


@pytest.fixture
def loop():
    return FakeLoop()


@pytest.fixture
def settings_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setenv("CALENDAR_HEADER_SETTINGS", str(path))
    return path


def utc(year, month, day, hour=12):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


TODAY = date(2026, 10, 18)
