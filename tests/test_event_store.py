import json
from datetime import date, timezone

import pytest

from conftest import utc
import event_store
from event_store import EventStore


def test_missing_file_is_empty(tmp_path):
    store = EventStore(tmp_path / "events.json")
    assert store.events == []


def test_add_persists_and_reloads(tmp_path):
    path = tmp_path / "sub" / "events.json"
    store = EventStore(path)
    ev = store.add_event("  Dentist ", utc(2026, 10, 20, 9), color="red")
    assert ev.title == "Dentist"
    assert ev.uid

    reloaded = EventStore(path)
    assert len(reloaded.events) == 1
    assert reloaded.events[0].title == "Dentist"
    assert reloaded.events[0].start == utc(2026, 10, 20, 9)
    assert reloaded.events[0].uid == ev.uid
    assert not list(path.parent.glob(".tmp-*"))


def test_remove(tmp_path):
    store = EventStore(tmp_path / "events.json")
    ev = store.add_event("a", utc(2026, 1, 1))
    assert store.remove_event("nope") is False
    assert store.remove_event(ev.uid) is True
    assert EventStore(tmp_path / "events.json").events == []


def test_rejects_empty_title_and_reversed_range(tmp_path):
    store = EventStore(tmp_path / "events.json")
    with pytest.raises(ValueError):
        store.add_event("   ", utc(2026, 1, 1))
    with pytest.raises(ValueError):
        store.add_event("x", utc(2026, 1, 2), end=utc(2026, 1, 1))


def test_corrupt_and_malformed_entries(tmp_path):
    path = tmp_path / "events.json"
    path.write_text("[", encoding="utf-8")
    assert EventStore(path).events == []

    path.write_text(json.dumps({"title": "not a list"}), encoding="utf-8")
    assert EventStore(path).events == []

    path.write_text(json.dumps([
        {"title": "ok", "start": "2026-03-01T10:00:00+00:00"},
        {"title": "bad date", "start": "yesterday"},
        {"start": "2026-03-01T10:00:00+00:00"},
        "junk",
    ]), encoding="utf-8")
    events = EventStore(path).events
    assert [ev.title for ev in events] == ["ok"]


def test_events_between(tmp_path):
    store = EventStore(tmp_path / "events.json")
    store.add_event("in", utc(2026, 3, 15))
    store.add_event("edge", utc(2026, 3, 31, 23))
    store.add_event("out", utc(2026, 4, 1, 0))
    found = store.events_between(date(2026, 3, 1), date(2026, 3, 31), timezone.utc)
    assert sorted(ev.title for ev in found) == ["edge", "in"]


def _failing_write(path, data):
    raise OSError("disk full")


def test_failed_add_leaves_events_unchanged(tmp_path, monkeypatch):
    path = tmp_path / "events.json"
    store = EventStore(path)
    kept = store.add_event("kept", utc(2026, 1, 1))

    monkeypatch.setattr(event_store, "write_json_atomic", _failing_write)
    with pytest.raises(OSError):
        store.add_event("lost", utc(2026, 1, 2))
    assert store.events == [kept]

    monkeypatch.undo()
    store.add_event("later", utc(2026, 1, 3))
    assert [ev.title for ev in EventStore(path).events] == ["kept", "later"]


def test_failed_remove_leaves_events_unchanged(tmp_path, monkeypatch):
    store = EventStore(tmp_path / "events.json")
    ev = store.add_event("stays", utc(2026, 1, 1))

    monkeypatch.setattr(event_store, "write_json_atomic", _failing_write)
    with pytest.raises(OSError):
        store.remove_event(ev.uid)
    assert store.events == [ev]
