import json
import logging
import time
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

import pytest

from calendar_event import CalendarEvent, group_by_day
from calendar_logic import day_index, day_index_from_datetime
from settings import (
    LocalTimezone,
    load_settings,
    resolve_timezone,
    save_settings,
    update_settings,
)


def test_defaults_when_missing(settings_file):
    settings = load_settings()
    assert settings["first_weekday"] == 6
    assert settings["header_expanded"] is False
    assert settings["timezone"] is None
    assert settings["holidays"] == []


def test_defaults_are_not_shared(settings_file):
    load_settings()["holiday_colors"]["CH"] = "#000000"
    assert load_settings()["holiday_colors"]["CH"] == "#FF0000"


def test_corrupt_file_gives_defaults(settings_file, caplog):
    settings_file.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_settings()["first_weekday"] == 6
    assert "Ignoring unreadable settings" in caplog.text


def test_bad_values_are_ignored(settings_file):
    settings_file.write_text(json.dumps({
        "first_weekday": 9,
        "header_expanded": "yes",
        "window_width": True,
        "window_height": 480,
        "holidays": ["ch_neujahr", 3],
        "holiday_colors": {"DE": "#123456", "XX": 1},
    }), encoding="utf-8")
    settings = load_settings()
    assert settings["first_weekday"] == 6
    assert settings["header_expanded"] is False
    assert settings["window_width"] is None
    assert settings["window_height"] == 480
    assert settings["holidays"] == ["ch_neujahr"]
    assert settings["holiday_colors"]["DE"] == "#123456"
    assert "XX" not in settings["holiday_colors"]


def test_save_and_update(settings_file):
    settings = load_settings()
    settings["first_weekday"] = 0
    save_settings(settings)
    update_settings(header_expanded=True, timezone="Europe/Zurich")

    reloaded = load_settings()
    assert reloaded["first_weekday"] == 0
    assert reloaded["header_expanded"] is True
    assert reloaded["timezone"] == "Europe/Zurich"


def test_resolve_known_zone():
    assert resolve_timezone("Europe/Zurich") == ZoneInfo("Europe/Zurich")


def test_unknown_zone_falls_back_to_local(caplog):
    with caplog.at_level(logging.WARNING):
        tz = resolve_timezone("Not/AZone")
    assert isinstance(tz, tzinfo)
    assert "Unknown time zone" in caplog.text


def test_no_zone_is_local():
    assert isinstance(resolve_timezone(None), tzinfo)


@pytest.fixture
def berlin_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("needs time.tzset")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_local_zone_keeps_dst_rules(berlin_tz):
    tz = resolve_timezone(None)
    assert tz == ZoneInfo("Europe/Berlin")
    # 23:30 CET on 1 December, written as UTC
    late = CalendarEvent("late", datetime(2026, 12, 1, 22, 30, tzinfo=timezone.utc))
    assert list(group_by_day([late], tz)) == [day_index(date(2026, 12, 1))]


def test_local_timezone_offsets_follow_the_date(berlin_tz):
    tz = LocalTimezone()
    assert tz.utcoffset(datetime(2026, 12, 1, 12)) == timedelta(hours=1)
    assert tz.utcoffset(datetime(2026, 7, 1, 12)) == timedelta(hours=2)
    assert tz.dst(datetime(2026, 7, 1, 12)) == timedelta(hours=1)
    late = datetime(2026, 12, 1, 22, 30, tzinfo=timezone.utc)
    assert day_index_from_datetime(late, tz) == day_index(date(2026, 12, 1))
    summer = datetime(2026, 7, 1, 22, 30, tzinfo=timezone.utc)
    assert day_index_from_datetime(summer, tz) == day_index(date(2026, 7, 2))


def test_tz_variable_with_colon_prefix(monkeypatch):
    monkeypatch.setenv("TZ", ":Europe/Zurich")
    assert resolve_timezone(None) == ZoneInfo("Europe/Zurich")


def test_unnamed_system_zone_uses_per_instant_lookup(monkeypatch):
    monkeypatch.setenv("TZ", "Nowhere/Land")
    assert isinstance(resolve_timezone(None), LocalTimezone)


def test_failed_save_keeps_previous_file(settings_file):
    update_settings(first_weekday=0)
    before = settings_file.read_text(encoding="utf-8")
    with pytest.raises(TypeError):
        save_settings({"first_weekday": object()})
    assert settings_file.read_text(encoding="utf-8") == before
    assert [p.name for p in settings_file.parent.iterdir()] == [settings_file.name]
