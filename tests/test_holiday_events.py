from datetime import date, timezone

from calendar_event import group_by_day
from calendar_logic import day_index
from holiday_events import COUNTRIES, HOLIDAYS, easter_sunday, holiday_events, holidays_by_country


def test_easter_dates():
    assert easter_sunday(2024) == date(2024, 3, 31)
    assert easter_sunday(2025) == date(2025, 4, 20)
    assert easter_sunday(2026) == date(2026, 4, 5)


def test_fixed_holiday_event():
    events = holiday_events([2026], {"ch_bundesfeier"}, timezone.utc)
    assert len(events) == 1
    ev = events[0]
    assert ev.start.date() == date(2026, 8, 1)
    assert ev.title == "Bundesfeier (CH)"
    assert ev.color == "#FF0000"
    assert ev.source == "holiday"


def test_easter_relative_holidays():
    events = holiday_events([2026], {"de_karfreitag", "de_pfingstmontag"}, timezone.utc)
    assert sorted(ev.start.date() for ev in events) == [date(2026, 4, 3), date(2026, 5, 25)]


def test_multi_day_lunar_holiday():
    events = holiday_events([2026], {"cn_spring_festival"}, timezone.utc)
    assert [ev.start.date() for ev in events] == [
        date(2026, 2, 17), date(2026, 2, 18), date(2026, 2, 19)]


def test_lunar_holiday_outside_table_is_skipped():
    assert holiday_events([2050], {"cn_mid_autumn"}, timezone.utc) == []


def test_unknown_key_and_custom_colors():
    events = holiday_events([2026], {"xx_nothing", "de_tag_dt_einheit"}, timezone.utc,
                            colors={"DE": "#000000"})
    assert [ev.color for ev in events] == ["#000000"]


def test_shared_dates_group_on_one_day():
    events = holiday_events([2026], {"ch_neujahr", "de_neujahr", "cn_neujahr"}, timezone.utc)
    by_day = group_by_day(events, timezone.utc)
    assert len(by_day[day_index(date(2026, 1, 1))]) == 3


def test_every_country_has_holidays():
    for code, _name in COUNTRIES:
        assert holidays_by_country(code)
    assert len({h.key for h in HOLIDAYS}) == len(HOLIDAYS)
