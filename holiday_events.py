"""Public holidays for Switzerland, Germany and China, as calendar events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable

from calendar_event import CalendarEvent

DEFAULT_COLORS = {"CH": "#FF0000", "DE": "#FFD700", "CN": "#4CAF50"}


def easter_sunday(year: int) -> date:
    """Compute Easter Sunday (Anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    el = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * el) // 451
    month, day = divmod(h + el - 7 * m + 114, 31)
    return date(year, month, day + 1)


# Lunar-calendar holidays, 2024-2036:
# year: (spring festival, qingming, dragon boat, mid-autumn) as (month, day)
_LUNAR = {
    2024: ((2, 10), (4, 4), (6, 10), (9, 17)),
    2025: ((1, 29), (4, 4), (5, 31), (10, 6)),
    2026: ((2, 17), (4, 5), (6, 19), (9, 25)),
    2027: ((2, 6), (4, 5), (6, 9), (9, 15)),
    2028: ((1, 26), (4, 4), (5, 28), (10, 3)),
    2029: ((2, 13), (4, 4), (6, 16), (9, 22)),
    2030: ((2, 3), (4, 5), (6, 5), (9, 12)),
    2031: ((1, 23), (4, 5), (6, 24), (10, 1)),
    2032: ((2, 11), (4, 4), (6, 13), (9, 19)),
    2033: ((1, 31), (4, 4), (6, 2), (9, 8)),
    2034: ((2, 19), (4, 5), (6, 22), (9, 28)),
    2035: ((2, 8), (4, 5), (6, 11), (9, 16)),
    2036: ((1, 28), (4, 4), (5, 31), (9, 5)),
}
_SPRING, _QINGMING, _DRAGON_BOAT, _MID_AUTUMN = range(4)


def _fixed(month: int, day: int, span: int = 1) -> Callable[[int], list[date]]:
    def dates(year: int) -> list[date]:
        start = date(year, month, day)
        return [start + timedelta(days=n) for n in range(span)]
    return dates


def _after_easter(offset: int) -> Callable[[int], list[date]]:
    return lambda year: [easter_sunday(year) + timedelta(days=offset)]


def _lunar(which: int, span: int = 1) -> Callable[[int], list[date]]:
    def dates(year: int) -> list[date]:
        row = _LUNAR.get(year)
        if row is None:
            return []
        start = date(year, *row[which])
        return [start + timedelta(days=n) for n in range(span)]
    return dates


@dataclass(frozen=True)
class Holiday:
    key: str
    name: str
    country: str
    dates: Callable[[int], list[date]]


HOLIDAYS: list[Holiday] = [
    Holiday("ch_neujahr", "Neujahr", "CH", _fixed(1, 1)),
    Holiday("ch_berchtoldstag", "Berchtoldstag", "CH", _fixed(1, 2)),
    Holiday("ch_karfreitag", "Karfreitag", "CH", _after_easter(-2)),
    Holiday("ch_ostermontag", "Ostermontag", "CH", _after_easter(1)),
    Holiday("ch_tag_der_arbeit", "Tag der Arbeit", "CH", _fixed(5, 1)),
    Holiday("ch_auffahrt", "Auffahrt", "CH", _after_easter(39)),
    Holiday("ch_pfingstmontag", "Pfingstmontag", "CH", _after_easter(50)),
    Holiday("ch_bundesfeier", "Bundesfeier", "CH", _fixed(8, 1)),
    Holiday("ch_weihnachten", "Weihnachten", "CH", _fixed(12, 25)),
    Holiday("de_neujahr", "Neujahr", "DE", _fixed(1, 1)),
    Holiday("de_karfreitag", "Karfreitag", "DE", _after_easter(-2)),
    Holiday("de_ostermontag", "Ostermontag", "DE", _after_easter(1)),
    Holiday("de_tag_der_arbeit", "Tag der Arbeit", "DE", _fixed(5, 1)),
    Holiday("de_christi_himmelfahrt", "Christi Himmelfahrt", "DE", _after_easter(39)),
    Holiday("de_pfingstmontag", "Pfingstmontag", "DE", _after_easter(50)),
    Holiday("de_tag_dt_einheit", "Tag der Deutschen Einheit", "DE", _fixed(10, 3)),
    Holiday("de_weihnachten1", "1. Weihnachtstag", "DE", _fixed(12, 25)),
    Holiday("de_weihnachten2", "2. Weihnachtstag", "DE", _fixed(12, 26)),
    Holiday("cn_neujahr", "New Year's Day", "CN", _fixed(1, 1)),
    Holiday("cn_spring_festival", "Spring Festival", "CN", _lunar(_SPRING, 3)),
    Holiday("cn_qingming", "Qingming Festival", "CN", _lunar(_QINGMING)),
    Holiday("cn_labour_day", "Labour Day", "CN", _fixed(5, 1)),
    Holiday("cn_dragon_boat", "Dragon Boat Festival", "CN", _lunar(_DRAGON_BOAT)),
    Holiday("cn_mid_autumn", "Mid-Autumn Festival", "CN", _lunar(_MID_AUTUMN)),
    Holiday("cn_national_day", "National Day", "CN", _fixed(10, 1, 3)),
]

_BY_KEY = {h.key: h for h in HOLIDAYS}

COUNTRIES: list[tuple[str, str]] = [
    ("CH", "Switzerland"),
    ("DE", "Germany"),
    ("CN", "China"),
]


def holidays_by_country(country: str) -> list[Holiday]:
    return [h for h in HOLIDAYS if h.country == country]


def holiday_events(
    years: Iterable[int],
    enabled_keys: Iterable[str],
    tz: tzinfo,
    colors: dict[str, str] | None = None,
) -> list[CalendarEvent]:
    """Return one all-day event per enabled holiday date in *years*.

    Unknown keys are ignored.
    """
    colors = colors or DEFAULT_COLORS
    result: list[CalendarEvent] = []
    for key in sorted(set(enabled_keys)):
        holiday = _BY_KEY.get(key)
        if holiday is None:
            continue
        for year in years:
            for d in holiday.dates(year):
                result.append(CalendarEvent(
                    title=f"{holiday.name} ({holiday.country})",
                    start=datetime(d.year, d.month, d.day, tzinfo=tz),
                    color=colors.get(holiday.country, "#888888"),
                    source="holiday",
                    uid=f"{key}-{d.isoformat()}",
                ))
    return result
