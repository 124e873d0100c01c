"""Pure calendar calculations — no UI dependencies."""

import calendar
from datetime import date, datetime, timedelta, tzinfo

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

# Indexed by date.weekday() (Monday == 0)
NARROW_WEEKDAYS = ["M", "T", "W", "T", "F", "S", "S"]

WEEKS_SHOWN = 5
EPOCH = date(1970, 1, 1)

_WEEK = timedelta(days=7)
_DAY = timedelta(days=1)


def _check_weekday(first_weekday: int) -> None:
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be in 0..6, got {first_weekday!r}")


# ------------------------------------------------------------------
# Month index (months since January 1970)
# ------------------------------------------------------------------
def month_index_from_date(d: date) -> int:
    """Return the month index of *d*."""
    return (d.year - 1970) * 12 + (d.month - 1)


def month_to_show(index: int) -> date:
    """Return the first day of the month identified by *index*."""
    year, month0 = divmod(index, 12)
    return date(1970 + year, month0 + 1, 1)


def prev_month_index(index: int) -> int:
    return index - 1


def next_month_index(index: int) -> int:
    return index + 1


# ------------------------------------------------------------------
# Day index (days since 1970-01-01, local calendar date)
# ------------------------------------------------------------------
def day_index(d: date) -> int:
    """Return the number of days between the epoch and *d*."""
    return (d - EPOCH).days


def date_from_day_index(index: int) -> date:
    return EPOCH + timedelta(days=index)


def day_index_from_datetime(dt: datetime, tz: tzinfo) -> int:
    """Return the day index of the local date *dt* falls on in *tz*.

    Naive datetimes are taken to be wall-clock time in *tz* already.
    """
    if dt.tzinfo is None:
        local = dt
    else:
        local = dt.astimezone(tz)
    return day_index(local.date())


# ------------------------------------------------------------------
# Month grid
# ------------------------------------------------------------------
def first_row_start(display: date, first_weekday: int = SUNDAY) -> tuple[date, bool]:
    """Return (first grid day, corrected) for the month containing *display*.

    The naive start steps back 1..7 days from the 1st to the previous
    *first_weekday*, so a month starting on the week start lands a whole
    week early.  That is detected when the second row begins on the 1st,
    and the grid is shifted forward one week.
    """
    _check_weekday(first_weekday)
    first = display.replace(day=1)
    back = (first.weekday() - first_weekday - 1) % 7 + 1
    top_first = first - timedelta(days=back)
    top_second = top_first + _WEEK
    if top_second.day == 1:
        # Out by a week.
        return top_second, True
    return top_first, False


def rows_needed(year: int, month: int, first_weekday: int = SUNDAY) -> int:
    """Return how many week rows it takes to show every day of the month."""
    _check_weekday(first_weekday)
    lead = (date(year, month, 1).weekday() - first_weekday) % 7
    days = calendar.monthrange(year, month)[1]
    return -(-(lead + days) // 7)


def month_grid(
    display: date, first_weekday: int = SUNDAY, weeks: int | None = WEEKS_SHOWN,
) -> list[list[date]]:
    """Return week rows of 7 consecutive dates for the month of *display*.

    ``weeks=None`` sizes the grid so the whole month is visible: never
    fewer than WEEKS_SHOWN rows, six when the month spills over.
    """
    if weeks is None:
        weeks = max(WEEKS_SHOWN, rows_needed(display.year, display.month, first_weekday))
    elif weeks < 1:
        raise ValueError(f"weeks must be at least 1, got {weeks!r}")

    start, _corrected = first_row_start(display, first_weekday)
    grid: list[list[date]] = []
    for r in range(weeks):
        row_start = start + r * _WEEK
        grid.append([row_start + c * _DAY for c in range(7)])
    return grid


def weekday_headers(first_weekday: int = SUNDAY) -> list[str]:
    """Return the narrow weekday labels in grid column order."""
    _check_weekday(first_weekday)
    return [NARROW_WEEKDAYS[(first_weekday + i) % 7] for i in range(7)]


def format_month_year(d: date) -> str:
    return f"{calendar.month_name[d.month]} {d.year}"
