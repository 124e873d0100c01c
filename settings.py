"""JSON-based settings persistence for the calendar header app."""

import json
import logging
import os
import tempfile
import time
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

_DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".calendar-header-settings.json")

_DEFAULTS = {
    "first_weekday": 6,  # Sunday
    "timezone": None,
    "header_expanded": False,
    "window_width": None,
    "window_height": None,
    "holidays": [],
    "holiday_colors": {"CH": "#FF0000", "DE": "#FFD700", "CN": "#4CAF50"},
    "events_path": None,
}


def settings_path() -> str:
    """Return the settings file, honouring CALENDAR_HEADER_SETTINGS."""
    return os.environ.get("CALENDAR_HEADER_SETTINGS") or _DEFAULT_PATH


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing or bad keys."""
    settings = json.loads(json.dumps(_DEFAULTS))
    path = settings_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", path)
        return settings

    fw = stored.get("first_weekday")
    if isinstance(fw, int) and not isinstance(fw, bool) and 0 <= fw <= 6:
        settings["first_weekday"] = fw
    if isinstance(stored.get("header_expanded"), bool):
        settings["header_expanded"] = stored["header_expanded"]
    for key in ("timezone", "events_path"):
        if isinstance(stored.get(key), str):
            settings[key] = stored[key]
    for key in ("window_width", "window_height"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            settings[key] = value
    if isinstance(stored.get("holidays"), list):
        settings["holidays"] = [k for k in stored["holidays"] if isinstance(k, str)]
    if isinstance(stored.get("holiday_colors"), dict):
        settings["holiday_colors"].update(
            {k: v for k, v in stored["holiday_colors"].items()
             if isinstance(k, str) and isinstance(v, str)})
    return settings


def write_json_atomic(path: str, data) -> None:
    """Write *data* as JSON next to *path*, then swap it in with os.replace.

    The old file is left untouched if serialising or writing fails.
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    write_json_atomic(settings_path(), settings)


def update_settings(**changes) -> dict:
    """Load, apply *changes*, save and return the result."""
    settings = load_settings()
    settings.update(changes)
    save_settings(settings)
    return settings


class LocalTimezone(tzinfo):
    """The machine's zone, asking the C library for each instant's offset."""

    _EPOCH = datetime(1970, 1, 1)

    def _local(self, dt: datetime) -> time.struct_time:
        stamp = time.mktime((dt.year, dt.month, dt.day, dt.hour, dt.minute,
                             dt.second, dt.weekday(), 0, -1))
        return time.localtime(stamp)

    def utcoffset(self, dt: datetime) -> timedelta:
        return timedelta(seconds=self._local(dt).tm_gmtoff)

    def dst(self, dt: datetime) -> timedelta:
        return timedelta(hours=1) if self._local(dt).tm_isdst > 0 else timedelta(0)

    def tzname(self, dt: datetime) -> str:
        return self._local(dt).tm_zone

    def fromutc(self, dt: datetime) -> datetime:
        stamp = (dt.replace(tzinfo=None) - self._EPOCH).total_seconds()
        return dt + timedelta(seconds=time.localtime(stamp).tm_gmtoff)

    def __repr__(self) -> str:
        return "LocalTimezone()"


def _system_zone_name() -> str | None:
    """Best guess at the IANA name of the machine's zone."""
    tz_env = os.environ.get("TZ", "").lstrip(":")
    if tz_env:
        return tz_env
    try:
        target = os.path.realpath("/etc/localtime")
    except OSError:
        return None
    marker = os.sep + "zoneinfo" + os.sep
    if marker in target:
        return target.split(marker, 1)[1]
    return None


def resolve_timezone(name: str | None) -> tzinfo:
    """Return the zone for *name*, or the local zone when unset or unknown.

    The local zone keeps its daylight-saving rules: a named IANA zone when
    one can be found, otherwise offsets looked up per instant.
    """
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown time zone %r, using local time", name)
    system_name = _system_zone_name()
    if system_name:
        try:
            return ZoneInfo(system_name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("System zone %r not in the tz database", system_name)
    return LocalTimezone()
