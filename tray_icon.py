"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import Menu, MenuItem

from calendar_logic import format_month_year


def tray_title(today: date) -> str:
    return f"Calendar – {today.day} {format_month_year(today)}"


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_toggle_month: Callable[[], None] | None = None,
    on_settings: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_toggle_month is not None:
        items.append(MenuItem("Expand / Collapse Month",
                              lambda _icon, _item: on_toggle_month()))
    if on_settings is not None:
        items.append(MenuItem("Settings", lambda _icon, _item: on_settings()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("calendar-header", icon_image, tray_title(date.today()), Menu(*items))
