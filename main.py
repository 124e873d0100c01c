"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import os
import threading

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    level = os.environ.get("CALENDAR_HEADER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    setup_logging()
    cal_win = CalendarWindow()

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_toggle_month() -> None:
        cal_win.root.after(0, cal_win.toggle_month)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.hide()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_toggle_month=on_toggle_month, on_settings=on_settings)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()
    logger.info("Calendar started; open it from the tray icon")

    cal_win.show()
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
