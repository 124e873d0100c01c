"""Main calendar window (tkinter): header above a scrolling agenda."""

import logging
import tkinter as tk
from datetime import datetime, time
from tkinter import colorchooser, simpledialog
from tkinter import font as tkfont

from agenda import Agenda
from calendar_header import CalendarHeader
from event_store import EventStore
from holiday_events import COUNTRIES, holiday_events, holidays_by_country
from settings import load_settings, resolve_timezone, save_settings, update_settings
from shared_state import SharedCalendarState

logger = logging.getLogger(__name__)

CALENDAR_KEY = "main"
GRID_BG = "white"
DEFAULT_SIZE = (320, 560)

_WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday",
                  "Saturday", "Sunday"]


class CalendarWindow:
    """Top-level window that hosts one calendar header and its agenda."""

    def __init__(self, calendar_key: str = CALENDAR_KEY) -> None:
        self.root = tk.Tk()
        self.root.title("Calendar")
        self.root.configure(bg=GRID_BG)
        self.root.attributes("-topmost", True)

        settings = load_settings()
        self._saved_width: int | None = settings["window_width"]
        self._saved_height: int | None = settings["window_height"]
        self._enabled_holidays: set[str] = set(settings["holidays"])
        self._holiday_colors: dict[str, str] = dict(settings["holiday_colors"])
        self._timezone_name: str | None = settings["timezone"]

        self.calendar_key = calendar_key
        self.state = SharedCalendarState.register(
            calendar_key,
            SharedCalendarState(resolve_timezone(self._timezone_name), settings["first_weekday"]),
        )
        self.state.header_expanded = settings["header_expanded"]
        self.store = EventStore(settings["events_path"])
        self.reload_events()

        self.header = CalendarHeader(
            self.root, calendar_key,
            persist_expanded=lambda expanded: update_settings(header_expanded=expanded),
            today=self._today,
        )
        self.header.pack(fill="x")
        self.agenda = Agenda(self.root, calendar_key, today=self._today)
        self.agenda.pack(fill="both", expand=True)

        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.bind("<Control-n>", lambda _e: self.new_event())
        self.root.bind("<Configure>", self._on_configure)
        self.root.protocol("WM_DELETE_WINDOW", self.hide)
        self.root.withdraw()

    def _today(self):
        return datetime.now(self.state.location).date()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def reload_events(self) -> None:
        """Recompute the per-day event map from the store and holidays."""
        year = self._today().year
        holidays = holiday_events(
            range(year - 1, year + 2), self._enabled_holidays,
            self.state.location, self._holiday_colors,
        )
        self.state.set_events(self.store.events + holidays)

    def new_event(self) -> None:
        day = self.state.current_top_day
        title = simpledialog.askstring(
            "New event", f"Title for {day.strftime('%d.%m.%Y')}:", parent=self.root)
        if not title or not title.strip():
            return
        start = datetime.combine(day, time(9, 0), self.state.location)
        self.store.add_event(title, start)
        logger.info("Added event %r on %s", title.strip(), day)
        self.reload_events()

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------
    def toggle_month(self) -> None:
        self.header.toggle()

    # ------------------------------------------------------------------
    # Settings dialog
    # ------------------------------------------------------------------
    def open_settings(self) -> None:
        dlg = tk.Toplevel(self.root)
        dlg.title("Settings")
        dlg.resizable(False, False)
        dlg.attributes("-topmost", True)
        dlg.grab_set()
        font_normal = tkfont.nametofont("TkDefaultFont")

        frame = tk.Frame(dlg, padx=12, pady=8)
        frame.pack()

        tk.Label(frame, text="Week starts on:").grid(row=0, column=0, sticky="w", pady=4)
        weekday_var = tk.StringVar(value=_WEEKDAY_NAMES[self.state.first_weekday])
        tk.OptionMenu(frame, weekday_var, *_WEEKDAY_NAMES).grid(
            row=0, column=1, sticky="we", padx=(8, 0), pady=4)

        tk.Label(frame, text="Time zone:").grid(row=1, column=0, sticky="w", pady=4)
        tz_entry = tk.Entry(frame, width=24)
        tz_entry.insert(0, self._timezone_name or "")
        tz_entry.grid(row=1, column=1, padx=(8, 0), pady=4)

        # --- Holiday section ---
        holiday_frame = tk.LabelFrame(frame, text="Holidays", padx=8, pady=4)
        holiday_frame.grid(row=2, column=0, columnspan=2, sticky="we", pady=(8, 0))

        check_vars: dict[str, tk.BooleanVar] = {}
        color_vals: dict[str, str] = dict(self._holiday_colors)

        for col_idx, (code, country_name) in enumerate(COUNTRIES):
            col_frame = tk.Frame(holiday_frame)
            col_frame.grid(row=0, column=col_idx, padx=8, pady=2, sticky="n")

            hdr = tk.Frame(col_frame)
            hdr.pack(fill="x", pady=(0, 4))
            tk.Label(hdr, text=country_name).pack(side="left")
            swatch = tk.Label(
                hdr, text="  ", bg=color_vals.get(code, "#888888"),
                relief="raised", borderwidth=1, cursor="hand2",
            )
            swatch.pack(side="right", padx=(4, 0))

            def _make_picker(c=code, sw=swatch):
                def _pick(_e=None):
                    result = colorchooser.askcolor(
                        color=color_vals[c], parent=dlg, title=f"Colour for {c}")
                    if result[1]:
                        color_vals[c] = result[1]
                        sw.configure(bg=result[1])
                return _pick

            swatch.bind("<Button-1>", _make_picker())

            for holiday in holidays_by_country(code):
                var = tk.BooleanVar(value=(holiday.key in self._enabled_holidays))
                check_vars[holiday.key] = var
                tk.Checkbutton(col_frame, text=holiday.name, variable=var,
                               font=font_normal, anchor="w").pack(fill="x")

        btn_frame = tk.Frame(frame)
        btn_frame.grid(row=3, column=0, columnspan=2, pady=(8, 0))

        def on_ok() -> None:
            first_weekday = _WEEKDAY_NAMES.index(weekday_var.get())
            tz_name = tz_entry.get().strip() or None
            self._enabled_holidays = {k for k, v in check_vars.items() if v.get()}
            self._holiday_colors = {code: color_vals[code] for code, _ in COUNTRIES}
            self._timezone_name = tz_name

            settings = load_settings()
            settings["first_weekday"] = first_weekday
            settings["timezone"] = tz_name
            settings["holidays"] = sorted(self._enabled_holidays)
            settings["holiday_colors"] = self._holiday_colors
            save_settings(settings)

            self.state.first_weekday = first_weekday
            self.state.location = resolve_timezone(tz_name)
            dlg.destroy()
            self.reload_events()
            self.header.refresh()

        tk.Button(btn_frame, text="OK", width=8, command=on_ok).pack(side="left", padx=4)
        tk.Button(btn_frame, text="Cancel", width=8, command=dlg.destroy).pack(
            side="left", padx=4)

    # ------------------------------------------------------------------
    # Size tracking
    # ------------------------------------------------------------------
    def _on_configure(self, event: tk.Event) -> None:
        if event.widget is not self.root or self.root.state() == "withdrawn":
            return
        self._saved_width = self.root.winfo_width()
        self._saved_height = self.root.winfo_height()

    def _persist_size(self) -> None:
        update_settings(window_width=self._saved_width, window_height=self._saved_height)

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.agenda.refresh()
        self.agenda.scroll_to_day(self._today())
        self.header.model.go_to(self._today())
        self.root.deiconify()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        if self._saved_width is not None and self._saved_height is not None:
            self._persist_size()
        self.root.withdraw()

    def _position_window(self) -> None:
        """Place the window in the bottom-right corner of the screen."""
        self.root.update_idletasks()
        win_w = self._saved_width or DEFAULT_SIZE[0]
        win_h = self._saved_height or DEFAULT_SIZE[1]
        x = self.root.winfo_screenwidth() - win_w - 12
        y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{max(0, x)}+{max(0, y)}")
