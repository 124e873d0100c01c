from datetime import date

import pytest

from calendar_event import CalendarEvent
from calendar_logic import day_index
from conftest import utc

pytest.importorskip("tkinter")

from agenda import agenda_lines  # noqa: E402


def test_agenda_lines_list_events(state):
    state.set_events([CalendarEvent("Dentist", utc(2026, 10, 19, 9))])
    first = day_index(date(2026, 10, 18))
    lines = agenda_lines(state, first, first + 1)
    assert lines[0] == (first, "Sun 18 Oct 2026")
    assert lines[1] == (first + 1, "Mon 19 Oct 2026   Dentist")


@pytest.fixture
def tk_root():
    import tkinter as tk

    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


def test_today_highlight_moves_after_midnight(tk_root, state):
    from agenda import TODAY_BG, Agenda

    today = [date(2026, 10, 18)]
    agenda = Agenda(tk_root, "test", today=lambda: today[0])
    rows = agenda._list
    first = agenda._first

    def background(d):
        return rows.itemcget(day_index(d) - first, "background")

    assert background(date(2026, 10, 18)) == TODAY_BG

    today[0] = date(2026, 10, 19)
    agenda.refresh()
    assert background(date(2026, 10, 19)) == TODAY_BG
    assert background(date(2026, 10, 18)) != TODAY_BG
    agenda.destroy()
