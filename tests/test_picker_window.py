"""Smoke tests for the tkinter picker window; skipped without a display."""

from datetime import date

import pytest

tk = pytest.importorskip("tkinter")

from picker_window import PickerWindow  # noqa: E402


@pytest.fixture
def root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


def test_renders_initial_month(root):
    window = PickerWindow({"initial_date": date(2024, 6, 15)}, root=root)
    assert window.title.cget("text") == "June 2024"
    assert window.day_buttons[0][6].cget("text") == "1"
    assert window.day_buttons[5][1].cget("text") == "1"
    assert window.week_labels[0].cget("text") == "22"


def test_next_month_rerenders(root):
    window = PickerWindow({"initial_date": date(2024, 6, 15)}, root=root)
    window.picker.next()
    assert window.title.cget("text") == "July 2024"


def test_day_button_confirms(root):
    confirmed = []
    window = PickerWindow({"initial_date": date(2024, 6, 15)}, root=root,
                          on_confirm=confirmed.append)
    window.day_buttons[0][6].invoke()
    assert [o.date for o in confirmed] == [date(2024, 6, 1)]


def test_year_first_shows_chooser(root):
    window = PickerWindow({"initial_date": date(2024, 6, 15), "choose_year_first": True},
                          root=root)
    assert window.year_var.get() == "2024"
    window.year_var.set("2031")
    window._on_year_chosen()
    assert window.picker.phase == "day"
    assert window.title.cget("text") == "June 2031"
