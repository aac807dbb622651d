"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from picker import DatePicker
from scheduler import ManualScheduler

TODAY = date(2024, 6, 15)


class Recorder:
    """Collects picker callbacks."""

    def __init__(self):
        self.confirmed = []
        self.cancelled = 0
        self.changes = 0

    def on_confirm(self, output):
        self.confirmed.append(output)

    def on_cancel(self):
        self.cancelled += 1

    def on_change(self, _picker):
        self.changes += 1


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_picker(scheduler, recorder):
    """Factory for a DatePicker wired to the manual scheduler and recorder."""

    def _make(**options):
        return DatePicker(
            options,
            scheduler=scheduler,
            today=TODAY,
            on_confirm=recorder.on_confirm,
            on_cancel=recorder.on_cancel,
            on_change=recorder.on_change,
        )

    return _make


@pytest.fixture
def find_cell():
    """Return the grid cell of a picker that shows the given date."""

    def _find(picker, day):
        for cell in picker.grid:
            if cell is not None and cell.as_date() == day:
                return cell
        raise AssertionError(f"{day} is not on the displayed grid")

    return _find
