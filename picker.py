"""Date picker session: grid, navigation, selection and deferred follow-ups."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from calendar_logic import DayCell, month_grid, to_instant
from navigation import DisplayedMonth, NavigationController
from scheduler import DeferredAction, Scheduler
from selection import (
    Mode,
    PickerOutput,
    RangeSelection,
    Selection,
    SelectionStateMachine,
    SingleSelection,
    primary_date,
)
from settings import normalize_options

logger = logging.getLogger(__name__)

_SEED_KEYS = ("mode", "initial_date", "start_date", "end_date")


class DatePicker:
    """One picker session driven by taps, navigation and confirm/cancel.

    Args:
        options: Picker options (see ``settings``); keyword overrides win.
        scheduler: Timer source for the navigation cooldown and the deferred
            month-follow / cancel restoration.
        on_confirm: Called with a :class:`PickerOutput` on every confirmation.
        on_cancel: Called when the user cancels.
        on_change: Called with the picker whenever what a host renders changes.
        today: Fixed "today" (defaults to ``date.today()`` at each use).
    """

    def __init__(
        self,
        options: dict | None = None,
        *,
        scheduler: Scheduler,
        on_confirm: Callable[[PickerOutput], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
        on_change: Callable[["DatePicker"], None] | None = None,
        today: date | None = None,
        **overrides,
    ) -> None:
        self.options = normalize_options({**(options or {}), **overrides})
        self.on_confirm = on_confirm
        self.on_cancel = on_cancel
        self.on_change = on_change
        self._today = today

        opts = self.options
        self.selection = SelectionStateMachine(
            opts["mode"], opts["date_string_format"],
            opts["initial_date"], opts["start_date"], opts["end_date"], self.today,
        )
        self.navigation = NavigationController(
            DisplayedMonth.containing(self._home_date()),
            scheduler,
            opts["navigation_cooldown_ms"],
            on_change=lambda _displayed: self._changed(),
        )
        self._follow = DeferredAction(scheduler, opts["follow_delay_ms"])
        self._restore = DeferredAction(scheduler, opts["follow_delay_ms"])
        self.phase = "year" if opts["choose_year_first"] else "day"

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def mode(self) -> Mode:
        return self.selection.mode

    @property
    def displayed(self) -> DisplayedMonth:
        return self.navigation.displayed

    @property
    def output(self) -> Selection:
        return self.selection.output

    @property
    def baseline(self) -> Selection:
        return self.selection.baseline

    @property
    def grid(self) -> list[DayCell | None]:
        shown = self.displayed
        return month_grid(
            shown.year,
            shown.month,
            to_instant(self.options["min_date"]),
            to_instant(self.options["max_date"]),
            self.options["first_weekday"],
        )

    def is_selected(self, day: date) -> bool:
        current = self.output
        if isinstance(current, SingleSelection):
            return current.date == day
        if isinstance(current, RangeSelection):
            if current.start_date is None:
                return False
            if current.end_date is None:
                return current.start_date == day
            return current.start_date <= day <= current.end_date
        return day in current.dates

    def _home_date(self) -> date:
        return (
            self.options["initial_date"]
            or primary_date(self.selection.output)
            or self.today
        )

    # ------------------------------------------------------------------
    # Selection events
    # ------------------------------------------------------------------
    def tap(self, cell: DayCell | None) -> PickerOutput | None:
        """Handle a tap on a grid cell; placeholders and disabled cells are ignored."""
        if cell is None or cell.disabled:
            return None
        self._begin_event()
        day = cell.as_date()
        result = self.selection.tap(day)
        if result is not None:
            self._emit(result)
            self._follow.schedule(lambda: self.navigation.show(day))
        self._changed()
        return result

    def confirm(self) -> PickerOutput | None:
        """Explicit confirmation; a no-op while the selection is incomplete."""
        self._begin_event()
        result = self.selection.confirm()
        if result is not None:
            self._emit(result)
            self._changed()
        return result

    def cancel(self) -> None:
        self._begin_event()
        logger.info("Selection cancelled")
        if self.on_cancel is not None:
            self.on_cancel()
        self._restore.schedule(self._restore_baseline)

    def _restore_baseline(self) -> None:
        restored = self.selection.cancel()
        self.navigation.show(
            primary_date(restored) or self.options["initial_date"] or self.today
        )
        self._changed()

    def _emit(self, result: PickerOutput) -> None:
        if self.on_confirm is not None:
            self.on_confirm(result)

    def _begin_event(self) -> None:
        # A pending restore must land before the new event; a pending follow is stale
        self._restore.flush()
        if self._follow.cancel():
            logger.debug("Dropped pending month follow")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def prev(self) -> bool:
        self._begin_event()
        return self.navigation.step("prev")

    def next(self) -> bool:
        self._begin_event()
        return self.navigation.step("next")

    def prev_year(self) -> bool:
        self._begin_event()
        return self.navigation.step_year("prev")

    def next_year(self) -> bool:
        self._begin_event()
        return self.navigation.step_year("next")

    def go_today(self) -> None:
        self._begin_event()
        self.navigation.go_today(self.today)

    # ------------------------------------------------------------------
    # Year chooser
    # ------------------------------------------------------------------
    def year_choices(self, span: int = 10) -> list[int]:
        year = self.displayed.year
        return list(range(year - span, year + span + 1))

    def choose_year(self, year: int) -> None:
        self._begin_event()
        self.navigation.jump_to(year, self.displayed.month)
        self.phase = "day"
        self._changed()

    def open_year_chooser(self) -> None:
        self._begin_event()
        self.phase = "year"
        self._changed()

    # ------------------------------------------------------------------
    # Option changes
    # ------------------------------------------------------------------
    def update_options(self, **changes) -> None:
        """Apply new options; mode or initial-date changes re-seed the selection."""
        updated = normalize_options({**self.options, **changes})
        reseed = any(updated[key] != self.options[key] for key in _SEED_KEYS)
        self.options = updated
        self.selection.pattern = updated["date_string_format"]
        self._follow.delay_ms = self._restore.delay_ms = updated["follow_delay_ms"]
        if reseed:
            self._restore.cancel()
            self._follow.cancel()
            self.selection.reset(
                updated["mode"], updated["initial_date"],
                updated["start_date"], updated["end_date"], self.today,
            )
            self.navigation.show(self._home_date())
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

