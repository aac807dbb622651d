"""Selection state machine for single, range and multi-date picking.

Transitions are plain functions over immutable selection values;
:class:`SelectionStateMachine` holds the current value and the last
confirmed one (the baseline restored on cancel).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Union

from date_format import DEFAULT_PATTERN, format_date

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    SINGLE = "single"
    RANGE = "range"
    MULTI = "multi"


@dataclass(frozen=True)
class SingleSelection:
    date: date


@dataclass(frozen=True)
class RangeSelection:
    start_date: date | None = None
    end_date: date | None = None

    @property
    def complete(self) -> bool:
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class MultiSelection:
    dates: tuple[date, ...] = ()


Selection = Union[SingleSelection, RangeSelection, MultiSelection]


@dataclass(frozen=True)
class PickerOutput:
    """Confirmed selection handed to the host.

    Every field is present whatever the mode; the ones that do not apply
    are ``None``.
    """

    date: date | None = None
    date_string: str | None = None
    start_date: date | None = None
    start_date_string: str | None = None
    end_date: date | None = None
    end_date_string: str | None = None
    dates: tuple[date, ...] | None = None
    date_strings: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def mode_of(selection: Selection) -> Mode:
    if isinstance(selection, SingleSelection):
        return Mode.SINGLE
    if isinstance(selection, RangeSelection):
        return Mode.RANGE
    return Mode.MULTI


def _ordered(a: date, b: date) -> tuple[date, date]:
    return (a, b) if a <= b else (b, a)


def _day(value: date | None) -> date | None:
    """Drop the time of day from a datetime seed."""
    return value.date() if isinstance(value, datetime) else value


def initial_selection(
    mode: Mode | str,
    initial_date: date | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    today: date | None = None,
) -> Selection:
    """Seed a selection from the caller's initial values.

    Single mode falls back to ``today``; range bounds stay absent unless given.
    """
    mode = Mode(mode)
    initial_date, start_date, end_date, today = map(
        _day, (initial_date, start_date, end_date, today)
    )
    if mode is Mode.SINGLE:
        return SingleSelection(initial_date or today or date.today())
    if mode is Mode.RANGE:
        if start_date is not None and end_date is not None:
            start_date, end_date = _ordered(start_date, end_date)
        return RangeSelection(start_date, end_date)
    return MultiSelection()


def apply_tap(selection: Selection, day: date) -> tuple[Selection, Selection | None]:
    """Return the selection after tapping ``day`` and what the tap confirms.

    Single taps confirm immediately. The second tap of a range confirms the
    ordered pair and leaves only the start selected, so the next tap picks a
    new end. Multi taps toggle ``day`` and never confirm.
    """
    if isinstance(selection, SingleSelection):
        picked = SingleSelection(day)
        return picked, picked

    if isinstance(selection, RangeSelection):
        if selection.start_date is None or selection.complete:
            return RangeSelection(day, None), None
        start, end = _ordered(selection.start_date, day)
        return RangeSelection(start, None), RangeSelection(start, end)

    if day in selection.dates:
        dates = tuple(d for d in selection.dates if d != day)
    else:
        dates = tuple(sorted(selection.dates + (day,)))
    return replace(selection, dates=dates), None


def confirm_selection(selection: Selection) -> Selection | None:
    """Return the selection if it can be confirmed as is, else None."""
    if isinstance(selection, RangeSelection) and not selection.complete:
        return None
    if isinstance(selection, MultiSelection) and not selection.dates:
        return None
    return selection


def primary_date(selection: Selection) -> date | None:
    """The date the displayed month should show for ``selection``."""
    if isinstance(selection, SingleSelection):
        return selection.date
    if isinstance(selection, RangeSelection):
        return selection.start_date
    return selection.dates[0] if selection.dates else None


def to_output(selection: Selection, pattern: str = DEFAULT_PATTERN) -> PickerOutput:
    if isinstance(selection, SingleSelection):
        return PickerOutput(
            date=selection.date, date_string=format_date(selection.date, pattern),
        )
    if isinstance(selection, RangeSelection):
        start, end = selection.start_date, selection.end_date
        return PickerOutput(
            start_date=start,
            start_date_string=format_date(start, pattern) if start else None,
            end_date=end,
            end_date_string=format_date(end, pattern) if end else None,
        )
    return PickerOutput(
        dates=selection.dates,
        date_strings=tuple(format_date(d, pattern) for d in selection.dates),
    )


class SelectionStateMachine:
    """Current selection plus the baseline restored on cancel."""

    def __init__(
        self,
        mode: Mode | str = Mode.SINGLE,
        pattern: str = DEFAULT_PATTERN,
        initial_date: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> None:
        self.pattern = pattern
        self.reset(mode, initial_date, start_date, end_date, today)

    @property
    def mode(self) -> Mode:
        return mode_of(self.output)

    def reset(
        self,
        mode: Mode | str,
        initial_date: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> None:
        """Re-seed both the selection and the baseline."""
        self.output: Selection = initial_selection(mode, initial_date, start_date, end_date, today)
        self.baseline: Selection = self.output
        logger.debug("Selection reset: %r", self.output)

    def tap(self, day: date) -> PickerOutput | None:
        """Apply a tapped day. Returns the formatted output if the tap confirms."""
        self.output, confirmed = apply_tap(self.output, day)
        logger.debug("Tapped %s -> %r", day, self.output)
        if confirmed is None:
            return None
        return self._commit(confirmed)

    def confirm(self) -> PickerOutput | None:
        """Confirm the current selection explicitly.

        Returns None, and changes nothing, while a range lacks either bound or
        no multi date is picked.
        """
        confirmed = confirm_selection(self.output)
        if confirmed is None:
            logger.debug("Nothing to confirm in %r", self.output)
            return None
        return self._commit(confirmed)

    def cancel(self) -> Selection:
        self.output = self.baseline
        logger.debug("Selection restored to %r", self.output)
        return self.output

    def _commit(self, confirmed: Selection) -> PickerOutput:
        self.baseline = confirmed
        output = to_output(confirmed, self.pattern)
        logger.info("Confirmed %s selection: %s", self.mode.value, output)
        return output
