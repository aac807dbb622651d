"""Pure calendar calculations: no UI dependencies.

Months are zero-based throughout (January is 0) and may fall outside [0, 11];
such values roll over into the adjacent year the way calendar arithmetic does.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from functools import lru_cache

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

GRID_ROWS = 6
GRID_COLS = 7
GRID_SIZE = GRID_ROWS * GRID_COLS

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY


@dataclass(frozen=True)
class DayCell:
    """One position of the month grid."""

    year: int
    month: int
    date: int
    is_current_month: bool
    disabled: bool = False

    def as_date(self) -> date:
        return resolve_date(self.year, self.month, self.date)


def resolve_date(year: int, month: int, day: int) -> date:
    """Return the calendar date for a zero-based, possibly overflowing month."""
    return date(year, 1, 1) + relativedelta(months=month, days=day - 1)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return (year, month) moved by ``delta`` months."""
    first = resolve_date(year, month + delta, 1)
    return first.year, first.month - 1


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return shift_month(year, month, -1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return shift_month(year, month, 1)


def days_in_month(year: int, month: int) -> int:
    first = resolve_date(year, month, 1)
    return calendar.monthrange(first.year, first.month)[1]


def to_instant(value: date | datetime | None) -> float | None:
    """Epoch seconds for a date (local midnight) or datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime.combine(value, time()).timestamp()


def month_grid(
    year: int,
    month: int,
    min_instant: float | None = None,
    max_instant: float | None = None,
    first_weekday: int = SUNDAY,
) -> list[DayCell | None]:
    """Return the 42 grid positions for the given month.

    The month is padded with the tail of the previous month and the head of
    the next one up to a whole number of weeks; the remaining positions of the
    six-row layout are ``None``. Always 42 entries so the grid height stays
    constant. Cells whose date lies strictly outside the optional bounds
    (epoch seconds, see :func:`to_instant`) are disabled.
    """
    year, month = shift_month(year, month, 0)
    return list(_build_grid(year, month, min_instant, max_instant, first_weekday))


@lru_cache(maxsize=128)
def _build_grid(
    year: int,
    month: int,
    min_instant: float | None,
    max_instant: float | None,
    first_weekday: int,
) -> tuple[DayCell | None, ...]:
    days = days_in_month(year, month)
    leading = (resolve_date(year, month, 1).weekday() - first_weekday) % 7
    prev_days = days_in_month(year, month - 1)

    cells = [DayCell(year, month, d, True) for d in range(1, days + 1)]

    # Tail of the previous month, counting down from its last day
    cells[:0] = [
        DayCell(year, month - 1, prev_days - i, False) for i in reversed(range(leading))
    ]

    # Head of the next month up to the end of the last week
    trailing = -len(cells) % 7
    cells.extend(DayCell(year, month + 1, d, False) for d in range(1, trailing + 1))

    if min_instant is not None or max_instant is not None:
        cells = [
            DayCell(c.year, c.month, c.date, c.is_current_month,
                    _out_of_bounds(c, min_instant, max_instant))
            for c in cells
        ]

    logger.debug(
        "Built grid for %04d-%02d: %d leading, %d days, %d trailing",
        year, month + 1, leading, days, trailing,
    )
    padding: list[DayCell | None] = [None] * (GRID_SIZE - len(cells))
    return tuple(cells + padding)


def _out_of_bounds(cell: DayCell, min_instant: float | None, max_instant: float | None) -> bool:
    instant = to_instant(cell.as_date())
    if min_instant is not None and instant < min_instant:
        return True
    if max_instant is not None and instant > max_instant:
        return True
    return False


def grid_rows(cells: list[DayCell | None]) -> list[list[DayCell | None]]:
    """Chunk a 42-entry grid into 6 weeks of 7."""
    return [cells[i:i + GRID_COLS] for i in range(0, GRID_SIZE, GRID_COLS)]


def week_numbers(cells: list[DayCell | None]) -> list[str]:
    """Return ISO week numbers for each of the 6 grid rows.

    The week is taken from the row's Thursday, so rows that do not start on
    Monday still get the week most of their days belong to. An empty
    placeholder row yields an empty string.
    """
    weeks: list[str] = []
    for row in grid_rows(cells):
        days = [c.as_date() for c in row if c is not None]
        thursday = next((d for d in days if d.weekday() == calendar.THURSDAY), None)
        if thursday is None:
            weeks.append("")
        else:
            weeks.append(str(thursday.isocalendar()[1]))
    return weeks
