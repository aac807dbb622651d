"""Month-by-month navigation with a cooldown between steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from calendar_logic import shift_month
from scheduler import DeferredAction, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_MS = 300

_DIRECTIONS = {"prev": -1, "next": 1}


@dataclass(frozen=True)
class DisplayedMonth:
    """The visible month; ``month`` is zero-based."""

    year: int
    month: int

    @classmethod
    def containing(cls, day: date) -> "DisplayedMonth":
        return cls(day.year, day.month - 1)

    def shifted(self, delta: int) -> "DisplayedMonth":
        return DisplayedMonth(*shift_month(self.year, self.month, delta))

    def contains(self, day: date) -> bool:
        return (day.year, day.month - 1) == (self.year, self.month)


def _delta(direction: str) -> int:
    try:
        return _DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"Unknown navigation direction: {direction!r}") from None


class NavigationController:
    """Steps the displayed month, dropping steps requested during the cooldown."""

    def __init__(
        self,
        displayed: DisplayedMonth,
        scheduler: Scheduler,
        cooldown_ms: int = DEFAULT_COOLDOWN_MS,
        on_change: Callable[[DisplayedMonth], None] | None = None,
    ) -> None:
        self.displayed = displayed
        self.on_change = on_change
        self._cooldown = DeferredAction(scheduler, cooldown_ms)

    @property
    def in_flight(self) -> bool:
        return self._cooldown.pending

    def step(self, direction: str) -> bool:
        """Move one month ``"prev"`` or ``"next"``. Returns False if dropped."""
        return self._step(_delta(direction))

    def step_year(self, direction: str) -> bool:
        return self._step(12 * _delta(direction))

    def jump_to(self, year: int, month: int) -> None:
        self._set(DisplayedMonth(*shift_month(year, month, 0)))

    def show(self, day: date) -> None:
        """Display the month containing ``day``."""
        self._set(DisplayedMonth.containing(day))

    def go_today(self, today: date | None = None) -> None:
        self.show(today or date.today())

    def _step(self, delta: int) -> bool:
        if self.in_flight:
            logger.debug("Navigation step dropped during cooldown")
            return False
        self._cooldown.schedule(self._release)
        self._set(self.displayed.shifted(delta))
        return True

    def _release(self) -> None:
        logger.debug("Navigation cooldown released")

    def _set(self, displayed: DisplayedMonth) -> None:
        if displayed == self.displayed:
            return
        logger.debug("Displayed month %04d-%02d", displayed.year, displayed.month + 1)
        self.displayed = displayed
        if self.on_change is not None:
            self.on_change(displayed)
