"""Scroll anchors for "jump to today" and the deferred two-stage scroll."""

from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass
from datetime import date
from typing import Callable

from calendar_logic import month_key

logger = logging.getLogger(__name__)

TODAY_ANCHOR = "today"


@dataclass(frozen=True)
class ScrollPlan:
    """Month anchor to reveal first, then the day anchor inside it."""

    month: str | None
    day: str | None = None


def resolve_today_target(days: tuple[date, ...], now: date) -> str | None:
    """Return the month key of *now* if any day of that month is in *days*.

    *days* must be sorted ascending, which every DateRange snapshot is.
    """
    month_start = date(now.year, now.month, 1)
    i = bisect_left(days, month_start)
    if i < len(days) and (days[i].year, days[i].month) == (now.year, now.month):
        return month_key(now)
    return None


def nearest_month_anchor(days: tuple[date, ...], now: date) -> str | None:
    """Closest available month to *now*; used when *now* is out of range."""
    if not days:
        return None
    if now < days[0]:
        return month_key(days[0])
    if now > days[-1]:
        return month_key(days[-1])
    return month_key(now)


def plan_today_scroll(days: tuple[date, ...], now: date) -> ScrollPlan:
    month = resolve_today_target(days, now)
    if month is None:
        return ScrollPlan(None)
    return ScrollPlan(month, TODAY_ANCHOR)


class ScrollScheduler:
    """Holds a scroll request until the grid reports it has been committed.

    The view calls :meth:`render_complete` once its widgets are laid out;
    the pending plan then runs month anchor first, day anchor second.
    """

    def __init__(self, scroll_to: Callable[[str], None]) -> None:
        self._scroll_to = scroll_to
        self._pending: ScrollPlan | None = None

    @property
    def pending(self) -> ScrollPlan | None:
        return self._pending

    def request(self, plan: ScrollPlan) -> None:
        if self._pending is not None:
            logger.debug("Replacing pending scroll %s with %s", self._pending, plan)
        self._pending = plan

    def cancel(self) -> None:
        self._pending = None

    def render_complete(self) -> None:
        plan, self._pending = self._pending, None
        if plan is None:
            return
        for anchor in (plan.month, plan.day):
            if anchor is not None:
                self._scroll_to(anchor)
