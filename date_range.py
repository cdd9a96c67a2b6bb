"""Day sequences for whole years, and the append-only range that owns them."""

from __future__ import annotations

import logging
import threading
from datetime import MAXYEAR, MINYEAR, date, timedelta

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class CalendarError(Exception):
    """Base class for calendar range errors."""


class InvalidDateError(CalendarError, ValueError):
    """A year whose Jan 1 or Dec 31 cannot be represented as a ``date``."""


class EmptyRangeError(CalendarError):
    """Extension requested on a range with no days to extend from."""


class ConfigurationError(CalendarError, ValueError):
    """A range or settings parameter rejected before generation starts."""


def generate_year(year: int) -> tuple[date, ...]:
    """Return every day from Jan 1 to Dec 31 of *year*, ascending."""
    try:
        start = date(year, 1, 1)
        end = date(year, 12, 31)
    except (ValueError, OverflowError) as exc:
        raise InvalidDateError(f"year {year} is outside the supported date range") from exc

    days: list[date] = []
    d = start
    while d < end:
        days.append(d)
        d += _ONE_DAY
    days.append(end)
    return tuple(days)


def validate_span(span: object) -> int:
    """Return *span* if it is a non-negative int, else raise ConfigurationError."""
    if isinstance(span, bool) or not isinstance(span, int):
        raise ConfigurationError(f"year span must be an integer, got {span!r}")
    if span < 0:
        raise ConfigurationError(f"year span must not be negative, got {span}")
    return span


def load_initial_range(center: int, span: int) -> tuple[date, ...]:
    """Concatenate whole years ``center - span`` .. ``center + span``.

    The window is clipped to the years ``date`` can represent, so a window
    reaching past year 9999 still yields the representable part.
    """
    span = validate_span(span)
    lo, hi = center - span, center + span
    first, last = max(lo, MINYEAR), min(hi, MAXYEAR)
    skipped = (hi - lo + 1) - max(0, last - first + 1)
    if skipped:
        logger.warning(
            "Skipping %d unrepresentable years of %d..%d (supported %d..%d)",
            skipped, lo, hi, MINYEAR, MAXYEAR,
        )
    days: list[date] = []
    for year in range(first, last + 1):
        days.extend(generate_year(year))
    logger.info(
        "Loaded initial range center=%d span=%d days=%d skipped=%d",
        center, span, len(days), skipped,
    )
    return tuple(days)


def extend_by_one_year(current: tuple[date, ...]) -> tuple[date, ...]:
    """Return *current* with the year after its last day appended."""
    if not current:
        raise EmptyRangeError("cannot extend an empty range")
    return tuple(current) + generate_year(current[-1].year + 1)


class DateRange:
    """Explicitly owned day sequence that only ever grows at the end.

    ``extend_by_one_year`` is the single mutation; it is serialized so two
    concurrent extensions cannot both read the same last year and append it
    twice.
    """

    def __init__(self, days: tuple[date, ...] = ()) -> None:
        self._days: tuple[date, ...] = tuple(days)
        self._lock = threading.Lock()

    @classmethod
    def initial(cls, center: int, span: int) -> "DateRange":
        return cls(load_initial_range(center, span))

    @property
    def days(self) -> tuple[date, ...]:
        return self._days

    @property
    def first_year(self) -> int | None:
        return self._days[0].year if self._days else None

    @property
    def last_year(self) -> int | None:
        return self._days[-1].year if self._days else None

    def extend_by_one_year(self) -> tuple[date, ...]:
        """Append the next full year and return only the added days."""
        with self._lock:
            before = len(self._days)
            self._days = extend_by_one_year(self._days)
            added = self._days[before:]
        logger.info("Extended range to %d (%d days added)", added[-1].year, len(added))
        return added

    def __len__(self) -> int:
        return len(self._days)

    def __bool__(self) -> bool:
        return bool(self._days)

    def __repr__(self) -> str:
        return f"DateRange({self.first_year}..{self.last_year}, {len(self._days)} days)"
