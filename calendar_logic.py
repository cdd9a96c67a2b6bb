"""Pure calendar calculations — no UI dependencies."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from lunar import LunarConverter, label_for

DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@dataclass(frozen=True)
class MonthGroup:
    """Contiguous run of days sharing one (year, month)."""

    year: int
    month: int
    days: tuple[date, ...]

    @property
    def key(self) -> str:
        return month_key(self.days[0]) if self.days else f"{self.year:04d}{self.month:02d}"


@dataclass(frozen=True)
class DayCell:
    """Display payload for a non-empty grid cell."""

    day: date
    label: str
    lunar: str | None = None
    is_today: bool = False


def month_key(d: date) -> str:
    """Return the 6-character ``YYYYMM`` anchor for the month of *d*."""
    return f"{d.year:04d}{d.month:02d}"


def cell_key(group: MonthGroup, index: int) -> str:
    """Stable identity for the cell at *index* of a padded month."""
    return f"{group.key}-{index}"


def first_weekday_offset(d: date) -> int:
    """Zero-based weekday index with Sunday = 0."""
    return d.isoweekday() % 7


def group_by_month(days: tuple[date, ...] | list[date]) -> list[MonthGroup]:
    """Split a day sequence wherever the (year, month) pair changes.

    Keying on the pair keeps December of one year apart from a following
    December even if sequences were ever interleaved.
    """
    groups: list[MonthGroup] = []
    current_key: tuple[int, int] | None = None
    current: list[date] = []
    for d in days:
        key = (d.year, d.month)
        if key != current_key:
            if current:
                groups.append(MonthGroup(current_key[0], current_key[1], tuple(current)))
            current = []
            current_key = key
        current.append(d)
    if current:
        groups.append(MonthGroup(current_key[0], current_key[1], tuple(current)))
    return groups


def pad_to_weeks(
    group: MonthGroup,
    lunar: LunarConverter | None = None,
    today: date | None = None,
) -> list[DayCell | None]:
    """Return the month's cells padded to whole Sunday-first weeks.

    Empty slots are None. Leading padding aligns the first day under its
    weekday column; trailing padding fills the last row.
    """
    if not group.days:
        return []

    cells: list[DayCell | None] = [None] * first_weekday_offset(group.days[0])
    for d in group.days:
        cells.append(DayCell(
            day=d,
            label=str(d.day),
            lunar=label_for(d, lunar) if lunar is not None else None,
            is_today=(d == today),
        ))
    remainder = len(cells) % 7
    if remainder:
        cells.extend([None] * (7 - remainder))
    return cells


def weeks(cells: list[DayCell | None]) -> list[list[DayCell | None]]:
    """Chunk padded cells into rows of seven."""
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def month_title(group: MonthGroup) -> str:
    return f"{calendar.month_name[group.month]} {group.year}"


def day_of_year(d: date) -> int:
    """Return the 1-based day-of-year for the given date."""
    return d.timetuple().tm_yday
