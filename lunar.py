"""Chinese lunar labels for day cells.

Conversion is delegated to ``lunardate``; this module only holds
the label tables and picks which one a cell shows.
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Callable

from lunardate import LunarDate

# (lunar month 1-12, lunar day 1-30) for a solar date, or None when the
# converter cannot place the date.
LunarConverter = Callable[[date], tuple[int, int] | None]

LUNAR_MONTH_NAMES = [
    "正月", "二月", "三月", "四月", "五月", "六月",
    "七月", "八月", "九月", "十月", "冬月", "腊月",
]

LUNAR_DAY_NAMES = [
    "初一", "初二", "初三", "初四", "初五", "初六", "初七", "初八", "初九", "初十",
    "十一", "十二", "十三", "十四", "十五", "十六", "十七", "十八", "十九", "二十",
    "廿一", "廿二", "廿三", "廿四", "廿五", "廿六", "廿七", "廿八", "廿九", "三十",
]


def lunar_label(month: int, day: int) -> str:
    """Month name on the first day of a lunar month, otherwise the day name."""
    if not 1 <= month <= 12:
        raise ValueError(f"lunar month out of range: {month}")
    if not 1 <= day <= 30:
        raise ValueError(f"lunar day out of range: {day}")
    if day == 1:
        return LUNAR_MONTH_NAMES[month - 1]
    return LUNAR_DAY_NAMES[day - 1]


# lunardate's tables start at lunar 1900-01-01 and end with lunar year 2099
SUPPORTED_FIRST = date(1900, 1, 31)
SUPPORTED_LAST = date(2099, 12, 31)


@lru_cache(maxsize=4096)
def solar_to_lunar(d: date) -> tuple[int, int] | None:
    """Return Chinese (lunar month, lunar day) for *d*, or None outside 1900-2099.

    A leap month reports the number of the month it repeats.
    """
    if not SUPPORTED_FIRST <= d <= SUPPORTED_LAST:
        return None
    try:
        lunar = LunarDate.fromSolarDate(d.year, d.month, d.day)
    except ValueError:
        return None
    return lunar.month, lunar.day


def label_for(d: date, converter: LunarConverter = solar_to_lunar) -> str | None:
    pair = converter(d)
    if pair is None:
        return None
    return lunar_label(*pair)
