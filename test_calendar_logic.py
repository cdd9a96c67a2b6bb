"""Tests for month grouping, week padding and month keys."""

from datetime import date

import pytest

from calendar_logic import (
    DAY_ABBR,
    DayCell,
    MonthGroup,
    cell_key,
    day_of_year,
    first_weekday_offset,
    group_by_month,
    month_key,
    month_title,
    pad_to_weeks,
    weeks,
)
from date_range import generate_year, load_initial_range


def _group(year: int, month: int) -> MonthGroup:
    return next(g for g in group_by_month(generate_year(year)) if g.month == month)


class TestGroupByMonth:
    def test_three_years_make_36_groups(self) -> None:
        groups = group_by_month(load_initial_range(2024, 1))
        assert len(groups) == 36
        for g in groups:
            assert all(d.year == g.year and d.month == g.month for d in g.days)
            assert list(g.days) == sorted(g.days)
            assert g.days[0].day == 1

    def test_empty(self) -> None:
        assert group_by_month(()) == []

    def test_single_day(self) -> None:
        groups = group_by_month((date(2024, 5, 7),))
        assert groups == [MonthGroup(2024, 5, (date(2024, 5, 7),))]

    def test_idempotent(self) -> None:
        days = load_initial_range(2024, 1)
        assert group_by_month(days) == group_by_month(days)

    def test_same_month_number_of_different_years_not_merged(self) -> None:
        days = (date(2023, 12, 30), date(2023, 12, 31), date(2024, 12, 1))
        groups = group_by_month(days)
        assert [(g.year, g.month) for g in groups] == [(2023, 12), (2024, 12)]

    def test_february_lengths(self) -> None:
        assert len(_group(2024, 2).days) == 29
        assert len(_group(2023, 2).days) == 28


class TestPadToWeeks:
    def test_september_2024_starts_on_sunday(self) -> None:
        cells = pad_to_weeks(_group(2024, 9))
        assert len(cells) == 35
        assert cells[0] == DayCell(day=date(2024, 9, 1), label="1")
        assert all(isinstance(c, DayCell) for c in cells[:30])
        assert cells[30:] == [None] * 5

    def test_leading_padding_matches_weekday(self) -> None:
        # 2024-10-01 is a Tuesday
        cells = pad_to_weeks(_group(2024, 10))
        assert cells[:2] == [None, None]
        assert cells[2].day == date(2024, 10, 1)

    def test_six_week_month(self) -> None:
        # March 2024 starts on Friday and has 31 days
        cells = pad_to_weeks(_group(2024, 3))
        assert len(cells) == 42
        assert len(weeks(cells)) == 6

    def test_exact_four_weeks(self) -> None:
        # February 2015 starts on Sunday and has 28 days
        cells = pad_to_weeks(_group(2015, 2))
        assert len(cells) == 28
        assert None not in cells

    def test_every_month_is_whole_weeks(self) -> None:
        for g in group_by_month(load_initial_range(2024, 2)):
            cells = pad_to_weeks(g)
            assert len(cells) % 7 == 0
            assert [c.day for c in cells if c is not None] == list(g.days)

    def test_partial_group(self) -> None:
        group = MonthGroup(2024, 9, (date(2024, 9, 18),))
        cells = pad_to_weeks(group)
        assert len(cells) == 7
        assert cells[3].day == date(2024, 9, 18)

    def test_empty_group(self) -> None:
        assert pad_to_weeks(MonthGroup(2024, 9, ())) == []

    def test_marks_only_today(self) -> None:
        today = date(2024, 9, 15)
        cells = pad_to_weeks(_group(2024, 9), today=today)
        flagged = [c.day for c in cells if c is not None and c.is_today]
        assert flagged == [today]

    def test_today_in_other_month_marks_nothing(self) -> None:
        cells = pad_to_weeks(_group(2024, 9), today=date(2024, 10, 1))
        assert not any(c.is_today for c in cells if c is not None)

    def test_lunar_labels_from_converter(self) -> None:
        def fake(d: date):
            return (8, 1) if d.day == 1 else (8, d.day)

        cells = [c for c in pad_to_weeks(_group(2024, 9), lunar=fake) if c is not None]
        assert cells[0].lunar == "八月"
        assert cells[14].lunar == "十五"

    def test_converter_out_of_range_leaves_label_empty(self) -> None:
        cells = pad_to_weeks(_group(2024, 9), lunar=lambda d: None)
        assert all(c.lunar is None for c in cells if c is not None)

    def test_no_converter_no_lunar(self) -> None:
        cells = pad_to_weeks(_group(2024, 9))
        assert all(c.lunar is None for c in cells if c is not None)


class TestKeys:
    def test_month_key(self) -> None:
        assert month_key(date(2024, 9, 15)) == "202409"

    def test_month_key_pads_small_years(self) -> None:
        assert month_key(date(5, 1, 1)) == "000501"

    def test_month_key_injective(self) -> None:
        keys = {month_key(date(y, m, 1)) for y in range(1, 10000) for m in range(1, 13)}
        assert len(keys) == 9999 * 12
        assert all(len(k) == 6 for k in keys)

    def test_group_key(self) -> None:
        assert _group(2024, 9).key == "202409"

    def test_cell_key_is_stable(self) -> None:
        group = _group(2024, 9)
        assert cell_key(group, 0) == "202409-0"
        assert cell_key(group, 34) == cell_key(_group(2024, 9), 34)


@pytest.mark.parametrize(
    ("d", "expected"),
    [
        (date(2024, 9, 1), 0),   # Sunday
        (date(2024, 9, 2), 1),
        (date(2024, 9, 7), 6),   # Saturday
    ],
)
def test_first_weekday_offset(d: date, expected: int) -> None:
    assert first_weekday_offset(d) == expected


def test_headers_start_on_sunday() -> None:
    assert DAY_ABBR[0] == "Sun"
    assert len(DAY_ABBR) == 7


def test_month_title() -> None:
    assert month_title(_group(2024, 9)) == "September 2024"


def test_day_of_year() -> None:
    assert day_of_year(date(2024, 12, 31)) == 366
