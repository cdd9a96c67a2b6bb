"""Tests for today-anchor resolution and the render-complete scheduler."""

from datetime import date

from date_range import generate_year, load_initial_range
from scroll_target import (
    TODAY_ANCHOR,
    ScrollPlan,
    ScrollScheduler,
    nearest_month_anchor,
    plan_today_scroll,
    resolve_today_target,
)


class TestResolveTodayTarget:
    def test_month_present(self) -> None:
        days = load_initial_range(2024, 1)
        assert resolve_today_target(days, date(2024, 9, 15)) == "202409"

    def test_first_and_last_month(self) -> None:
        days = generate_year(2024)
        assert resolve_today_target(days, date(2024, 1, 31)) == "202401"
        assert resolve_today_target(days, date(2024, 12, 1)) == "202412"

    def test_month_absent(self) -> None:
        days = generate_year(2024)
        assert resolve_today_target(days, date(2025, 1, 1)) is None
        assert resolve_today_target(days, date(2023, 12, 31)) is None

    def test_empty(self) -> None:
        assert resolve_today_target((), date(2024, 9, 15)) is None

    def test_partial_month_still_counts(self) -> None:
        days = (date(2024, 9, 20), date(2024, 9, 21))
        assert resolve_today_target(days, date(2024, 9, 1)) == "202409"


class TestNearestMonthAnchor:
    def test_before_range(self) -> None:
        assert nearest_month_anchor(generate_year(2024), date(2020, 5, 5)) == "202401"

    def test_after_range(self) -> None:
        assert nearest_month_anchor(generate_year(2024), date(2030, 5, 5)) == "202412"

    def test_inside_range(self) -> None:
        assert nearest_month_anchor(generate_year(2024), date(2024, 6, 6)) == "202406"

    def test_empty(self) -> None:
        assert nearest_month_anchor((), date(2024, 6, 6)) is None


class TestPlanTodayScroll:
    def test_two_stage_plan(self) -> None:
        plan = plan_today_scroll(generate_year(2024), date(2024, 9, 15))
        assert plan == ScrollPlan("202409", TODAY_ANCHOR)

    def test_no_day_anchor_when_month_missing(self) -> None:
        plan = plan_today_scroll(generate_year(2024), date(2026, 1, 1))
        assert plan == ScrollPlan(None, None)


class TestScrollScheduler:
    def test_waits_for_render_complete(self) -> None:
        calls: list[str] = []
        scheduler = ScrollScheduler(calls.append)
        scheduler.request(ScrollPlan("202409", TODAY_ANCHOR))
        assert calls == []
        scheduler.render_complete()
        assert calls == ["202409", TODAY_ANCHOR]

    def test_runs_once(self) -> None:
        calls: list[str] = []
        scheduler = ScrollScheduler(calls.append)
        scheduler.request(ScrollPlan("202409"))
        scheduler.render_complete()
        scheduler.render_complete()
        assert calls == ["202409"]
        assert scheduler.pending is None

    def test_latest_request_wins(self) -> None:
        calls: list[str] = []
        scheduler = ScrollScheduler(calls.append)
        scheduler.request(ScrollPlan("202401"))
        scheduler.request(ScrollPlan("202409", TODAY_ANCHOR))
        scheduler.render_complete()
        assert calls == ["202409", TODAY_ANCHOR]

    def test_cancel(self) -> None:
        calls: list[str] = []
        scheduler = ScrollScheduler(calls.append)
        scheduler.request(ScrollPlan("202409"))
        scheduler.cancel()
        scheduler.render_complete()
        assert calls == []

    def test_empty_plan_scrolls_nowhere(self) -> None:
        calls: list[str] = []
        scheduler = ScrollScheduler(calls.append)
        scheduler.request(ScrollPlan(None))
        scheduler.render_complete()
        assert calls == []
