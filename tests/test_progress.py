"""Tests for completion tracking and progress summaries."""

from datetime import date

from couch_planner.core.generator import generate_plan
from couch_planner.core.models import ProgramSettings
from couch_planner.core.progress import (
    current_week,
    mark_completed,
    next_session,
    session_status,
    summarize_progress,
)
from couch_planner.core.scheduler import schedule_all, skip_session

SETTINGS = ProgramSettings(start_date=date(2024, 1, 1), program_weeks=3, training_days_per_week=2)


def _plan():
    return schedule_all(generate_plan(SETTINGS), SETTINGS)


class TestMarkCompleted:
    """Setting and clearing the completed flag."""

    def test_complete_records_date(self):
        result = mark_completed(_plan(), 1, 1, on=date(2024, 1, 2))
        assert result[0].completed
        assert result[0].completed_date == date(2024, 1, 2)
        # scheduled date is kept
        assert result[0].scheduled_date == date(2024, 1, 1)

    def test_default_date_is_today(self):
        result = mark_completed(_plan(), 1, 1)
        assert result[0].completed_date == date.today()

    def test_undo_clears_completion(self):
        done = mark_completed(_plan(), 1, 1, on=date(2024, 1, 1))
        result = mark_completed(done, 1, 1, completed=False)
        assert not result[0].completed
        assert result[0].completed_date is None
        assert result[0].scheduled_date == date(2024, 1, 1)

    def test_completing_skipped_session_clears_skip(self):
        plan = skip_session(_plan(), 1, 2, SETTINGS)
        result = mark_completed(plan, 1, 2, on=date(2024, 1, 5))
        assert result[1].completed and not result[1].skipped

    def test_unknown_session_returns_input(self):
        plan = _plan()
        assert mark_completed(plan, 7, 1) is plan

    def test_input_not_mutated(self):
        plan = _plan()
        mark_completed(plan, 1, 1)
        assert not plan[0].completed


class TestSessionStatus:
    """Display classification by calendar day."""

    def test_statuses(self):
        plan = _plan()
        plan[0].completed = True
        plan[1].skipped = True
        plan[1].scheduled_date = None
        plan[5].scheduled_date = None
        today = date(2024, 1, 4)

        assert session_status(plan[0], today) == "completed"
        assert session_status(plan[1], today) == "skipped"
        assert session_status(plan[2], today) == "missed"  # 01-03
        assert session_status(plan[3], today) == "scheduled"  # 01-04, today
        assert session_status(plan[4], today) == "scheduled"  # 01-05
        assert session_status(plan[5], today) == "unscheduled"


class TestCurrentWeek:
    """Week of the first pending session."""

    def test_empty_plan_is_week_one(self):
        assert current_week([]) == 1

    def test_first_pending_week(self):
        plan = _plan()
        for s in plan[:3]:
            s.completed = True
        assert current_week(plan) == 2
        assert next_session(plan).identity == (2, 2)

    def test_skipped_sessions_are_passed_over(self):
        plan = _plan()
        plan[0].skipped = True
        plan[1].skipped = True
        assert current_week(plan) == 2

    def test_all_done_is_final_week(self):
        plan = _plan()
        for s in plan:
            s.completed = True
        assert current_week(plan) == 3
        assert next_session(plan) is None


class TestSummarizeProgress:
    """Overall and weekly figures."""

    def test_empty_progress(self):
        summary = summarize_progress(_plan(), SETTINGS)
        assert summary.total == 6
        assert summary.completed == 0
        assert summary.percentage == 0.0
        assert summary.remaining == 6
        assert summary.recent == []

    def test_counts_and_percentages(self):
        plan = _plan()
        plan = mark_completed(plan, 1, 1, on=date(2024, 1, 1))
        plan = mark_completed(plan, 1, 2, on=date(2024, 1, 2))
        plan = mark_completed(plan, 2, 1, on=date(2024, 1, 3))
        plan = skip_session(plan, 2, 2, SETTINGS)

        summary = summarize_progress(plan, SETTINGS)

        assert summary.completed == 3
        assert summary.skipped == 1
        assert summary.remaining == 2
        assert summary.percentage == 50.0
        assert summary.current_week == 3
        assert [w.week for w in summary.weeks] == [1, 2, 3]
        assert summary.weeks[0].percentage == 100.0
        assert summary.weeks[1].percentage == 50.0
        assert summary.weeks[1].skipped == 1
        assert summary.weeks[2].percentage == 0.0

    def test_empty_plan(self):
        settings = ProgramSettings(start_date=date(2024, 1, 1), program_weeks=0)
        summary = summarize_progress([], settings)
        assert summary.percentage == 0.0
        assert summary.weeks == []
        assert summary.current_week == 1

    def test_recent_newest_first_and_capped(self):
        plan = _plan()
        for i, s in enumerate(plan):
            plan = mark_completed(plan, s.week, s.day, on=date(2024, 1, 1 + i))

        summary = summarize_progress(plan, SETTINGS)

        assert len(summary.recent) == 5
        assert summary.recent[0].identity == (3, 2)
        assert summary.recent[0].completed_date == date(2024, 1, 6)
        dates = [s.completed_date for s in summary.recent]
        assert dates == sorted(dates, reverse=True)
