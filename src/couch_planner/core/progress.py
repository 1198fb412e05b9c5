"""
Progress tracking: completion state, per-session status and summaries.
"""

import logging
from dataclasses import replace
from datetime import date

from .config import RECENT_ACTIVITY_LIMIT
from .models import ProgramSettings, ProgressSummary, Session, SessionStatus, WeekProgress

logger = logging.getLogger(__name__)


def mark_completed(
    sessions: list[Session],
    week: int,
    day: int,
    completed: bool = True,
    on: date | None = None,
) -> list[Session]:
    """
    Set or clear the completed flag of one session.

    Completing a session records ``on`` (default: today) as its completion
    date and clears a previous skip.  Reverting clears the completion date;
    the scheduled date is kept either way.

    Args:
        sessions: Current session list
        week: Week of the session
        day: Day of the session
        completed: New completed state
        on: Completion date

    Returns:
        New session list; the input unchanged if (week, day) does not exist
    """
    for i, s in enumerate(sessions):
        if s.week == week and s.day == day:
            break
    else:
        logger.debug("Completion ignored: no session (%d, %d)", week, day)
        return sessions

    result = list(sessions)
    if completed:
        result[i] = replace(s, completed=True, skipped=False, completed_date=on or date.today())
    else:
        result[i] = replace(s, completed=False, completed_date=None)
    return result


def session_status(session: Session, today: date | None = None) -> SessionStatus:
    """
    Classify a session for display.

    Comparison is by calendar day: a session scheduled for today is
    "scheduled", one scheduled before today and not run is "missed".
    """
    if session.completed:
        return "completed"
    if session.skipped:
        return "skipped"
    if session.scheduled_date is None:
        return "unscheduled"
    today = today or date.today()
    if session.scheduled_date >= today:
        return "scheduled"
    return "missed"


def next_session(sessions: list[Session]) -> Session | None:
    """First pending session in plan order, or None when the plan is done."""
    return next((s for s in sessions if s.is_pending), None)


def current_week(sessions: list[Session]) -> int:
    """
    Week the athlete is currently working on.

    The week of the first pending session; the final week once nothing is
    pending; 1 for an empty plan.
    """
    if not sessions:
        return 1
    nxt = next_session(sessions)
    if nxt is not None:
        return nxt.week
    return max(s.week for s in sessions)


def summarize_progress(sessions: list[Session], settings: ProgramSettings) -> ProgressSummary:
    """
    Build the overall and per-week progress summary.

    Args:
        sessions: Current session list
        settings: Program settings (program_weeks drives the week breakdown)

    Returns:
        ProgressSummary
    """
    total = len(sessions)
    done = [s for s in sessions if s.completed]
    skipped = sum(1 for s in sessions if s.skipped)

    weeks: list[WeekProgress] = []
    for week in range(1, settings.program_weeks + 1):
        week_sessions = [s for s in sessions if s.week == week]
        weeks.append(
            WeekProgress(
                week=week,
                total=len(week_sessions),
                completed=sum(1 for s in week_sessions if s.completed),
                skipped=sum(1 for s in week_sessions if s.skipped),
            )
        )

    # Sessions without a completion date sort last
    recent = sorted(
        done,
        key=lambda s: s.completed_date or date.min,
        reverse=True,
    )[:RECENT_ACTIVITY_LIMIT]

    return ProgressSummary(
        total=total,
        completed=len(done),
        skipped=skipped,
        percentage=len(done) / total * 100 if total else 0.0,
        current_week=current_week(sessions),
        weeks=weeks,
        recent=recent,
    )
