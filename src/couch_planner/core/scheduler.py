"""
Calendar scheduling for couch-planner.

Assigns dates to pending sessions in plan order, one session per training
day, stepping over the configured rest days.  Completed and skipped sessions
are never given a new date.

All functions return a new list and leave the input untouched.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta

from .config import MAX_REST_DAY_SCAN
from .models import ProgramSettings, Session

logger = logging.getLogger(__name__)


class SchedulingError(ValueError):
    """Raised when the rest-day configuration leaves no day to train on."""

    pass


def weekday_index(d: date) -> int:
    """Weekday of a calendar date with 0 = Sunday .. 6 = Saturday."""
    return (d.weekday() + 1) % 7


def next_training_day(d: date, rest_days: frozenset[int] | set[int]) -> date:
    """
    First date on or after ``d`` that is not a rest day.

    Args:
        d: Candidate date
        rest_days: Weekday indices to avoid (0 = Sunday)

    Returns:
        The earliest allowed date

    Raises:
        SchedulingError: If no training day is found within MAX_REST_DAY_SCAN days
    """
    cursor = d
    for _ in range(MAX_REST_DAY_SCAN):
        if weekday_index(cursor) not in rest_days:
            return cursor
        cursor += timedelta(days=1)
    raise SchedulingError(
        f"No training day within {MAX_REST_DAY_SCAN} days of {d.isoformat()}: "
        f"rest days {sorted(rest_days)} leave no day to train on"
    )


def _find_index(sessions: list[Session], week: int, day: int) -> int | None:
    """Index of the session with identity (week, day), or None."""
    for i, s in enumerate(sessions):
        if s.week == week and s.day == day:
            return i
    return None


def _pack_from(
    sessions: list[Session],
    indices: list[int],
    cursor: date,
    rest_days: frozenset[int],
) -> date:
    """
    Assign consecutive training days to ``sessions[i]`` for each i in indices.

    Mutates the given list in place (callers pass their own copy).

    Returns:
        The cursor after the last assignment
    """
    for i in indices:
        cursor = next_training_day(cursor, rest_days)
        sessions[i] = replace(sessions[i], scheduled_date=cursor)
        cursor += timedelta(days=1)
    return cursor


def schedule_all(sessions: list[Session], settings: ProgramSettings) -> list[Session]:
    """
    Assign dates to every pending session, starting at the program start date.

    Sessions are walked in list order.  Each pending session takes the next
    non-rest day at or after the cursor; the cursor then moves one day on.
    Completed and skipped sessions keep whatever date they already have.

    Re-running with unchanged inputs yields the same dates.

    Args:
        sessions: Current session list
        settings: Program settings (start_date, rest_days)

    Returns:
        New session list with scheduled dates

    Raises:
        SchedulingError: If every weekday is a rest day and there is work to place
    """
    result = list(sessions)
    pending = [i for i, s in enumerate(result) if s.is_pending]
    end = _pack_from(result, pending, settings.start_date, settings.rest_days)

    logger.debug(
        "Scheduled %d sessions from %s (next free day %s)",
        len(pending),
        settings.start_date.isoformat(),
        end.isoformat(),
    )
    return result


def skip_session(
    sessions: list[Session],
    week: int,
    day: int,
    settings: ProgramSettings,
) -> list[Session]:
    """
    Mark a session skipped and pull the rest of the plan forward.

    The skipped session loses its date and never receives one again.  Its
    slot is not back-filled: every pending session after it is re-packed on
    consecutive training days, starting one day past the latest date held by
    a session that is not being moved (earlier sessions and completed ones).
    With no such date the cursor starts at the program start date.

    A (week, day) that does not exist, or a session that is already
    completed, leaves the plan unchanged.

    Args:
        sessions: Current session list
        week: Week of the session to skip
        day: Day of the session to skip
        settings: Program settings (start_date, rest_days)

    Returns:
        New session list

    Raises:
        SchedulingError: If every weekday is a rest day and there is work to place
    """
    idx = _find_index(sessions, week, day)
    if idx is None:
        logger.debug("Skip ignored: no session (%d, %d)", week, day)
        return sessions

    target = sessions[idx]
    if target.completed:
        logger.debug("Skip ignored: session (%d, %d) already completed", week, day)
        return sessions

    result = list(sessions)
    result[idx] = replace(target, skipped=True, scheduled_date=None)

    to_move = [i for i in range(idx + 1, len(result)) if result[i].is_pending]
    moving = set(to_move)
    anchors = [
        s.scheduled_date
        for i, s in enumerate(result)
        if i not in moving and not s.skipped and s.scheduled_date is not None
    ]
    cursor = max(anchors) + timedelta(days=1) if anchors else settings.start_date

    _pack_from(result, to_move, cursor, settings.rest_days)
    logger.debug(
        "Skipped (%d, %d); re-packed %d sessions from %s",
        week,
        day,
        len(to_move),
        cursor.isoformat(),
    )
    return result


def postpone_session(
    sessions: list[Session],
    week: int,
    day: int,
    new_date: date,
    settings: ProgramSettings,
) -> list[Session]:
    """
    Move one pending session to a new date and re-pack the sessions after it.

    If ``new_date`` is a rest day the session lands on the next training day.
    The session must still come after every dated, non-skipped session
    before it in plan order.  Every pending session that follows it is
    placed on consecutive training days after both its new date and any
    completed session further on.

    A (week, day) that does not exist, or a session that is completed or
    skipped, leaves the plan unchanged.

    Args:
        sessions: Current session list
        week: Week of the session to move
        day: Day of the session to move
        new_date: Requested date
        settings: Program settings (rest_days)

    Returns:
        New session list

    Raises:
        SchedulingError: If every weekday is a rest day, or the session would
            land on or before an earlier session's date
    """
    idx = _find_index(sessions, week, day)
    if idx is None or not sessions[idx].is_pending:
        logger.debug("Postpone ignored: no pending session (%d, %d)", week, day)
        return sessions

    landed = next_training_day(new_date, settings.rest_days)
    earlier = [
        s for s in sessions[:idx] if not s.skipped and s.scheduled_date is not None
    ]
    if earlier:
        latest = max(earlier, key=lambda s: s.scheduled_date)
        if landed <= latest.scheduled_date:
            raise SchedulingError(
                f"Cannot move ({week}, {day}) to {landed.isoformat()}: "
                f"{latest.title} is on {latest.scheduled_date.isoformat()}"
            )

    result = list(sessions)
    result[idx] = replace(result[idx], scheduled_date=landed)

    to_move = [i for i in range(idx + 1, len(result)) if result[i].is_pending]
    moving = set(to_move)
    later_done = [
        s.scheduled_date
        for i, s in enumerate(result[idx + 1:], idx + 1)
        if i not in moving and not s.skipped and s.scheduled_date is not None
    ]
    cursor = max([landed, *later_done]) + timedelta(days=1)
    _pack_from(result, to_move, cursor, settings.rest_days)
    logger.debug(
        "Postponed (%d, %d) to %s; re-packed %d sessions",
        week,
        day,
        landed.isoformat(),
        len(to_move),
    )
    return result
