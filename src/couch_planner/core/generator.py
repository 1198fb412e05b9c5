"""
Plan generation for couch-planner.

Builds the full, deterministic session list for a program: one session per
(week, day), each with a workout description derived from how far the
session sits along the program.  Dates are not assigned here; see
scheduler.py.

Progression model
-----------------
The progress ratio of a session is its 1-based position among all sessions
divided by the session count, r = (index + 1) / total, so r lies in (0, 1]
and reaches 1 on the final session.  The same r drives both the workout
structure and the target distance.

Weeks are split into three phases with ceiling cutoffs:

    interval    week <= ceil(0.3 * weeks)    short run/walk repeats (seconds)
    block       week <= ceil(0.6 * weeks)    longer run/walk blocks (minutes)
    continuous  remaining weeks              one continuous run

The target distance is the straight-line interpolation between the starting
and goal distance.  For interval and block sessions an estimate of the
distance actually covered (from run/walk time and the configured speeds) is
kept alongside it for display only.
"""

import logging
import math
from typing import Literal

from .config import (
    BLOCK_PHASE,
    BLOCK_PHASE_FRACTION,
    INTERVAL_PHASE,
    INTERVAL_PHASE_FRACTION,
    PhaseParams,
)
from .models import ProgramSettings, Session

logger = logging.getLogger(__name__)

Phase = Literal["interval", "block", "continuous"]

# Settings that shape the generated sessions; a change to any of them
# invalidates the current plan.
PLAN_SHAPING_FIELDS = (
    "program_weeks",
    "training_days_per_week",
    "goal_distance_km",
    "starting_distance_km",
    "walking_speed_kmh",
    "running_speed_kmh",
)


def progress_ratio(index: int, total: int) -> float:
    """
    Position of a session along the program.

    Args:
        index: 0-based session index in (week, day) order
        total: Number of sessions in the program

    Returns:
        Ratio in (0, 1]; 0.0 for an empty program
    """
    if total <= 0:
        return 0.0
    return (index + 1) / total


def _phase_cutoff(program_weeks: int, fraction: float) -> int:
    # round() first: 10 * 0.3 is 3.0000000000000004 in binary floating point
    return math.ceil(round(program_weeks * fraction, 9))


def phase_for_week(week: int, program_weeks: int) -> Phase:
    """Return the training phase a week belongs to."""
    if week <= _phase_cutoff(program_weeks, INTERVAL_PHASE_FRACTION):
        return "interval"
    if week <= _phase_cutoff(program_weeks, BLOCK_PHASE_FRACTION):
        return "block"
    return "continuous"


def target_distance(settings: ProgramSettings, ratio: float) -> float:
    """Linear interpolation between starting and goal distance at ``ratio``."""
    start = settings.starting_distance_km
    return start + (settings.goal_distance_km - start) * ratio


def interval_structure(params: PhaseParams, ratio: float) -> tuple[int, int, int]:
    """
    Run segment, walk segment and repeat count for a run/walk session.

    Segments are in the phase's own unit (seconds or minutes).  The run
    segment grows toward its cap, the walk segment shrinks toward its floor
    and the repeat count shrinks toward its floor as ratio grows.

    Args:
        params: Phase shape
        ratio: Progress ratio in [0, 1]

    Returns:
        (run, walk, intervals), all rounded up
    """
    run = params.run_base + (params.run_cap - params.run_base) * ratio
    walk = params.walk_base - (params.walk_base - params.walk_floor) * ratio
    intervals = params.intervals_base - (params.intervals_base - params.intervals_floor) * ratio

    run_units = min(math.ceil(run), math.ceil(params.run_cap))
    walk_units = max(math.ceil(walk), math.ceil(params.walk_floor))
    interval_count = max(math.ceil(intervals), params.intervals_floor)
    return run_units, walk_units, interval_count


def estimate_interval_distance(
    settings: ProgramSettings,
    run_seconds: int,
    walk_seconds: int,
    intervals: int,
) -> float:
    """
    Distance covered by a run/walk session at the configured speeds.

    Display-only; the session target is always the linear target distance.

    Returns:
        Estimated km, rounded to 0.1
    """
    run_hours = run_seconds * intervals / 3600
    walk_hours = walk_seconds * intervals / 3600
    km = run_hours * settings.running_speed_kmh + walk_hours * settings.walking_speed_kmh
    return round(km, 1)


def continuous_run_minutes(distance_km: float, running_speed_kmh: float) -> int:
    """Minutes needed to run ``distance_km`` at ``running_speed_kmh``, rounded up."""
    # round() first so float noise (e.g. 20.000000000000004) does not add a minute
    return math.ceil(round(distance_km / running_speed_kmh * 60, 6))


def build_session(settings: ProgramSettings, week: int, day: int, index: int) -> Session:
    """
    Build one unscheduled session.

    Args:
        settings: Program settings
        week: 1-based week
        day: 1-based day within the week
        index: 0-based position among all sessions

    Returns:
        Session with title, description and distances filled in
    """
    ratio = progress_ratio(index, settings.total_sessions)
    distance = target_distance(settings, ratio)
    phase = phase_for_week(week, settings.program_weeks)
    estimate: float | None = None

    if phase == "interval":
        run_s, walk_s, n = interval_structure(INTERVAL_PHASE, ratio)
        estimate = estimate_interval_distance(settings, run_s, walk_s, n)
        description = f"{run_s}s run, {walk_s}s walk ({n}x) - Target: {distance:.1f}km"
    elif phase == "block":
        run_m, walk_m, n = interval_structure(BLOCK_PHASE, ratio)
        unit = BLOCK_PHASE.unit_seconds
        estimate = estimate_interval_distance(settings, run_m * unit, walk_m * unit, n)
        description = f"{run_m}min run, {walk_m}min walk ({n}x) - Target: {distance:.1f}km"
    else:
        run_m = continuous_run_minutes(distance, settings.running_speed_kmh)
        description = f"{run_m}min continuous run - Target: {distance:.1f}km"

    return Session(
        week=week,
        day=day,
        title=f"Week {week}, Day {day}",
        description=description,
        target_distance_km=round(distance, 3),
        estimated_distance_km=estimate,
    )


def generate_plan(settings: ProgramSettings) -> list[Session]:
    """
    Generate the full session list for a program.

    Pure and deterministic: the same settings always give the same list.
    No dates are assigned.

    Args:
        settings: Program settings

    Returns:
        program_weeks * training_days_per_week sessions ordered by (week, day);
        empty when either count is zero
    """
    sessions: list[Session] = []
    index = 0
    for week in range(1, settings.program_weeks + 1):
        for day in range(1, settings.training_days_per_week + 1):
            sessions.append(build_session(settings, week, day, index))
            index += 1

    logger.debug(
        "Generated %d sessions (%d weeks x %d days)",
        len(sessions),
        settings.program_weeks,
        settings.training_days_per_week,
    )
    return sessions


def requires_regeneration(old: ProgramSettings, new: ProgramSettings) -> bool:
    """True if the settings change alters the generated sessions."""
    return any(getattr(old, f) != getattr(new, f) for f in PLAN_SHAPING_FIELDS)


def regenerate_plan(previous: list[Session], settings: ProgramSettings) -> list[Session]:
    """
    Rebuild the plan for new settings, keeping progress by (week, day).

    A session whose identity still exists in the new plan keeps its
    completed/skipped flags and completion date; a completed session also
    keeps the date it was scheduled on.  Pending sessions come back
    unscheduled, and sessions beyond the new plan's size are dropped.

    Args:
        previous: Current session list
        settings: New program settings

    Returns:
        Fresh session list with carried-over progress
    """
    old_by_id = {s.identity: s for s in previous}
    sessions = generate_plan(settings)
    carried = 0

    for session in sessions:
        old = old_by_id.get(session.identity)
        if old is None or old.is_pending:
            continue
        session.completed = old.completed
        session.skipped = old.skipped
        session.completed_date = old.completed_date
        if old.completed:
            session.scheduled_date = old.scheduled_date
        carried += 1

    new_ids = {s.identity for s in sessions}
    dropped = sum(1 for s in previous if not s.is_pending and s.identity not in new_ids)
    logger.debug("Regenerated plan: carried %d sessions, dropped %d", carried, dropped)
    return sessions
