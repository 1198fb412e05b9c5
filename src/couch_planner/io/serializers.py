"""
JSON serialization for planner data models.

Handles conversion between dataclasses and JSON-compatible dicts, and the
validation applied to settings entering the system from files or the CLI.
"""

import json
import re
from datetime import date, datetime
from typing import Any

from ..core.config import (
    MAX_DAYS_PER_WEEK,
    MAX_PROGRAM_WEEKS,
    MIN_DAYS_PER_WEEK,
    MIN_PROGRAM_WEEKS,
    WEEKDAY_NAMES,
)
from ..core.models import ProgramSettings, Session


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def parse_date(value: str | date) -> date:
    """
    Parse a calendar date.

    Accepts plain ``YYYY-MM-DD`` as well as full ISO-8601 timestamps
    (``2024-01-05T00:00:00.000Z``, ``2024-01-05T08:30:00+02:00``); the
    time of day is discarded and only the calendar day is kept.

    Args:
        value: ISO string or date

    Returns:
        datetime.date

    Raises:
        ValidationError: If the string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not re.match(r"^\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}.*)?$", value):
        raise ValidationError(f"Invalid date format: {value!r}. Expected YYYY-MM-DD")

    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e


def format_date(value: date | None) -> str | None:
    """Format a date as YYYY-MM-DD (None passes through)."""
    return value.isoformat() if value is not None else None


def parse_rest_days(raw: str) -> frozenset[int]:
    """
    Parse a rest-day list from the command line.

    Accepts weekday indices (``"0,6"``), English names or their three-letter
    prefixes (``"sat,sun"``), mixed freely.  An empty string or ``"none"``
    means no rest days.

    Raises:
        ValidationError: If an entry is not a weekday
    """
    raw = raw.strip()
    if not raw or raw.lower() == "none":
        return frozenset()

    prefixes = {name[:3].lower(): i for i, name in enumerate(WEEKDAY_NAMES)}
    days: set[int] = set()
    for part in re.split(r"[,\s]+", raw):
        if not part:
            continue
        token = part.lower()
        if token.isdigit():
            idx = int(token)
            if not 0 <= idx <= 6:
                raise ValidationError(f"Invalid rest day: {part}. Use 0 (Sunday) to 6 (Saturday)")
            days.add(idx)
        elif token[:3] in prefixes and WEEKDAY_NAMES[prefixes[token[:3]]].lower().startswith(token):
            days.add(prefixes[token[:3]])
        else:
            raise ValidationError(f"Invalid rest day: {part!r}")
    return frozenset(days)


def format_rest_days(rest_days: frozenset[int] | set[int]) -> str:
    """Human-readable rest-day list, Sunday first."""
    if not rest_days:
        return "none"
    return ", ".join(WEEKDAY_NAMES[d] for d in sorted(rest_days))


def validate_flag(value: Any, name: str) -> bool:
    """
    Validate a boolean field read from JSON.

    Raises:
        ValidationError: If value is not a JSON boolean (e.g. the string "false")
    """
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false, got {value!r}")
    return value


def validate_settings(settings: ProgramSettings) -> ProgramSettings:
    """
    Validate settings at the configuration boundary.

    Stricter than the model itself: the program must have at least one week
    and one training day per week, and at least one weekday must be free of
    rest so the scheduler can place sessions.

    Args:
        settings: Settings to check

    Returns:
        The settings if valid

    Raises:
        ValidationError: If the configuration cannot produce a usable plan
    """
    if not MIN_PROGRAM_WEEKS <= settings.program_weeks <= MAX_PROGRAM_WEEKS:
        raise ValidationError(
            f"program_weeks must be between {MIN_PROGRAM_WEEKS} and {MAX_PROGRAM_WEEKS}, "
            f"got {settings.program_weeks}"
        )
    if not MIN_DAYS_PER_WEEK <= settings.training_days_per_week <= MAX_DAYS_PER_WEEK:
        raise ValidationError(
            f"training_days_per_week must be between {MIN_DAYS_PER_WEEK} and "
            f"{MAX_DAYS_PER_WEEK}, got {settings.training_days_per_week}"
        )
    if len(settings.rest_days) >= 7:
        raise ValidationError("rest_days cannot cover all seven weekdays")
    return settings


def settings_to_dict(settings: ProgramSettings) -> dict[str, Any]:
    """
    Convert ProgramSettings to JSON-compatible dict.

    Args:
        settings: Settings to convert

    Returns:
        Dict representation
    """
    return {
        "start_date": format_date(settings.start_date),
        "goal_distance_km": settings.goal_distance_km,
        "starting_distance_km": settings.starting_distance_km,
        "walking_speed_kmh": settings.walking_speed_kmh,
        "running_speed_kmh": settings.running_speed_kmh,
        "program_weeks": settings.program_weeks,
        "training_days_per_week": settings.training_days_per_week,
        "rest_days": sorted(settings.rest_days),
    }


def dict_to_settings(data: dict[str, Any]) -> ProgramSettings:
    """
    Convert dict to ProgramSettings.

    Args:
        data: Dict representation

    Returns:
        ProgramSettings instance

    Raises:
        ValidationError: If data is invalid
    """
    if "start_date" not in data:
        raise ValidationError("settings: start_date is required")
    try:
        return ProgramSettings(
            start_date=parse_date(data["start_date"]),
            goal_distance_km=float(data.get("goal_distance_km", 5.0)),
            starting_distance_km=float(data.get("starting_distance_km", 0.0)),
            walking_speed_kmh=float(data.get("walking_speed_kmh", 5.0)),
            running_speed_kmh=float(data.get("running_speed_kmh", 9.0)),
            program_weeks=int(data.get("program_weeks", 9)),
            training_days_per_week=int(data.get("training_days_per_week", 3)),
            rest_days=frozenset(int(d) for d in data.get("rest_days", [])),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"settings: {e}") from e


def session_to_dict(session: Session) -> dict[str, Any]:
    """
    Convert Session to JSON-compatible dict.

    Args:
        session: Session to convert

    Returns:
        Dict representation
    """
    return {
        "week": session.week,
        "day": session.day,
        "title": session.title,
        "description": session.description,
        "target_distance_km": session.target_distance_km,
        "estimated_distance_km": session.estimated_distance_km,
        "completed": session.completed,
        "skipped": session.skipped,
        "scheduled_date": format_date(session.scheduled_date),
        "completed_date": format_date(session.completed_date),
    }


def dict_to_session(data: dict[str, Any]) -> Session:
    """
    Convert dict to Session.

    Missing title falls back to "Week W, Day D"; missing optional dates
    stay None.

    Args:
        data: Dict representation

    Returns:
        Session instance

    Raises:
        ValidationError: If data is invalid
    """
    try:
        week = int(data["week"])
        day = int(data["day"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"session: week and day are required integers ({e})") from e

    scheduled = data.get("scheduled_date")
    completed_on = data.get("completed_date")
    estimate = data.get("estimated_distance_km")

    try:
        return Session(
            week=week,
            day=day,
            title=str(data.get("title") or f"Week {week}, Day {day}"),
            description=str(data.get("description", "")),
            target_distance_km=float(data.get("target_distance_km", 0.0)),
            estimated_distance_km=float(estimate) if estimate is not None else None,
            completed=validate_flag(data.get("completed", False), "completed"),
            skipped=validate_flag(data.get("skipped", False), "skipped"),
            scheduled_date=parse_date(scheduled) if scheduled else None,
            completed_date=parse_date(completed_on) if completed_on else None,
        )
    except ValueError as e:
        raise ValidationError(f"session ({week}, {day}): {e}") from e


def sessions_to_json(sessions: list[Session]) -> str:
    """Serialize a session list to a JSON document."""
    return json.dumps([session_to_dict(s) for s in sessions], indent=2)
