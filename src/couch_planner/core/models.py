"""
Data models for couch-planner.

Program settings, training sessions, and progress summaries.
Dates are calendar dates (datetime.date); time of day is never stored.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from .config import MAX_DAYS_PER_WEEK, MAX_PROGRAM_WEEKS

SessionStatus = Literal["completed", "skipped", "scheduled", "missed", "unscheduled"]


@dataclass(frozen=True)
class ProgramSettings:
    """
    User-editable program configuration.

    rest_days uses weekday indices with 0 = Sunday .. 6 = Saturday.

    Zero weeks or zero days per week are accepted here (they produce an
    empty plan); the stricter 1..52 / 1..7 policy and the "not every day is
    a rest day" rule are enforced by io.serializers.validate_settings.
    """

    start_date: date
    goal_distance_km: float = 5.0
    starting_distance_km: float = 0.0
    walking_speed_kmh: float = 5.0
    running_speed_kmh: float = 9.0
    program_weeks: int = 9
    training_days_per_week: int = 3
    rest_days: frozenset[int] = field(default_factory=lambda: frozenset({0, 6}))

    def __post_init__(self) -> None:
        """Validate settings data."""
        if not isinstance(self.start_date, date):
            raise ValueError(f"start_date must be a date, got {self.start_date!r}")
        if self.goal_distance_km < 0:
            raise ValueError("goal_distance_km must be non-negative")
        if self.starting_distance_km < 0:
            raise ValueError("starting_distance_km must be non-negative")
        if self.walking_speed_kmh <= 0:
            raise ValueError("walking_speed_kmh must be positive")
        if self.running_speed_kmh <= 0:
            raise ValueError("running_speed_kmh must be positive")
        if not 0 <= self.program_weeks <= MAX_PROGRAM_WEEKS:
            raise ValueError(f"program_weeks must be between 0 and {MAX_PROGRAM_WEEKS}")
        if not 0 <= self.training_days_per_week <= MAX_DAYS_PER_WEEK:
            raise ValueError(f"training_days_per_week must be between 0 and {MAX_DAYS_PER_WEEK}")

        # Accept any iterable of ints (lists from JSON/CLI) but store a frozenset
        rest_days = frozenset(int(d) for d in self.rest_days)
        for d in rest_days:
            if not 0 <= d <= 6:
                raise ValueError(f"Invalid rest day: {d}. Must be 0 (Sunday) to 6 (Saturday)")
        object.__setattr__(self, "rest_days", rest_days)

    @property
    def total_sessions(self) -> int:
        """Number of sessions a plan built from these settings contains."""
        return self.program_weeks * self.training_days_per_week


@dataclass
class Session:
    """
    One training occurrence, identified by (week, day).

    target_distance_km is the authoritative target shown in the description.
    estimated_distance_km is a display-only estimate derived from the
    run/walk structure and the configured speeds (None for continuous runs).
    """

    week: int
    day: int
    title: str
    description: str
    target_distance_km: float = 0.0
    estimated_distance_km: float | None = None
    completed: bool = False
    skipped: bool = False
    scheduled_date: date | None = None
    completed_date: date | None = None

    def __post_init__(self) -> None:
        """Validate session data."""
        if self.week < 1:
            raise ValueError("week must be positive")
        if self.day < 1:
            raise ValueError("day must be positive")
        if self.target_distance_km < 0:
            raise ValueError("target_distance_km must be non-negative")

    @property
    def identity(self) -> tuple[int, int]:
        """The (week, day) pair that identifies this session."""
        return (self.week, self.day)

    @property
    def is_pending(self) -> bool:
        """True if the session still needs to be run."""
        return not self.completed and not self.skipped


@dataclass
class WeekProgress:
    """Completion counts for one program week."""

    week: int
    total: int
    completed: int
    skipped: int = 0

    @property
    def percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.completed / self.total * 100


@dataclass
class ProgressSummary:
    """
    Overall progress derived from the session list.
    """

    total: int
    completed: int
    skipped: int
    percentage: float
    current_week: int
    weeks: list[WeekProgress] = field(default_factory=list)
    recent: list[Session] = field(default_factory=list)  # newest completion first

    @property
    def remaining(self) -> int:
        return self.total - self.completed - self.skipped
