"""
Configuration constants for the couch-to-5K plan model.

All adjustable parameters are centralized here for easy tuning.
User-editable program defaults also live in the bundled program.yaml.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# PHASE CUTOFFS
# =============================================================================

# A week belongs to a phase while week <= ceil(fraction * program_weeks)
INTERVAL_PHASE_FRACTION: Final[float] = 0.3
BLOCK_PHASE_FRACTION: Final[float] = 0.6

# =============================================================================
# PHASE PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class PhaseParams:
    """Run/walk segment shape for one phase, interpolated by progress ratio."""

    run_base: float  # run segment at r = 0
    run_cap: float  # run segment never exceeds this
    walk_base: float  # walk segment at r = 0
    walk_floor: float  # walk segment never drops below this
    intervals_base: float
    intervals_floor: int
    unit_seconds: int  # 1 for seconds, 60 for minutes


INTERVAL_PHASE: Final[PhaseParams] = PhaseParams(
    run_base=60,
    run_cap=300,
    walk_base=120,
    walk_floor=60,
    intervals_base=8,
    intervals_floor=3,
    unit_seconds=1,
)

BLOCK_PHASE: Final[PhaseParams] = PhaseParams(
    run_base=3,
    run_cap=12,
    walk_base=3,
    walk_floor=1,
    intervals_base=3,  # fixed count
    intervals_floor=3,
    unit_seconds=60,
)

# =============================================================================
# SCHEDULING
# =============================================================================

# Longest run of consecutive rest days the scheduler will step over before
# giving up on the configuration.
MAX_REST_DAY_SCAN: Final[int] = 14

WEEKDAY_NAMES: Final[list[str]] = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]

# =============================================================================
# PLAN LIMITS
# =============================================================================

MIN_PROGRAM_WEEKS: Final[int] = 1
MAX_PROGRAM_WEEKS: Final[int] = 52
MIN_DAYS_PER_WEEK: Final[int] = 1
MAX_DAYS_PER_WEEK: Final[int] = 7

RECENT_ACTIVITY_LIMIT: Final[int] = 5

# =============================================================================
# DEFAULT PROGRAM (fallback when program.yaml is unavailable)
# =============================================================================

DEFAULT_GOAL_DISTANCE_KM: Final[float] = 5.0
DEFAULT_STARTING_DISTANCE_KM: Final[float] = 0.0
DEFAULT_REST_DAYS: Final[list[int]] = [0, 6]
DEFAULT_PROGRAM_WEEKS: Final[int] = 9
DEFAULT_DAYS_PER_WEEK: Final[int] = 3
DEFAULT_WALKING_SPEED_KMH: Final[float] = 5.0
DEFAULT_RUNNING_SPEED_KMH: Final[float] = 9.0
