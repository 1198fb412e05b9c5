"""Settings commands: init, settings, update-settings."""

from dataclasses import replace
from datetime import date
from typing import Annotated, Any, Optional

import typer

from ...core.engine.config_loader import default_settings_dict
from ...core.generator import generate_plan, regenerate_plan, requires_regeneration
from ...core.models import ProgramSettings
from ...core.scheduler import SchedulingError, schedule_all
from ...io.serializers import ValidationError, parse_date, parse_rest_days, validate_settings
from .. import views
from ..app import PlanDirOption, app, get_store, load_plan

StartDateOption = Annotated[
    Optional[str],
    typer.Option("--start-date", "-s", help="First day of the program (YYYY-MM-DD)"),
]
GoalOption = Annotated[
    Optional[float],
    typer.Option("--goal-km", "-g", help="Goal distance in km"),
]
StartingOption = Annotated[
    Optional[float],
    typer.Option("--starting-km", help="Starting distance in km"),
]
WeeksOption = Annotated[
    Optional[int],
    typer.Option("--weeks", "-w", help="Program length in weeks (1-52)"),
]
DaysOption = Annotated[
    Optional[int],
    typer.Option("--days-per-week", "-d", help="Training days per week (1-7)"),
]
RestDaysOption = Annotated[
    Optional[str],
    typer.Option("--rest-days", "-r", help="Rest days, e.g. '0,6' or 'sat,sun' or 'none' (0 = Sunday)"),
]
WalkingOption = Annotated[
    Optional[float],
    typer.Option("--walking-speed", help="Walking speed in km/h"),
]
RunningOption = Annotated[
    Optional[float],
    typer.Option("--running-speed", help="Running speed in km/h"),
]


def _collect_overrides(
    start_date: str | None,
    goal_km: float | None,
    starting_km: float | None,
    weeks: int | None,
    days_per_week: int | None,
    rest_days: str | None,
    walking_speed: float | None,
    running_speed: float | None,
) -> dict[str, Any]:
    """Translate CLI options into ProgramSettings field overrides (None = not given)."""
    overrides: dict[str, Any] = {}
    if start_date is not None:
        overrides["start_date"] = parse_date(start_date)
    if goal_km is not None:
        overrides["goal_distance_km"] = goal_km
    if starting_km is not None:
        overrides["starting_distance_km"] = starting_km
    if weeks is not None:
        overrides["program_weeks"] = weeks
    if days_per_week is not None:
        overrides["training_days_per_week"] = days_per_week
    if rest_days is not None:
        overrides["rest_days"] = parse_rest_days(rest_days)
    if walking_speed is not None:
        overrides["walking_speed_kmh"] = walking_speed
    if running_speed is not None:
        overrides["running_speed_kmh"] = running_speed
    return overrides


@app.command()
def init(
    plan_dir: PlanDirOption = None,
    start_date: StartDateOption = None,
    goal_km: GoalOption = None,
    starting_km: StartingOption = None,
    weeks: WeeksOption = None,
    days_per_week: DaysOption = None,
    rest_days: RestDaysOption = None,
    walking_speed: WalkingOption = None,
    running_speed: RunningOption = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing program without prompting"),
    ] = False,
) -> None:
    """
    Create a program: save settings, generate every session and schedule it.

    Options not given fall back to program.yaml (bundled, or your override in
    ~/.couch-planner/program.yaml).
    """
    store = get_store(plan_dir)

    if store.exists() and not force:
        try:
            done = sum(1 for s in store.load_sessions() if s.completed)
        except ValidationError:
            done = 0
        views.print_warning(
            f"A program already exists in {store.plan_dir} ({done} sessions completed)."
        )
        views.print_info("Use 'update-settings' to change it and keep your progress.")
        if not views.confirm_action("Replace it with a new program?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    defaults = default_settings_dict()
    try:
        overrides = _collect_overrides(
            start_date, goal_km, starting_km, weeks, days_per_week,
            rest_days, walking_speed, running_speed,
        )
        fields = {**defaults, "start_date": date.today(), **overrides}
        settings = validate_settings(ProgramSettings(**fields))
        sessions = schedule_all(generate_plan(settings), settings)
    except (ValidationError, TypeError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.init()
    store.save_settings(settings)
    store.save_sessions(sessions)

    views.print_settings(settings)
    views.console.print()
    first = sessions[0].scheduled_date if sessions else None
    views.print_success(
        f"Created {len(sessions)} sessions"
        + (f", first run on {first.strftime('%a %Y-%m-%d')}." if first else ".")
    )


@app.command("settings")
def show_settings(plan_dir: PlanDirOption = None) -> None:
    """
    Show the current program settings.
    """
    store = get_store(plan_dir)
    settings, _ = load_plan(store)
    views.print_settings(settings)


@app.command("update-settings")
def update_settings(
    plan_dir: PlanDirOption = None,
    start_date: StartDateOption = None,
    goal_km: GoalOption = None,
    starting_km: StartingOption = None,
    weeks: WeeksOption = None,
    days_per_week: DaysOption = None,
    rest_days: RestDaysOption = None,
    walking_speed: WalkingOption = None,
    running_speed: RunningOption = None,
) -> None:
    """
    Change program settings.

    Changing weeks, days per week, distances or speeds rebuilds the plan;
    progress on sessions that still exist is kept.  Changing only the start
    date or rest days re-schedules the pending sessions.
    """
    store = get_store(plan_dir)
    old, sessions = load_plan(store)

    try:
        overrides = _collect_overrides(
            start_date, goal_km, starting_km, weeks, days_per_week,
            rest_days, walking_speed, running_speed,
        )
        new = validate_settings(replace(old, **overrides))
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if new == old:
        views.print_info("No change applied.")
        raise typer.Exit(0)

    regenerate = requires_regeneration(old, new)
    try:
        if regenerate:
            sessions = regenerate_plan(sessions, new)
        sessions = schedule_all(sessions, new)
    except SchedulingError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_settings(new)
    store.save_sessions(sessions)

    views.print_settings(new)
    views.console.print()
    if regenerate:
        views.print_success(f"Plan rebuilt: {len(sessions)} sessions, progress kept where possible.")
    else:
        views.print_success("Pending sessions re-scheduled.")
