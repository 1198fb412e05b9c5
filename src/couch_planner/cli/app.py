"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import ProgramSettings, Session
from ..io.plan_store import PlanStore, get_default_plan_dir
from ..io.serializers import ValidationError
from . import views

WeekArg = Annotated[int, typer.Argument(help="Week number (1-based)")]
DayArg = Annotated[int, typer.Argument(help="Day within the week (1-based)")]

# Shared --plan-dir option type used across all commands
PlanDirOption = Annotated[
    Optional[Path],
    typer.Option("--plan-dir", "-p", help="Directory holding settings.json and plan.json"),
]

app = typer.Typer(
    name="couch-planner",
    help="Couch-to-5K running planner: build, schedule and track a run/walk program.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(plan_dir: Path | None) -> PlanStore:
    """Get plan store from directory or default location."""
    if plan_dir is None:
        plan_dir = get_default_plan_dir()
    return PlanStore(plan_dir)


def load_plan(store: PlanStore) -> tuple[ProgramSettings, list[Session]]:
    """Load settings and sessions, or print the error and exit."""
    if not store.exists():
        views.print_error(f"Settings not found: {store.settings_path}")
        views.print_info("Run 'init' first to create a program.")
        raise typer.Exit(1)

    try:
        return store.load_settings(), store.load_sessions()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def require_session(sessions: list[Session], week: int, day: int) -> Session:
    """Return the (week, day) session or print an error and exit."""
    session = next((s for s in sessions if s.week == week and s.day == day), None)
    if session is None:
        views.print_error(f"No session for week {week}, day {day}.")
        raise typer.Exit(1)
    return session
