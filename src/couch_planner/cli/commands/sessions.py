"""Session commands: complete, progress."""

from datetime import date
from typing import Annotated, Optional

import typer

from ...core.progress import mark_completed, summarize_progress
from ...io.serializers import ValidationError, parse_date
from .. import views
from ..app import DayArg, PlanDirOption, WeekArg, app, get_store, load_plan, require_session


@app.command()
def complete(
    week: WeekArg,
    day: DayArg,
    plan_dir: PlanDirOption = None,
    on: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Completion date (YYYY-MM-DD, default: today)"),
    ] = None,
    undo: Annotated[
        bool,
        typer.Option("--undo", "-u", help="Mark the session as not completed"),
    ] = False,
) -> None:
    """
    Mark a session as completed (or revert it with --undo).
    """
    store = get_store(plan_dir)
    _, sessions = load_plan(store)
    target = require_session(sessions, week, day)

    try:
        when = parse_date(on) if on else date.today()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if undo:
        if not target.completed:
            views.print_info(f"{target.title} is not completed.")
            raise typer.Exit(0)
        sessions = mark_completed(sessions, week, day, completed=False)
        store.save_sessions(sessions)
        views.print_success(f"{target.title} marked as not completed.")
        return

    if target.completed:
        views.print_info(f"{target.title} was already completed on {target.completed_date}.")
    sessions = mark_completed(sessions, week, day, completed=True, on=when)
    store.save_sessions(sessions)
    views.print_success(f"Completed {target.title} on {when.strftime('%a %Y-%m-%d')}.")


@app.command()
def progress(plan_dir: PlanDirOption = None) -> None:
    """
    Show overall progress, the weekly breakdown and recent activity.
    """
    store = get_store(plan_dir)
    settings, sessions = load_plan(store)
    summary = summarize_progress(sessions, settings)
    views.print_progress(summary, settings.goal_distance_km)
