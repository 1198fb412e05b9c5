"""Planning commands: plan, schedule, skip, postpone."""

from datetime import date
from typing import Annotated, Optional

import typer

from ...core.progress import next_session
from ...core.scheduler import SchedulingError, postpone_session, schedule_all, skip_session
from ...io.serializers import ValidationError, parse_date
from .. import views
from ..app import DayArg, PlanDirOption, WeekArg, app, get_store, load_plan, require_session


@app.command()
def plan(
    plan_dir: PlanDirOption = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", "-w", help="Only show this week"),
    ] = None,
) -> None:
    """
    Show the training plan with dates and status.
    """
    store = get_store(plan_dir)
    settings, sessions = load_plan(store)

    shown = sessions
    title = f"Couch to {settings.goal_distance_km:g}K"
    if week is not None:
        shown = [s for s in sessions if s.week == week]
        title += f" - Week {week}"

    views.print_plan(shown, title=title)

    nxt = next_session(sessions)
    views.console.print()
    if nxt is None:
        views.print_success("Every session is done. Well run!")
    elif nxt.scheduled_date is not None:
        views.console.print(
            f"Next: [bold]{nxt.title}[/bold] on {nxt.scheduled_date.strftime('%a %Y-%m-%d')} - {nxt.description}"
        )
    else:
        views.console.print(f"Next: [bold]{nxt.title}[/bold] (not scheduled) - {nxt.description}")
        views.print_info("Run 'schedule' to assign dates.")


@app.command()
def schedule(plan_dir: PlanDirOption = None) -> None:
    """
    Assign dates to every pending session from the program start date.

    Completed and skipped sessions keep their dates.
    """
    store = get_store(plan_dir)
    settings, sessions = load_plan(store)

    try:
        sessions = schedule_all(sessions, settings)
    except SchedulingError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_sessions(sessions)
    pending = [s for s in sessions if s.is_pending]
    if pending:
        views.print_success(
            f"Scheduled {len(pending)} sessions: "
            f"{pending[0].scheduled_date.isoformat()} to {pending[-1].scheduled_date.isoformat()}."
        )
    else:
        views.print_info("Nothing left to schedule.")


@app.command()
def skip(
    week: WeekArg,
    day: DayArg,
    plan_dir: PlanDirOption = None,
) -> None:
    """
    Skip a session and pull the rest of the plan forward.

    The skipped session is not made up; the remaining sessions move onto
    the next training days.
    """
    store = get_store(plan_dir)
    settings, sessions = load_plan(store)
    target = require_session(sessions, week, day)

    if target.completed:
        views.print_error(f"{target.title} is already completed. Use 'complete --undo' first.")
        raise typer.Exit(1)
    if target.skipped:
        views.print_info(f"{target.title} is already skipped.")
        raise typer.Exit(0)

    try:
        sessions = skip_session(sessions, week, day, settings)
    except SchedulingError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_sessions(sessions)
    views.print_success(f"Skipped {target.title}.")
    nxt = next_session(sessions)
    if nxt is not None and nxt.scheduled_date is not None:
        views.print_info(f"Next up: {nxt.title} on {nxt.scheduled_date.strftime('%a %Y-%m-%d')}.")


@app.command()
def postpone(
    week: WeekArg,
    day: DayArg,
    new_date: Annotated[
        str,
        typer.Option("--date", "-d", help="New date (YYYY-MM-DD)"),
    ],
    plan_dir: PlanDirOption = None,
) -> None:
    """
    Move a session to another date; later sessions follow it.

    A rest day moves the session to the next training day.
    """
    store = get_store(plan_dir)
    settings, sessions = load_plan(store)
    target = require_session(sessions, week, day)

    try:
        when = parse_date(new_date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not target.is_pending:
        views.print_error(f"{target.title} is {'completed' if target.completed else 'skipped'}; only pending sessions can move.")
        raise typer.Exit(1)

    if when < date.today():
        views.print_warning(f"{when.isoformat()} is in the past.")

    try:
        sessions = postpone_session(sessions, week, day, when, settings)
    except SchedulingError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.save_sessions(sessions)
    landed = require_session(sessions, week, day).scheduled_date
    if landed != when:
        views.print_info(f"{when.strftime('%a %Y-%m-%d')} is a rest day.")
    views.print_success(f"{target.title} moved to {landed.strftime('%a %Y-%m-%d')}.")
