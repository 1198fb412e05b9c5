"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, settings and progress.
"""

from datetime import date

from rich.console import Console
from rich.table import Table

from ..core.models import ProgramSettings, ProgressSummary, Session, SessionStatus
from ..core.progress import session_status
from ..io.serializers import format_rest_days

console = Console()

STATUS_STYLES: dict[SessionStatus, str] = {
    "completed": "green",
    "skipped": "dim",
    "scheduled": "cyan",
    "missed": "red",
    "unscheduled": "yellow",
}


def _format_day(d: date | None) -> str:
    """Short date with weekday, e.g. 'Mon 2024-01-01'."""
    if d is None:
        return "-"
    return d.strftime("%a %Y-%m-%d")


def format_plan_table(
    sessions: list[Session],
    today: date | None = None,
    title: str = "Training Plan",
) -> Table:
    """
    Create a Rich table displaying the session plan.

    Args:
        sessions: Sessions to display
        today: Reference day for status (default: today)
        title: Table title

    Returns:
        Rich Table object
    """
    today = today or date.today()
    table = Table(title=title)

    table.add_column("Wk", justify="right", style="dim", width=3)
    table.add_column("Day", justify="right", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Status")
    table.add_column("Workout")
    table.add_column("Est.(km)", justify="right")
    table.add_column("Done", style="green")

    for session in sessions:
        status = session_status(session, today)
        style = STATUS_STYLES[status]
        table.add_row(
            str(session.week),
            str(session.day),
            _format_day(session.scheduled_date),
            f"[{style}]{status}[/{style}]",
            session.description,
            f"{session.estimated_distance_km:.1f}" if session.estimated_distance_km is not None else "-",
            _format_day(session.completed_date) if session.completed_date else "",
        )

    return table


def print_plan(sessions: list[Session], today: date | None = None, title: str = "Training Plan") -> None:
    """
    Print the session plan to console.

    Args:
        sessions: Sessions to display
        today: Reference day for status
        title: Table title
    """
    if not sessions:
        console.print("[yellow]No sessions in the plan.[/yellow]")
        return

    console.print(format_plan_table(sessions, today, title))


def format_settings_display(settings: ProgramSettings) -> str:
    """
    Format program settings as text block.

    Args:
        settings: ProgramSettings to display

    Returns:
        Formatted string
    """
    lines = [
        "Program settings",
        f"- Start date:      {_format_day(settings.start_date)}",
        f"- Distance:        {settings.starting_distance_km:.1f} km → {settings.goal_distance_km:.1f} km",
        f"- Program:         {settings.program_weeks} weeks × {settings.training_days_per_week} days",
        f"- Rest days:       {format_rest_days(settings.rest_days)}",
        f"- Walking speed:   {settings.walking_speed_kmh:.1f} km/h",
        f"- Running speed:   {settings.running_speed_kmh:.1f} km/h",
    ]
    return "\n".join(lines)


def print_settings(settings: ProgramSettings) -> None:
    """Print program settings to console."""
    console.print(format_settings_display(settings))


def format_week_table(summary: ProgressSummary) -> Table:
    """
    Create a Rich table with the per-week breakdown.

    Args:
        summary: Progress summary

    Returns:
        Rich Table object
    """
    table = Table(title="Weekly Breakdown")

    table.add_column("Week", justify="right")
    table.add_column("Done", justify="right", style="green")
    table.add_column("Skipped", justify="right", style="dim")
    table.add_column("Total", justify="right")
    table.add_column("%", justify="right", style="bold")

    for w in summary.weeks:
        marker = " ←" if w.week == summary.current_week else ""
        table.add_row(
            f"{w.week}{marker}",
            str(w.completed),
            str(w.skipped),
            str(w.total),
            f"{w.percentage:.0f}",
        )

    return table


def print_progress(summary: ProgressSummary, goal_distance_km: float) -> None:
    """
    Print the progress summary to console.

    Args:
        summary: Progress summary
        goal_distance_km: Program goal, shown in the header
    """
    console.print(f"[bold]Couch to {goal_distance_km:g}K[/bold]")
    console.print(
        f"Overall progress: [bold]{summary.percentage:.0f}%[/bold] "
        f"({summary.completed}/{summary.total} workouts, "
        f"{summary.skipped} skipped, {summary.remaining} to go)"
    )
    console.print(f"Current week: {summary.current_week}")
    console.print()
    console.print(format_week_table(summary))

    if summary.recent:
        console.print()
        console.print("[bold]Recent activity[/bold]")
        for s in summary.recent:
            when = _format_day(s.completed_date) if s.completed_date else "recently"
            console.print(f"  {s.title} - completed {when}")
            console.print(f"    [dim]{s.description}[/dim]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
