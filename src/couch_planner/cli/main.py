"""
CLI entry point using Typer.

Provides commands for running-program management:
- init: Create settings and a scheduled plan
- settings / update-settings: Show or change program settings
- plan: Show the plan with dates and status
- schedule: Re-assign dates to all pending sessions
- skip: Skip a session and pull the plan forward
- postpone: Move a session to another date
- complete: Mark a session completed (or undo)
- progress: Overall and weekly progress
"""

import logging
from typing import Annotated

import typer

from . import views
from .app import app
from .commands.planning import plan, schedule
from .commands.sessions import complete, progress  # noqa: F401 (registers commands)
from .commands.settings import show_settings


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging from the planner"),
    ] = False,
) -> None:
    """
    Couch-to-5K running planner. Run without a command for interactive mode.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if ctx.invoked_subcommand is not None:
        return  # a sub-command handles the rest

    # Interactive main menu
    views.console.print()
    views.console.print("[bold cyan]couch-planner[/bold cyan]: couch-to-5K running planner")
    views.console.print()

    menu = {
        "1": ("plan",     "Show training plan"),
        "2": ("progress", "Show progress"),
        "3": ("schedule", "Re-schedule pending sessions"),
        "4": ("settings", "Show settings"),
        "0": ("quit",     "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = menu.get(choice, (None,))[0]
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "plan":
        ctx.invoke(plan)
    elif chosen == "progress":
        ctx.invoke(progress)
    elif chosen == "schedule":
        ctx.invoke(schedule)
    elif chosen == "settings":
        ctx.invoke(show_settings)


if __name__ == "__main__":
    app()
