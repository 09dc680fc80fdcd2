"""lootledger week commands - week directory."""

import click
from rich.table import Table

from lootledger.cli.utils import build_context, get_console, handle_errors


@click.group()
def week_group() -> None:
    """Manage raid weeks."""


@week_group.command("start")
@click.pass_context
@handle_errors
def start_week(ctx: click.Context) -> None:
    """Start the next week and make it current."""
    week = build_context(ctx).weeks.start_new_week()
    get_console().print(f"Week [bold]{week.week_number}[/] is now current", highlight=False)


@week_group.command("list")
@click.pass_context
@handle_errors
def list_weeks(ctx: click.Context) -> None:
    """List weeks, newest first."""
    weeks = build_context(ctx).weeks.list_weeks()
    table = Table(title="Weeks")
    table.add_column("Week", justify="right")
    table.add_column("Started")
    table.add_column("Current")
    for week in weeks:
        table.add_row(
            str(week.week_number),
            week.started_at.strftime("%Y-%m-%d %H:%M"),
            "*" if week.is_current else "",
        )
    get_console().print(table)


@week_group.command("current")
@click.argument("week_number", type=int, required=False)
@click.pass_context
@handle_errors
def current_week(ctx: click.Context, week_number: int | None) -> None:
    """Show the current week, or switch to WEEK_NUMBER."""
    weeks = build_context(ctx).weeks
    if week_number is not None:
        week = weeks.set_current_week(week_number)
    else:
        week = weeks.get_current()
    if week is None:
        get_console().print("No current week")
        return
    get_console().print(f"Current week: [bold]{week.week_number}[/]", highlight=False)


@week_group.command("delete")
@click.argument("week_number", type=int)
@click.confirmation_option(prompt="Delete this week and revert all of its loot?")
@click.pass_context
@handle_errors
def delete_week(ctx: click.Context, week_number: int) -> None:
    """Delete WEEK_NUMBER, reverting every assignment made in it."""
    build_context(ctx).weeks.delete_week(week_number)
    get_console().print(f"Deleted week {week_number}", highlight=False)
