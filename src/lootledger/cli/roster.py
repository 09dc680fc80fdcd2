"""lootledger member commands - manage the roster."""

import click
from rich.table import Table

from lootledger.cli.utils import build_context, get_console, handle_errors
from lootledger.gear.models import MemberRole


@click.group()
def member_group() -> None:
    """Manage roster members."""


@member_group.command("add")
@click.argument("name")
@click.option(
    "--role",
    type=click.Choice([r.value for r in MemberRole], case_sensitive=False),
    default=MemberRole.DPS.value,
    show_default=True,
)
@click.pass_context
@handle_errors
def add_member(ctx: click.Context, name: str, role: str) -> None:
    """Add a member called NAME."""
    context = build_context(ctx)
    matched = next(r for r in MemberRole if r.value.lower() == role.lower())
    member = context.roster.create_member(name, matched)
    get_console().print(f"Added [bold]{member.name}[/] ({member.id})", highlight=False)


@member_group.command("list")
@click.pass_context
@handle_errors
def list_members(ctx: click.Context) -> None:
    """List roster members."""
    context = build_context(ctx)
    members = context.roster.list_members()

    table = Table(title="Roster")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Role")
    table.add_column("Main spec")
    table.add_column("Off spec")
    for member in members:
        table.add_row(
            member.id,
            member.name,
            member.role.value,
            _progress(member.main_spec.items),
            _progress(member.off_spec.items),
        )
    get_console().print(table)


@member_group.command("remove")
@click.argument("member_id")
@click.pass_context
@handle_errors
def remove_member(ctx: click.Context, member_id: str) -> None:
    """Remove member MEMBER_ID."""
    context = build_context(ctx)
    context.roster.delete_member(member_id)
    get_console().print(f"Removed {member_id}", highlight=False)


def _progress(items: list) -> str:
    if not items:
        return "-"
    acquired = sum(1 for item in items if item.is_acquired)
    return f"{acquired}/{len(items)}"
