"""lootledger import / eligibility commands."""

import click
from rich.table import Table

from lootledger.cli.utils import build_context, get_console, handle_errors
from lootledger.gear.models import FloorNumber, SpecType

_TRACK_SPECS = [SpecType.MAIN_SPEC.value, SpecType.OFF_SPEC.value]


@click.command()
@click.argument("member_id")
@click.argument("link")
@click.option(
    "--spec",
    "spec",
    type=click.Choice(_TRACK_SPECS, case_sensitive=False),
    default=SpecType.MAIN_SPEC.value,
    show_default=True,
)
@click.pass_context
@handle_errors
def import_command(ctx: click.Context, member_id: str, link: str, spec: str) -> None:
    """Import the BiS list at LINK for MEMBER_ID."""
    context = build_context(ctx)
    member = context.gear.import_gear(member_id, link, SpecType.parse(spec))
    track = member.track(SpecType.parse(spec))

    table = Table(title=f"{member.name} - {spec}")
    table.add_column("Slot")
    table.add_column("Item")
    table.add_column("Type")
    table.add_column("Acquired")
    table.add_column("Upgraded")
    for item in track.ordered_items():
        table.add_row(
            item.slot.value,
            item.item_name,
            item.item_type.value,
            "yes" if item.is_acquired else "",
            "yes" if item.upgrade_material_acquired else "",
        )
    get_console().print(table)


@click.command()
@click.argument("floor", type=click.IntRange(1, 4))
@click.option("--week", "week_number", type=int, default=None, help="Week (default: current)")
@click.pass_context
@handle_errors
def eligibility_command(ctx: click.Context, floor: int, week_number: int | None) -> None:
    """Show who needs each drop of FLOOR."""
    context = build_context(ctx)
    loot = context.distribution.get_eligibility(FloorNumber(floor), week_number)

    table = Table(title=f"Floor {floor}")
    table.add_column("Drop", style="bold")
    table.add_column("Eligible")
    table.add_column("Assigned")
    for entry in loot:
        eligible = ", ".join(
            f"{need.member_name} ({need.spec_type.value}"
            + (f" x{need.needed_count})" if need.needed_count > 1 else ")")
            for need in entry.eligible
        )
        table.add_row(entry.target.key, eligible or "-", entry.assigned_member_id or "")
    get_console().print(table)


@click.command()
@click.argument("week_number", type=int, required=False)
@click.pass_context
@handle_errors
def history_command(ctx: click.Context, week_number: int | None) -> None:
    """Show live loot entries, for WEEK_NUMBER or every week."""
    context = build_context(ctx)
    if week_number is None:
        weeks = context.history.all_history()
    else:
        single = context.history.week_history(week_number)
        weeks = [single] if single is not None else []
    if not weeks:
        get_console().print("No loot recorded")
        return

    for week in weeks:
        table = Table(title=f"Week {week.week_number}" + (" (current)" if week.is_current else ""))
        table.add_column("Floor")
        table.add_column("Member")
        table.add_column("Drop")
        table.add_column("Spec")
        table.add_column("Source")
        for entry in week.entries:
            assignment = entry.assignment
            kind = assignment.item_kind
            if assignment.is_manual_edit:
                source = f"manual ({kind.value})" if kind is not None else "manual"
            else:
                source = "ledger"
            table.add_row(
                "-" if assignment.is_manual_edit else str(assignment.floor_number),
                entry.member_name,
                assignment.target_key or "",
                assignment.spec_type,
                source,
            )
        get_console().print(table)
