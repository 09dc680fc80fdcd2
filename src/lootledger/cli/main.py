"""LootLedger CLI - lootledger command."""

from pathlib import Path

import click

from lootledger.cli.loot import eligibility_command, history_command, import_command
from lootledger.cli.roster import member_group
from lootledger.cli.serve import serve_command
from lootledger.cli.week import week_group
from lootledger.config.constants import DEFAULT_DATA_DIR


@click.group()
@click.version_option(version="0.1.0", prog_name="lootledger")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    show_default=True,
    envvar="LOOTLEDGER_DATA_DIR",
    help="Directory holding config.yaml and the database",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, verbose: bool) -> None:
    """LootLedger - raid loot distribution and BiS tracking."""
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir.resolve()
    ctx.obj["verbose"] = verbose


cli.add_command(serve_command, name="serve")
cli.add_command(member_group, name="member")
cli.add_command(week_group, name="week")
cli.add_command(import_command, name="import")
cli.add_command(eligibility_command, name="eligibility")
cli.add_command(history_command, name="history")


if __name__ == "__main__":
    cli()
