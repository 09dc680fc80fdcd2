"""lootledger serve command - run the HTTP API."""

import click
import uvicorn

from lootledger.cli.utils import build_context, get_console
from lootledger.daemon.app import create_app


@click.command()
@click.option("--host", default=None, help="Bind address (default: from config)")
@click.option("--port", type=int, default=None, help="Port (default: from config)")
@click.pass_context
def serve_command(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Serve the LootLedger HTTP API."""
    context = build_context(ctx)
    host = host or context.config.server.host
    port = port if port is not None else context.config.server.port

    console = get_console()
    console.print(f"[bold cyan]LootLedger[/] serving on http://{host}:{port}", highlight=False)
    console.print(f"[dim]data dir: {context.data_dir}[/]", highlight=False)

    uvicorn.run(
        create_app(context),
        host=host,
        port=port,
        log_config=None,
        access_log=False,
    )
