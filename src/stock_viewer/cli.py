"""Click-based CLI for stock-viewer.

Thin wrapper around library modules. Every command delegates to the
catalog, market, or api packages.
"""

from __future__ import annotations

import asyncio
import json
import os

import click
from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run an async coroutine from synchronous Click code."""
    return asyncio.run(coro)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from stock_viewer.core import configure_logging, load_config

        config = load_config(config_path=ctx.obj.get("config_path"))
        configure_logging("DEBUG" if ctx.obj.get("verbose") else config.logging.level)
        ctx.obj["config"] = config
    return ctx.obj["config"]


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="STOCK_VIEWER_CONFIG",
    default=None,
    help="Path to stock-viewer.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.version_option(package_name="stock-viewer")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Stock Viewer: Alpha Vantage series proxy and ticker search."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["console"] = console


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("query")
@click.option("--limit", "-n", type=int, default=None, help="Maximum results (default from config).")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.pass_context
def search(ctx: click.Context, query: str, limit: int | None, output_format: str) -> None:
    """Search the ticker catalog by symbol or company name."""
    from stock_viewer.catalog import load_catalog
    from stock_viewer.core import StockViewerError

    try:
        config = _load_config(ctx)
        catalog = load_catalog(config.catalog)
    except StockViewerError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise SystemExit(1)

    results = catalog.search(query, limit=limit if limit is not None else config.catalog.default_limit)

    if output_format == "json":
        click.echo(json.dumps([r.model_dump() for r in results], indent=2))
        return

    table = Table(title=f"Matches for '{query}'")
    table.add_column("Symbol", style="bold")
    table.add_column("Name")
    for r in results:
        table.add_row(r.symbol, r.name)
    console.print(table)


# ---------------------------------------------------------------------------
# get-data
# ---------------------------------------------------------------------------


@cli.command("get-data")
@click.argument("symbol")
@click.option("--start", "-s", required=True, help="Start date (yyyy-MM-dd).")
@click.option("--end", "-e", required=True, help="End date (yyyy-MM-dd).")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.pass_context
def get_data(ctx: click.Context, symbol: str, start: str, end: str, output_format: str) -> None:
    """Fetch a date-filtered OHLCV series for SYMBOL."""
    from stock_viewer.core import StockViewerError
    from stock_viewer.market import AlphaVantageClient, MarketDataService

    async def _run():
        config = _load_config(ctx)
        async with AlphaVantageClient(config.alpha_vantage) as client:
            return await MarketDataService(client).get_data(symbol, start, end)

    try:
        series = _run_async(_run())
    except StockViewerError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise SystemExit(1)

    if output_format == "json":
        from stock_viewer.api.schemas import SeriesResponse

        click.echo(SeriesResponse.from_series(series).model_dump_json(indent=2))
        return

    table = Table(title=f"{symbol.upper()} {start} → {end}")
    table.add_column("Date", style="bold")
    for col in ("Open", "High", "Low", "Close", "Volume"):
        table.add_column(col, justify="right")
    for p in series:
        table.add_row(str(p.date), str(p.open), str(p.high), str(p.low), str(p.close), str(p.volume))
    console.print(table)


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (default from config).")
@click.option("--port", "-p", type=int, default=None, help="Port number (default from config).")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    import uvicorn

    from stock_viewer.core import StockViewerError

    try:
        config = _load_config(ctx)
    except StockViewerError as e:
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise SystemExit(1)

    host = host or config.api.host
    port = port or config.api.port

    console.print(f"Starting stock-viewer API on [bold]{host}:{port}[/bold]")
    console.print(f"API docs: http://{host}:{port}/docs")

    # The app factory reloads config in the server process
    if ctx.obj.get("config_path"):
        os.environ["STOCK_VIEWER_CONFIG"] = ctx.obj["config_path"]

    uvicorn.run(
        "stock_viewer.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
