"""Cache management commands for PriceMix CLI."""

import click
from rich.console import Console
from rich.table import Table

from pricemix.cli.data import _get_config, _get_data_store

console = Console()


@click.group()
def cache() -> None:
    """Inspect and clear the local price cache.

    \b
    Examples:
      pricemix cache list
      pricemix cache clear SPY
    """
    pass


@cache.command("list")
@click.pass_context
def list_cache(ctx: click.Context) -> None:
    """List cached symbols."""
    config = _get_config(ctx)
    store = _get_data_store(config)
    entries = store.list_symbols()

    if not entries:
        console.print("[yellow]Cache is empty[/yellow]")
        return

    table = Table(title="Cached Symbols", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Candles", justify="right")
    table.add_column("Updated", style="dim")

    for symbol, count, updated_at in entries:
        table.add_row(symbol, f"{count:,}", updated_at.strftime("%Y-%m-%d %H:%M"))

    console.print(table)


@cache.command("clear")
@click.argument("symbol")
@click.pass_context
def clear_cache(ctx: click.Context, symbol: str) -> None:
    """Remove SYMBOL from the cache."""
    config = _get_config(ctx)
    store = _get_data_store(config)
    symbol = symbol.upper()

    if store.delete_daily_data(symbol):
        console.print(f"[green]✓[/green] Removed {symbol} from cache")
    else:
        console.print(f"[yellow]{symbol} is not cached[/yellow]")
