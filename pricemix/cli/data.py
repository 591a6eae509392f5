"""Data commands for PriceMix CLI.

Handles fetching and displaying daily candles for a ticker, a ticker list
or a weighted ticker mix, and inspecting how an expression is weighted.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pricemix.config import PriceMixConfig, load_config

console = Console()

# Rows shown when --rows is not given
DEFAULT_ROWS = 20


def _get_config(ctx: click.Context) -> PriceMixConfig:
    """Load configuration, exiting with an error panel if it is invalid."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        return load_config(config_path)
    except ValueError as e:
        console.print(Panel(
            f"[red]{e}[/red]",
            title="[bold red]Configuration Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)


def _get_data_store(config: PriceMixConfig):
    """Get the data store instance."""
    from pricemix.db.store import DataStore

    return DataStore(config.cache.db_path)


def _get_source():
    """Get the remote price source."""
    from pricemix.sources.yahoo import YahooSource

    return YahooSource()


def _parse_date(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[date]:
    """Click callback turning YYYY-MM-DD into a date."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


@click.command()
@click.argument("expression")
@click.option(
    "--cache/--no-cache",
    "use_cache",
    default=None,
    help="Read and write the local cache (default: from config)",
)
@click.option(
    "-a", "--adjust",
    is_flag=True,
    default=False,
    help="Show split/dividend adjusted prices",
)
@click.option(
    "-s", "--start",
    "start_date",
    callback=_parse_date,
    default=None,
    help="Only show candles after this date (YYYY-MM-DD)",
)
@click.option(
    "-n", "--rows",
    default=DEFAULT_ROWS,
    type=click.IntRange(min=1),
    help=f"Number of most recent candles to show (default: {DEFAULT_ROWS})",
)
@click.pass_context
def data(
    ctx: click.Context,
    expression: str,
    use_cache: Optional[bool],
    adjust: bool,
    start_date: Optional[date],
    rows: int,
) -> None:
    """Fetch and display daily candles for a symbol expression.

    EXPRESSION is a ticker (SPY), a ticker list (SPY,QQQ) averaged
    together, or a weighted list (SPY:3,TLT:1) mixed by weight.

    \b
    Examples:
      pricemix data SPY
      pricemix data SPY,QQQ --start 2024-01-01
      pricemix data SPY:3,TLT:1 --adjust --rows 50
    """
    from pricemix.core.service import PriceService

    config = _get_config(ctx)
    if use_cache is None:
        use_cache = config.cache.enabled

    expression = expression.upper()
    console.print(f"[dim]Fetching daily data for {expression}...[/dim]")

    with PriceService(
        _get_data_store(config),
        _get_source(),
        symbol_config=config.symbols,
    ) as service:
        candles = service.get_ticker_data(
            expression,
            use_cache=use_cache,
            start_date=start_date,
            adjust=adjust,
        )

    if not candles:
        console.print(Panel(
            f"[yellow]No data available for {expression}[/yellow]\n\n"
            "[dim]The symbol may be invalid, the remote source unreachable, "
            "or no trading data exists for the requested period.[/dim]",
            title="[bold yellow]No Data[/bold yellow]",
            border_style="yellow",
        ))
        return

    table = Table(
        title=f"{expression} - 1day ({len(candles)} candles)",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Date", style="dim")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right", style="green")
    table.add_column("Low", justify="right", style="red")
    table.add_column("Close", justify="right")
    table.add_column("Adj Close", justify="right")
    table.add_column("Volume", justify="right", style="dim")
    table.add_column("Change", justify="right")

    display_candles = candles[:rows]

    for i, candle in enumerate(display_candles):
        # Series is most-recent-first, the previous session sits at i + 1
        if i + 1 < len(candles):
            prev_close = candles[i + 1].close
            change = candle.close - prev_close
            change_pct = (change / prev_close * 100) if prev_close > 0 else 0
            change_str = f"{change:+.2f} ({change_pct:+.2f}%)"
            change_style = "green" if change >= 0 else "red"
        else:
            change_str = "-"
            change_style = "dim"

        table.add_row(
            candle.date.isoformat(),
            f"{candle.open:.2f}",
            f"{candle.high:.2f}",
            f"{candle.low:.2f}",
            f"{candle.close:.2f}",
            f"{candle.adj_close:.2f}",
            f"{candle.volume:,}",
            f"[{change_style}]{change_str}[/{change_style}]",
        )

    console.print(table)

    if len(candles) > rows:
        console.print(f"[dim]Showing last {rows} of {len(candles)} candles[/dim]")


@click.command()
@click.argument("expression")
@click.pass_context
def weights(ctx: click.Context, expression: str) -> None:
    """Show how a symbol expression is weighted.

    Entries without a valid weight get an equal share of the whole
    expression.

    \b
    Examples:
      pricemix weights SPY,QQQ
      pricemix weights SPY:3,TLT:1
    """
    from pricemix.core.symbols import parse_weighted_symbols

    config = _get_config(ctx)
    parsed = parse_weighted_symbols(expression.upper(), config.symbols)
    total = sum(parsed.values())

    table = Table(title="Weights", show_header=True, header_style="bold cyan")
    table.add_column("Symbol", style="bold")
    table.add_column("Weight", justify="right")
    table.add_column("Share", justify="right")

    for symbol, weight in parsed.items():
        share = (weight / total * 100) if total else 0
        table.add_row(symbol, f"{weight:g}", f"{share:.1f}%")

    console.print(table)
