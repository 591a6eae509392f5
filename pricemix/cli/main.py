"""Main CLI entry point for PriceMix.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules (and yfinance/pandas behind them) are only imported
    when a command is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = getattr(module, cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "data": "pricemix.cli.data",
    "weights": "pricemix.cli.data",
    "cache": "pricemix.cli.cache",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c", "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to config.toml (default: ~/.config/pricemix/config.toml)",
)
@click.version_option(package_name="pricemix")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]) -> None:
    """PriceMix - cached daily prices and weighted ticker mixes.

    \b
    Quick Start:
      pricemix data SPY              # Daily candles for one ticker
      pricemix data SPY,QQQ          # Average of two tickers
      pricemix data SPY:3,TLT:1      # Weighted, scale-normalized mix
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
