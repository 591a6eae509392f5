"""CLI commands for PriceMix.

This package provides the command-line interface for PriceMix,
including data retrieval, weight inspection and cache management.
"""

from pricemix.cli.main import cli, main

__all__ = ["cli", "main"]
