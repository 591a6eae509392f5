"""Remote price sources for PriceMix."""

from pricemix.sources.base import BaseSource
from pricemix.sources.yahoo import YahooSource

__all__ = [
    "BaseSource",
    "YahooSource",
]
