"""Cache, refresh and symbol handling for PriceMix."""

from pricemix.core.freshness import is_up_to_date, last_expected_close
from pricemix.core.join import join_prices
from pricemix.core.service import PriceService
from pricemix.core.symbols import parse_weighted_symbols, split_symbols

__all__ = [
    "PriceService",
    "is_up_to_date",
    "join_prices",
    "last_expected_close",
    "parse_weighted_symbols",
    "split_symbols",
]
