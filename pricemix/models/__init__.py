"""Data models for PriceMix."""

from pricemix.models.candle import CandleRecord, to_cache_records
from pricemix.models.weights import WeightedSeries

__all__ = [
    "CandleRecord",
    "WeightedSeries",
    "to_cache_records",
]
