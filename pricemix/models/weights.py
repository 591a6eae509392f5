"""Weighted series pairing."""

from typing import NamedTuple

from pricemix.models.candle import CandleRecord


class WeightedSeries(NamedTuple):
    """A resolved price series and the weight it carries in a mix."""

    series: list[CandleRecord]
    weight: float
