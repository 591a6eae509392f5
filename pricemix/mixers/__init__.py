"""Series mixing module."""

from pricemix.mixers.average import mix_average, prepare_prices_list
from pricemix.mixers.weighted import (
    calculate_proportions,
    merge_weighted_prices,
    mix_weighted,
)

__all__ = [
    "calculate_proportions",
    "merge_weighted_prices",
    "mix_average",
    "mix_weighted",
    "prepare_prices_list",
]
