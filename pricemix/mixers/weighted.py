"""Weighted, scale-normalized averaging of several price series.

Series are first brought to a comparable nominal price level: each one is
divided by its proportion, the ratio of its latest open to the highest open
seen in any series. Without this a high-priced asset would dominate the mix
through its units alone.
"""

import logging

from pricemix.mixers.average import prepare_prices_list
from pricemix.models import CandleRecord, WeightedSeries

logger = logging.getLogger(__name__)


def calculate_proportions(prices_list: list[list[CandleRecord]]) -> list[float]:
    """Scale factor per series: latest open over the maximum open overall.

    Args:
        prices_list: Non-empty aligned series.

    Returns:
        One factor in ``(0, 1]`` per series.
    """
    max_open = max(candle.open for prices in prices_list for candle in prices)
    return [prices[0].open / max_open for prices in prices_list]


def merge_weighted_prices(
    weighted: list[WeightedSeries],
    total_weight: float,
    proportions: list[float],
    index_by_series: bool = False,
) -> list[CandleRecord]:
    """Merge aligned series using weights and proportions.

    With ``index_by_series`` off, the proportion used at time index ``d`` is
    picked by a counter that advances once per index and wraps at the number
    of series, and is applied to every series at that index. Turning it on
    uses each series' own proportion instead.

    Args:
        weighted: Aligned series with their weights.
        total_weight: Sum of all weights.
        proportions: Output of :func:`calculate_proportions`.
        index_by_series: Select the proportion by series instead of by counter.

    Returns:
        Merged series, dated like the first series.
    """
    number_of_time_points = len(weighted[0].series)
    result = []
    asset_index = 0

    for d in range(number_of_time_points):
        current_date = weighted[0].series[d].date
        sum_open = sum_close = sum_adj_close = sum_high = sum_low = sum_volume = 0.0

        for series_index, (prices, weight) in enumerate(weighted):
            # Shorter series repeat their last candle
            candle = prices[min(d, len(prices) - 1)]
            adjusted_weight = weight / total_weight
            proportion = proportions[series_index if index_by_series else asset_index]

            sum_open += (candle.open / proportion) * adjusted_weight
            sum_close += (candle.close / proportion) * adjusted_weight
            sum_adj_close += (candle.adj_close / proportion) * adjusted_weight
            sum_high += (candle.high / proportion) * adjusted_weight
            sum_low += (candle.low / proportion) * adjusted_weight
            sum_volume += (candle.volume / proportion) * adjusted_weight

        result.append(CandleRecord(
            date=current_date,
            open=sum_open,
            high=sum_high,
            low=sum_low,
            close=sum_close,
            adj_close=sum_adj_close,
            volume=round(sum_volume),
        ))

        asset_index = (asset_index + 1) % len(weighted)

    return result


def mix_weighted(
    weighted: list[WeightedSeries], index_by_series: bool = False
) -> list[CandleRecord]:
    """Mix series according to their weights.

    Args:
        weighted: Series paired with positive weights.
        index_by_series: See :func:`merge_weighted_prices`.

    Returns:
        Merged series, or an empty list when there is nothing to mix.
    """
    if not weighted:
        return []

    if any(item.weight <= 0 for item in weighted):
        logger.warning("Cannot mix series with a weight that is not positive")
        return []

    aligned = prepare_prices_list([item.series for item in weighted])
    if not aligned[0]:
        return []

    if max(candle.open for prices in aligned for candle in prices) <= 0:
        logger.warning("Cannot scale series without a positive open price")
        return []

    proportions = calculate_proportions(aligned)
    if any(proportion <= 0 for proportion in proportions):
        logger.warning("Cannot scale series whose latest open is not positive")
        return []

    total_weight = sum(item.weight for item in weighted)

    aligned_weighted = [
        WeightedSeries(series=prices, weight=item.weight)
        for prices, item in zip(aligned, weighted)
    ]
    return merge_weighted_prices(
        aligned_weighted, total_weight, proportions, index_by_series=index_by_series
    )
