"""Unweighted averaging of several price series.

All functions take and return most-recent-first series and never modify
their inputs.
"""

from pricemix.models import CandleRecord


def prepare_prices_list(
    prices_list: list[list[CandleRecord]],
) -> list[list[CandleRecord]]:
    """Align series to a common date window and length.

    Each series is restricted to the dates covered by every series, then all
    are trimmed to the shortest length keeping the most recent records, so
    index ``d`` refers to a comparable day in each.

    Args:
        prices_list: Series to align.

    Returns:
        New aligned series, in input order. All empty if any input is empty.
    """
    if not prices_list:
        return []
    if any(not prices for prices in prices_list):
        return [[] for _ in prices_list]

    window_start = max(prices[-1].date for prices in prices_list)
    window_end = min(prices[0].date for prices in prices_list)

    windowed = [
        [candle for candle in prices if window_start <= candle.date <= window_end]
        for prices in prices_list
    ]
    min_length = min(len(prices) for prices in windowed)

    return [prices[:min_length] for prices in windowed]


def mix_average(prices_list: list[list[CandleRecord]]) -> list[CandleRecord]:
    """Average several series field by field.

    Args:
        prices_list: Series to mix.

    Returns:
        One series whose candles hold the per-index mean of every field,
        dated like the first series. Empty if there is nothing to mix.
    """
    if not prices_list:
        return []

    aligned = prepare_prices_list(prices_list)
    count = len(aligned)
    result = []

    for d in range(len(aligned[0])):
        candles = [prices[d] for prices in aligned]
        result.append(CandleRecord(
            date=aligned[0][d].date,
            open=sum(c.open for c in candles) / count,
            high=sum(c.high for c in candles) / count,
            low=sum(c.low for c in candles) / count,
            close=sum(c.close for c in candles) / count,
            adj_close=sum(c.adj_close for c in candles) / count,
            volume=round(sum(c.volume for c in candles) / count),
        ))

    return result
