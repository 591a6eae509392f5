"""Splicing freshly fetched candles onto a cached series."""

from pricemix.models import CandleRecord


def join_prices(
    prices: list[CandleRecord], next_prices: list[CandleRecord]
) -> list[CandleRecord]:
    """Join a cached series with a newly fetched tail.

    Both inputs are most-recent-first. On a date present in both, the new
    record wins since the cached one may hold an intraday quote.

    Args:
        prices: Existing series.
        next_prices: Newly fetched series.

    Returns:
        New de-duplicated series, most-recent-first.
    """
    by_date = {candle.date: candle for candle in prices}
    by_date.update({candle.date: candle for candle in next_prices})

    return [by_date[day] for day in sorted(by_date, reverse=True)]
