"""Cache freshness policy."""

from datetime import date, timedelta
from typing import Optional

from pricemix.models import CandleRecord

# Saturday and Sunday
WEEKEND_DAYS = (5, 6)


def last_expected_close(today: Optional[date] = None) -> date:
    """Most recent weekday strictly before ``today``.

    Today's session is excluded because its close is not final yet.
    """
    day = (today or date.today()) - timedelta(days=1)
    while day.weekday() in WEEKEND_DAYS:
        day -= timedelta(days=1)
    return day


def is_up_to_date(
    prices: list[CandleRecord],
    start_date: Optional[date] = None,
    today: Optional[date] = None,
) -> bool:
    """Check whether a cached series can be served without a refresh.

    Args:
        prices: Cached series, most-recent-first.
        start_date: Requested start date, if any.
        today: Reference day, defaults to the current date.

    Returns:
        True if the newest cached candle reaches the last expected close
        (or the start date, when that is later).
    """
    if not prices:
        return False

    reference = last_expected_close(today)
    if start_date is not None and start_date > reference:
        reference = start_date

    return prices[0].date >= reference
