"""Base remote source interface for PriceMix."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from pricemix.models import CandleRecord


class BaseSource(ABC):
    """Abstract base class for remote daily price sources.

    Implementations only fetch; caching and refresh decisions belong to
    :class:`~pricemix.core.service.PriceService`.
    """

    @abstractmethod
    def fetch(
        self,
        symbol: str,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Get daily candles for a symbol.

        Args:
            symbol: Ticker symbol.
            start_date: First date to fetch. Full history when None.
            adjust: Whether to return adjusted prices.

        Returns:
            Candles, most-recent-first. Empty if the source has no data.

        Raises:
            ValueError: If the request fails.
        """
        pass
