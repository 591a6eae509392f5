"""Price retrieval service.

Decides per symbol between serving the local cache, refreshing its tail from
the remote source, or fetching the whole history again. Remote failures
degrade to an empty series; cache write-back runs in the background and its
outcome is never reported to the caller.
"""

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import date
from typing import Any, Callable, Optional

from pricemix.config import SymbolConfig
from pricemix.core.freshness import is_up_to_date
from pricemix.core.join import join_prices
from pricemix.core.symbols import (
    is_list,
    is_weighted,
    parse_weighted_symbols,
    split_symbols,
)
from pricemix.db.store import DataStore
from pricemix.mixers import mix_average, mix_weighted
from pricemix.models import CandleRecord, WeightedSeries, to_cache_records
from pricemix.sources.base import BaseSource

logger = logging.getLogger(__name__)

FreshnessPolicy = Callable[[list[CandleRecord], Optional[date]], bool]

# Position of the refresh checkpoint. The newest one or two cached candles
# may hold an intraday quote instead of a final close.
CHECKPOINT_INDEX = 2


class PriceService:
    """Serves daily price series from the cache and a remote source.

    Symbols of a multi-symbol request are resolved one after the other.
    """

    def __init__(
        self,
        store: DataStore,
        source: BaseSource,
        executor: Optional[Executor] = None,
        freshness: FreshnessPolicy = is_up_to_date,
        symbol_config: Optional[SymbolConfig] = None,
    ):
        """Initialize the service.

        Args:
            store: Cache store.
            source: Remote price source.
            executor: Executor for cache write-back. A single worker thread
                owned by the service when None.
            freshness: Policy deciding whether a cached series is current.
            symbol_config: Separators for symbol expressions.
        """
        self._store = store
        self._source = source
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="pricemix-cache"
        )
        self._freshness = freshness
        self._symbol_config = symbol_config or SymbolConfig()

    def close(self) -> None:
        """Wait for pending cache writes and release the owned executor."""
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "PriceService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ==================== Public entry points ====================

    def get_ticker_data(
        self,
        symbol: str,
        use_cache: bool = True,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Get the candles for a symbol expression.

        Args:
            symbol: Bare ticker, ticker list or weighted ticker list.
            use_cache: Whether to read and write the local cache.
            start_date: Only return candles after this date.
            adjust: Whether to return adjusted prices.

        Returns:
            Candles, most-recent-first. Empty when no data could be obtained.
        """
        if is_weighted(symbol, self._symbol_config):
            return self.get_weighted_ticker_data(
                symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
            )
        if is_list(symbol, self._symbol_config):
            return self.get_ticker_data_list(
                split_symbols(symbol, self._symbol_config),
                use_cache=use_cache,
                start_date=start_date,
                adjust=adjust,
            )

        return self._direct_get_ticker_data(
            symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
        )

    def get_weighted_ticker_data(
        self,
        weighted_symbols: str,
        use_cache: bool = True,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Fetch every ticker of a weighted expression and mix them."""
        weights = parse_weighted_symbols(weighted_symbols, self._symbol_config)
        weighted_prices = []

        for symbol, weight in weights.items():
            prices = self._direct_get_ticker_data(
                symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
            )
            weighted_prices.append(WeightedSeries(series=prices, weight=weight))

        return mix_weighted(weighted_prices)

    def get_ticker_data_list(
        self,
        symbols: list[str],
        use_cache: bool = True,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Fetch several tickers and average them."""
        prices_list = [
            self._direct_get_ticker_data(
                symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
            )
            for symbol in symbols
        ]
        return mix_average(prices_list)

    # ==================== Fetch / refresh ====================

    def get_all_data(
        self,
        symbol: str,
        use_cache: bool = True,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Fetch the full history of a symbol from the remote source.

        Args:
            symbol: Ticker symbol.
            use_cache: Whether to write the result to the cache.
            start_date: Drop candles before this date from the result.
            adjust: Whether to return adjusted prices.

        Returns:
            Candles, most-recent-first, or an empty list if the fetch failed.
        """
        try:
            prices = self._source.fetch(symbol, adjust=adjust)
        except Exception as e:
            logger.warning(f"Failed to fetch {symbol}: {e}")
            return []

        if not prices:
            return []

        if use_cache:
            self._save_in_background(symbol, prices)

        if start_date is not None:
            prices = [candle for candle in prices if candle.date >= start_date]

        return prices

    def refresh_data(
        self,
        prices: list[CandleRecord],
        symbol: str,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Fetch the recent tail of a cached series and join it on.

        Falls back to :meth:`get_all_data` when the series is too short or
        the tail fetch brings nothing.

        Args:
            prices: Whole cached series, most-recent-first.
            symbol: Ticker symbol.
            start_date: Only return candles after this date.
            adjust: Whether to return adjusted prices.

        Returns:
            Refreshed series, most-recent-first.
        """
        if len(prices) > 1:
            checkpoint = prices[min(CHECKPOINT_INDEX, len(prices) - 1)].date

            try:
                next_prices = self._source.fetch(
                    symbol, start_date=checkpoint, adjust=adjust
                )
            except Exception as e:
                logger.warning(f"Failed to refresh {symbol} from {checkpoint}: {e}")
                next_prices = []

            if next_prices:
                joined = join_prices(prices, next_prices)
                self._save_in_background(symbol, joined)
                if start_date is not None:
                    joined = [candle for candle in joined if candle.date > start_date]
                return joined

        logger.debug(f"Refresh not possible for {symbol}, fetching full history")
        return self.get_all_data(symbol, start_date=start_date, adjust=adjust)

    def _direct_get_ticker_data(
        self,
        symbol: str,
        use_cache: bool,
        start_date: Optional[date] = None,
        adjust: bool = False,
    ) -> list[CandleRecord]:
        """Resolve a single ticker through the cache, refresh or full fetch."""
        cached = self._read_cache(symbol, adjust) if use_cache else []
        prices = [
            candle for candle in cached
            if start_date is None or candle.date > start_date
        ]

        if not prices:
            return self.get_all_data(
                symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
            )

        if len(prices) < 2:
            logger.debug(f"Cache for {symbol} too short to refresh")
            return self.get_all_data(
                symbol, use_cache=use_cache, start_date=start_date, adjust=adjust
            )

        if self._freshness(prices, start_date):
            logger.debug(f"Serving {symbol} from cache")
            return prices

        # Join against the whole cache; only the returned series is filtered
        return self.refresh_data(cached, symbol, start_date=start_date, adjust=adjust)

    # ==================== Cache access ====================

    def _read_cache(self, symbol: str, adjust: bool) -> list[CandleRecord]:
        """Read a cached series, treating an unreadable entry as a miss."""
        try:
            raw_prices = self._store.get_all_daily_data(symbol)
            return [
                CandleRecord.from_cache_record(raw, adjust=adjust)
                for raw in raw_prices or []
            ]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache entry for {symbol}: {e}")
            return []

    def _save_in_background(self, symbol: str, prices: list[CandleRecord]) -> None:
        """Queue a cache write without waiting for it.

        The returned future is dropped, so a failing write is never seen by
        the request that triggered it.
        """
        records = to_cache_records(prices)
        try:
            self._executor.submit(self._store.save_daily_data, symbol, records)
        except RuntimeError:
            # Executor already shut down
            pass
