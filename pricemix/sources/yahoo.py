"""Yahoo Finance source implementation."""

import logging
from datetime import date
from typing import Optional

import pandas as pd
import yfinance as yf

from pricemix.models import CandleRecord
from pricemix.sources.base import BaseSource

logger = logging.getLogger(__name__)


class YahooSource(BaseSource):
    """Fetches daily candles from Yahoo Finance via the yfinance library."""

    INTERVAL = "1d"

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
            Candles, most-recent-first.
        """
        try:
            ticker = yf.Ticker(symbol)
            if start_date is not None:
                history = ticker.history(
                    start=start_date.isoformat(),
                    interval=self.INTERVAL,
                    auto_adjust=False,
                    actions=False,
                )
            else:
                history = ticker.history(
                    period="max",
                    interval=self.INTERVAL,
                    auto_adjust=False,
                    actions=False,
                )
        except Exception as e:
            raise ValueError(f"Failed to get historical data for {symbol}: {e}")

        if history is None or history.empty:
            logger.info(f"No data returned for {symbol}")
            return []

        try:
            candles = self._to_candles(history)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Failed to parse historical data for {symbol}: {e}")

        if adjust:
            candles = [candle.adjusted() for candle in candles]

        return candles

    @staticmethod
    def _to_candles(history: pd.DataFrame) -> list[CandleRecord]:
        """Convert a yfinance history frame into most-recent-first candles."""
        history = history.dropna(subset=["Open", "High", "Low", "Close"])
        history = history[~history.index.duplicated(keep="last")].sort_index()

        candles = []
        for timestamp, row in history.iterrows():
            close = float(row["Close"])
            adj_close = row.get("Adj Close", close)
            candles.append(CandleRecord(
                date=pd.Timestamp(timestamp).date(),
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=close,
                adj_close=close if pd.isna(adj_close) else float(adj_close),
                volume=int(round(float(row["Volume"]))) if not pd.isna(row["Volume"]) else 0,
            ))

        candles.reverse()
        return candles
