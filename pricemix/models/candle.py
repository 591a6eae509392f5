"""Daily candle data model."""

from datetime import date as date_type
from typing import Any

from pydantic import BaseModel, Field


class CandleRecord(BaseModel):
    """Represents one trading day of OHLCV data for a symbol."""

    date: date_type = Field(..., description="Trading date")
    open: float = Field(..., description="Opening price")
    high: float = Field(..., description="High price")
    low: float = Field(..., description="Low price")
    close: float = Field(..., description="Closing price")
    adj_close: float = Field(..., description="Split/dividend adjusted close")
    volume: int = Field(..., ge=0, description="Trading volume")

    model_config = {"frozen": True}

    def adjusted(self) -> "CandleRecord":
        """Return a copy with prices scaled to the adjusted close.

        Open, high and low are multiplied by ``adj_close / close`` and close
        becomes ``adj_close``. Applying it twice is a no-op.
        """
        if self.close == 0:
            return self

        ratio = self.adj_close / self.close
        return self.model_copy(
            update={
                "open": self.open * ratio,
                "high": self.high * ratio,
                "low": self.low * ratio,
                "close": self.adj_close,
            }
        )

    @classmethod
    def from_cache_record(
        cls, record: dict[str, Any], adjust: bool = False
    ) -> "CandleRecord":
        """Build a candle from a cached JSON record.

        Args:
            record: Mapping as produced by :meth:`to_cache_record`.
            adjust: Whether to return adjusted prices.

        Returns:
            The candle.
        """
        candle = cls(
            date=date_type.fromisoformat(str(record["date"])[:10]),
            open=float(record["open"]),
            high=float(record["high"]),
            low=float(record["low"]),
            close=float(record["close"]),
            adj_close=float(record.get("adjClose", record["close"])),
            volume=int(round(float(record.get("volume", 0)))),
        )
        return candle.adjusted() if adjust else candle

    def to_cache_record(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly mapping."""
        return {
            "date": self.date.isoformat(),
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "adjClose": self.adj_close,
            "volume": self.volume,
        }


def to_cache_records(prices: list[CandleRecord]) -> list[dict[str, Any]]:
    """Serialize a whole series for the cache store."""
    return [candle.to_cache_record() for candle in prices]
