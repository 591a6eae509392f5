"""SQLite data store for PriceMix."""

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional


class DataStore:
    """SQLite-based cache of daily price series, one JSON payload per symbol.

    A connection is opened per operation, so the store can be used from the
    background write-back thread as well as the caller's thread.
    """

    REQUIRED_TABLES = [
        "daily_prices",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS daily_prices (
                    symbol TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    # ==================== Daily prices ====================

    def save_daily_data(self, symbol: str, records: list[dict[str, Any]]) -> None:
        """Save a symbol's whole series, replacing any previous one.

        Args:
            symbol: Ticker symbol.
            records: Serialized candles, most-recent-first.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO daily_prices (symbol, payload, updated_at)
                VALUES (?, ?, ?)
                """,
                (symbol, json.dumps(records), datetime.now().isoformat()),
            )
            conn.commit()
        finally:
            conn.close()

    def get_all_daily_data(self, symbol: str) -> Optional[list[dict[str, Any]]]:
        """Get a symbol's cached series.

        Args:
            symbol: Ticker symbol.

        Returns:
            Serialized candles, or None if the symbol is not cached.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT payload FROM daily_prices WHERE symbol = ?",
                (symbol,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return json.loads(row["payload"])
        finally:
            conn.close()

    def delete_daily_data(self, symbol: str) -> bool:
        """Remove a symbol from the cache.

        Returns:
            True if something was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM daily_prices WHERE symbol = ?", (symbol,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def list_symbols(self) -> list[tuple[str, int, datetime]]:
        """List cached symbols with their candle count and last update."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT symbol, payload, updated_at FROM daily_prices ORDER BY symbol"
            )
            return [
                (
                    row["symbol"],
                    len(json.loads(row["payload"])),
                    datetime.fromisoformat(row["updated_at"]),
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()
