"""Database layer for PriceMix."""

from pricemix.db.store import DataStore

__all__ = ["DataStore"]
