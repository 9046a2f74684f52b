"""Storage layer for pocketledger."""

from pocketledger.database.base import Store
from pocketledger.database.factories import create_sqlite_store
from pocketledger.database.repository import LedgerRepository

__all__ = ["Store", "create_sqlite_store", "LedgerRepository"]
