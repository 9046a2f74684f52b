"""Locate the ledger database and open a store on it."""

import os
from pathlib import Path
from typing import Optional

from pocketledger.database.sqlalchemy_store import SQLAlchemyStore

DB_PATH_ENV = "POCKETLEDGER_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".pocketledger"


def resolve_database_path(database_path: Optional[str] = None) -> Path:
    """Pick the database file: the argument, then $POCKETLEDGER_DB_PATH,
    then ~/.pocketledger/pocketledger.db.

    The default directory is created on first use.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    if chosen:
        return Path(chosen).expanduser()
    DEFAULT_DB_DIR.mkdir(parents=True, exist_ok=True)
    return DEFAULT_DB_DIR / "pocketledger.db"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Open a SQLite-backed store on the resolved database file."""
    return SQLAlchemyStore.for_sqlite_file(resolve_database_path(database_path))
