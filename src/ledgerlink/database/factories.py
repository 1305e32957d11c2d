"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerlink.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "LEDGERLINK_DB_PATH"
DEFAULT_DB_DIR = Path("~/.ledgerlink")
DEFAULT_DB_NAME = "ledgerlink.db"


def default_database_path() -> Path:
    """Per-user database file, creating its directory on first use."""
    db_dir = DEFAULT_DB_DIR.expanduser()
    db_dir.mkdir(parents=True, exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance holding every organization's ledger.

    Args:
        database_path: Path to SQLite database file. If None, checks the
            LEDGERLINK_DB_PATH environment variable, then falls back to
            ~/.ledgerlink/ledgerlink.db. A leading "~" is expanded.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        path = default_database_path()
    else:
        path = Path(database_path).expanduser()

    return SQLAlchemyDatabase(f"sqlite:///{path}")
