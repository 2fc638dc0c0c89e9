"""Database layer for Vale Cashback."""

from valecashback.database.base import Database
from valecashback.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
