"""
SQLite Adapter - sqlite3 specific transaction handling
"""

import sqlite3
from pathlib import Path
from typing import Union

from .base import DbApiAdapter

import logging
logger = logging.getLogger(__name__)


class SQLiteAdapter(DbApiAdapter):
    """
    Adapter for sqlite3 connections.

    sqlite3 only opens implicit transactions before DML, so DDL would be
    auto-committed inside a batch. An explicit BEGIN keeps the whole batch
    atomic, DDL included.
    """

    db_type = "sqlite"

    @classmethod
    def connect(cls, database: Union[str, Path]) -> "SQLiteAdapter":
        """Open a sqlite database (path, "sqlite:///path" URL or ":memory:")."""
        database = str(database)
        if database.startswith("sqlite:///"):
            database = database[10:]
        return cls(sqlite3.connect(database, check_same_thread=False))

    def begin(self) -> None:
        if self.connection.in_transaction:
            logger.debug("sqlite transaction already open, reusing it")
            return
        self.connection.execute("BEGIN")
