"""
SQL Server Adapter - pyodbc connections
"""

from ...constants import CONNECTION_TIMEOUT_S
from .base import DbApiAdapter

import logging
logger = logging.getLogger(__name__)


class SQLServerAdapter(DbApiAdapter):
    """
    Adapter for pyodbc connections to SQL Server.

    pyodbc connections may be opened with autocommit on; a transaction
    turns it off until commit or rollback, then restores it.
    """

    db_type = "sqlserver"

    def __init__(self, connection):
        super().__init__(connection)
        self._saved_autocommit = None

    @classmethod
    def connect(cls, connection_string: str, timeout: int = CONNECTION_TIMEOUT_S) -> "SQLServerAdapter":
        """Open a connection from an ODBC connection string."""
        import pyodbc

        return cls(pyodbc.connect(connection_string, timeout=timeout))

    def begin(self) -> None:
        self._saved_autocommit = getattr(self.connection, "autocommit", False)
        if self._saved_autocommit:
            self.connection.autocommit = False

    def commit(self) -> None:
        try:
            self.connection.commit()
        finally:
            self._restore_autocommit()

    def rollback(self) -> None:
        try:
            self.connection.rollback()
        finally:
            self._restore_autocommit()

    def _restore_autocommit(self) -> None:
        if self._saved_autocommit:
            self.connection.autocommit = True
        self._saved_autocommit = None
