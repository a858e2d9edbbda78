"""
Base Connection Adapter - Uniform execution surface over DB-API drivers

Adapters hide driver differences that matter to query execution:
- Transaction start (implicit for most drivers, explicit BEGIN for sqlite)
- Result shape (row sets, affected row counts, acknowledgments)

Every result is returned as a DriverResult carrying an explicit kind, so
callers classify responses by tag instead of inspecting driver objects.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)


class ResultKind(Enum):
    """Shape of a driver response."""
    AFFECTED = "affected"          # DML with an affected row count
    ROWS = "rows"                  # Tabular result set
    ACKNOWLEDGED = "acknowledged"  # Row data echoed alongside a status packet
    UNKNOWN = "unknown"            # Anything else (DDL, SET, USE...)


@dataclass
class DriverResult:
    """Tagged result of one executed statement."""
    kind: ResultKind
    affected_rows: int = 0
    rows: List[list] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)

    @classmethod
    def affected(cls, count: int) -> "DriverResult":
        return cls(ResultKind.AFFECTED, affected_rows=count)

    @classmethod
    def tabular(cls, rows: List[list], fields: List[str]) -> "DriverResult":
        return cls(ResultKind.ROWS, rows=rows, fields=fields)

    @classmethod
    def acknowledged(cls, rows: Optional[List[list]] = None,
                     fields: Optional[List[str]] = None) -> "DriverResult":
        return cls(ResultKind.ACKNOWLEDGED, rows=rows or [], fields=fields or [])

    @classmethod
    def unknown(cls) -> "DriverResult":
        return cls(ResultKind.UNKNOWN)


class ConnectionAdapter(ABC):
    """
    Abstract execution surface over one database connection.

    The core only ever calls these five methods; connection acquisition
    and pooling stay with the caller.
    """

    db_type: str = ""

    @abstractmethod
    def query(self, sql: str) -> DriverResult:
        """
        Execute one statement.

        Raises:
            Exception: Any driver error, unchanged
        """
        pass

    @abstractmethod
    def begin(self) -> None:
        """Open a transaction."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit the open transaction."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the open transaction."""
        pass

    def close(self) -> None:
        """Release the underlying connection. Default does nothing."""
        pass


class DbApiAdapter(ConnectionAdapter):
    """
    Adapter over any DB-API 2.0 connection (sqlite3, pyodbc, psycopg2...).

    Result tagging, in order:
    1. First result set has a description -> ROWS, or ACKNOWLEDGED when a
       following result set is non-tabular (multi-statement echo)
    2. rowcount > 0 -> AFFECTED
    3. otherwise -> UNKNOWN
    """

    db_type = "dbapi"

    def __init__(self, connection: Any):
        """
        Initialize the adapter.

        Args:
            connection: Open DB-API connection object
        """
        self.connection = connection

    def query(self, sql: str) -> DriverResult:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            return self._tag_result(cursor)
        finally:
            try:
                cursor.close()
            except Exception as e:
                logger.debug(f"Cursor close failed: {e}")

    def _tag_result(self, cursor) -> DriverResult:
        if cursor.description:
            fields = [column[0] for column in cursor.description]
            rows = [list(row) for row in cursor.fetchall()]
            if self._next_set_is_status(cursor):
                return DriverResult.acknowledged(rows, fields)
            return DriverResult.tabular(rows, fields)

        rowcount = getattr(cursor, "rowcount", -1)
        if rowcount is not None and rowcount > 0:
            return DriverResult.affected(rowcount)
        return DriverResult.unknown()

    @staticmethod
    def _next_set_is_status(cursor) -> bool:
        """True if the driver has a further, non-tabular result set."""
        nextset = getattr(cursor, "nextset", None)
        if nextset is None:
            return False
        try:
            has_more = nextset()
        except Exception:
            # sqlite3 has no nextset, some drivers raise NotSupportedError
            return False
        return bool(has_more) and not cursor.description

    def begin(self) -> None:
        # Most DB-API drivers open a transaction implicitly on the first statement
        pass

    def commit(self) -> None:
        self.connection.commit()

    def rollback(self) -> None:
        self.connection.rollback()

    def close(self) -> None:
        self.connection.close()
