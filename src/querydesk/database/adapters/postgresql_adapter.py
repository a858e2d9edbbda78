"""
PostgreSQL Adapter - psycopg2 connections
"""

from typing import Optional
from urllib.parse import urlparse, unquote

from ...constants import CONNECTION_TIMEOUT_S
from .base import DbApiAdapter

import logging
logger = logging.getLogger(__name__)


def parse_postgresql_url(conn_str: str) -> Optional[dict]:
    """
    Parse a postgresql:// URL into psycopg2.connect() kwargs.

    Returns None if conn_str is not a postgresql URL.
    """
    if not conn_str.startswith(("postgresql://", "postgres://")):
        return None

    url = urlparse(conn_str)
    database = url.path.lstrip("/") or "postgres"

    return {
        "host": url.hostname or "localhost",
        "port": url.port or 5432,
        "user": unquote(url.username or ""),
        "password": unquote(url.password or ""),
        "database": database,
        "connect_timeout": CONNECTION_TIMEOUT_S,
    }


class PostgreSQLAdapter(DbApiAdapter):
    """
    Adapter for psycopg2 connections.

    psycopg2 opens a transaction on the first statement unless autocommit
    is set, so begin() only has to make sure autocommit is off.
    """

    db_type = "postgresql"

    @classmethod
    def connect(cls, connection_string: str) -> "PostgreSQLAdapter":
        """Open a connection from a postgresql:// URL or a libpq DSN."""
        import psycopg2

        kwargs = parse_postgresql_url(connection_string)
        if kwargs is None:
            return cls(psycopg2.connect(connection_string, connect_timeout=CONNECTION_TIMEOUT_S))
        return cls(psycopg2.connect(**kwargs))

    def begin(self) -> None:
        if getattr(self.connection, "autocommit", False):
            logger.debug("Disabling autocommit for transaction")
            self.connection.autocommit = False
