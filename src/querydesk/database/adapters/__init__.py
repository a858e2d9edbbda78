"""
Connection Adapters - Driver-independent statement execution

Usage:
    from querydesk.database.adapters import AdapterFactory

    adapter = AdapterFactory.create("sqlite", connection)
    result = adapter.query("SELECT 1")
    result.kind  # ResultKind.ROWS
"""

from .base import ConnectionAdapter, DbApiAdapter, DriverResult, ResultKind
from .factory import AdapterFactory

from .sqlite_adapter import SQLiteAdapter
from .sqlserver_adapter import SQLServerAdapter
from .postgresql_adapter import PostgreSQLAdapter, parse_postgresql_url

__all__ = [
    # Base classes
    "ConnectionAdapter",
    "DbApiAdapter",
    "DriverResult",
    "ResultKind",

    # Factory
    "AdapterFactory",

    # Implementations
    "SQLiteAdapter",
    "SQLServerAdapter",
    "PostgreSQLAdapter",
    "parse_postgresql_url",
]
