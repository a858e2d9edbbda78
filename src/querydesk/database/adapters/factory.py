"""
Adapter Factory - Create the connection adapter for a database type
"""

from typing import Any, Dict, Type

from ...exceptions import UnsupportedDatabaseError
from .base import ConnectionAdapter, DbApiAdapter

import logging
logger = logging.getLogger(__name__)


class AdapterFactory:
    """
    Factory for connection adapters.

    Usage:
        adapter = AdapterFactory.create("sqlite", sqlite3.connect(":memory:"))
        adapter = AdapterFactory.connect("postgresql", "postgresql://u:p@host/db")
    """

    # Registry of supported database types
    _adapters: Dict[str, Type[ConnectionAdapter]] = {}

    @classmethod
    def create(cls, db_type: str, connection: Any) -> ConnectionAdapter:
        """
        Wrap an open DB-API connection.

        Unknown database types fall back to the generic DbApiAdapter.
        """
        adapter_class = cls._adapters.get(db_type.lower())
        if adapter_class is None:
            logger.warning(f"No adapter for database type: {db_type}, using generic DB-API adapter")
            adapter_class = DbApiAdapter
        return adapter_class(connection)

    @classmethod
    def connect(cls, db_type: str, connection_string: str) -> ConnectionAdapter:
        """
        Open a new connection and wrap it.

        Raises:
            UnsupportedDatabaseError: If no registered adapter can connect
        """
        adapter_class = cls._adapters.get(db_type.lower())
        if adapter_class is None or not hasattr(adapter_class, "connect"):
            raise UnsupportedDatabaseError(db_type)
        return adapter_class.connect(connection_string)

    @classmethod
    def is_supported(cls, db_type: str) -> bool:
        """Check if a database type is supported."""
        return db_type.lower() in cls._adapters

    @classmethod
    def supported_types(cls) -> list:
        """Get list of supported database types."""
        return list(cls._adapters.keys())

    @classmethod
    def register(cls, db_type: str, adapter_class: Type[ConnectionAdapter]):
        """
        Register a new adapter type.

        Args:
            db_type: Database type identifier
            adapter_class: ConnectionAdapter subclass
        """
        cls._adapters[db_type.lower()] = adapter_class
        logger.debug(f"Registered adapter for: {db_type}")


def _register_default_adapters():
    """Register built-in adapters. Called on module import."""
    from .sqlite_adapter import SQLiteAdapter
    from .sqlserver_adapter import SQLServerAdapter
    from .postgresql_adapter import PostgreSQLAdapter

    AdapterFactory.register("sqlite", SQLiteAdapter)
    AdapterFactory.register("sqlserver", SQLServerAdapter)
    AdapterFactory.register("mssql", SQLServerAdapter)  # Alias
    AdapterFactory.register("postgresql", PostgreSQLAdapter)
    AdapterFactory.register("postgres", PostgreSQLAdapter)  # Alias


# Register on module import
_register_default_adapters()
