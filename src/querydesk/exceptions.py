"""
Exceptions raised across the querydesk boundary.

Expected failures (bad SQL, empty selection, failed batch) are reported as
values, not exceptions. These classes cover the remaining exceptional cases.
"""


class QueryDeskError(Exception):
    """Base class for querydesk errors."""


class NoEditorError(QueryDeskError):
    """No editor context is available to read SQL from."""

    def __init__(self, message: str = "No SQL file selected!"):
        super().__init__(message)


class UnsupportedDatabaseError(QueryDeskError):
    """The adapter factory has no adapter for a database type."""

    def __init__(self, db_type: str):
        self.db_type = db_type
        super().__init__(f"No adapter for database type: {db_type}")


class SessionClosedError(QueryDeskError):
    """A statement was dispatched on a session that was already closed."""
