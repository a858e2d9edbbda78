"""
querydesk - Statement selection and execution core for SQL editors
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("querydesk")
except PackageNotFoundError:
    # Package not installed, fallback to the pyproject.toml version
    __version__ = "0.3.1"

__author__ = "Lestat2Lioncourt"

from .core.query_orchestrator import QueryOrchestrator, QueryListener
from .core.batch_executor import BatchExecutor, BatchResult, run_batch
from .database.delimiter import DelimiterStore, DelimiterDirectiveParser, ParseOutcome
from .database.session import ConnectionSession
from .utils.sql_splitter import split_statements, statement_at_cursor

__all__ = [
    "__version__",
    "QueryOrchestrator",
    "QueryListener",
    "BatchExecutor",
    "BatchResult",
    "run_batch",
    "DelimiterStore",
    "DelimiterDirectiveParser",
    "ParseOutcome",
    "ConnectionSession",
    "split_statements",
    "statement_at_cursor",
]
