"""
Connection Session - One logical connection and its per-connection state.

A session binds:
- the connection id used as key for the delimiter state
- the adapter that executes statements
- a single worker thread, so statements on one connection never overlap
"""
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Hashable, Iterable, Optional

from ..core.batch_executor import BatchResult, run_batch
from ..exceptions import SessionClosedError
from .adapters.base import ConnectionAdapter, DriverResult
from .delimiter import DelimiterStore

import logging
logger = logging.getLogger(__name__)


class ConnectionSession:
    """
    Per-connection execution context.

    Usage:
        session = ConnectionSession(AdapterFactory.create("sqlite", conn))
        future = session.submit("SELECT 1")
        result = future.result()
        session.close()   # also forgets the connection's delimiter
    """

    def __init__(self, adapter: ConnectionAdapter,
                 connection_id: Optional[Hashable] = None,
                 delimiters: Optional[DelimiterStore] = None):
        """
        Initialize the session.

        Args:
            adapter: Adapter over the open connection
            connection_id: Stable id of the logical connection (generated if omitted)
            delimiters: Shared delimiter store (a private one is created if omitted)
        """
        self.adapter = adapter
        self.connection_id = connection_id if connection_id is not None else str(uuid.uuid4())
        self.delimiters = delimiters if delimiters is not None else DelimiterStore()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="querydesk-session")
        self._lock = threading.Lock()
        self._closed = False

    # ==================== Delimiter ====================

    @property
    def delimiter(self) -> Optional[str]:
        """Custom delimiter of this connection, None for the default ';'."""
        return self.delimiters.get(self.connection_id)

    def set_delimiter(self, token: str) -> None:
        self.delimiters.set(self.connection_id, token)

    # ==================== Execution ====================

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, sql: str) -> "Future[DriverResult]":
        """
        Queue a statement on the session worker. The statement is committed
        on success and rolled back on failure.

        Returns:
            Future resolving to the DriverResult, or to the driver exception

        Raises:
            SessionClosedError: If the session was closed
        """
        with self._lock:
            if self._closed:
                raise SessionClosedError(f"Session {self.connection_id} is closed")
            return self._executor.submit(self._run_statement, sql)

    def _run_statement(self, sql: str) -> DriverResult:
        """Run one statement outside any batch and commit its effects."""
        try:
            result = self.adapter.query(sql)
        except Exception:
            # Clear the failed implicit transaction (required by PostgreSQL)
            try:
                self.adapter.rollback()
            except Exception as e:
                logger.debug(f"Rollback after failed statement failed: {e}")
            raise
        self.adapter.commit()
        return result

    def execute(self, sql: str) -> DriverResult:
        """Run a statement and wait for its result."""
        return self.submit(sql).result()

    def run_batch(self, statements: Iterable[str]) -> BatchResult:
        """Run a transactional batch on the session worker and wait for it."""
        with self._lock:
            if self._closed:
                raise SessionClosedError(f"Session {self.connection_id} is closed")
            future = self._executor.submit(run_batch, self.adapter, list(statements))
        return future.result()

    def close(self) -> None:
        """Stop the worker, forget the delimiter and close the connection."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        self.delimiters.discard(self.connection_id)
        try:
            self.adapter.close()
        except Exception as e:
            logger.warning(f"Error closing connection {self.connection_id}: {e}")
        logger.debug(f"Session {self.connection_id} closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
