"""
Batch Executor - Run an ordered list of statements in one transaction.

Statements run strictly one after another on the same connection; later
statements may depend on earlier ones (DDL before DML, inserts before
selects). The first failure rolls the whole batch back.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from ..database.adapters.base import ConnectionAdapter

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """
    Outcome of a batch.

    Truthy when the batch was committed, falsy when it was rolled back,
    so ``if run_batch(...)`` keeps working as a plain boolean check.
    """
    committed: bool
    executed: int = 0                   # Statements that completed successfully
    failed_index: Optional[int] = None  # Position in the submitted list
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.committed


def run_batch(connection: ConnectionAdapter, statements: Iterable[str]) -> BatchResult:
    """
    Execute statements sequentially inside one transaction.

    Blank entries are skipped without reaching the connection. On the
    first failing statement the transaction is rolled back and the
    remaining statements are not sent. This function does not raise.

    Args:
        connection: Adapter of the connection to run on
        statements: Ordered statement texts

    Returns:
        BatchResult, truthy if committed
    """
    try:
        connection.begin()
    except Exception as e:
        logger.error(f"Could not open transaction: {e}")
        return BatchResult(committed=False, error=str(e))

    executed = 0
    for index, sql in enumerate(statements):
        sql = sql.strip()
        if not sql:
            continue
        try:
            connection.query(sql)
        except Exception as e:
            logger.error(f"Batch statement {index + 1} failed, rolling back: {e}")
            _rollback(connection)
            return BatchResult(committed=False, executed=executed, failed_index=index, error=str(e))
        executed += 1

    try:
        connection.commit()
    except Exception as e:
        logger.error(f"Commit failed, rolling back: {e}")
        _rollback(connection)
        return BatchResult(committed=False, executed=executed, error=str(e))

    logger.info(f"Batch committed: {executed} statement(s)")
    return BatchResult(committed=True, executed=executed)


def _rollback(connection: ConnectionAdapter) -> None:
    try:
        connection.rollback()
    except Exception as e:
        logger.warning(f"Rollback failed: {e}")


class BatchExecutor:
    """
    Runs batches on one connection.

    Usage:
        executor = BatchExecutor(adapter)
        if not executor.run(["CREATE TABLE t (id INT)", "INSERT INTO t VALUES (1)"]):
            print(executor.last_result.error)
    """

    def __init__(self, connection: ConnectionAdapter):
        self.connection = connection
        self.last_result: Optional[BatchResult] = None

    def run(self, statements: Iterable[str]) -> BatchResult:
        self.last_result = run_batch(self.connection, statements)
        return self.last_result
