"""
Query responses - Classified outcome of one executed statement.

Exactly one response is produced per statement:
- Dml: affected row count (triggers history/refresh)
- Rows: tabular data with its columns and the page size to display it with
- Status: success or notification message without data
- Failure: driver error message
"""
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..constants import EXECUTE_SUCCESS_MESSAGE
from ..database.adapters.base import DriverResult, ResultKind


@dataclass(frozen=True)
class Dml:
    sql: str
    affected_rows: int
    cost_time: float = 0.0


@dataclass(frozen=True)
class Rows:
    sql: str
    data: List[list] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)
    page_size: Optional[int] = None
    cost_time: float = 0.0


@dataclass(frozen=True)
class Status:
    message: str
    success: bool = True
    cost_time: Optional[float] = None


@dataclass(frozen=True)
class Failure:
    sql: str
    message: str


ClassifiedResponse = Union[Dml, Rows, Status, Failure]


def classify_result(sql: str, result: DriverResult, cost_time: float = 0.0,
                    page_size: Optional[int] = None) -> ClassifiedResponse:
    """
    Map a tagged driver result to a response.

    Args:
        sql: Statement that produced the result
        result: Tagged result from the connection adapter
        cost_time: Execution time in milliseconds
        page_size: Rows per page for tabular results
    """
    if result.kind is ResultKind.AFFECTED and result.affected_rows:
        return Dml(sql=sql, affected_rows=result.affected_rows, cost_time=cost_time)

    if result.kind is ResultKind.ROWS:
        return Rows(sql=sql, data=result.rows, fields=result.fields,
                    page_size=page_size, cost_time=cost_time)

    # ACKNOWLEDGED, zero-row DML and unknown shapes
    return Status(message=EXECUTE_SUCCESS_MESSAGE.format(sql=sql), cost_time=cost_time)
