"""
Query Result Bridge - Qt signals for orchestration events.

Lets widgets subscribe to query execution without knowing the orchestrator:
    bridge = QueryResultBridge(history=history)
    bridge.response_ready.connect(result_view.show_response)
    orchestrator = QueryOrchestrator(session, listener=bridge)
"""
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..core.history import QueryHistory
from ..core.query_orchestrator import QueryListener


class QueryResultBridge(QObject, QueryListener):
    """QueryListener that re-emits every event as a Qt signal."""

    run_started = Signal(str)              # sql
    response_ready = Signal(object)        # ClassifiedResponse
    history_recorded = Signal(str, float)  # sql, cost time (ms)
    refresh_requested = Signal()

    def __init__(self, history: Optional[QueryHistory] = None, parent=None):
        super().__init__(parent)
        self.history = history

    def on_run(self, sql: str) -> None:
        self.run_started.emit(sql)

    def on_response(self, response) -> None:
        self.response_ready.emit(response)

    def record_history(self, sql: str, cost_time: float) -> None:
        if self.history is not None:
            self.history.record(sql, cost_time)
        self.history_recorded.emit(sql, cost_time)

    def refresh(self) -> None:
        self.refresh_requested.emit()
