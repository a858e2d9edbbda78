"""
Query Worker - Background thread for orchestrated query execution

Keeps the UI responsive while the connection works; results arrive
through signals on the UI thread.
"""

from PySide6.QtCore import QThread, Signal

from ..core.query_orchestrator import QueryOrchestrator

import logging
logger = logging.getLogger(__name__)


class QueryWorker(QThread):
    """Run one QueryOrchestrator.run_query call off the UI thread"""

    # Signals
    query_finished = Signal(object)  # ClassifiedResponse or None
    query_error = Signal(str)        # Unexpected error message

    def __init__(self, orchestrator: QueryOrchestrator, sql: str, parent=None):
        super().__init__(parent)
        self.orchestrator = orchestrator
        self.sql = sql

    def run(self):
        """Execute the query in background"""
        try:
            response = self.orchestrator.run_query(self.sql)
        except Exception as e:
            logger.error(f"Query worker failed: {e}")
            self.query_error.emit(str(e))
            return
        self.query_finished.emit(response)
