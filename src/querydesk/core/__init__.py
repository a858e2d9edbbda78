"""
Core module - Statement execution and response classification.

- batch_executor: Transactional, strictly sequential batches
- query_orchestrator: Single statement flow (comments, directives, dispatch)
- responses: Dml / Rows / Status / Failure taxonomy
- import_service: "source <path>" script imports
- history: Bounded record of executed queries

Architecture:
    editor text
           ↓
    DelimiterDirectiveParser → splitter → statement(s)
           ↓
    QueryOrchestrator / run_batch → ConnectionSession → adapter
"""

from .batch_executor import BatchExecutor, BatchResult, run_batch
from .responses import ClassifiedResponse, Dml, Failure, Rows, Status, classify_result

__all__ = [
    "BatchExecutor",
    "BatchResult",
    "run_batch",
    "ClassifiedResponse",
    "Dml",
    "Failure",
    "Rows",
    "Status",
    "classify_result",
]
