"""
Query Orchestrator - Run one statement from editor text and report its outcome.

Flow:
    strip comments -> delimiter directives -> import directive -> dispatch
    -> classify (or report failure)

Outcomes are reported to a QueryListener and returned; execution errors
never propagate out of run_query.
"""
from __future__ import annotations

import re
import time
from typing import Callable, Optional, TYPE_CHECKING

from ..config.user_preferences import UserPreferences, get_preferences
from ..constants import DELIMITER_CHANGED_MESSAGE, EXECUTE_SUCCESS_MESSAGE
from ..database.delimiter import DelimiterDirectiveParser
from ..database.session import ConnectionSession
from ..utils.sql_splitter import strip_line_comments
from .responses import ClassifiedResponse, Dml, Failure, Status, classify_result

if TYPE_CHECKING:
    from .import_service import ScriptImportService

import logging
logger = logging.getLogger(__name__)


class QueryListener:
    """
    Receiver of orchestration events. All methods are no-ops by default.

    The Qt implementation is querydesk.ui.query_bridge.QueryResultBridge.
    """

    def on_run(self, sql: str) -> None:
        """A statement is about to be sent to the connection."""

    def on_response(self, response: ClassifiedResponse) -> None:
        """A classified response (or a notification) is available."""

    def record_history(self, sql: str, cost_time: float) -> None:
        """A statement completed and should be added to history."""

    def refresh(self) -> None:
        """Data changed; views showing database objects should reload."""


class QueryOrchestrator:
    """
    Single statement execution for one connection session.

    Usage:
        orchestrator = QueryOrchestrator(session, listener=bridge)
        response = orchestrator.run_query("SELECT * FROM users")
    """

    IMPORT_PATTERN = re.compile(r"^\s*\bsource\b\s+(.+)", re.IGNORECASE)

    def __init__(self, session: ConnectionSession,
                 listener: Optional[QueryListener] = None,
                 importer: Optional["ScriptImportService"] = None,
                 sql_source: Optional[Callable[[Optional[str]], str]] = None,
                 page_size: Optional[int] = None,
                 preferences: Optional[UserPreferences] = None):
        """
        Initialize the orchestrator.

        Args:
            session: Connection session statements run on
            listener: Receiver of run/response/history/refresh events
            importer: Collaborator handling "source <path>" directives
            sql_source: Callable(delimiter) returning editor SQL when run_query gets none
            page_size: Rows per page for tabular results (preferences when omitted)
            preferences: UserPreferences instance (global instance when omitted)
        """
        self.session = session
        self.listener = listener or QueryListener()
        self.importer = importer
        self.sql_source = sql_source
        self._page_size = page_size
        self._preferences = preferences
        self.parser = DelimiterDirectiveParser(session.delimiters)

    @property
    def preferences(self) -> UserPreferences:
        if self._preferences is None:
            self._preferences = get_preferences()
        return self._preferences

    @property
    def page_size(self) -> int:
        if self._page_size is not None:
            return self._page_size
        return self.preferences.get_default_limit()

    def run_query(self, sql: Optional[str] = None) -> Optional[ClassifiedResponse]:
        """
        Execute one statement and report the classified outcome.

        Args:
            sql: SQL text; read from the editor source when omitted

        Returns:
            The reported response, or None when nothing was executed
            (empty text, import directive without an importer)

        Raises:
            NoEditorError: Only from the editor source, when no editor is available
        """
        from_editor = False
        if not sql:
            if self.sql_source is None:
                logger.debug("No SQL given and no editor source configured")
                return None
            sql = self.sql_source(self.session.delimiter)
            from_editor = True

        sql = strip_line_comments(sql or "").strip()

        outcome = self.parser.parse_batch(sql, self.session.connection_id)
        sql = outcome.sql
        if not sql and outcome.consumed_as_directive:
            response = Status(message=DELIMITER_CHANGED_MESSAGE)
            self.listener.on_response(response)
            return response

        import_match = self.IMPORT_PATTERN.match(sql)
        if import_match:
            return self._import(import_match.group(1))

        if not sql:
            logger.debug("Nothing to execute")
            return None

        return self._dispatch(sql, from_editor)

    def _import(self, raw_path: str) -> Optional[ClassifiedResponse]:
        """Hand a script to the importer and report whether it was committed."""
        path = raw_path.strip().rstrip(";").strip()
        if self.importer is None:
            logger.warning(f"No importer configured, ignoring source {path}")
            return None
        logger.info(f"Handing {path} to importer")

        sql = f"source {path}"
        try:
            result = self.importer.import_file(path, self.session)
        except Exception as e:
            logger.error(f"Import of {path} failed: {e}")
            result = None
            error = str(e)
        else:
            error = result.error if not result else None

        if result:
            response = Status(message=EXECUTE_SUCCESS_MESSAGE.format(sql=sql))
            self.listener.on_response(response)
            self.listener.refresh()
        else:
            response = Failure(sql=sql, message=error or f"Import of {path} was rolled back")
            self.listener.on_response(response)
        return response

    def _dispatch(self, sql: str, from_editor: bool) -> ClassifiedResponse:
        self.listener.on_run(sql)

        execute_time = time.time()
        try:
            result = self.session.submit(sql).result()
        except Exception as e:
            logger.error(f"Execute sql fail : {sql}: {e}")
            response = Failure(sql=sql, message=str(e))
            self.listener.on_response(response)
            return response

        cost_time = (time.time() - execute_time) * 1000
        response = classify_result(sql, result, cost_time, self.page_size)

        if (from_editor or isinstance(response, Dml)) and self.preferences.get("record_history", True):
            self.listener.record_history(sql, cost_time)

        self.listener.on_response(response)
        if isinstance(response, Dml):
            self.listener.refresh()
        return response
