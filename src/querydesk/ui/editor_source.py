"""
Editor Source - Read the SQL to execute from a Qt text editor.
"""
from typing import Callable, Optional, Union

from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from ..exceptions import NoEditorError
from ..utils.sql_splitter import statement_at_cursor

import logging
logger = logging.getLogger(__name__)

# QTextCursor.selectedText() separates lines with U+2029
_PARAGRAPH_SEPARATOR = "\u2029"


def sql_from_editor(editor, delimiter: Optional[str] = None) -> str:
    """
    Return the selection if any, otherwise the statement under the cursor.

    Args:
        editor: QPlainTextEdit or QTextEdit holding the SQL document
        delimiter: Active custom delimiter of the connection

    Raises:
        NoEditorError: If no editor is given
    """
    if editor is None:
        raise NoEditorError()

    cursor = editor.textCursor()
    if cursor.hasSelection():
        return cursor.selectedText().replace(_PARAGRAPH_SEPARATOR, "\n")

    content = editor.toPlainText()
    return statement_at_cursor(content, cursor.position(), delimiter)


class EditorSqlSource:
    """
    Callable SQL source for QueryOrchestrator.

    Usage:
        source = EditorSqlSource(lambda: tab_widget.currentWidget().sql_editor)
        orchestrator = QueryOrchestrator(session, sql_source=source)
    """

    def __init__(self, editor_getter: Callable[[], Optional[Union[QPlainTextEdit, QTextEdit]]]):
        self._editor_getter = editor_getter

    def __call__(self, delimiter: Optional[str] = None) -> str:
        return sql_from_editor(self._editor_getter(), delimiter)
