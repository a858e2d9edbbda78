"""
SQL Splitter - Split editor text into statements and pick the one under the cursor.

Handles:
- Semicolon-delimited statements (a custom delimiter is normalized to ';' first)
- Single and double quoted literals with embedded separators
- Stored routine bodies (TRIGGER / PROCEDURE / FUNCTION), which are never split
- Line comments ('--' at the start of a line)
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import sqlparse

from ..constants import BATCH_BODY_KEYWORDS, DEFAULT_DELIMITER, LINE_COMMENT_MARKER

import logging
logger = logging.getLogger(__name__)


# Maximal runs of unquoted text or quoted regions, bounded by a bare ';'.
# A lone unterminated quote is consumed as a plain character.
_STATEMENT_PATTERN = re.compile(r"""(?:[^;"']+|"[^"]*"|'[^']*'|["'])+""")

_BATCH_BODY_PATTERN = re.compile(
    r"\b(?:" + "|".join(BATCH_BODY_KEYWORDS) + r")\b", re.IGNORECASE
)

_LINE_COMMENT_PATTERN = re.compile(
    r"^[ \t]*" + re.escape(LINE_COMMENT_MARKER) + r".*(?:\r?\n|$)", re.MULTILINE
)


@dataclass
class SQLStatement:
    """Represents a single SQL statement."""
    text: str           # Trimmed SQL text
    raw_length: int     # Length of the untrimmed span in the source text
    line_start: int     # Starting line number (1-based)
    line_end: int       # Ending line number (1-based)
    is_select: bool     # True if SELECT statement that returns results


def strip_line_comments(sql_text: str) -> str:
    """Remove every line whose first non-blank characters are '--'."""
    if not sql_text:
        return ""
    return _LINE_COMMENT_PATTERN.sub("", sql_text)


def is_batch_body(sql_text: str) -> bool:
    """
    Check whether the text looks like a stored routine definition.

    This is a keyword heuristic, not a grammar check: any whole-word
    TRIGGER, PROCEDURE or FUNCTION keeps the text in one piece.
    """
    return bool(_BATCH_BODY_PATTERN.search(sql_text or ""))


def normalize_delimiter(sql_text: str, delimiter: Optional[str]) -> str:
    """Rewrite every literal occurrence of a custom delimiter to ';'."""
    if not delimiter or delimiter == DEFAULT_DELIMITER:
        return sql_text
    return sql_text.replace(delimiter, DEFAULT_DELIMITER)


def _raw_segments(sql_text: str) -> List[str]:
    """Untrimmed statement spans, in order, separators excluded."""
    return _STATEMENT_PATTERN.findall(sql_text)


def split_statements(sql_text: str, delimiter: Optional[str] = None) -> List[SQLStatement]:
    """
    Split SQL text into individual statements.

    Args:
        sql_text: Full SQL text with one or more statements
        delimiter: Active custom delimiter for the connection, if any

    Returns:
        List of SQLStatement objects, empty statements excluded
    """
    if not sql_text or not sql_text.strip():
        return []

    sql_text = normalize_delimiter(sql_text, delimiter)

    if is_batch_body(sql_text):
        logger.debug("Routine keyword found, keeping text as a single statement")
        segments = [sql_text]
    else:
        segments = _raw_segments(sql_text)

    statements = []
    current_line = 1
    for raw in segments:
        stmt_text = raw.strip()
        if stmt_text:
            leading = raw[:len(raw) - len(raw.lstrip())]
            line_start = current_line + leading.count("\n")
            statements.append(SQLStatement(
                text=stmt_text,
                raw_length=len(raw),
                line_start=line_start,
                line_end=line_start + stmt_text.count("\n"),
                is_select=_is_select_statement(stmt_text),
            ))
        current_line += raw.count("\n")

    return statements


def statement_at_cursor(sql_text: str, cursor_offset: int,
                        delimiter: Optional[str] = None) -> str:
    """
    Return the statement under the cursor.

    Args:
        sql_text: Full editor text
        cursor_offset: Number of characters from the start of the text to the cursor
        delimiter: Active custom delimiter for the connection, if any

    Returns:
        The trimmed statement, or "" when there is nothing to execute
    """
    if not sql_text:
        return ""

    if delimiter and delimiter != DEFAULT_DELIMITER:
        # Cursor offset is measured in the original text
        shrink = len(delimiter) - len(DEFAULT_DELIMITER)
        cursor_offset -= sql_text[:cursor_offset].count(delimiter) * shrink
        sql_text = normalize_delimiter(sql_text, delimiter)

    if is_batch_body(sql_text):
        return sql_text.strip()

    segments = _raw_segments(sql_text)
    if not segments:
        return ""
    if len(segments) == 1:
        return segments[0].strip()

    non_empty: List[str] = []
    index = 0
    for raw in segments:
        trimmed = raw.strip()
        index += len(raw) + 1
        if cursor_offset < index:
            if not trimmed:
                # Cursor sits after a trailing separator or blank run
                return non_empty[-1] if non_empty else ""
            logger.debug(f"Cursor {cursor_offset} selects statement ending at {index}")
            return trimmed
        if trimmed:
            non_empty.append(trimmed)

    return non_empty[-1] if non_empty else ""


def _is_select_statement(stmt_text: str) -> bool:
    """
    Determine if a statement is a query that returns rows.

    Returns True for SELECT, WITH ... SELECT (CTEs), SHOW, DESCRIBE,
    EXPLAIN and PRAGMA. Everything else (DML, DDL, SET, USE...) is False.
    """
    # Normalize: remove comments and extra whitespace
    try:
        cleaned = sqlparse.format(stmt_text, strip_comments=True).strip().upper()
    except Exception:
        cleaned = stmt_text.strip().upper()

    if not cleaned:
        return False

    words = cleaned.split()
    first_word = words[0].lstrip("(") if words else ""

    return first_word in {"SELECT", "WITH", "SHOW", "DESCRIBE", "DESC", "EXPLAIN", "PRAGMA"}
