"""
Centralized constants for querydesk.

Import from here instead of hardcoding values.
"""

# ===========================================================================
# Statement delimiting
# ===========================================================================
DEFAULT_DELIMITER = ";"         # Implicit delimiter when none is stored

# Stored routine keywords: text containing one of them is never split
BATCH_BODY_KEYWORDS = ("TRIGGER", "PROCEDURE", "FUNCTION")

LINE_COMMENT_MARKER = "--"

# ===========================================================================
# Timeouts (seconds)
# ===========================================================================
CONNECTION_TIMEOUT_S = 5        # Driver connect timeout (pyodbc / psycopg2)

# ===========================================================================
# Query / Data limits
# ===========================================================================
DEFAULT_PAGE_SIZE = 100         # Rows per result page when no preference is set
HISTORY_MAX_ENTRIES = 500       # Bounded in-memory query history

# ===========================================================================
# Messages
# ===========================================================================
DELIMITER_CHANGED_MESSAGE = "change delimiter success"
EXECUTE_SUCCESS_MESSAGE = "Execute sql success : {sql}"
