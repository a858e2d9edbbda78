"""
Delimiter handling - Per-connection statement terminators.

Scripts containing stored routine bodies often switch the terminator
(``SET DELIMITER TO $$`` or the mysql client form ``DELIMITER $$``).
DelimiterStore remembers the active token per connection and
DelimiterDirectiveParser consumes the directive lines and rewrites
custom terminators back to ';' for the splitter.
"""
import re
import threading
from dataclasses import dataclass
from typing import Dict, Hashable, Optional

from ..constants import DEFAULT_DELIMITER
from ..utils.sql_splitter import normalize_delimiter

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    """Result of directive parsing."""
    sql: str                         # Text left to execute (may be empty)
    consumed_as_directive: bool      # True if a directive line was consumed
    delimiter: Optional[str] = None  # Custom delimiter active afterwards


class DelimiterStore:
    """
    Active custom delimiter per connection id.

    Absence of an entry means the default ';'. Entries live until the
    connection is torn down (see ``discard``).

    Usage:
        store = DelimiterStore()
        store.set("conn-1", "$$")
        store.get("conn-1")     # "$$"
        store.discard("conn-1")
    """

    def __init__(self):
        self._delimiters: Dict[Hashable, str] = {}
        self._lock = threading.Lock()

    def get(self, connection_id: Hashable) -> Optional[str]:
        """Return the custom delimiter for a connection, or None for the default."""
        with self._lock:
            return self._delimiters.get(connection_id)

    def set(self, connection_id: Hashable, token: str) -> None:
        """
        Store the delimiter for a connection.

        Setting the default ';' removes the entry.
        """
        with self._lock:
            if token == DEFAULT_DELIMITER:
                self._delimiters.pop(connection_id, None)
            else:
                self._delimiters[connection_id] = token
        logger.info(f"Delimiter for connection {connection_id} set to {token!r}")

    def discard(self, connection_id: Hashable) -> None:
        """Forget the delimiter of a torn down connection."""
        with self._lock:
            self._delimiters.pop(connection_id, None)

    def __contains__(self, connection_id: Hashable) -> bool:
        with self._lock:
            return connection_id in self._delimiters

    def __len__(self) -> int:
        with self._lock:
            return len(self._delimiters)


class DelimiterDirectiveParser:
    """
    Detect and consume delimiter directives at the head of a SQL block.

    Recognized (case-insensitive, one per line):
        SET DELIMITER TO <token>
        DELIMITER <token>

    The token is the rest of the line, surrounding blanks trimmed.
    """

    DIRECTIVE_PATTERN = re.compile(
        r"^[ \t]*(?:set[ \t]+delimiter[ \t]+to|delimiter)[ \t]+(\S.*?)[ \t]*$",
        re.IGNORECASE,
    )

    def __init__(self, store: Optional[DelimiterStore] = None):
        self.store = store if store is not None else DelimiterStore()

    def get(self, connection_id: Hashable) -> Optional[str]:
        """Pure lookup of the active custom delimiter."""
        return self.store.get(connection_id)

    def parse_batch(self, sql: str, connection_id: Hashable) -> ParseOutcome:
        """
        Consume leading delimiter directives or normalize the active delimiter.

        Args:
            sql: SQL text (comments already stripped)
            connection_id: Key of the connection the text runs on

        Returns:
            ParseOutcome. When directives were consumed, ``sql`` holds the
            trimmed text that followed them (empty for a directive-only input).
        """
        lines = sql.splitlines()
        consumed = 0
        token = None

        for line in lines:
            if not line.strip():
                consumed += 1
                continue
            match = self.DIRECTIVE_PATTERN.match(line)
            if not match:
                break
            token = match.group(1)
            consumed += 1

        if token is not None:
            self.store.set(connection_id, token)
            remaining = "\n".join(lines[consumed:]).strip()
            active = self.store.get(connection_id)
            logger.debug(f"Delimiter directive consumed, {len(remaining)} chars remaining")
            return ParseOutcome(
                sql=normalize_delimiter(remaining, active),
                consumed_as_directive=True,
                delimiter=active,
            )

        active = self.store.get(connection_id)
        return ParseOutcome(
            sql=normalize_delimiter(sql, active),
            consumed_as_directive=False,
            delimiter=active,
        )
