"""
Script Import Service - Run a .sql file named by a "source <path>" directive.
"""
from pathlib import Path
from typing import Optional, Union

from ..database.delimiter import DelimiterDirectiveParser
from ..database.session import ConnectionSession
from ..utils.sql_splitter import split_statements, strip_line_comments
from .batch_executor import BatchResult

import logging
logger = logging.getLogger(__name__)

# Tried in order after the preferred encoding fails to decode
FALLBACK_ENCODINGS = ("latin-1", "cp1252", "iso-8859-1")


def read_script(path: Path, encoding: str = "utf-8") -> Optional[str]:
    """
    Read a script file as text.

    Args:
        path: Path to the script
        encoding: Encoding tried first

    Returns:
        File content, or None if the file cannot be read or decoded
    """
    for candidate in (encoding,) + FALLBACK_ENCODINGS:
        try:
            with open(path, "r", encoding=candidate) as f:
                return f.read()
        except UnicodeDecodeError:
            logger.debug(f"{path} is not valid {candidate}")
            continue
        except OSError as e:
            logger.error(f"Error reading file {path}: {e}")
            return None

    logger.warning(f"Could not decode file {path} with common encodings")
    return None


class ScriptImportService:
    """
    Imports SQL script files into a connection as one transactional batch.

    Delimiter directives at the head of the file apply to the session's
    connection, exactly as when typed in the editor.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def import_file(self, path: Union[str, Path], session: ConnectionSession) -> BatchResult:
        """
        Read, split and run a script.

        Args:
            path: Script location (``~`` is expanded)
            session: Session the statements run on

        Returns:
            BatchResult, falsy when the file could not be read or the batch
            was rolled back
        """
        path = Path(path).expanduser()
        sql_text = read_script(path, self.encoding)
        if sql_text is None:
            return BatchResult(committed=False, error=f"Could not read script {path}")
        logger.info(f"Importing {path} ({len(sql_text)} chars)")

        sql_text = strip_line_comments(sql_text)
        outcome = DelimiterDirectiveParser(session.delimiters).parse_batch(
            sql_text, session.connection_id
        )
        statements = [stmt.text for stmt in split_statements(outcome.sql)]

        result = session.run_batch(statements)
        if result:
            logger.info(f"Imported {path}: {result.executed} statement(s)")
        else:
            logger.warning(f"Import of {path} rolled back at statement "
                           f"{result.failed_index}: {result.error}")
        return result
