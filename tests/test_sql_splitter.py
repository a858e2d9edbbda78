"""
Unit tests for statement splitting and cursor selection.
"""
import pytest

from querydesk.utils.sql_splitter import (
    is_batch_body,
    normalize_delimiter,
    split_statements,
    statement_at_cursor,
    strip_line_comments,
)


def texts(statements):
    return [stmt.text for stmt in statements]


class TestSplitStatements:
    """Test split_statements boundaries."""

    def test_unquoted_text_matches_naive_split(self):
        """Without quotes, splitting equals a plain split on ';'."""
        sql = "SELECT 1; SELECT 2;\nUPDATE t SET a = 1 ; DELETE FROM t"
        naive = [part.strip() for part in sql.split(";") if part.strip()]
        assert texts(split_statements(sql)) == naive

    def test_quoted_separator_is_not_a_boundary(self):
        assert texts(split_statements("SELECT ';' ; SELECT 2;")) == ["SELECT ';'", "SELECT 2"]

    def test_double_quoted_separator_is_not_a_boundary(self):
        sql = 'SELECT "a;b" FROM t; SELECT 2'
        assert texts(split_statements(sql)) == ['SELECT "a;b" FROM t', "SELECT 2"]

    def test_mixed_quotes(self):
        sql = """INSERT INTO t VALUES ('it"s;', "x';y"); SELECT 1"""
        assert texts(split_statements(sql)) == [
            """INSERT INTO t VALUES ('it"s;', "x';y")""",
            "SELECT 1",
        ]

    def test_unterminated_quote_does_not_raise(self):
        assert texts(split_statements("SELECT 'abc; SELECT 2")) == ["SELECT 'abc", "SELECT 2"]

    def test_empty_input(self):
        assert split_statements("") == []
        assert split_statements("   \n  ") == []
        assert split_statements(";;;") == []

    def test_trigger_body_is_never_split(self):
        sql = "  CREATE TRIGGER t BEFORE INSERT BEGIN SET x = 1; END;  "
        statements = split_statements(sql)
        assert len(statements) == 1
        assert statements[0].text == sql.strip()

    @pytest.mark.parametrize("keyword", ["PROCEDURE", "function", "Trigger"])
    def test_routine_keywords_are_case_insensitive(self, keyword):
        sql = f"CREATE {keyword} p() BEGIN SELECT 1; SELECT 2; END"
        assert len(split_statements(sql)) == 1

    def test_keyword_must_be_a_whole_word(self):
        sql = "SELECT functional FROM procedures_log; SELECT 2"
        assert texts(split_statements(sql)) == ["SELECT functional FROM procedures_log", "SELECT 2"]

    def test_custom_delimiter_matches_default(self):
        custom = texts(split_statements("SELECT 1$$ SELECT 2$$", delimiter="$$"))
        default = texts(split_statements("SELECT 1; SELECT 2;"))
        assert custom == default == ["SELECT 1", "SELECT 2"]

    def test_order_is_preserved(self):
        sql = "CREATE TABLE t (id INT); INSERT INTO t VALUES (1); SELECT * FROM t"
        assert texts(split_statements(sql)) == [
            "CREATE TABLE t (id INT)",
            "INSERT INTO t VALUES (1)",
            "SELECT * FROM t",
        ]

    def test_line_ranges(self):
        sql = "SELECT 1;\nSELECT 2;\n\nSELECT\n  3;"
        statements = split_statements(sql)
        assert [(s.line_start, s.line_end) for s in statements] == [(1, 1), (2, 2), (4, 5)]

    def test_raw_length_keeps_whitespace(self):
        statements = split_statements("SELECT 1;   SELECT 2  ")
        assert [s.raw_length for s in statements] == [8, 13]

    def test_select_detection(self):
        statements = split_statements(
            "SELECT 1; INSERT INTO t VALUES (1); WITH x AS (SELECT 1) SELECT * FROM x; SHOW TABLES"
        )
        assert [s.is_select for s in statements] == [True, False, True, True]


class TestStatementAtCursor:
    """Test statement_at_cursor selection."""

    @pytest.mark.parametrize("offset", [0, 4, 8, 100])
    def test_single_statement_ignores_cursor(self, offset):
        assert statement_at_cursor("SELECT 1", offset) == "SELECT 1"

    def test_single_statement_is_trimmed(self):
        assert statement_at_cursor("  SELECT 1;  ", 0) == "SELECT 1"

    def test_cursor_in_first_statement(self):
        assert statement_at_cursor("SELECT 1; SELECT 2;", 3) == "SELECT 1"

    def test_cursor_in_second_statement(self):
        assert statement_at_cursor("SELECT 1; SELECT 2;", 12) == "SELECT 2"

    def test_cursor_at_end(self):
        sql = "SELECT 1; SELECT 2;"
        assert statement_at_cursor(sql, len(sql)) == "SELECT 2"

    def test_cursor_past_end(self):
        assert statement_at_cursor("SELECT 1; SELECT 2;", 500) == "SELECT 2"

    def test_cursor_after_trailing_blank_lines(self):
        sql = "SELECT 1;\nSELECT 2;\n\n"
        assert statement_at_cursor(sql, len(sql)) == "SELECT 2"

    def test_cursor_with_quoted_separator(self):
        sql = "SELECT ';' ; SELECT 2;"
        assert statement_at_cursor(sql, 2) == "SELECT ';'"
        assert statement_at_cursor(sql, 16) == "SELECT 2"

    def test_nothing_to_execute(self):
        assert statement_at_cursor("", 0) == ""
        assert statement_at_cursor(";;", 1) == ""

    def test_routine_returns_whole_text(self):
        sql = "CREATE PROCEDURE p() BEGIN SELECT 1; SELECT 2; END;\n"
        assert statement_at_cursor(sql, 30) == sql.strip()

    def test_custom_delimiter_offsets_use_original_text(self):
        sql = "SELECT 1$$ SELECT 2$$"
        assert statement_at_cursor(sql, 5, delimiter="$$") == "SELECT 1"
        assert statement_at_cursor(sql, 14, delimiter="$$") == "SELECT 2"


class TestHelpers:
    """Test comment stripping, routine detection and delimiter normalization."""

    def test_strip_line_comments(self):
        sql = "-- header\nSELECT 1;\n   -- indented note\nSELECT 2; -- trailing stays"
        assert strip_line_comments(sql) == "SELECT 1;\nSELECT 2; -- trailing stays"

    def test_strip_line_comments_empty(self):
        assert strip_line_comments("") == ""
        assert strip_line_comments("-- only") == ""

    def test_is_batch_body(self):
        assert is_batch_body("create function f() returns int")
        assert not is_batch_body("SELECT * FROM functions_list")

    def test_normalize_delimiter_is_literal(self):
        assert normalize_delimiter("SELECT 1$$ SELECT 2$$", "$$") == "SELECT 1; SELECT 2;"
        assert normalize_delimiter("SELECT 1;", None) == "SELECT 1;"
        assert normalize_delimiter("a.b|c", "|") == "a.b;c"
