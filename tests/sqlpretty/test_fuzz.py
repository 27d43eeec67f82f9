"""Property-based fuzz tests for the scanner and the formatter.

All tests in this module are marked ``@pytest.mark.fuzz`` so they are
excluded from the default test run.  Use ``pytest -m fuzz`` to execute.
"""

from __future__ import annotations

import os

import pytest

hypothesis = pytest.importorskip("hypothesis")
from hypothesis import given, settings
from hypothesis import strategies as st

from sqlpretty import SqlFormatError, TokenType, format_sql, scan, split

from .conftest import assert_idempotent, make_formatter

pytestmark = pytest.mark.fuzz

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

MAX_EXAMPLES = int(os.environ.get("HYPOTHESIS_MAX_EXAMPLES", "500"))

# ---------------------------------------------------------------------------
# SQL-biased input strategy
# ---------------------------------------------------------------------------

_SQL_KEYWORDS = [
    "SELECT",
    "FROM",
    "WHERE",
    "JOIN",
    "LEFT JOIN",
    "ON",
    "AND",
    "OR",
    "NOT",
    "AS",
    "GROUP BY",
    "ORDER BY",
    "LIMIT",
    "UNION",
    "BETWEEN",
    "CASE",
    "WHEN",
    "THEN",
    "ELSE",
    "END",
    "CAST",
    "WITH",
]

_SQL_PUNCTUATION = [";", "(", ")", ",", ".", "::", "=", "<>", "+", "*", "--", "/*", "*/", "'", "?", ":x", "$1"]

_sql_fragment = st.lists(
    st.one_of(
        st.sampled_from(_SQL_KEYWORDS),
        st.sampled_from(_SQL_PUNCTUATION),
        st.from_regex(r"[a-z_][a-z0-9_]{0,8}", fullmatch=True),
        st.integers(0, 9999).map(str),
    ),
    min_size=1,
    max_size=30,
).map(" ".join)

sql_input = st.one_of(st.text(), _sql_fragment)


def _is_plain_identifier(text: str) -> bool:
    tokens = scan(text)
    return len(tokens) == 1 and tokens[0].type is TokenType.WORD


_identifier = st.from_regex(r"[a-z][a-z0-9_]{0,8}", fullmatch=True).filter(_is_plain_identifier)
_number = st.integers(0, 999).map(str)
_condition = st.one_of(
    st.builds("{} = {}".format, _identifier, _number),
    st.builds("{} BETWEEN {} AND {}".format, _identifier, _number, _number),
    st.builds(
        lambda col, values: f"{col} IN ({', '.join(values)})",
        _identifier,
        st.lists(_number, min_size=1, max_size=4),
    ),
)


@st.composite
def simple_select(draw: st.DrawFn) -> str:
    columns = draw(st.lists(_identifier, min_size=1, max_size=5))
    table = draw(_identifier)
    conditions = draw(st.lists(_condition, min_size=0, max_size=3))
    sql = f"SELECT {', '.join(columns)} FROM {table}"
    if conditions:
        sql += " WHERE " + draw(st.sampled_from([" AND ", " OR "])).join(conditions)
    return sql


# ---------------------------------------------------------------------------
# Totality
# ---------------------------------------------------------------------------


class TestScanFuzz:
    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=sql_input)
    def test_tokens_reconstruct_input(self, sql: str) -> None:
        tokens = scan(sql)
        assert "".join(t.whitespace_before + t.value for t in tokens) == sql.rstrip()

    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=sql_input)
    def test_statements_are_never_empty(self, sql: str) -> None:
        for statement in split(scan(sql)):
            assert statement.tokens
            assert all(t.value != ";" or t.type is not TokenType.OPERATOR for t in statement.tokens[:-1])


class TestFormatFuzz:
    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=sql_input)
    def test_format_does_not_crash(self, sql: str) -> None:
        try:
            result = format_sql(sql)
            assert isinstance(result, str)
        except SqlFormatError:
            pass

    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=sql_input)
    def test_layout_passes_do_not_crash(self, sql: str) -> None:
        try:
            result = format_sql(sql, comma_position="before", tabulate_alias=True, indent_style="tabularLeft")
            assert isinstance(result, str)
        except SqlFormatError:
            pass


# ---------------------------------------------------------------------------
# Properties of well-formed queries
# ---------------------------------------------------------------------------


class TestSimpleSelectProperties:
    @settings(max_examples=MAX_EXAMPLES)
    @given(
        sql=simple_select(),
        mode=st.sampled_from(["always", "avoid"]),
        style=st.sampled_from(["standard", "tabularLeft", "tabularRight"]),
    )
    def test_idempotent(self, sql: str, mode: str, style: str) -> None:
        assert_idempotent(sql, multiline_lists=mode, indent_style=style)

    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=simple_select(), mode=st.sampled_from(["always", "avoid"]))
    def test_blocks_balanced(self, sql: str, mode: str) -> None:
        formatter = make_formatter(multiline_lists=mode)
        formatter.format(split(scan(sql))[0])
        assert formatter._indentation.block_depth == 0
        assert not formatter._inline_block.is_active()

    @settings(max_examples=MAX_EXAMPLES)
    @given(sql=simple_select())
    def test_tokens_preserved(self, sql: str) -> None:
        before = [t.value.upper() for t in scan(sql)]
        after = [t.value.upper() for t in scan(format_sql(sql, keyword_case="upper"))]
        assert before == after
