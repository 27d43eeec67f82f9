from __future__ import annotations

from typing import Any

import pytest

from sqlpretty import FormatOptions, Statement, StatementFormatter, Token, TokenType, format_sql, scan, split
from sqlpretty.format.alias_as import AsTokenFactory
from sqlpretty.format.params import Params

# -- Fixtures ------------------------------------------------------------------


@pytest.fixture
def select_statement() -> Statement:
    """Pre-tokenized ``select a, b from t where a = 1``."""
    return Statement(
        (
            Token(TokenType.RESERVED_COMMAND, "select"),
            Token(TokenType.WORD, "a", " "),
            Token(TokenType.OPERATOR, ","),
            Token(TokenType.WORD, "b", " "),
            Token(TokenType.RESERVED_COMMAND, "from", " "),
            Token(TokenType.WORD, "t", " "),
            Token(TokenType.RESERVED_COMMAND, "where", " "),
            Token(TokenType.WORD, "a", " "),
            Token(TokenType.OPERATOR, "=", " "),
            Token(TokenType.NUMBER, "1", " "),
        )
    )


# -- Helpers -------------------------------------------------------------------


def make_formatter(**overrides: Any) -> StatementFormatter:
    options = FormatOptions(**overrides)
    return StatementFormatter(options, Params(options.params), AsTokenFactory(options.keyword_case))


def format_statement(sql: str, **overrides: Any) -> str:
    """Format the first statement of *sql* with a bare StatementFormatter (no trimming, no layout passes)."""
    options = FormatOptions(**overrides)
    tokens = scan(sql)
    formatter = StatementFormatter(options, Params(options.params), AsTokenFactory(options.keyword_case, tokens))
    return formatter.format(split(tokens)[0])


def assert_idempotent(sql: str, **overrides: Any) -> None:
    """Assert that formatting already formatted SQL with the same options is a no-op."""
    once = format_sql(sql, **overrides)
    twice = format_sql(once, **overrides)
    assert once == twice, f"Formatting not stable:\n  input:  {sql!r}\n  once:   {once!r}\n  twice:  {twice!r}"
