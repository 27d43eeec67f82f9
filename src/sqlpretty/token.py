"""Token model shared by the scanner, the statement splitter, and the formatter."""

from __future__ import annotations

import enum
import re
from typing import TYPE_CHECKING, Final, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Callable


class TokenType(enum.Enum):
    """Lexical category of a token."""

    WORD = "word"
    STRING = "string"
    NUMBER = "number"
    RESERVED_KEYWORD = "reserved_keyword"
    RESERVED_LOGICAL_OPERATOR = "reserved_logical_operator"
    RESERVED_DEPENDENT_CLAUSE = "reserved_dependent_clause"
    RESERVED_BINARY_COMMAND = "reserved_binary_command"
    RESERVED_COMMAND = "reserved_command"
    RESERVED_JOIN_CONDITION = "reserved_join_condition"
    RESERVED_CASE_START = "reserved_case_start"
    RESERVED_CASE_END = "reserved_case_end"
    OPERATOR = "operator"
    BLOCK_START = "block_start"
    BLOCK_END = "block_end"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    PLACEHOLDER = "placeholder"
    EOF = "eof"


class Token(NamedTuple):
    """A single lexical token.

    Attributes:
        type: Lexical category.
        value: Literal source text of the token.
        whitespace_before: Whitespace that separated this token from the previous one in the source.
        key: Lookup key for placeholders (``"name"`` for ``:name``, ``"1"`` for ``$1``), ``None`` otherwise.
    """

    type: TokenType
    value: str
    whitespace_before: str = ""
    key: str | None = None


#: Sentinel returned by look-ahead/look-behind probes that run off either end of the token stream.
EOF_TOKEN: Final = Token(TokenType.EOF, "")

_RESERVED_TYPES: Final = frozenset(
    {
        TokenType.RESERVED_KEYWORD,
        TokenType.RESERVED_LOGICAL_OPERATOR,
        TokenType.RESERVED_DEPENDENT_CLAUSE,
        TokenType.RESERVED_BINARY_COMMAND,
        TokenType.RESERVED_COMMAND,
        TokenType.RESERVED_JOIN_CONDITION,
        TokenType.RESERVED_CASE_START,
        TokenType.RESERVED_CASE_END,
    }
)


def is_reserved(token: Token) -> bool:
    return token.type in _RESERVED_TYPES


def is_command(token: Token) -> bool:
    """Return ``True`` for clause-starting tokens (commands and binary commands)."""
    return token.type in (TokenType.RESERVED_COMMAND, TokenType.RESERVED_BINARY_COMMAND)


def _test_token(token_type: TokenType, pattern: str) -> Callable[[Token], bool]:
    regex = re.compile(pattern, re.IGNORECASE)

    def test(token: Token) -> bool:
        return token.type is token_type and regex.match(token.value) is not None

    return test


class is_token:  # noqa: N801
    """Namespace of predicates that recognise specific reserved tokens regardless of case."""

    AS = staticmethod(_test_token(TokenType.RESERVED_KEYWORD, r"^AS$"))
    AND = staticmethod(_test_token(TokenType.RESERVED_LOGICAL_OPERATOR, r"^AND$"))
    BETWEEN = staticmethod(_test_token(TokenType.RESERVED_KEYWORD, r"^BETWEEN$"))
    CASE = staticmethod(_test_token(TokenType.RESERVED_CASE_START, r"^CASE$"))
    CAST = staticmethod(_test_token(TokenType.RESERVED_KEYWORD, r"^CAST$"))
    END = staticmethod(_test_token(TokenType.RESERVED_CASE_END, r"^END$"))
    LIMIT = staticmethod(_test_token(TokenType.RESERVED_COMMAND, r"^LIMIT$"))
    # Matches multi-word forms such as ``SELECT DISTINCT`` as well.
    SELECT = staticmethod(_test_token(TokenType.RESERVED_COMMAND, r"^SELECT\b"))
