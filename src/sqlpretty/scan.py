"""SQL scanning/tokenization into the token model consumed by the formatter."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from sqlpretty import keywords
from sqlpretty.token import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Iterable


def _reserved_word_regex(words: Iterable[str]) -> re.Pattern[str]:
    """Compile an alternation of (possibly multi-word) keywords, longest first, ending on a word boundary."""
    alternatives = sorted(words, key=len, reverse=True)
    body = "|".join(r"\s+".join(re.escape(part) for part in word.split()) for word in alternatives)
    return re.compile(rf"(?:{body})(?![\w$])", re.IGNORECASE)


_WHITESPACE_RE: Final = re.compile(r"\s+")
_LINE_COMMENT_RE: Final = re.compile(r"--[^\r\n]*")
_BLOCK_COMMENT_RE: Final = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_STRING_RE: Final = re.compile(
    r"""[ENXB]?'(?:[^']|'')*(?:'|\Z)|"(?:[^"]|"")*(?:"|\Z)|`(?:[^`]|``)*(?:`|\Z)""",
    re.IGNORECASE,
)
_MULTI_CHAR_OPERATOR_RE: Final = re.compile("|".join(re.escape(op) for op in keywords.OPERATORS))
_POSITIONAL_PLACEHOLDER_RE: Final = re.compile(r"\?(\d*)")
_NUMBERED_PLACEHOLDER_RE: Final = re.compile(r"\$(\d+)")
_NAMED_PLACEHOLDER_RE: Final = re.compile(r"[:@]([A-Za-z_]\w*)")
_NUMBER_RE: Final = re.compile(
    r"-?(?:0x[0-9a-f]+|0b[01]+|\d+(?:\.\d*)?(?:e[-+]?\d+)?|\.\d+(?:e[-+]?\d+)?)(?!\w)",
    re.IGNORECASE,
)
_WORD_RE: Final = re.compile(r"\w[\w$]*")

#: Reserved categories in matching priority order.
_RESERVED_PATTERNS: Final = (
    (TokenType.RESERVED_CASE_START, _reserved_word_regex(keywords.RESERVED_CASE_START)),
    (TokenType.RESERVED_CASE_END, _reserved_word_regex(keywords.RESERVED_CASE_END)),
    (TokenType.RESERVED_COMMAND, _reserved_word_regex(keywords.RESERVED_COMMANDS)),
    (TokenType.RESERVED_BINARY_COMMAND, _reserved_word_regex(keywords.RESERVED_BINARY_COMMANDS)),
    (TokenType.RESERVED_DEPENDENT_CLAUSE, _reserved_word_regex(keywords.RESERVED_DEPENDENT_CLAUSES)),
    (TokenType.RESERVED_LOGICAL_OPERATOR, _reserved_word_regex(keywords.RESERVED_LOGICAL_OPERATORS)),
    (TokenType.RESERVED_JOIN_CONDITION, _reserved_word_regex(keywords.RESERVED_JOIN_CONDITIONS)),
    (TokenType.RESERVED_KEYWORD, _reserved_word_regex(keywords.RESERVED_KEYWORDS)),
)

#: Token types after which a ``-`` is a binary minus rather than the sign of a number.
_OPERAND_END_TYPES: Final = frozenset(
    {
        TokenType.WORD,
        TokenType.STRING,
        TokenType.NUMBER,
        TokenType.PLACEHOLDER,
        TokenType.BLOCK_END,
        TokenType.RESERVED_CASE_END,
    }
)


def scan(sql: str) -> list[Token]:
    """Tokenize a SQL string into a list of tokens.

    The scanner is total: any character it does not otherwise recognise becomes a one-character ``OPERATOR`` token,
    and unterminated strings or block comments run to the end of the input.  Whitespace is not emitted as tokens;
    instead each token records the whitespace that preceded it in ``whitespace_before``.

    Args:
        sql: A SQL string containing zero or more statements.

    Returns:
        The tokens in source order.  Trailing whitespace after the last token is discarded.

    Example:
        >>> from sqlpretty import scan
        >>> [t.value for t in scan("select a, b from t")]
        ['select', 'a', ',', 'b', 'from', 't']
    """
    tokens: list[Token] = []
    pos = 0
    end = len(sql)
    while pos < end:
        ws = _WHITESPACE_RE.match(sql, pos)
        whitespace = ws.group() if ws else ""
        pos += len(whitespace)
        if pos >= end:
            break
        previous = tokens[-1] if tokens else None
        token_type, value, key = _next_token(sql, pos, previous)
        tokens.append(Token(token_type, value, whitespace, key))
        pos += len(value)
    return tokens


def _next_token(sql: str, pos: int, previous: Token | None) -> tuple[TokenType, str, str | None]:
    if m := _LINE_COMMENT_RE.match(sql, pos):
        return TokenType.LINE_COMMENT, m.group(), None
    if m := _BLOCK_COMMENT_RE.match(sql, pos):
        return TokenType.BLOCK_COMMENT, m.group(), None
    if m := _STRING_RE.match(sql, pos):
        return TokenType.STRING, m.group(), None

    char = sql[pos]
    if char == "(":
        return TokenType.BLOCK_START, char, None
    if char == ")":
        return TokenType.BLOCK_END, char, None

    if m := _MULTI_CHAR_OPERATOR_RE.match(sql, pos):
        return TokenType.OPERATOR, m.group(), None

    for regex in (_POSITIONAL_PLACEHOLDER_RE, _NUMBERED_PLACEHOLDER_RE, _NAMED_PLACEHOLDER_RE):
        if m := regex.match(sql, pos):
            return TokenType.PLACEHOLDER, m.group(), m.group(1) or None

    if m := _NUMBER_RE.match(sql, pos):
        value = m.group()
        if not (value.startswith("-") and previous is not None and previous.type in _OPERAND_END_TYPES):
            return TokenType.NUMBER, value, None

    # A word directly after "." is a column or schema member, never a keyword.
    if previous is None or previous.value != ".":
        for token_type, regex in _RESERVED_PATTERNS:
            if m := regex.match(sql, pos):
                return token_type, m.group(), None

    if m := _WORD_RE.match(sql, pos):
        return TokenType.WORD, m.group(), None

    return TokenType.OPERATOR, char, None
