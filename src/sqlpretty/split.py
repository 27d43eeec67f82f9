"""Splitting a token stream into individual statements."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from sqlpretty.token import TokenType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlpretty.token import Token


class Statement(NamedTuple):
    """The tokens of one SQL statement, including its terminating ``;`` when present."""

    tokens: tuple[Token, ...]


def split(tokens: Iterable[Token]) -> list[Statement]:
    """Split a token stream into statements.

    A statement ends right after each ``;`` operator token or at the end of the stream.  Statements without any tokens
    (the gap in ``;;``) are skipped.  Comments are kept with the statement in which they appear.

    Args:
        tokens: Tokens as produced by :func:`~sqlpretty.scan`.

    Returns:
        The statements in source order.

    Example:
        >>> from sqlpretty import scan, split
        >>> [len(s.tokens) for s in split(scan("SELECT 1; SELECT 2"))]
        [3, 2]
    """
    statements: list[Statement] = []
    current: list[Token] = []
    for token in tokens:
        if token.type is TokenType.OPERATOR and token.value == ";":
            if current:
                current.append(token)
                statements.append(Statement(tuple(current)))
            current = []
        else:
            current.append(token)
    if current:
        statements.append(Statement(tuple(current)))
    return statements
