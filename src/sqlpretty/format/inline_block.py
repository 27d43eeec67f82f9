"""Detection of parenthesized groups that are short enough to stay on one line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlpretty.errors import UnbalancedBlockError
from sqlpretty.token import TokenType, is_token

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlpretty.token import Token

_FORBIDDEN_TYPES = frozenset(
    {
        TokenType.RESERVED_COMMAND,
        TokenType.RESERVED_BINARY_COMMAND,
        TokenType.RESERVED_LOGICAL_OPERATOR,
        TokenType.LINE_COMMENT,
        TokenType.BLOCK_COMMENT,
    }
)


class InlineBlock:
    """Tracks whether the formatter is inside a parenthesized group rendered on a single line.

    A group is inline when, measured from its ``(`` to the matching ``)``, the concatenated token text fits within
    ``expression_width`` and contains no clause keywords, boolean operators, comments, ``;`` or ``CASE``.  Once an
    inline group is open, every nested group is inline too.
    """

    def __init__(self, expression_width: int) -> None:
        self._expression_width = expression_width
        self._level = 0

    def begin_if_possible(self, tokens: Sequence[Token], index: int) -> None:
        """Evaluate the group opened by ``tokens[index]`` and enter inline mode if it fits."""
        if self._level == 0 and self._is_inline_block(tokens, index):
            self._level = 1
        elif self._level > 0:
            self._level += 1
        else:
            self._level = 0

    def end(self) -> None:
        """Leave the innermost inline group.

        Raises:
            UnbalancedBlockError: If no inline group is open.
        """
        if self._level == 0:
            raise UnbalancedBlockError("ending an inline block that was never begun")
        self._level -= 1

    def is_active(self) -> bool:
        return self._level > 0

    def _is_inline_block(self, tokens: Sequence[Token], index: int) -> bool:
        length = 0
        level = 0
        for token in tokens[index:]:
            length += len(token.value)
            if length > self._expression_width:
                return False
            if token.type is TokenType.BLOCK_START:
                level += 1
            elif token.type is TokenType.BLOCK_END:
                level -= 1
                if level == 0:
                    return True
            if self._is_forbidden_token(token):
                return False
        return False

    @staticmethod
    def _is_forbidden_token(token: Token) -> bool:
        return token.type in _FORBIDDEN_TYPES or token.value == ";" or is_token.CASE(token)
