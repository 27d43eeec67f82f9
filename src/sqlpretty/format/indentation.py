"""Indentation tracker with independent top-level and block-level nesting."""

from __future__ import annotations

import enum

from sqlpretty.errors import UnbalancedBlockError


class _IndentType(enum.Enum):
    TOP_LEVEL = "top-level"
    BLOCK_LEVEL = "block-level"


class Indentation:
    """Stack of indent levels.

    Two kinds of level share one stack: *top-level* entries are opened by clause keywords (``SELECT``, ``FROM``, ...)
    and *block-level* entries by multi-line parenthesized groups and ``CASE`` expressions.  Closing a block also
    discards any top-level entries opened inside it, so a subquery's clauses never leak out of its parentheses.
    """

    def __init__(self, indent: str) -> None:
        """Create an empty tracker.

        Args:
            indent: Text of one indent unit (e.g. two spaces).
        """
        self._indent = indent
        self._levels: list[_IndentType] = []

    def get_single_indent(self) -> str:
        return self._indent

    def get_indent(self) -> str:
        return self._indent * len(self._levels)

    @property
    def block_depth(self) -> int:
        """Number of currently open block levels."""
        return self._levels.count(_IndentType.BLOCK_LEVEL)

    def increase_top_level(self) -> None:
        self._levels.append(_IndentType.TOP_LEVEL)

    def increase_block_level(self) -> None:
        self._levels.append(_IndentType.BLOCK_LEVEL)

    def decrease_top_level(self) -> None:
        """Close the innermost level if it is a top-level one; otherwise do nothing."""
        if self._levels and self._levels[-1] is _IndentType.TOP_LEVEL:
            self._levels.pop()

    def decrease_block_level(self) -> None:
        """Close the innermost block level together with any top-level levels opened inside it.

        Raises:
            UnbalancedBlockError: If no block level is open.
        """
        while self._levels:
            if self._levels.pop() is _IndentType.BLOCK_LEVEL:
                return
        raise UnbalancedBlockError("closing a block with no open block")
