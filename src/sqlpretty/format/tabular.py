"""Tabular keyword alignment.

In the tabular indent styles clause keywords are written into a fixed-width gutter::

    SELECT    a,
              b
    FROM      t
    LEFT      JOIN u ON ...

While a statement is being formatted, such keywords are kept in the output as :class:`TabularKeyword` spans rather
than padded text.  :func:`render` resolves them once the whole statement is known, padding every span to the width
of the longest keyword head actually used (never narrower than the gutter).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Literal, NamedTuple

from sqlpretty.config import TABULAR_INDENT_WIDTH

if TYPE_CHECKING:
    from collections.abc import Sequence

#: Keywords are padded to this many columns; the separating space completes one tabular indent unit.
KEYWORD_WIDTH: Final = TABULAR_INDENT_WIDTH - 1


class TabularKeyword(NamedTuple):
    """A keyword awaiting alignment.

    Attributes:
        head: Text placed in the gutter and padded.
        tail: Text following the gutter (``" OUTER JOIN"`` for ``LEFT OUTER JOIN``), or ``""``.
        align: ``"left"`` pads after *head*, ``"right"`` pads before it.
    """

    head: str
    tail: str
    align: Literal["left", "right"]


def to_tabular_keyword(text: str, align: Literal["left", "right"]) -> TabularKeyword:
    """Split a keyword into gutter and trailing text.

    Multi-word keywords that would not fit the gutter keep only their first word in it, so ``LEFT OUTER JOIN`` becomes
    ``LEFT`` + ``" OUTER JOIN"`` while ``ORDER BY`` stays whole.
    """
    if len(text) > KEYWORD_WIDTH and " " in text:
        head, _, rest = text.partition(" ")
        return TabularKeyword(head, " " + rest, align)
    return TabularKeyword(text, "", align)


def render(parts: Sequence[str | TabularKeyword]) -> str:
    """Join formatter output, padding every :class:`TabularKeyword` to a common width."""
    width = max([KEYWORD_WIDTH, *(len(p.head) for p in parts if isinstance(p, TabularKeyword))])
    out: list[str] = []
    for i, part in enumerate(parts):
        if isinstance(part, TabularKeyword):
            head = part.head.ljust(width) if part.align == "left" else part.head.rjust(width)
            text = head + part.tail
            following = parts[i + 1] if i + 1 < len(parts) else "\n"
            # Padding never ends a line.
            if isinstance(following, str) and following[:1] in ("\n", ""):
                text = text.rstrip(" ")
            out.append(text)
        else:
            out.append(part)
    return "".join(out)
