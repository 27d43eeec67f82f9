"""Single-statement formatting engine.

:class:`StatementFormatter` walks the tokens of one statement left to right exactly once.  Each token is routed to a
``_format_<token type>`` renderer that appends to the output, consulting and updating a small amount of running
state:

* the current token index, read by look-ahead/look-behind probes;
* the last reserved token and the last command token seen;
* ``current_newline``, decided once at each clause keyword and reused by every comma and logical operator of that
  clause, so a clause is either broken item-per-line or kept on one line as a whole.

Indentation, inline parenthesized groups, alias handling and placeholder substitution are delegated to their own
collaborators.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from sqlpretty.config import indent_string, is_tabular_style, tabular_alignment
from sqlpretty.errors import UnbalancedBlockError
from sqlpretty.format.alias_as import AliasAs
from sqlpretty.format.indentation import Indentation
from sqlpretty.format.inline_block import InlineBlock
from sqlpretty.format.tabular import TabularKeyword, render, to_tabular_keyword
from sqlpretty.token import EOF_TOKEN, Token, TokenType, is_command, is_reserved, is_token

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlpretty.config import FormatOptions
    from sqlpretty.format.alias_as import AsTokenFactory
    from sqlpretty.format.params import Params
    from sqlpretty.split import Statement

logger = logging.getLogger(__name__)

#: Reserved token types written into the gutter in the tabular styles.
_TABULAR_TYPES: Final = frozenset(
    {
        TokenType.RESERVED_COMMAND,
        TokenType.RESERVED_BINARY_COMMAND,
        TokenType.RESERVED_DEPENDENT_CLAUSE,
        TokenType.RESERVED_LOGICAL_OPERATOR,
    }
)

#: Tokens after which an opening parenthesis keeps the whitespace in front of it.
_PRESERVE_WHITESPACE_BEFORE_PAREN: Final = frozenset(
    {TokenType.BLOCK_START, TokenType.LINE_COMMENT, TokenType.OPERATOR}
)

_WHITESPACE_RE: Final = re.compile(r"\s+")
_COMMENT_CONTINUATION_RE: Final = re.compile(r"\n[ \t]*")
_JOIN_RE: Final = re.compile(r"JOIN|APPLY", re.IGNORECASE)
_TRAILING_SPACES = " \t"


class StatementFormatter:
    """Formats a single SQL statement.

    An instance owns mutable state for the duration of one :meth:`format` call and must not be shared between
    concurrent calls.  :meth:`format` resets that state, so an instance may be reused sequentially.
    """

    def __init__(self, options: FormatOptions, params: Params, as_token_factory: AsTokenFactory) -> None:
        """Create a formatter.

        Args:
            options: Validated, read-only formatting options.
            params: Placeholder resolver, possibly shared with other statements of the same query.
            as_token_factory: Source of synthesized ``AS`` tokens.
        """
        self._options = options
        self._tabular = is_tabular_style(options)
        self._alignment = tabular_alignment(options)
        self._params = params
        self._as_token_factory = as_token_factory
        self._alias_as = AliasAs(options.alias_as, self)
        self._indentation = Indentation(indent_string(options))
        self._inline_block = InlineBlock(options.expression_width)

        self._current_newline = True
        self._previous_reserved_token: Token = EOF_TOKEN
        self._previous_command_token: Token = EOF_TOKEN
        self._tokens: Sequence[Token] = ()
        self._index = -1
        self._parts: list[str | TabularKeyword] = []

    def reset(self) -> None:
        self._indentation = Indentation(indent_string(self._options))
        self._inline_block = InlineBlock(self._options.expression_width)
        self._current_newline = True
        self._previous_reserved_token = EOF_TOKEN
        self._previous_command_token = EOF_TOKEN
        self._tokens = ()
        self._index = -1
        self._parts = []

    def format(self, statement: Statement) -> str:
        """Format *statement* and return the text.

        The result is not trimmed; callers joining several statements strip trailing whitespace themselves.

        Raises:
            ParamsError: If a placeholder cannot be resolved.
            UnbalancedBlockError: If a closing bracket or ``END`` has no matching opener.
        """
        self.reset()
        self._tokens = statement.tokens
        for index, token in enumerate(self._tokens):
            self._index = index
            if is_reserved(token):
                self._previous_reserved_token = token
                if token.type is TokenType.RESERVED_COMMAND:
                    self._previous_command_token = token
            handler = getattr(self, f"_format_{token.type.value}", self._format_word)
            handler(token)
        return render(self._parts)

    # ── Token stream probes ───────────────────────────────────────

    def token_look_behind(self, n: int = 1) -> Token:
        """Return the *n*-th previous token, or :data:`~sqlpretty.token.EOF_TOKEN` before the start."""
        i = self._index - n
        return self._tokens[i] if 0 <= i < len(self._tokens) else EOF_TOKEN

    def token_look_ahead(self, n: int = 1) -> Token:
        """Return the *n*-th next token, or :data:`~sqlpretty.token.EOF_TOKEN` past the end."""
        i = self._index + n
        return self._tokens[i] if 0 <= i < len(self._tokens) else EOF_TOKEN

    def get_previous_reserved_token(self) -> Token:
        return self._previous_reserved_token

    def is_within_select(self) -> bool:
        return is_token.SELECT(self._previous_command_token)

    # ── Newline decision ──────────────────────────────────────────

    def _tokens_until_next_command_or_query_end(self) -> Sequence[Token]:
        tail = self._tokens[self._index + 1 :]
        for i, token in enumerate(tail):
            if is_command(token) or token.value == ";":
                return tail[:i]
        return tail

    def _select_has_case(self, window: Sequence[Token]) -> bool:
        return self.is_within_select() and any(is_token.CASE(t) for t in window)

    def _check_newline(self, token: Token, window: Sequence[Token]) -> bool:
        """Decide whether the clause opened by *token* is broken into one item per line."""
        if self._select_has_case(window):
            return True

        mode = self._options.multiline_lists
        if mode == "always":
            return True
        if mode == "avoid":
            return False
        too_wide = _inline_width(token, window) > self._options.expression_width
        if mode == "expressionWidth":
            return too_wide
        return _count_clauses(window) > mode or too_wide

    # ── Renderers ─────────────────────────────────────────────────

    def _format_line_comment(self, token: Token) -> None:
        self._append(self._show(token))
        self._add_newline()

    def _format_block_comment(self, token: Token) -> None:
        self._add_newline()
        indent = self._indentation.get_indent() + " "
        self._append(_COMMENT_CONTINUATION_RE.sub(lambda _: "\n" + indent, token.value))
        self._add_newline()

    def _format_reserved_command(self, token: Token) -> None:
        window = self._tokens_until_next_command_or_query_end()
        self._current_newline = self._check_newline(token, window)
        # A keyword is followed by a line break only when it opens a list; LIMIT's "offset, count" is not one.
        break_after = self._current_newline and (
            self._select_has_case(window) or (_count_clauses(window) > 1 and not is_token.LIMIT(token))
        )
        logger.debug("clause %r: newline=%s break_after=%s", token.value, self._current_newline, break_after)

        self._indentation.decrease_top_level()
        self._add_newline()
        # In the tabular styles a keyword directly followed by "(" does not open an indent level.
        if not (self._tabular and self.token_look_ahead().value == "("):
            self._indentation.increase_top_level()

        self._append(self._keyword(token))
        if break_after and not self._tabular:
            self._add_newline()
        else:
            self._append(" ")

    def _format_reserved_binary_command(self, token: Token) -> None:
        is_join = _JOIN_RE.search(token.value) is not None
        if not is_join or self._tabular:
            self._indentation.decrease_top_level()
        self._add_newline()
        self._append(self._keyword(token))
        if is_join:
            self._append(" ")
        else:
            self._add_newline()

    def _format_reserved_dependent_clause(self, token: Token) -> None:
        self._add_newline()
        self._append(self._keyword(token))
        self._append(" ")

    def _format_reserved_join_condition(self, token: Token) -> None:
        self._append(self._keyword(token))
        self._append(" ")

    def _format_reserved_logical_operator(self, token: Token) -> None:
        # The AND of "BETWEEN x AND y" is not a boolean connective.
        if is_token.AND(token) and is_token.BETWEEN(self.token_look_behind(2)):
            self._format_with_spaces(token)
            return

        if self._tabular:
            self._indentation.decrease_top_level()

        if self._options.logical_operator_newline == "before":
            if self._current_newline:
                self._add_newline()
            self._append(self._keyword(token))
            self._append(" ")
        else:
            self._append(self._keyword(token))
            if self._current_newline:
                self._add_newline()
            else:
                self._append(" ")

    def _format_reserved_keyword(self, token: Token) -> None:
        if is_token.AS(token) and self._alias_as.should_remove():
            return
        self._format_with_spaces(token)

    def _format_block_start(self, token: Token) -> None:
        # Attach "(" to the preceding token unless the source separated them or the preceding token is itself an
        # opener, a line comment or an operator.
        previous = self.token_look_behind()
        if not token.whitespace_before and previous.type not in _PRESERVE_WHITESPACE_BEFORE_PAREN:
            if not self._at_line_start():
                self._trim_spaces_end()
        elif (
            not self._options.newline_before_open_paren
            and self._parts
            and previous.type is not TokenType.LINE_COMMENT
        ):
            self._trim_end()
            self._append(" ")
        self._append(self._show(token))

        self._inline_block.begin_if_possible(self._tokens, self._index)
        if not self._inline_block.is_active():
            self._indentation.increase_block_level()
            self._add_newline()

    def _format_block_end(self, token: Token) -> None:
        if self._inline_block.is_active():
            self._inline_block.end()
            self._format_with_space_after(token)
        else:
            self._format_multiline_block_end(token)

    def _format_reserved_case_start(self, token: Token) -> None:
        self._format_with_spaces(token)
        self._indentation.increase_block_level()
        if self._options.multiline_lists == "always":
            self._add_newline()

    def _format_reserved_case_end(self, token: Token) -> None:
        self._format_multiline_block_end(token)

    def _format_multiline_block_end(self, token: Token) -> None:
        if self._indentation.block_depth == 0:
            raise UnbalancedBlockError(f"{token.value!r} closes a block that was never opened", token=token)
        self._indentation.decrease_block_level()

        if self._tabular:
            self._add_newline()
            self._append(self._indentation.get_single_indent())
        elif self._options.newline_before_close_paren:
            self._add_newline()
        elif self.token_look_behind().type is TokenType.LINE_COMMENT:
            # A line comment runs to the end of its line, so ")" cannot join it.
            self._add_newline()
        else:
            self._trim_end()
            self._append(" ")
        self._format_with_spaces(token)

    def _format_placeholder(self, token: Token) -> None:
        self._append(self._params.get(token))
        self._append(" ")

    def _format_operator(self, token: Token) -> None:
        value = token.value
        if value == ",":
            self._format_comma(token)
        elif value == ";":
            self._format_query_separator(token)
        elif value in ("$", "["):
            self._append(self._show(token))
        elif value in (":", "]"):
            self._format_with_space_after(token)
        elif value in (".", "{", "}", "`", "::"):
            self._format_without_spaces(token)
        elif self._options.dense_operators and self.token_look_behind().type is not TokenType.RESERVED_COMMAND:
            # "SELECT *" keeps its space.
            if self._at_line_start():
                self._append(self._show(token))
            else:
                self._format_without_spaces(token)
        else:
            self._format_with_spaces(token)

    def _format_comma(self, token: Token) -> None:
        self._trim_spaces_end()
        self._append(self._show(token))
        self._append(" ")
        if self._inline_block.is_active() or is_token.LIMIT(self._previous_reserved_token):
            return
        if self._current_newline:
            self._add_newline()

    def _format_query_separator(self, token: Token) -> None:
        self._trim_spaces_end()
        if self._options.newline_before_semicolon:
            self._append("\n")
        self._append(self._show(token))

    def _format_word(self, token: Token) -> None:
        """Render identifiers, literals and anything without a dedicated renderer, inserting ``AS`` if required."""
        if self._alias_as.should_add_before(token):
            self._format_with_spaces(self._as_token_factory.token())
        self._format_with_spaces(token)
        if self._alias_as.should_add_after():
            self._format_with_spaces(self._as_token_factory.token())

    # ── Output helpers ────────────────────────────────────────────

    def _show(self, token: Token) -> str:
        """Return the token text with the configured keyword case applied to reserved words."""
        if not is_reserved(token):
            return token.value
        keyword_case = self._options.keyword_case
        if keyword_case == "upper":
            return token.value.upper()
        if keyword_case == "lower":
            return token.value.lower()
        return token.value

    def _keyword(self, token: Token) -> str | TabularKeyword:
        text = _WHITESPACE_RE.sub(" ", self._show(token))
        if self._tabular and token.type in _TABULAR_TYPES:
            return to_tabular_keyword(text, self._alignment)
        return text

    def _append(self, text: str | TabularKeyword) -> None:
        self._parts.append(text)

    def _format_with_spaces(self, token: Token) -> None:
        self._append(self._show(token))
        self._append(" ")

    def _format_without_spaces(self, token: Token) -> None:
        self._trim_spaces_end()
        self._append(self._show(token))

    def _format_with_space_after(self, token: Token) -> None:
        self._trim_spaces_end()
        self._append(self._show(token))
        self._append(" ")

    def _trim_spaces_end(self) -> None:
        self._trim(_TRAILING_SPACES)

    def _trim_end(self) -> None:
        self._trim(None)

    def _trim(self, chars: str | None) -> None:
        parts = self._parts
        while parts and isinstance(parts[-1], str):
            trimmed = parts[-1].rstrip(chars)
            if trimmed:
                parts[-1] = trimmed
                return
            parts.pop()

    def _at_line_start(self) -> bool:
        """Return ``True`` if only indentation has been written since the last line break."""
        for part in reversed(self._parts):
            if not isinstance(part, str):
                return False
            line_start = part.rfind("\n")
            if part[line_start + 1 :].strip(_TRAILING_SPACES):
                return False
            if line_start >= 0:
                return True
        return True

    def _add_newline(self) -> None:
        """End the current line (never producing a blank line) and write the current indent."""
        self._trim_spaces_end()
        last = self._parts[-1] if self._parts else None
        if last is not None and not (isinstance(last, str) and last.endswith("\n")):
            self._append("\n")
        self._append(self._indentation.get_indent())


def _inline_width(token: Token, window: Sequence[Token]) -> int:
    """Width of a clause written on one line: commas are followed by a space, other tokens are concatenated."""
    rest = "".join(t.value + " " if t.value == "," else t.value for t in window)
    return len(f"{token.whitespace_before}{token.value} {rest}")


def _count_clauses(window: Sequence[Token]) -> int:
    """Count top-level comma-separated items; commas inside brackets do not count and there is always one item."""
    count = 1
    open_blocks = 0
    for token in window:
        if token.value == "," and open_blocks == 0:
            count += 1
        if token.type is TokenType.BLOCK_START:
            open_blocks += 1
        elif token.type is TokenType.BLOCK_END:
            open_blocks -= 1
    return count
