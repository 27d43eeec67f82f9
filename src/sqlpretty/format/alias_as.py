"""Policies for inserting and removing the ``AS`` alias keyword."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from sqlpretty.token import Token, TokenType, is_command, is_token

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlpretty.config import AliasMode, KeywordCase


class TokenStream(Protocol):
    """Read-only view of the formatter's position in the token stream."""

    def token_look_behind(self, n: int = 1) -> Token: ...

    def token_look_ahead(self, n: int = 1) -> Token: ...

    def is_within_select(self) -> bool: ...

    def get_previous_reserved_token(self) -> Token: ...


class AliasAs:
    """Decides, token by token, whether an ``AS`` should be synthesized or dropped.

    Modes:

    * ``"preserve"`` leaves the input alone.
    * ``"always"`` adds ``AS`` before table/subquery aliases (a word following ``)``) and before SELECT column aliases.
    * ``"select"`` adds ``AS`` before SELECT column aliases and drops it after ``)`` outside SELECT, except in
      ``WITH name AS (``.
    * ``"never"`` drops every ``AS`` but keeps the one required by ``CAST(x AS type)``.
    """

    def __init__(self, alias_as: AliasMode, stream: TokenStream) -> None:
        self._alias_as = alias_as
        self._stream = stream

    def should_add_before(self, token: Token) -> bool:
        """Return ``True`` if an ``AS`` belongs right before *token*."""
        if self._alias_as not in ("always", "select"):
            return False
        prev = self._stream.token_look_behind()
        nxt = self._stream.token_look_ahead()
        if nxt.value == ")":
            return False

        missing_table_alias = self._alias_as == "always" and token.type is TokenType.WORD and prev.value == ")"
        missing_select_column_alias = (
            self._stream.is_within_select()
            and token.type is TokenType.WORD
            and (
                is_token.END(prev)
                or (
                    prev.type in (TokenType.WORD, TokenType.NUMBER)
                    and (nxt.value == "," or nxt.value == ";" or nxt.type is TokenType.EOF or is_command(nxt))
                )
            )
        )
        return missing_table_alias or missing_select_column_alias

    def should_add_after(self) -> bool:
        """Return ``True`` if an ``AS`` belongs right after the current token.

        Only happens in ``"never"`` mode, to put back the ``AS`` of ``CAST(x AS type)`` that :meth:`should_remove`
        drops.
        """
        return self._is_missing_type_cast_as()

    def should_remove(self) -> bool:
        """Return ``True`` if the current ``AS`` token should be dropped."""
        return self._alias_as == "never" or (self._alias_as == "select" and self._is_removable_non_select_as())

    def _is_missing_type_cast_as(self) -> bool:
        stream = self._stream
        return (
            self._alias_as == "never"
            and is_token.CAST(stream.get_previous_reserved_token())
            and is_token.AS(stream.token_look_ahead())
            and stream.token_look_ahead(2).type in (TokenType.WORD, TokenType.RESERVED_KEYWORD)
            and stream.token_look_ahead(3).value in (")", "(")
        )

    def _is_removable_non_select_as(self) -> bool:
        # ") AS alias" outside SELECT, but keep "WITH name AS (".
        return (
            self._stream.token_look_behind().value == ")"
            and not self._stream.is_within_select()
            and self._stream.token_look_ahead().value != "("
        )


class AsTokenFactory:
    """Builds the ``AS`` tokens synthesized by :class:`AliasAs`.

    Under ``keyword_case="preserve"`` the synthesized keyword follows the case used by the majority of ``AS`` tokens
    in the input: uppercase when more than half of them are spelled ``AS``, lowercase otherwise.
    """

    def __init__(self, keyword_case: KeywordCase, tokens: Iterable[Token] = ()) -> None:
        self._keyword_case = keyword_case
        self._detected_case = self._auto_detect_case(tokens)

    @staticmethod
    def _auto_detect_case(tokens: Iterable[Token]) -> str:
        as_tokens = [t for t in tokens if is_token.AS(t)]
        upper = sum(1 for t in as_tokens if t.value == "AS")
        return "upper" if upper > len(as_tokens) / 2 else "lower"

    def token(self) -> Token:
        keyword_case = self._detected_case if self._keyword_case == "preserve" else self._keyword_case
        return Token(TokenType.RESERVED_KEYWORD, "AS" if keyword_case == "upper" else "as", " ")
