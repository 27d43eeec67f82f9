"""Placeholder resolution."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from sqlpretty.errors import ParamsError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlpretty.token import Token


class Params:
    """Maps placeholder tokens to substitution text.

    Bare ``?`` placeholders consume values from a sequence in order; keyed placeholders (``:name``, ``@name``,
    ``$1``, ``?1``) look up their key in a mapping.  Numbered keys also index a sequence, 1-based.  Without params every
    placeholder is emitted as written.  One instance is shared by all statements of a single ``format_sql`` call, so
    positional numbering runs across statement boundaries.
    """

    def __init__(self, params: Sequence[object] | Mapping[str, object] | None) -> None:
        self._params = params
        self._index = 0

    def get(self, token: Token) -> str:
        """Return the substitution text for a placeholder token.

        Raises:
            ParamsError: If params were supplied but hold no value for *token*.
        """
        if self._params is None:
            return token.value
        if token.key is not None:
            return str(self._lookup_key(token))
        index = self._index
        self._index += 1
        if isinstance(self._params, Mapping) or index >= len(self._params):
            raise ParamsError(f"no value bound for positional placeholder #{index + 1}", index=index)
        return str(self._params[index])

    def _lookup_key(self, token: Token) -> object:
        key = token.key
        params = self._params
        if isinstance(params, Mapping):
            if key in params:
                return params[key]
        elif key is not None and key.isdigit() and 1 <= int(key) <= len(params):
            return params[int(key) - 1]
        raise ParamsError(f"no value bound for placeholder {token.value!r}", key=key)
