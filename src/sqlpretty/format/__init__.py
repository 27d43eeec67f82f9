"""SQL pretty-printer that formats a token stream statement by statement."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from sqlpretty.config import FormatOptions, validate_options
from sqlpretty.errors import ConfigError
from sqlpretty.format.alias_as import AsTokenFactory
from sqlpretty.format.layout import apply_layout
from sqlpretty.format.params import Params
from sqlpretty.format.statement import StatementFormatter
from sqlpretty.scan import scan
from sqlpretty.split import split

logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(FormatOptions))


def format_sql(sql: str, options: FormatOptions | None = None, **overrides: Any) -> str:
    """Format a SQL string into a canonical, readable layout.

    Args:
        sql: A SQL string containing zero or more statements.
        options: Formatting options; defaults to :class:`~sqlpretty.FormatOptions` defaults.
        **overrides: Individual option values applied on top of *options*, e.g. ``keyword_case="upper"``.

    Returns:
        The formatted SQL.  Statements are separated by ``lines_between_queries`` blank lines and trailing whitespace
        is stripped.  An input without tokens yields ``""``.

    Raises:
        ConfigError: If an option is unknown or holds an invalid value.
        ParamsError: If ``params`` are given but a placeholder has no bound value.
        UnbalancedBlockError: If a closing bracket or ``END`` has no matching opener.

    Example:
        >>> from sqlpretty import format_sql
        >>> print(format_sql("select a, b from t where a = 1", keyword_case="upper", multiline_lists="avoid"))
        SELECT a, b
        FROM t
        WHERE a = 1
    """
    for name in overrides:
        if name not in _OPTION_NAMES:
            raise ConfigError(f"Unknown option {name!r}", option=name)
    opts = validate_options(dataclasses.replace(options or FormatOptions(), **overrides))

    tokens = scan(sql)
    statements = split(tokens)
    logger.debug("formatting %d statement(s), %d token(s)", len(statements), len(tokens))

    params = Params(opts.params)
    as_token_factory = AsTokenFactory(opts.keyword_case, tokens)
    parts: list[str] = []
    for statement in statements:
        formatter = StatementFormatter(opts, params, as_token_factory)
        parts.append(formatter.format(statement).rstrip())

    query = ("\n" * (opts.lines_between_queries + 1)).join(parts)
    return apply_layout(query, opts).rstrip()
