"""Configurable, token-driven SQL pretty-printer."""

from sqlpretty.config import FormatOptions, validate_options
from sqlpretty.errors import ConfigError, ParamsError, SqlFormatError, UnbalancedBlockError
from sqlpretty.format import format_sql
from sqlpretty.format.statement import StatementFormatter
from sqlpretty.scan import scan
from sqlpretty.split import Statement, split
from sqlpretty.token import EOF_TOKEN, Token, TokenType

__all__ = [
    "ConfigError",
    "EOF_TOKEN",
    "format_sql",
    "FormatOptions",
    "ParamsError",
    "scan",
    "split",
    "SqlFormatError",
    "Statement",
    "StatementFormatter",
    "Token",
    "TokenType",
    "UnbalancedBlockError",
    "validate_options",
]
