"""Error handling for sqlpretty.

Every exception raised by the package derives from :class:`SqlFormatError`, so callers can catch one type.  The
subclasses carry structured keyword-only fields describing what went wrong, so diagnostics do not have to parse the
message string.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlpretty.token import Token


class SqlFormatError(Exception):
    """Base class for every error raised by sqlpretty.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(SqlFormatError):
    """Raised when :class:`~sqlpretty.FormatOptions` holds an invalid value.

    Attributes:
        message: Human-readable error description.
        option: Name of the offending option (snake_case), e.g. ``"expression_width"``.

    Examples:
        >>> from sqlpretty import ConfigError, format_sql
        >>> try:
        ...     format_sql("SELECT 1", expression_width=0)
        ... except ConfigError as e:
        ...     print(e.option)
        expression_width
    """

    def __init__(self, message: str, *, option: str) -> None:
        super().__init__(message)
        self.option = option


class ParamsError(SqlFormatError):
    """Raised when a placeholder has no bound value in the supplied ``params``.

    Formatting is all-or-nothing: when this is raised no partial output is produced.

    Attributes:
        message: Human-readable error description.
        key: The placeholder key (``"name"`` for ``:name``, ``"1"`` for ``$1``), or ``None`` for a bare ``?``.
        index: Zero-based position of a bare ``?`` among the positional placeholders, or ``None`` for keyed ones.
    """

    def __init__(self, message: str, *, key: str | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.key = key
        self.index = index


class UnbalancedBlockError(SqlFormatError):
    """Raised when a closing bracket or ``END`` has no open block to close.

    The formatter trusts its input to be well formed; nesting that would drive the block depth below zero is reported
    instead of being silently clamped.

    Attributes:
        message: Human-readable error description.
        token: The closing token that could not be matched, or ``None`` when unknown.
    """

    def __init__(self, message: str, *, token: Token | None = None) -> None:
        super().__init__(message)
        self.token = token
