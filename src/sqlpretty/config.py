"""Formatting options and their validation."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Final, Literal, TypeAlias, Union

from sqlpretty.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

KeywordCase: TypeAlias = Literal["preserve", "upper", "lower"]
IndentStyle: TypeAlias = Literal["standard", "tabular", "tabularLeft", "tabularRight"]
MultilineLists: TypeAlias = Union[Literal["always", "avoid", "expressionWidth"], int]
LogicalOperatorNewline: TypeAlias = Literal["before", "after"]
AliasMode: TypeAlias = Literal["preserve", "always", "never", "select"]
CommaPosition: TypeAlias = Literal["after", "before", "tabular"]

#: Width of one indent unit in the tabular styles; keywords are padded to one column less than this.
TABULAR_INDENT_WIDTH: Final = 10

_CHOICES: Final[Mapping[str, tuple[str, ...]]] = {
    "keyword_case": ("preserve", "upper", "lower"),
    "indent_style": ("standard", "tabular", "tabularLeft", "tabularRight"),
    "logical_operator_newline": ("before", "after"),
    "alias_as": ("preserve", "always", "never", "select"),
    "comma_position": ("after", "before", "tabular"),
}

_MULTILINE_LIST_MODES: Final = ("always", "avoid", "expressionWidth")


@dataclasses.dataclass(frozen=True)
class FormatOptions:
    """User-selectable style rules.

    Instances are immutable; derive variants with :func:`dataclasses.replace` or pass keyword overrides to
    :func:`~sqlpretty.format_sql`.

    Attributes:
        keyword_case: Case applied to reserved words: ``"preserve"``, ``"upper"`` or ``"lower"``.
        indent_style: ``"standard"`` indents by ``tab_width``; ``"tabularLeft"``/``"tabularRight"`` (``"tabular"``
            is an alias of ``"tabularLeft"``) align clause keywords into a fixed 10-column gutter.
        tab_width: Number of spaces per indent level in the standard style.
        use_tabs: Indent with tab characters instead of spaces.
        expression_width: Column budget used to decide whether a clause or parenthesized group fits on one line.
        multiline_lists: ``"always"`` breaks every list, ``"avoid"`` never does, ``"expressionWidth"`` breaks when a
            clause is wider than ``expression_width``, and an integer *N* breaks when a clause has more than *N*
            items or is too wide.
        logical_operator_newline: Put ``AND``/``OR`` at the start (``"before"``) or end (``"after"``) of lines.
        alias_as: ``"preserve"``, ``"always"``, ``"never"`` or ``"select"`` handling of the ``AS`` alias keyword.
        tabulate_alias: Align column aliases of multi-line SELECT lists into one column.
        comma_position: ``"after"`` (trailing), ``"before"`` (leading) or ``"tabular"`` (aligned trailing) commas.
        dense_operators: Drop the spaces around binary operators.
        newline_before_open_paren: Keep existing line breaks before ``(``; when ``False`` they collapse to a space.
        newline_before_close_paren: Put the ``)`` of a multi-line group on its own line.
        newline_before_semicolon: Put the terminating ``;`` on its own line.
        lines_between_queries: Blank lines between consecutive statements.
        params: Values substituted for placeholders: a sequence for ``?`` and a mapping for ``:name`` / ``$1``.
            ``None`` leaves placeholders untouched.
    """

    keyword_case: KeywordCase = "preserve"
    indent_style: IndentStyle = "standard"
    tab_width: int = 2
    use_tabs: bool = False
    expression_width: int = 50
    multiline_lists: MultilineLists = "always"
    logical_operator_newline: LogicalOperatorNewline = "before"
    alias_as: AliasMode = "preserve"
    tabulate_alias: bool = False
    comma_position: CommaPosition = "after"
    dense_operators: bool = False
    newline_before_open_paren: bool = True
    newline_before_close_paren: bool = True
    newline_before_semicolon: bool = False
    lines_between_queries: int = 1
    params: Sequence[object] | Mapping[str, object] | None = None


def validate_options(options: FormatOptions) -> FormatOptions:
    """Check *options* for invalid values.

    Args:
        options: The options to check.

    Returns:
        *options* unchanged, so calls can be chained.

    Raises:
        ConfigError: If any option holds an unsupported value.
    """
    for name, choices in _CHOICES.items():
        value = getattr(options, name)
        if value not in choices:
            raise ConfigError(f"{name} must be one of {', '.join(choices)}; got {value!r}", option=name)

    if not _is_int(options.expression_width) or options.expression_width <= 0:
        raise ConfigError(
            f"expression_width must be a positive integer; got {options.expression_width!r}",
            option="expression_width",
        )
    for name in ("tab_width", "lines_between_queries"):
        value = getattr(options, name)
        if not _is_int(value) or value < 0:
            raise ConfigError(f"{name} must be a non-negative integer; got {value!r}", option=name)

    lists = options.multiline_lists
    if isinstance(lists, str):
        if lists not in _MULTILINE_LIST_MODES:
            raise ConfigError(
                f"multiline_lists must be one of {', '.join(_MULTILINE_LIST_MODES)} or an integer; got {lists!r}",
                option="multiline_lists",
            )
    elif not _is_int(lists) or lists < 0:
        raise ConfigError(
            f"multiline_lists threshold must be a non-negative integer; got {lists!r}", option="multiline_lists"
        )

    if options.use_tabs and options.comma_position == "before":
        raise ConfigError("comma_position='before' cannot be combined with use_tabs", option="comma_position")
    return options


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_tabular_style(options: FormatOptions) -> bool:
    return options.indent_style != "standard"


def tabular_alignment(options: FormatOptions) -> Literal["left", "right"]:
    """Return which side tabular keywords are aligned to (``"tabular"`` aligns left)."""
    return "right" if options.indent_style == "tabularRight" else "left"


def indent_string(options: FormatOptions) -> str:
    """Return the text of a single indent unit for *options*."""
    if is_tabular_style(options):
        return " " * TABULAR_INDENT_WIDTH
    if options.use_tabs:
        return "\t"
    return " " * options.tab_width
