"""Line-oriented passes applied to the joined output of all statements.

These passes only move whitespace and commas around; they never reorder or drop tokens.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from sqlpretty import keywords
from sqlpretty.config import indent_string

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlpretty.config import FormatOptions

_SELECT_LINE_RE: Final = re.compile(r"^\s*SELECT\b", re.IGNORECASE)
_SELECT_KEYWORD_ONLY_RE: Final = re.compile(r"^\s*SELECT(?:\s+(?:ALL|DISTINCT))?\s*$", re.IGNORECASE)
_ALIAS_RE: Final = re.compile(
    r"^(?P<expr>.*?\S)\s+(?P<as>AS\s+)?(?P<alias>[\w\"`$]+)(?P<comma>,?)$",
    re.IGNORECASE,
)
_OPERAND_END_RE: Final = re.compile(r"[\w\"'`)\]]$")
_LEADING_WS_RE: Final = re.compile(r"^\s*")

_RESERVED_WORDS: Final = frozenset(
    word
    for table in (
        keywords.RESERVED_KEYWORDS,
        keywords.RESERVED_COMMANDS,
        keywords.RESERVED_BINARY_COMMANDS,
        keywords.RESERVED_DEPENDENT_CLAUSES,
        keywords.RESERVED_JOIN_CONDITIONS,
        keywords.RESERVED_LOGICAL_OPERATORS,
        keywords.RESERVED_CASE_START,
    )
    for phrase in table
    for word in phrase.split()
)


def apply_layout(query: str, options: FormatOptions) -> str:
    """Run the alias and comma passes selected by *options* over formatted text."""
    if options.tabulate_alias:
        query = tabulate_aliases(query)
    if options.comma_position in ("before", "tabular"):
        query = format_comma_positions(query, options)
    return query


# ── Comma position ────────────────────────────────────────────────


def format_comma_positions(query: str, options: FormatOptions) -> str:
    """Rewrite every run of comma-terminated lines into leading (``"before"``) or aligned (``"tabular"``) commas."""
    indent = indent_string(options)
    lines: list[str] = []
    for group in _group_comma_delimited_lines(query.split("\n")):
        if len(group) == 1:
            lines.extend(group)
        elif options.comma_position == "tabular":
            lines.extend(_format_tabular(group))
        else:
            lines.extend(_format_before(group, indent))
    return "\n".join(lines)


def _group_comma_delimited_lines(lines: Sequence[str]) -> list[list[str]]:
    """Group each run of lines ending with a comma together with the line that ends the run."""
    groups: list[list[str]] = []
    i = 0
    while i < len(lines):
        group = [lines[i]]
        while lines[i].endswith(",") and i + 1 < len(lines):
            i += 1
            group.append(lines[i])
        groups.append(group)
        i += 1
    return groups


def _format_tabular(lines: Sequence[str]) -> list[str]:
    width = max(len(line) for line in lines)
    trimmed = [_trim_trailing_comma(line) for line in lines]
    result = [line + " " * (width - len(line) - 1) + "," for line in trimmed[:-1]]
    result.append(trimmed[-1])
    return result


def _format_before(lines: Sequence[str], indent: str) -> list[str]:
    comma_indent = indent[:-2] + ", " if len(indent) >= 2 else ", "
    trimmed = [_trim_trailing_comma(line) for line in lines]
    result = [trimmed[0]]
    for line in trimmed[1:]:
        whitespace = _LEADING_WS_RE.match(line).group()  # type: ignore[union-attr]
        if indent and whitespace.endswith(indent):
            whitespace = whitespace[: -len(indent)]
        result.append(whitespace + comma_indent + line.lstrip())
    return result


def _trim_trailing_comma(line: str) -> str:
    return line[:-1] if line.endswith(",") else line


# ── Alias tabulation ──────────────────────────────────────────────


def tabulate_aliases(query: str) -> str:
    """Align the aliases of every multi-line SELECT list into one column.

    Example::

        SELECT                     SELECT
          id,                        id,
          first_name AS name,  ->    first_name AS name,
          count(*) total             count(*)   total
    """
    lines = query.split("\n")
    out: list[str] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if not _SELECT_LINE_RE.match(line):
            out.append(line)
            i += 1
            continue

        if _SELECT_KEYWORD_ONLY_RE.match(line):
            out.append(line)
            i += 1
        elif not line.endswith(","):
            # Single-line SELECT list: nothing to align.
            out.append(line)
            i += 1
            continue

        group: list[str] = []
        while i < len(lines):
            group.append(lines[i])
            i += 1
            if not group[-1].endswith(","):
                break
        if group:
            out.extend(_align_aliases(group))
    return "\n".join(out)


def _split_alias(line: str) -> tuple[str, str, str, str] | None:
    """Split ``expr [AS] alias[,]`` into its parts, or return ``None`` when the line has no alias."""
    m = _ALIAS_RE.match(line)
    if m is None:
        return None
    expr, as_kw, alias, comma = m.group("expr", "as", "alias", "comma")
    if alias.upper() in _RESERVED_WORDS:
        return None
    if not as_kw:
        last_word = expr.rsplit(None, 1)[-1]
        if not _OPERAND_END_RE.search(expr) or last_word.upper() in _RESERVED_WORDS:
            return None
    return expr, as_kw.rstrip() + " " if as_kw else "", alias, comma


def _align_aliases(lines: Sequence[str]) -> list[str]:
    splits = [_split_alias(line) for line in lines]
    width = max(
        len(parts[0]) if parts is not None else len(_trim_trailing_comma(line)) for line, parts in zip(lines, splits)
    )
    result: list[str] = []
    for line, parts in zip(lines, splits):
        if parts is None:
            result.append(line)
            continue
        expr, as_kw, alias, comma = parts
        result.append(expr + " " * (width - len(expr) + 1) + as_kw + alias + comma)
    return result
