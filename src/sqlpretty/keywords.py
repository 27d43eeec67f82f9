"""Reserved-word tables for standard SQL.

Every entry is written with single spaces between words; the scanner accepts any run of whitespace between the words
of a multi-word keyword, so ``GROUP\\n  BY`` is recognised as ``GROUP BY``.  Matching is case-insensitive and longer
phrases win over their prefixes (``UNION ALL`` beats ``UNION``).
"""

from __future__ import annotations

from typing import Final

#: Clause starters.  Each one closes the previous clause and opens a new top-level indent.
RESERVED_COMMANDS: Final = (
    "ADD",
    "ALTER COLUMN",
    "ALTER TABLE",
    "CREATE TABLE",
    "CREATE VIEW",
    "CREATE OR REPLACE VIEW",
    "DELETE FROM",
    "DELETE",
    "DROP TABLE",
    "DROP VIEW",
    "FETCH FIRST",
    "FETCH NEXT",
    "FROM",
    "GROUP BY",
    "HAVING",
    "INSERT INTO",
    "INSERT",
    "LIMIT",
    "OFFSET",
    "ORDER BY",
    "PARTITION BY",
    "QUALIFY",
    "RETURNING",
    "SELECT ALL",
    "SELECT DISTINCT",
    "SELECT",
    "SET SCHEMA",
    "SET",
    "TRUNCATE TABLE",
    "UPDATE",
    "VALUES",
    "WHERE",
    "WINDOW",
    "WITH RECURSIVE",
    "WITH",
)

#: Set operations and joins.  Joins stay at the level of their surrounding clause.
RESERVED_BINARY_COMMANDS: Final = (
    "UNION ALL",
    "UNION DISTINCT",
    "UNION",
    "INTERSECT ALL",
    "INTERSECT DISTINCT",
    "INTERSECT",
    "EXCEPT ALL",
    "EXCEPT DISTINCT",
    "EXCEPT",
    "MINUS",
    "JOIN",
    "INNER JOIN",
    "LEFT JOIN",
    "LEFT OUTER JOIN",
    "RIGHT JOIN",
    "RIGHT OUTER JOIN",
    "FULL JOIN",
    "FULL OUTER JOIN",
    "CROSS JOIN",
    "NATURAL JOIN",
    "NATURAL LEFT JOIN",
    "NATURAL RIGHT JOIN",
    "NATURAL FULL JOIN",
    "CROSS APPLY",
    "OUTER APPLY",
)

RESERVED_DEPENDENT_CLAUSES: Final = ("WHEN", "ELSE")

RESERVED_JOIN_CONDITIONS: Final = ("ON", "USING")

RESERVED_LOGICAL_OPERATORS: Final = ("AND", "OR", "XOR")

RESERVED_CASE_START: Final = ("CASE",)

RESERVED_CASE_END: Final = ("END",)

RESERVED_KEYWORDS: Final = (
    "ALL",
    "ALTER",
    "ANY",
    "ARRAY",
    "AS",
    "ASC",
    "AUTO_INCREMENT",
    "BETWEEN",
    "BIGINT",
    "BINARY",
    "BOOLEAN",
    "BOTH",
    "BY",
    "CASCADE",
    "CAST",
    "CHAR",
    "CHARACTER",
    "CHECK",
    "COLLATE",
    "COLUMN",
    "CONSTRAINT",
    "CREATE",
    "CROSS",
    "CURRENT",
    "CURRENT_DATE",
    "CURRENT_TIME",
    "CURRENT_TIMESTAMP",
    "CURRENT_USER",
    "DATABASE",
    "DATE",
    "DECIMAL",
    "DEFAULT",
    "DESC",
    "DISTINCT",
    "DOUBLE",
    "DROP",
    "EXISTS",
    "EXTRACT",
    "FALSE",
    "FILTER",
    "FLOAT",
    "FOLLOWING",
    "FOR",
    "FOREIGN",
    "FULL",
    "GRANT",
    "GROUPS",
    "IF",
    "IGNORE",
    "ILIKE",
    "IN",
    "INDEX",
    "INNER",
    "INT",
    "INTEGER",
    "INTERVAL",
    "INTO",
    "IS",
    "KEY",
    "LATERAL",
    "LEADING",
    "LEFT",
    "LIKE",
    "LOCAL",
    "NATURAL",
    "NO",
    "NOT",
    "NULL",
    "NULLS",
    "NUMERIC",
    "OF",
    "ONLY",
    "OUTER",
    "OVER",
    "PRECEDING",
    "PRIMARY",
    "RANGE",
    "RECURSIVE",
    "REFERENCES",
    "REPLACE",
    "RESTRICT",
    "REVOKE",
    "RIGHT",
    "ROLLBACK",
    "ROW",
    "ROWS",
    "SCHEMA",
    "SIMILAR",
    "SMALLINT",
    "SOME",
    "TABLE",
    "TEMPORARY",
    "TEXT",
    "THEN",
    "TIME",
    "TIMESTAMP",
    "TO",
    "TRAILING",
    "TRUE",
    "UNBOUNDED",
    "UNIQUE",
    "UNKNOWN",
    "VARCHAR",
    "VIEW",
    "WITHIN",
    "WITHOUT",
    "ZONE",
)

#: Multi-character operators, longest first.  Anything else is scanned as a single-character operator.
OPERATORS: Final = (
    "->>",
    "#>>",
    "<=>",
    "!=",
    "<>",
    "<=",
    ">=",
    "==",
    "||",
    "::",
    "->",
    "#>",
    "=>",
    "<<",
    ">>",
    "@>",
    "<@",
    "&&",
    "!~",
    "~*",
)
