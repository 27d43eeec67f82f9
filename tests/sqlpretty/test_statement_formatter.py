from __future__ import annotations

import logging

import pytest

from sqlpretty import EOF_TOKEN, ParamsError, UnbalancedBlockError, scan, split

from .conftest import format_statement, make_formatter


class TestClauseLayout:
    def test_avoid_keeps_lists_on_one_line(self, select_statement):
        formatter = make_formatter(keyword_case="upper", multiline_lists="avoid")
        assert formatter.format(select_statement).rstrip() == "SELECT a, b\nFROM t\nWHERE a = 1"

    def test_always_breaks_multi_item_lists(self, select_statement):
        formatter = make_formatter(keyword_case="upper", multiline_lists="always")
        assert formatter.format(select_statement).rstrip() == "SELECT\n  a,\n  b\nFROM t\nWHERE a = 1"

    def test_result_is_not_trimmed(self, select_statement):
        assert make_formatter().format(select_statement).endswith("1 ")

    def test_formatter_is_reusable(self, select_statement):
        formatter = make_formatter()
        assert formatter.format(select_statement) == formatter.format(select_statement)

    def test_threshold_counts_top_level_items(self):
        assert format_statement("SELECT a, b FROM t", multiline_lists=2).rstrip() == "SELECT a, b\nFROM t"
        result = format_statement("SELECT a, b, c FROM t", multiline_lists=2)
        assert result.rstrip() == "SELECT\n  a,\n  b,\n  c\nFROM t"

    def test_threshold_ignores_commas_in_brackets(self):
        assert format_statement("SELECT f(a, b, c) FROM t", multiline_lists=2).rstrip() == "SELECT f(a, b, c)\nFROM t"

    def test_expression_width(self):
        result = format_statement(
            "SELECT aaaa, bbbb, cccc FROM t", multiline_lists="expressionWidth", expression_width=20
        )
        assert result.rstrip() == "SELECT\n  aaaa,\n  bbbb,\n  cccc\nFROM t"
        result = format_statement("SELECT aaaa, bbbb FROM t", multiline_lists="expressionWidth", expression_width=20)
        assert result.rstrip() == "SELECT aaaa, bbbb\nFROM t"

    def test_limit_offset_list_stays_inline(self):
        assert format_statement("SELECT a LIMIT 1, 2").rstrip() == "SELECT a\nLIMIT 1, 2"

    @pytest.mark.parametrize("mode", ["avoid", 1])
    def test_limit_offset_list_ignores_list_mode(self, mode):
        assert format_statement("SELECT a LIMIT 1, 2", multiline_lists=mode).rstrip() == "SELECT a\nLIMIT 1, 2"

    def test_case_in_select_breaks_even_when_avoiding(self):
        result = format_statement("SELECT CASE WHEN a THEN 1 END FROM t", multiline_lists="avoid")
        assert result.rstrip() == "SELECT\n  CASE\n    WHEN a THEN 1\n  END\nFROM t"

    def test_threshold_breaks_on_width_under_item_count(self):
        result = format_statement("SELECT aaaaaaaaaa, bbbbbbbbbbbb FROM t", multiline_lists=5, expression_width=10)
        assert result.rstrip() == "SELECT\n  aaaaaaaaaa,\n  bbbbbbbbbbbb\nFROM t"


class TestLogicalOperators:
    def test_between_and_is_not_a_connective(self):
        result = format_statement("SELECT * FROM t WHERE a BETWEEN 1 AND 2 AND b = 3")
        assert result.rstrip() == "SELECT *\nFROM t\nWHERE a BETWEEN 1 AND 2\n  AND b = 3"

    def test_newline_after_operator(self):
        result = format_statement("SELECT * FROM t WHERE a = 1 AND b = 2", logical_operator_newline="after")
        assert result.rstrip() == "SELECT *\nFROM t\nWHERE a = 1 AND\n  b = 2"

    def test_after_mode_without_newline_keeps_space(self):
        result = format_statement(
            "SELECT * FROM t WHERE a = 1 AND b = 2", logical_operator_newline="after", multiline_lists="avoid"
        )
        assert result.rstrip() == "SELECT *\nFROM t\nWHERE a = 1 AND b = 2"

    def test_between_and_in_after_mode(self):
        result = format_statement(
            "SELECT * FROM t WHERE a BETWEEN 1 AND 2 AND b = 3", logical_operator_newline="after"
        )
        assert result.rstrip() == "SELECT *\nFROM t\nWHERE a BETWEEN 1 AND 2 AND\n  b = 3"


class TestBlocks:
    def test_subquery_is_indented(self):
        result = format_statement("SELECT * FROM (SELECT a FROM t) x")
        assert result.rstrip() == "SELECT *\nFROM (\n    SELECT a\n    FROM t\n  ) x"

    def test_blocks_balance_after_format(self):
        formatter = make_formatter()
        formatter.format(split(scan("SELECT * FROM (SELECT (a + (b)) FROM (SELECT 1) y) x"))[0])
        assert formatter._indentation.block_depth == 0

    def test_function_call_stays_inline(self):
        assert format_statement("SELECT count(*) FROM t").rstrip() == "SELECT count(*)\nFROM t"

    def test_stray_close_raises_with_token(self):
        formatter = make_formatter()
        with pytest.raises(UnbalancedBlockError) as exc_info:
            formatter.format(split(scan("SELECT a) FROM t"))[0])
        assert exc_info.value.token.value == ")"

    def test_case_block(self):
        result = format_statement("SELECT CASE WHEN a = 1 THEN 'x' ELSE 'y' END AS c FROM t")
        assert result.rstrip() == "SELECT\n  CASE\n    WHEN a = 1 THEN 'x'\n    ELSE 'y'\n  END AS c\nFROM t"

    def test_close_paren_after_line_comment_starts_new_line(self):
        sql = "SELECT * FROM t WHERE a IN (\n  SELECT b FROM u -- note\n)"
        result = format_statement(sql, newline_before_close_paren=False)
        assert result.rstrip() == "SELECT *\nFROM t\nWHERE a IN (\n    SELECT b\n    FROM u -- note\n  )"
        assert [t.value for t in scan(result)][-1] == ")"


class TestOperators:
    def test_dense_operators(self):
        assert format_statement("SELECT a + b FROM t", dense_operators=True).rstrip() == "SELECT a+b\nFROM t"

    def test_dense_operators_keep_space_after_command(self):
        assert format_statement("SELECT * FROM t", dense_operators=True).rstrip() == "SELECT *\nFROM t"

    def test_cast_operator_is_dense(self):
        assert format_statement("SELECT a::int FROM t").rstrip() == "SELECT a::int\nFROM t"

    def test_qualified_names(self):
        assert format_statement("SELECT t . a FROM s . t").rstrip() == "SELECT t.a\nFROM s.t"

    def test_dense_operator_at_line_start_keeps_indent(self):
        assert format_statement("SELECT a, * FROM t", dense_operators=True).rstrip() == "SELECT\n  a,\n  *\nFROM t"

    def test_newline_before_semicolon(self):
        assert format_statement("SELECT 1;", newline_before_semicolon=True).rstrip() == "SELECT 1\n;"


class TestComments:
    def test_line_comment_ends_line(self):
        assert format_statement("SELECT a -- note\nFROM t").rstrip() == "SELECT a -- note\nFROM t"

    def test_block_comment_reindented(self):
        result = format_statement("SELECT /* a\n b */ x FROM t")
        assert result.rstrip() == "SELECT\n  /* a\n   b */\n  x\nFROM t"


class TestTabular:
    def test_tabular_left(self):
        result = format_statement("SELECT a, b FROM t WHERE a = 1 AND b = 2", indent_style="tabularLeft")
        assert result.rstrip() == "SELECT    a,\n          b\nFROM      t\nWHERE     a = 1\nAND       b = 2"

    def test_tabular_right(self):
        result = format_statement("SELECT a, b FROM t WHERE a = 1 AND b = 2", indent_style="tabularRight")
        assert result.rstrip() == "   SELECT a,\n          b\n     FROM t\n    WHERE a = 1\n      AND b = 2"


class TestPlaceholders:
    def test_substitution(self):
        assert format_statement("SELECT ?", params=["5"]).rstrip() == "SELECT 5"

    def test_missing_value_raises(self):
        with pytest.raises(ParamsError):
            format_statement("SELECT ?, ?", params=["5"])


class TestProbes:
    def test_probes_outside_stream_return_eof(self):
        formatter = make_formatter()
        assert formatter.token_look_ahead() == EOF_TOKEN
        assert formatter.token_look_behind() == EOF_TOKEN
        assert not formatter.is_within_select()

    def test_clause_decisions_are_logged(self, caplog, select_statement):
        with caplog.at_level(logging.DEBUG, logger="sqlpretty.format.statement"):
            make_formatter().format(select_statement)
        assert "clause 'select'" in caplog.text
