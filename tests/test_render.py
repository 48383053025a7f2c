from __future__ import annotations

from ll1lab.pipeline import LL1Workbench
from ll1lab.render import render_grammar, render_report, render_table


def test_report_sections(scenario_grammar):
	art = LL1Workbench().run(scenario_grammar, "S")
	report = render_report(art)
	assert "Grammar after Left Factoring:\nS -> A S'\nS' -> a | b\nA -> c | d\n" in report
	assert "Grammar after Left Recursion Removal:\n" in report
	assert "FIRST(S) = { c, d }" in report
	assert "FIRST(S') = { a, b }" in report
	assert "FOLLOW(S) = { $ }" in report
	assert "FOLLOW(A) = { a, b }" in report
	assert "Conflicts" not in report


def test_table_is_fixed_width(scenario_grammar):
	art = LL1Workbench().run(scenario_grammar, "S")
	lines = render_table(art.table, column_width=10).splitlines()
	assert lines[0] == "Non-Terminal" + "".join(f"{t:>10}" for t in ["a", "b", "c", "d"])
	assert lines[1] == "-" * 50
	assert lines[2] == f"{'S':>10}" + " " * 20 + f"{'A S' + chr(39):>10}" * 2
	assert len(lines) == 5


def test_conflicts_listed(ambiguous_grammar):
	report = render_report(LL1Workbench().run(ambiguous_grammar, "S"))
	assert "Conflicts (later production kept):" in report
	assert "M[S, a]" in report


def test_render_grammar(expr_grammar):
	assert render_grammar(expr_grammar).splitlines()[0] == "E -> E + T | T"
