from __future__ import annotations

import pytest

from ll1lab.grammar import Grammar, Production
from ll1lab.symbols import EOF, EPS
from ll1lab.table import LL1ConflictError, ParsingTable, analyze
from ll1lab.transform import transform


def _body(table, nt, t):
	p = table.get(nt, t)
	return " ".join(p.rhs) if p is not None else None


def test_scenario_table(scenario_grammar):
	_, final = transform(scenario_grammar, "S")
	_, _, table = analyze(final, "S")
	assert _body(table, "S", "c") == "A S'"
	assert _body(table, "S", "d") == "A S'"
	assert _body(table, "S'", "a") == "a"
	assert _body(table, "S'", "b") == "b"
	assert _body(table, "A", "c") == "c"
	assert _body(table, "A", "d") == "d"
	assert len(table) == 6
	assert table.conflicts == []


def test_epsilon_entries_come_from_follow(expr_grammar):
	_, final = transform(expr_grammar, "E")
	_, follow, table = analyze(final, "E")
	for t in follow["E'"]:
		assert table.get("E'", t) == Production("E'", (EPS,))
	assert _body(table, "E'", "+") == "+ T E'"
	assert _body(table, "T'", "+") == EPS
	assert table.get("E'", "id") is None
	assert table.conflicts == []
	assert table.terminals == ["(", ")", "*", "+", "id", EOF]


def test_conflict_keeps_later_production(ambiguous_grammar):
	_, _, table = analyze(ambiguous_grammar, "S")
	assert table.get("S", "a") == Production("S", ("B",))
	cell = table.cell("S", "a")
	assert cell.conflicted
	assert cell.superseded == [Production("S", ("A",))]
	assert len(table.conflicts) == 1
	c = table.conflicts[0]
	assert (c.nonterminal, c.terminal) == ("S", "a")
	assert "M[S, a]" in str(c)


def test_strict_mode_raises(ambiguous_grammar):
	with pytest.raises(LL1ConflictError) as excinfo:
		analyze(ambiguous_grammar, "S", strict=True)
	assert len(excinfo.value.conflicts) == 1


def test_first_follow_conflict_detected():
	# S -> A a ; A -> a | ε : FIRST(a) and FOLLOW(A) both contain a
	g = Grammar.from_mapping({"S": ["A a"], "A": ["a", EPS]})
	_, _, table = analyze(g, "S")
	assert table.get("A", "a") == Production("A", (EPS,))
	assert [(c.nonterminal, c.terminal) for c in table.conflicts] == [("A", "a")]


def test_rewriting_same_production_is_not_a_conflict():
	table = ParsingTable(("S",))
	p = Production("S", ("a",))
	table.assign("S", "a", p)
	table.assign("S", "a", p)
	assert table.conflicts == []
	assert table.row("S") == {"a": p}
