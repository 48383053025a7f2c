from __future__ import annotations

from ll1lab.grammar import Grammar
from ll1lab.symbols import EOF, EPS, SymbolKind, classify
from ll1lab.transform import left_factor


def test_classify_kinds(scenario_grammar):
	assert classify("S", scenario_grammar).kind is SymbolKind.NONTERMINAL
	assert classify("a", scenario_grammar).kind is SymbolKind.TERMINAL
	assert classify(EPS, scenario_grammar).kind is SymbolKind.EPSILON
	assert classify(EOF, scenario_grammar).kind is SymbolKind.END_MARKER


def test_classification_depends_on_snapshot(scenario_grammar):
	factored, _ = left_factor(scenario_grammar)
	assert classify("S'", scenario_grammar).kind is SymbolKind.TERMINAL
	assert classify("S'", factored).is_nonterminal


def test_end_marker_counts_as_terminal():
	g = Grammar.from_mapping({"S": ["a"]})
	assert classify(EOF, g).is_terminal
	assert not classify(EPS, g).is_terminal
