from __future__ import annotations

import pytest

from ll1lab.grammar import InvalidGrammar
from ll1lab.loader import parse_grammar_lines, parse_grammar_text
from ll1lab.symbols import EPS

GRAMMAR_TEXT = """
# arithmetic
E -> E + T | T
T -> T * F | F
F -> ( E ) | id
"""


def test_parse_text():
	grammar, start = parse_grammar_text(GRAMMAR_TEXT)
	assert start == "E"
	assert grammar.nonterminals == ("E", "T", "F")
	assert grammar.as_mapping()["F"] == [("(", "E", ")"), ("id",)]


def test_epsilon_aliases_and_empty_alternative():
	grammar, _ = parse_grammar_lines(["A -> a | eps | epsilon", "B -> b |"])
	assert grammar.as_mapping() == {"A": [("a",), (EPS,), (EPS,)], "B": [("b",), (EPS,)]}


def test_custom_epsilon_tokens():
	grammar, _ = parse_grammar_lines(["A -> a | nil"], epsilon_tokens=["nil"])
	assert grammar.as_mapping()["A"] == [("a",), (EPS,)]


def test_repeated_lhs_collects_alternatives():
	grammar, _ = parse_grammar_lines(["A -> a", "// more", "A -> b"])
	assert grammar.as_mapping() == {"A": [("a",), ("b",)]}


def test_explicit_start():
	_, start = parse_grammar_lines(["A -> B", "B -> b"], start="B")
	assert start == "B"


@pytest.mark.parametrize(
	"lines,start",
	[
		(["A a b"], None),
		([" -> a"], None),
		(["A B -> a"], None),
		(["A -> a"], "S"),
		(["# nothing"], None),
	],
)
def test_invalid_input(lines, start):
	with pytest.raises(InvalidGrammar):
		parse_grammar_lines(lines, start=start)
