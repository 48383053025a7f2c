from __future__ import annotations

import pytest

from ll1lab.grammar import Grammar


@pytest.fixture
def scenario_grammar() -> Grammar:
	# S -> A a | A b
	# A -> c | d
	return Grammar.from_mapping({"S": ["A a", "A b"], "A": ["c", "d"]})


@pytest.fixture
def expr_grammar() -> Grammar:
	# Left-recursive arithmetic expressions
	return Grammar.from_mapping(
		{
			"E": ["E + T", "T"],
			"T": ["T * F", "F"],
			"F": ["( E )", "id"],
		}
	)


@pytest.fixture
def ambiguous_grammar() -> Grammar:
	# S -> A | B with FIRST(A) == FIRST(B): not LL(1), and nothing to factor
	return Grammar.from_mapping({"S": ["A", "B"], "A": ["a"], "B": ["a"]})
