from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ll1lab.config import DEFAULT_EPSILON_TOKENS
from ll1lab.grammar import Grammar, InvalidGrammar, validate_grammar
from ll1lab.symbols import EPS


def parse_grammar_lines(
	lines: Sequence[str], *, start: Optional[str] = None, epsilon_tokens: Iterable[str] = DEFAULT_EPSILON_TOKENS
) -> Tuple[Grammar, str]:
	"""
	Parse a small CFG given as production lines, e.g.:

	  E  -> E + T | T
	  T  -> T * F | F
	  F  -> ( E ) | id

	Notes:
	- Nonterminals are inferred from LHS symbols; the first LHS is the start symbol
	  unless `start` is given.
	- Alternatives are separated by '|', symbols by whitespace.
	- Any of `epsilon_tokens` (or an empty alternative) stands for ε.
	- A LHS that appears on several lines collects all of their alternatives.
	"""
	eps_aliases = set(epsilon_tokens) | {EPS}

	def norm_eps(tok: str) -> str:
		return EPS if tok in eps_aliases else tok

	rules: Dict[str, List[Tuple[str, ...]]] = {}

	for raw_line in lines:
		line = (raw_line or "").strip()
		if not line or line.startswith("#") or line.startswith("//"):
			continue
		if "->" not in line:
			raise InvalidGrammar(f"Invalid production (missing '->'): {raw_line}")
		lhs, rhs = line.split("->", 1)
		lhs = lhs.strip()
		if not lhs or len(lhs.split()) != 1:
			raise InvalidGrammar(f"Invalid production (bad LHS): {raw_line}")
		alts = rules.setdefault(lhs, [])
		for alt in rhs.split("|"):
			syms = [norm_eps(t) for t in alt.split()]
			alts.append(tuple(syms) if syms else (EPS,))

	grammar = Grammar.from_mapping(rules)
	if start is None:
		if not grammar.nonterminals:
			raise InvalidGrammar("Grammar has no productions")
		start = grammar.nonterminals[0]
	validate_grammar(grammar, start)
	return grammar, start


def parse_grammar_text(
	text: str, *, start: Optional[str] = None, epsilon_tokens: Iterable[str] = DEFAULT_EPSILON_TOKENS
) -> Tuple[Grammar, str]:
	return parse_grammar_lines(text.splitlines(), start=start, epsilon_tokens=epsilon_tokens)
