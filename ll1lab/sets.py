from __future__ import annotations

from typing import Dict, List, Sequence, Set, Tuple

from ll1lab.grammar import Grammar
from ll1lab.symbols import EOF, EPS, SymbolKind, classify

FirstMap = Dict[str, Set[str]]
FollowMap = Dict[str, Set[str]]
Passes = List[Dict[str, List[str]]]


def first_of_sequence(seq: Sequence[str], *, first: FirstMap, grammar: Grammar) -> Set[str]:
	"""
	FIRST(seq) computed left-to-right.
	Returns terminals plus EPS (if the entire sequence can derive epsilon).
	An explicit ε symbol ends the scan and contributes EPS.
	"""
	out: Set[str] = set()

	for name in seq:
		kind = classify(name, grammar).kind
		if kind is SymbolKind.EPSILON:
			out.add(EPS)
			return out
		if kind is not SymbolKind.NONTERMINAL:
			out.add(name)
			return out

		f = first.get(name, set())
		out |= f - {EPS}
		if EPS not in f:
			return out

	out.add(EPS)
	return out


def _first_pass(grammar: Grammar, first: FirstMap, pass_changes: Dict[str, List[str]]) -> bool:
	changed = False
	for p in grammar.productions:
		before = set(first[p.lhs])
		first[p.lhs] |= first_of_sequence(p.rhs, first=first, grammar=grammar)
		added = sorted(first[p.lhs] - before)
		if added:
			pass_changes[p.lhs].extend(added)
			changed = True
	return changed


def compute_first_sets(grammar: Grammar) -> FirstMap:
	first, _ = compute_first_sets_with_trace(grammar)
	return first


def compute_first_sets_with_trace(grammar: Grammar) -> Tuple[FirstMap, Passes]:
	"""
	Compute FIRST sets and also return an iteration log.
	The log is a list of passes; each pass maps Nonterminal -> list of newly-added symbols.
	"""
	first: FirstMap = {nt: set() for nt in grammar.nonterminals}
	passes: Passes = []

	changed = True
	while changed:
		pass_changes: Dict[str, List[str]] = {nt: [] for nt in grammar.nonterminals}
		changed = _first_pass(grammar, first, pass_changes)
		if changed:
			passes.append(pass_changes)

	return first, passes


def _follow_of_remainder(rest: Sequence[str], *, first: FirstMap, grammar: Grammar) -> Tuple[Set[str], bool]:
	"""
	Terminals that can start `rest`, and whether `rest` can vanish entirely.
	"""
	out: Set[str] = set()
	for name in rest:
		kind = classify(name, grammar).kind
		if kind is SymbolKind.EPSILON:
			continue
		if kind is not SymbolKind.NONTERMINAL:
			out.add(name)
			return out, False
		f = first[name]
		out |= f - {EPS}
		if EPS not in f:
			return out, False
	return out, True


def compute_follow_sets(grammar: Grammar, first: FirstMap, start: str) -> FollowMap:
	follow, _ = compute_follow_sets_with_trace(grammar, first, start)
	return follow


def compute_follow_sets_with_trace(grammar: Grammar, first: FirstMap, start: str) -> Tuple[FollowMap, Passes]:
	"""
	Compute FOLLOW sets and also return an iteration log.
	The log is a list of passes; each pass maps Nonterminal -> list of newly-added symbols.
	"""
	follow: FollowMap = {nt: set() for nt in grammar.nonterminals}
	follow[start].add(EOF)
	passes: Passes = []

	changed = True
	while changed:
		changed = False
		pass_changes: Dict[str, List[str]] = {nt: [] for nt in grammar.nonterminals}
		for p in grammar.productions:
			rhs = p.rhs
			for i, sym in enumerate(rhs):
				if not grammar.is_nonterminal(sym):
					continue

				before = set(follow[sym])
				found, vanishes = _follow_of_remainder(rhs[i + 1 :], first=first, grammar=grammar)
				follow[sym] |= found
				if vanishes:
					follow[sym] |= follow[p.lhs]

				added = sorted(follow[sym] - before)
				if added:
					pass_changes[sym].extend(added)
					changed = True

		if changed:
			passes.append(pass_changes)

	return follow, passes
