from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ll1lab.grammar import Grammar, NameAllocator, Production
from ll1lab.symbols import EPS

log = logging.getLogger(__name__)

Rule = Tuple[str, List[Production]]


def common_prefix(a: Sequence[str], b: Sequence[str]) -> Tuple[str, ...]:
	i = 0
	while i < len(a) and i < len(b) and a[i] == b[i]:
		i += 1
	return tuple(a[:i])


def left_factor_rule(nonterminal: str, prods: Sequence[Production], names: NameAllocator) -> List[Rule]:
	"""
	Factor the prefix shared by every alternative of one non-terminal.

	  A -> a b | a c   becomes   A -> a A'
	                             A' -> b | c

	The new non-terminal is not factored again, even if its alternatives
	still share a prefix among themselves.
	"""
	if len(prods) < 2:
		return [(nonterminal, list(prods))]

	prefix: Tuple[str, ...] = prods[0].rhs
	for p in prods[1:]:
		prefix = common_prefix(prefix, p.rhs)
		if not prefix:
			break

	if not prefix:
		return [(nonterminal, list(prods))]

	fresh = names.numbered(nonterminal)
	log.debug("left factoring %s on prefix %r into %s", nonterminal, " ".join(prefix), fresh)

	suffixes: List[Production] = []
	for p in prods:
		rest = p.rhs[len(prefix) :]
		suffixes.append(Production(fresh, rest if rest else (EPS,)))

	return [
		(nonterminal, [Production(nonterminal, prefix + (fresh,))]),
		(fresh, suffixes),
	]


def eliminate_rule(nonterminal: str, prods: Sequence[Production], names: NameAllocator) -> List[Rule]:
	"""
	Remove immediate left recursion from one non-terminal:

	  A -> A x | y     becomes   A -> y A'
	                             A' -> x A' | ε

	Indirect recursion (A -> B x, B -> A y) is left as is.
	"""
	recursive: List[Tuple[str, ...]] = []
	others: List[Tuple[str, ...]] = []
	for p in prods:
		if p.rhs and p.rhs[0] == nonterminal:
			recursive.append(p.rhs[1:])
		else:
			others.append(p.rhs)

	if not recursive:
		return [(nonterminal, list(prods))]

	fresh = names.primed(nonterminal)
	log.debug("removing left recursion from %s via %s", nonterminal, fresh)

	head: List[Production] = []
	for beta in others:
		# A -> ε contributes just the tail
		body = () if beta == (EPS,) else beta
		head.append(Production(nonterminal, body + (fresh,)))

	tail: List[Production] = []
	for alpha in recursive:
		# A -> A adds nothing to the language and would leave A' -> A'
		if not alpha or alpha == (EPS,):
			continue
		tail.append(Production(fresh, alpha + (fresh,)))
	tail.append(Production(fresh, (EPS,)))

	return [(nonterminal, head), (fresh, tail)]


def _assemble(rules: List[Rule]) -> Grammar:
	nts: List[str] = []
	prods: List[Production] = []
	for nt, ps in rules:
		nts.append(nt)
		prods.extend(ps)
	return Grammar(nonterminals=tuple(nts), productions=tuple(prods))


def left_factor(grammar: Grammar, names: Optional[NameAllocator] = None) -> Tuple[Grammar, NameAllocator]:
	if names is None:
		names = NameAllocator.for_grammar(grammar)
	rules: List[Rule] = []
	for nt, prods in grammar.rules():
		rules.extend(left_factor_rule(nt, prods, names))
	return _assemble(rules), names


def eliminate_left_recursion(grammar: Grammar, names: Optional[NameAllocator] = None) -> Tuple[Grammar, NameAllocator]:
	if names is None:
		names = NameAllocator.for_grammar(grammar)
	else:
		names.reserve(grammar.nonterminals)
	rules: List[Rule] = []
	for nt, prods in grammar.rules():
		rules.extend(eliminate_rule(nt, prods, names))
	return _assemble(rules), names


def transform(grammar: Grammar, start: str, names: Optional[NameAllocator] = None) -> Tuple[Grammar, Grammar]:
	"""
	Left-factor, then remove immediate left recursion.
	Returns (factored, final); `grammar` itself is left untouched.
	"""
	if names is None:
		names = NameAllocator.for_grammar(grammar)
	factored, names = left_factor(grammar, names)
	final, names = eliminate_left_recursion(factored, names)
	log.debug("transformed grammar for start symbol %s: %d -> %d non-terminals", start, len(grammar.nonterminals), len(final.nonterminals))
	return factored, final
