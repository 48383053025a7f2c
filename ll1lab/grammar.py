from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Set, Tuple

from ll1lab.symbols import EOF, EPS


class InvalidGrammar(ValueError):
	"""Raised when a grammar cannot be handed to the pipeline."""


@dataclass(frozen=True)
class Production:
	lhs: str
	rhs: Tuple[str, ...]

	@property
	def is_epsilon(self) -> bool:
		return self.rhs == (EPS,)

	def body(self) -> str:
		return " ".join(self.rhs)

	def __str__(self) -> str:
		if len(self.rhs) == 0:
			return f"{self.lhs} -> {EPS}"
		return f"{self.lhs} -> " + self.body()


@dataclass(frozen=True)
class Grammar:
	nonterminals: Tuple[str, ...]
	productions: Tuple[Production, ...]
	_keys: FrozenSet[str] = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		object.__setattr__(self, "_keys", frozenset(self.nonterminals))

	@classmethod
	def from_mapping(cls, rules: Mapping[str, Iterable[Sequence[str]]]) -> "Grammar":
		"""
		Build a grammar from {NonTerminal: [alternative, ...]}.

		Alternatives are symbol sequences; a plain string is split on whitespace:

		  Grammar.from_mapping({"S": ["A a", "A b"], "A": [("c",), ("d",)]})
		"""
		nts: List[str] = []
		prods: List[Production] = []
		for lhs, alts in rules.items():
			nts.append(lhs)
			for alt in alts:
				syms = alt.split() if isinstance(alt, str) else list(alt)
				prods.append(Production(lhs, tuple(syms)))
		return cls(nonterminals=tuple(nts), productions=tuple(prods))

	def as_mapping(self) -> Dict[str, List[Tuple[str, ...]]]:
		out: Dict[str, List[Tuple[str, ...]]] = {nt: [] for nt in self.nonterminals}
		for p in self.productions:
			out[p.lhs].append(p.rhs)
		return out

	def is_nonterminal(self, name: str) -> bool:
		return name in self._keys

	@property
	def terminals(self) -> Set[str]:
		terms: Set[str] = set()
		for p in self.productions:
			for s in p.rhs:
				if s == EPS:
					continue
				if s not in self._keys:
					terms.add(s)
		return terms

	def productions_for(self, lhs: str) -> List[Production]:
		return [p for p in self.productions if p.lhs == lhs]

	def rules(self) -> List[Tuple[str, List[Production]]]:
		return [(nt, self.productions_for(nt)) for nt in self.nonterminals]


def validate_grammar(grammar: Grammar, start: str) -> None:
	if not grammar.nonterminals:
		raise InvalidGrammar("Grammar has no productions")
	if len(set(grammar.nonterminals)) != len(grammar.nonterminals):
		raise InvalidGrammar("Grammar declares a non-terminal more than once")
	if start not in grammar.nonterminals:
		raise InvalidGrammar(f"Start symbol '{start}' is not a non-terminal of the grammar")
	if EOF in grammar.nonterminals or EPS in grammar.nonterminals:
		raise InvalidGrammar(f"'{EOF}' and '{EPS}' are reserved and cannot be non-terminals")
	for p in grammar.productions:
		if p.lhs not in grammar.nonterminals:
			raise InvalidGrammar(f"Production {p} has an undeclared left-hand side")
		if len(p.rhs) == 0:
			raise InvalidGrammar(f"Production for '{p.lhs}' has an empty right-hand side (write {EPS} instead)")
	for nt in grammar.nonterminals:
		if not grammar.productions_for(nt):
			raise InvalidGrammar(f"Non-terminal '{nt}' has no productions")


class NameAllocator:
	"""
	Hands out fresh non-terminal names for one pipeline run.

	Every name already in use is reserved, so a fresh name never replaces an
	existing non-terminal. `counter` numbers left-factoring allocations: the
	first one gets a bare prime (E'), later ones get the counter appended (T'2).
	"""

	def __init__(self, reserved: Iterable[str] = (), counter: int = 1) -> None:
		self._taken: Set[str] = set(reserved)
		self.counter = counter
		self.allocated: List[Tuple[str, str]] = []
		self.renamed: List[Tuple[str, str]] = []

	@classmethod
	def for_grammar(cls, grammar: Grammar) -> "NameAllocator":
		return cls(grammar.nonterminals)

	def reserve(self, names: Iterable[str]) -> None:
		self._taken.update(names)

	def numbered(self, base: str) -> str:
		candidate = base + "'"
		if self.counter > 1:
			candidate += str(self.counter)
		self.counter += 1
		return self._claim(base, candidate)

	def primed(self, base: str) -> str:
		return self._claim(base, base + "'")

	def _claim(self, base: str, candidate: str) -> str:
		requested = candidate
		while candidate in self._taken:
			candidate += "'"
		if candidate != requested:
			self.renamed.append((requested, candidate))
		self._taken.add(candidate)
		self.allocated.append((base, candidate))
		return candidate
