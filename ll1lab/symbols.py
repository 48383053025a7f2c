from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from ll1lab.grammar import Grammar

EPS = "ε"
EOF = "$"


class SymbolKind(Enum):
	TERMINAL = auto()
	NONTERMINAL = auto()
	EPSILON = auto()
	END_MARKER = auto()


@dataclass(frozen=True)
class Symbol:
	name: str
	kind: SymbolKind

	@property
	def is_nonterminal(self) -> bool:
		return self.kind is SymbolKind.NONTERMINAL

	@property
	def is_terminal(self) -> bool:
		return self.kind in (SymbolKind.TERMINAL, SymbolKind.END_MARKER)

	def __str__(self) -> str:
		return self.name


def classify(name: str, grammar: "Grammar") -> Symbol:
	"""
	Classify a symbol name against one grammar snapshot.
	A name is a non-terminal only if it is a key of that grammar.
	"""
	if name == EPS:
		return Symbol(name, SymbolKind.EPSILON)
	if name == EOF:
		return Symbol(name, SymbolKind.END_MARKER)
	if grammar.is_nonterminal(name):
		return Symbol(name, SymbolKind.NONTERMINAL)
	return Symbol(name, SymbolKind.TERMINAL)
