from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ll1lab.grammar import Grammar
from ll1lab.symbols import EOF, EPS, SymbolKind, classify
from ll1lab.table import ParsingTable


@dataclass(frozen=True)
class ParseStep:
	stack: List[str]
	remaining_input: List[str]
	action: str


@dataclass(frozen=True)
class ParseResult:
	accepted: bool
	error: Optional[str]
	steps: List[ParseStep]
	# (non-terminal, lookahead) cells used while one of their alternatives had been overwritten
	ambiguous_cells: List[Tuple[str, str]] = field(default_factory=list)


class PredictiveParser:
	"""
	Drives a ParsingTable over a token sequence.

	The stack starts as [$, start]; each top is classified against the grammar
	the table was built from. A non-terminal is expanded from its cell, a
	terminal or $ must match the lookahead, ε is simply popped.
	"""

	def __init__(self, grammar: Grammar, table: ParsingTable, start: str) -> None:
		self.grammar = grammar
		self.table = table
		self.start = start

	def parse(self, tokens: Sequence[str], *, trace: bool = True) -> ParseResult:
		self._input = [t for t in tokens if t] + [EOF]
		self._pos = 0
		self._stack: List[str] = [EOF, self.start]
		self._steps: List[ParseStep] = []
		self._trace = trace
		self._ambiguous: List[Tuple[str, str]] = []

		self._record("init")
		while self._stack:
			top = self._stack.pop()
			kind = classify(top, self.grammar).kind
			if kind is SymbolKind.EPSILON:
				self._record("pop ε")
			elif kind is SymbolKind.NONTERMINAL:
				error = self._expand(top)
				if error:
					return self._finish(False, error)
			else:
				lookahead = self._lookahead()
				if top != lookahead:
					return self._finish(False, f"Mismatch: expected '{top}' but found '{lookahead}'")
				self._record(f"match {lookahead}")
				self._pos += 1
				if kind is SymbolKind.END_MARKER:
					return self._finish(True, None)

		return self._finish(False, "Unexpected end of parse (stack exhausted).")

	def _lookahead(self) -> str:
		return self._input[self._pos] if self._pos < len(self._input) else EOF

	def _expand(self, nonterminal: str) -> Optional[str]:
		lookahead = self._lookahead()
		cell = self.table.cell(nonterminal, lookahead)
		if cell is None:
			return f"No rule for M[{nonterminal}, {lookahead}]"

		action = str(cell.production)
		if cell.conflicted:
			self._ambiguous.append((nonterminal, lookahead))
			action += " (over " + ", ".join(p.body() for p in cell.superseded) + ")"
		self._record(action)

		rhs = [s for s in cell.production.rhs if s != EPS]
		# keep a marker so the trace shows the ε being consumed
		self._stack.extend(reversed(rhs) if rhs else [EPS])
		return None

	def _record(self, action: str) -> None:
		if self._trace:
			self._steps.append(ParseStep(list(self._stack), self._input[self._pos :], action))

	def _finish(self, accepted: bool, error: Optional[str]) -> ParseResult:
		return ParseResult(accepted, error, self._steps, self._ambiguous)


def parse_tokens_ll1(
	grammar: Grammar, table: ParsingTable, start: str, tokens: Sequence[str], *, trace: bool = True
) -> ParseResult:
	return PredictiveParser(grammar, table, start).parse(tokens, trace=trace)
