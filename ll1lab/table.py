from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ll1lab.grammar import Grammar, Production
from ll1lab.sets import FirstMap, FollowMap, compute_first_sets, compute_follow_sets, first_of_sequence
from ll1lab.symbols import EOF, EPS


@dataclass(frozen=True)
class Conflict:
	nonterminal: str
	terminal: str
	kept: Production
	superseded: Production

	def __str__(self) -> str:
		return f"Conflict at M[{self.nonterminal}, {self.terminal}]: {self.kept} replaces {self.superseded}"


@dataclass
class TableCell:
	production: Production
	superseded: List[Production] = field(default_factory=list)

	@property
	def conflicted(self) -> bool:
		return bool(self.superseded)


class LL1ConflictError(ValueError):
	def __init__(self, conflicts: List[Conflict]) -> None:
		super().__init__(f"Grammar is not LL(1): {len(conflicts)} conflicting table entries")
		self.conflicts = conflicts


class ParsingTable:
	"""
	table[NonTerminal][TerminalOr$] = TableCell

	A later write to an occupied cell wins; the production it replaced is kept
	in the cell's `superseded` list and reported in `conflicts`.
	"""

	def __init__(self, nonterminals: Tuple[str, ...]) -> None:
		self._rows: Dict[str, Dict[str, TableCell]] = {nt: {} for nt in nonterminals}
		self.conflicts: List[Conflict] = []

	def assign(self, nonterminal: str, terminal: str, production: Production) -> None:
		row = self._rows.setdefault(nonterminal, {})
		cell = row.get(terminal)
		if cell is None:
			row[terminal] = TableCell(production)
			return
		if cell.production == production:
			return
		self.conflicts.append(Conflict(nonterminal, terminal, kept=production, superseded=cell.production))
		row[terminal] = TableCell(production, cell.superseded + [cell.production])

	def get(self, nonterminal: str, terminal: str) -> Optional[Production]:
		cell = self.cell(nonterminal, terminal)
		return cell.production if cell is not None else None

	def cell(self, nonterminal: str, terminal: str) -> Optional[TableCell]:
		return self._rows.get(nonterminal, {}).get(terminal)

	def row(self, nonterminal: str) -> Dict[str, Production]:
		return {t: c.production for t, c in self._rows.get(nonterminal, {}).items()}

	@property
	def nonterminals(self) -> List[str]:
		return list(self._rows)

	@property
	def terminals(self) -> List[str]:
		"""Every column that holds at least one entry, sorted with $ last."""
		cols = {t for row in self._rows.values() for t in row}
		return sorted(cols - {EOF}) + ([EOF] if EOF in cols else [])

	def __len__(self) -> int:
		return sum(len(row) for row in self._rows.values())


def build_ll1_table(
	grammar: Grammar, first: FirstMap, follow: FollowMap, *, strict: bool = False
) -> ParsingTable:
	table = ParsingTable(grammar.nonterminals)

	for p in grammar.productions:
		first_rhs = first_of_sequence(p.rhs, first=first, grammar=grammar)

		for a in sorted(first_rhs - {EPS}):
			table.assign(p.lhs, a, p)

		if EPS in first_rhs:
			for b in sorted(follow[p.lhs]):
				table.assign(p.lhs, b, p)

	if strict and table.conflicts:
		raise LL1ConflictError(table.conflicts)
	return table


def analyze(grammar: Grammar, start: str, *, strict: bool = False) -> Tuple[FirstMap, FollowMap, ParsingTable]:
	first = compute_first_sets(grammar)
	follow = compute_follow_sets(grammar, first, start)
	table = build_ll1_table(grammar, first, follow, strict=strict)
	return first, follow, table
