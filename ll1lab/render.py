"""Plain-text report: transformed grammars, FIRST/FOLLOW listings and the fixed-width table."""

from __future__ import annotations

from typing import Dict, List, Set

from ll1lab.grammar import Grammar
from ll1lab.pipeline import AnalysisArtifacts
from ll1lab.table import ParsingTable


def render_grammar(grammar: Grammar) -> str:
	return "\n".join(
		f"{nt} -> " + " | ".join(p.body() for p in prods) for nt, prods in grammar.rules()
	)


def render_sets(label: str, sets: Dict[str, Set[str]], order: List[str]) -> str:
	lines = []
	for nt in order:
		lines.append(f"{label}({nt}) = {{ " + ", ".join(sorted(sets.get(nt, set()))) + " }")
	return "\n".join(lines)


def render_table(table: ParsingTable, *, column_width: int = 20) -> str:
	terms = table.terminals
	out: List[str] = []
	out.append(f"{'Non-Terminal':>{column_width}}" + "".join(f"{t:>{column_width}}" for t in terms))
	out.append("-" * (column_width * (len(terms) + 1)))
	for nt in table.nonterminals:
		row = table.row(nt)
		if not row:
			continue
		cells = "".join(f"{(row[t].body() if t in row else ''):>{column_width}}" for t in terms)
		out.append(f"{nt:>{column_width}}" + cells)
	return "\n".join(out)


def render_report(art: AnalysisArtifacts, *, column_width: int = 20) -> str:
	order = list(art.final.nonterminals)
	parts = [
		"Grammar after Left Factoring:",
		render_grammar(art.factored),
		"",
		"Grammar after Left Recursion Removal:",
		render_grammar(art.final),
		"",
		"FIRST Sets:",
		render_sets("FIRST", art.first, order),
		"",
		"FOLLOW Sets:",
		render_sets("FOLLOW", art.follow, order),
		"",
		"LL(1) Parsing Table:",
		"",
		render_table(art.table, column_width=column_width),
	]
	if art.table.conflicts:
		parts += ["", "Conflicts (later production kept):"]
		parts += [str(c) for c in art.table.conflicts]
	return "\n".join(parts) + "\n"
