"""
Export analysis artifacts (grammars, FIRST, FOLLOW, parse table) into Excel-friendly files.

Outputs (always):
  - LL1_Grammar.csv
  - LL1_FIRST.csv
  - LL1_FOLLOW.csv
  - LL1_ParseTable.csv

Optional (only if openpyxl is installed, see the `xlsx` extra):
  - LL1_Parse_Table.xlsx  (multiple sheets)
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Set

from ll1lab.grammar import Grammar, Production
from ll1lab.pipeline import AnalysisArtifacts
from ll1lab.symbols import EPS
from ll1lab.table import ParsingTable

CSV_FILES = ("LL1_Grammar.csv", "LL1_FIRST.csv", "LL1_FOLLOW.csv", "LL1_ParseTable.csv")


def fmt_sym(s: str) -> str:
	return "eps" if s == EPS else s


def fmt_prod(p: Production) -> str:
	return str(p).replace(EPS, "eps")


def _grammar_rows(art: AnalysisArtifacts) -> List[List[str]]:
	rows: List[List[str]] = [["Section", "Production"]]
	sections = (
		("Original", art.raw),
		("After left factoring", art.factored),
		("After left recursion removal", art.final),
	)
	for title, grammar in sections:
		for p in grammar.productions:
			rows.append([title, fmt_prod(p)])
		rows.append([])
	return rows[:-1]


def _set_rows(title: str, sets: Dict[str, Set[str]], order: Grammar) -> List[List[str]]:
	rows: List[List[str]] = [[title, "Symbols (sorted)"]]
	for nt in order.nonterminals:
		rows.append([nt, " ".join(sorted(fmt_sym(s) for s in sets.get(nt, set())))])
	return rows


def _table_rows(grammar: Grammar, table: ParsingTable) -> List[List[str]]:
	terms = table.terminals
	rows: List[List[str]] = [["NonTerminal"] + terms]
	for nt in grammar.nonterminals:
		row: List[str] = [nt]
		for t in terms:
			p = table.get(nt, t)
			row.append(fmt_prod(p) if p is not None else "")
		rows.append(row)
	return rows


def _sheets(art: AnalysisArtifacts) -> Dict[str, List[List[str]]]:
	return {
		"Grammar": _grammar_rows(art),
		"FIRST": _set_rows("FIRST", art.first, art.final),
		"FOLLOW": _set_rows("FOLLOW", art.follow, art.final),
		"ParseTable": _table_rows(art.final, art.table),
	}


def export_csv(art: AnalysisArtifacts, out_dir: Path) -> List[Path]:
	out_dir = Path(out_dir)
	out_dir.mkdir(parents=True, exist_ok=True)
	written: List[Path] = []
	for filename, rows in zip(CSV_FILES, _sheets(art).values()):
		out_path = out_dir / filename
		with out_path.open("w", newline="", encoding="utf-8") as f:
			csv.writer(f).writerows(rows)
		written.append(out_path)
	return written


def export_xlsx(art: AnalysisArtifacts, out_path: Path) -> bool:
	try:
		import openpyxl  # type: ignore
		from openpyxl.utils import get_column_letter  # type: ignore
	except ImportError:
		return False

	wb = openpyxl.Workbook()
	wb.remove(wb.active)

	for name, rows in _sheets(art).items():
		ws = wb.create_sheet(name)
		for row in rows:
			ws.append(row)

	# Basic column sizing
	for sheet in wb.worksheets:
		for col in range(1, sheet.max_column + 1):
			letter = get_column_letter(col)
			sheet.column_dimensions[letter].width = 22 if col == 1 else 18

	wb.save(Path(out_path))
	return True
