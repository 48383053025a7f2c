"""
LL(1) grammar lab: left factoring, left-recursion removal, FIRST/FOLLOW sets
and predictive parsing tables.
"""

from __future__ import annotations

from ll1lab.grammar import Grammar, InvalidGrammar, NameAllocator, Production
from ll1lab.pipeline import AnalysisArtifacts, LL1Workbench
from ll1lab.sets import compute_first_sets, compute_follow_sets
from ll1lab.symbols import EOF, EPS, Symbol, SymbolKind, classify
from ll1lab.table import Conflict, LL1ConflictError, ParsingTable, TableCell, analyze, build_ll1_table
from ll1lab.transform import eliminate_left_recursion, left_factor, transform

__all__ = [
	"EOF",
	"EPS",
	"AnalysisArtifacts",
	"Conflict",
	"Grammar",
	"InvalidGrammar",
	"LL1ConflictError",
	"LL1Workbench",
	"NameAllocator",
	"ParsingTable",
	"Production",
	"Symbol",
	"SymbolKind",
	"TableCell",
	"analyze",
	"build_ll1_table",
	"classify",
	"compute_first_sets",
	"compute_follow_sets",
	"eliminate_left_recursion",
	"left_factor",
	"transform",
]
