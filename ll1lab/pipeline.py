from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from ll1lab.config import Settings
from ll1lab.diagnostics import Diagnostic, DiagnosticEngine
from ll1lab.grammar import Grammar, NameAllocator, validate_grammar
from ll1lab.sets import FirstMap, FollowMap, Passes, compute_first_sets_with_trace, compute_follow_sets_with_trace
from ll1lab.table import ParsingTable, build_ll1_table
from ll1lab.transform import eliminate_left_recursion, left_factor

log = logging.getLogger(__name__)


@dataclass
class AnalysisArtifacts:
	start: str
	raw: Grammar
	factored: Grammar
	final: Grammar
	first: FirstMap
	follow: FollowMap
	table: ParsingTable
	diagnostics: List[Diagnostic]
	duration_ms: float
	first_passes: Optional[Passes] = None
	follow_passes: Optional[Passes] = None
	fresh_names: List[str] = field(default_factory=list)

	@property
	def is_ll1(self) -> bool:
		return not self.table.conflicts


class LL1Workbench:
	def __init__(self, settings: Optional[Settings] = None) -> None:
		self.settings = settings or Settings()

	def run(self, grammar: Grammar, start: str) -> AnalysisArtifacts:
		validate_grammar(grammar, start)
		diagnostics = DiagnosticEngine()
		t0 = time.perf_counter()

		names = NameAllocator.for_grammar(grammar)
		log.debug("left factoring %d non-terminals", len(grammar.nonterminals))
		factored, names = left_factor(grammar, names)
		log.debug("removing immediate left recursion")
		final, names = eliminate_left_recursion(factored, names)

		for base, fresh in names.allocated:
			log.info("introduced %s for %s", fresh, base)
			diagnostics.info(f"Introduced non-terminal {fresh} while rewriting {base}", nonterminal=fresh)
		for requested, fresh in names.renamed:
			diagnostics.warning(f"Fresh name {requested} was already taken; used {fresh}", nonterminal=fresh)
		for nt in final.nonterminals:
			if not final.productions_for(nt):
				diagnostics.warning(f"Every alternative of {nt} is left recursive; it derives no string", nonterminal=nt)

		log.debug("computing FIRST and FOLLOW sets")
		first, first_passes = compute_first_sets_with_trace(final)
		follow, follow_passes = compute_follow_sets_with_trace(final, first, start)
		table = build_ll1_table(final, first, follow, strict=self.settings.strict)

		for c in table.conflicts:
			log.info("%s", c)
			diagnostics.warning(
				str(c),
				nonterminal=c.nonterminal,
				hint="The grammar is not LL(1); the later production was kept.",
			)

		duration_ms = (time.perf_counter() - t0) * 1000
		return AnalysisArtifacts(
			start=start,
			raw=grammar,
			factored=factored,
			final=final,
			first=first,
			follow=follow,
			table=table,
			diagnostics=diagnostics.items,
			duration_ms=duration_ms,
			first_passes=first_passes if self.settings.include_working else None,
			follow_passes=follow_passes if self.settings.include_working else None,
			fresh_names=[fresh for _, fresh in names.allocated],
		)
