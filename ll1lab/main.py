from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from ll1lab.config import Settings
from ll1lab.grammar import Grammar, InvalidGrammar
from ll1lab.loader import parse_grammar_lines
from ll1lab.parser import parse_tokens_ll1
from ll1lab.pipeline import AnalysisArtifacts, LL1Workbench
from ll1lab.symbols import EOF
from ll1lab.table import LL1ConflictError

settings = Settings.from_env()

app = FastAPI(title="LL(1) Grammar Lab", version="1.0.0")

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


class GrammarRequest(BaseModel):
	# Example: ["E -> E + T | T", "T -> id"]
	grammar_lines: List[str] = Field(min_length=1)
	grammar_start: Optional[str] = None
	# Unset fields fall back to the LL1LAB_* environment settings
	strict: Optional[bool] = None
	# Optional: include FIRST/FOLLOW iteration logs
	include_working: Optional[bool] = None


class LL1Request(GrammarRequest):
	# Example: "id + id"
	tokens: str
	trace: bool = True


def _grammar_json(grammar: Grammar) -> Dict[str, Any]:
	return {
		"nonterminals": list(grammar.nonterminals),
		"terminals": sorted(grammar.terminals),
		"rules": {nt: [p.body() for p in prods] for nt, prods in grammar.rules()},
	}


def _analysis_json(art: AnalysisArtifacts) -> Dict[str, Any]:
	terminals_sorted = sorted(art.final.terminals - {EOF}) + [EOF]
	table_out: Dict[str, Dict[str, str]] = {}
	for nt in art.final.nonterminals:
		row: Dict[str, str] = {}
		for t in terminals_sorted:
			p = art.table.get(nt, t)
			row[t] = p.body() if p is not None else ""
		table_out[nt] = row

	return {
		"start": art.start,
		"duration_ms": art.duration_ms,
		"grammar": {
			"raw": _grammar_json(art.raw),
			"factored": _grammar_json(art.factored),
			"final": _grammar_json(art.final),
		},
		"first": {k: sorted(v) for k, v in art.first.items()},
		"follow": {k: sorted(v) for k, v in art.follow.items()},
		"working": {
			"first_passes": art.first_passes,
			"follow_passes": art.follow_passes,
		}
		if art.first_passes is not None
		else None,
		"table": table_out,
		"is_ll1": art.is_ll1,
		"conflicts": [
			{
				"nonterminal": c.nonterminal,
				"terminal": c.terminal,
				"kept": c.kept.body(),
				"superseded": c.superseded.body(),
			}
			for c in art.table.conflicts
		],
		"diagnostics": [
			{"severity": d.severity.name, "message": d.message, "nonterminal": d.nonterminal, "hint": d.hint}
			for d in art.diagnostics
		],
	}


def _run(req: GrammarRequest) -> AnalysisArtifacts:
	overrides = {k: v for k, v in (("strict", req.strict), ("include_working", req.include_working)) if v is not None}
	run_settings = settings.model_copy(update=overrides)
	try:
		grammar, start = parse_grammar_lines(
			req.grammar_lines, start=req.grammar_start, epsilon_tokens=run_settings.epsilon_tokens
		)
		return LL1Workbench(run_settings).run(grammar, start)
	except InvalidGrammar as exc:
		raise HTTPException(status_code=400, detail=str(exc))
	except LL1ConflictError as exc:
		raise HTTPException(status_code=409, detail={"message": str(exc), "conflicts": [str(c) for c in exc.conflicts]})


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
	return HTMLResponse(
		"<h2>LL(1) Grammar Lab API</h2><p>POST <code>/api/grammar</code> with JSON: "
		"<code>{\"grammar_lines\": [\"E -> E + T | T\", \"T -> id\"]}</code></p>"
	)


@app.get("/health")
def health() -> Dict[str, str]:
	return {"status": "ok"}


@app.post("/api/grammar")
def analyze_grammar(req: GrammarRequest) -> Dict[str, Any]:
	"""Left factoring, left-recursion removal, FIRST/FOLLOW sets and the LL(1) table."""
	return _analysis_json(_run(req))


@app.post("/api/ll1")
def ll1_lab(req: LL1Request) -> Dict[str, Any]:
	"""
	Same analysis as /api/grammar plus a table-driven parse of `tokens` with its trace.
	"""
	art = _run(req)
	tokens = [t for t in (req.tokens or "").split() if t]
	result = parse_tokens_ll1(art.final, art.table, art.start, tokens, trace=bool(req.trace))

	out = _analysis_json(art)
	out["input"] = {
		"tokens": tokens,
		"tokens_with_eof": tokens + [EOF],
	}
	out["result"] = {
		"accepted": result.accepted,
		"error": result.error,
		"ambiguous_cells": [list(c) for c in result.ambiguous_cells],
		"steps": [
			{
				"stack": step.stack,
				"remaining_input": step.remaining_input,
				"action": step.action,
			}
			for step in result.steps
		],
	}
	return out
