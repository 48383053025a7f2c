"""
Command-line front end: read a grammar file, run the LL(1) pipeline, write the report.

Usage:
  ll1lab [grammar.txt] [-o output.txt] [--start S] [--strict] [--export-dir DIR] [--parse "id + id"]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ll1lab.config import Settings
from ll1lab.export import export_csv, export_xlsx
from ll1lab.grammar import InvalidGrammar
from ll1lab.loader import parse_grammar_text
from ll1lab.parser import parse_tokens_ll1
from ll1lab.pipeline import LL1Workbench
from ll1lab.render import render_report
from ll1lab.symbols import EPS
from ll1lab.table import LL1ConflictError

log = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
	ap = argparse.ArgumentParser(prog="ll1lab", description="Left-factor a grammar, remove left recursion and build its LL(1) table.")
	ap.add_argument("grammar", nargs="?", default="grammar.txt", help="grammar file, one 'A -> x | y' rule per line")
	ap.add_argument("-o", "--output", default="output.txt", help="report file ('-' for stdout)")
	ap.add_argument("--start", default=None, help="start symbol (default: first LHS)")
	ap.add_argument("--strict", action="store_true", default=None, help="fail on LL(1) table conflicts")
	ap.add_argument("--export-dir", default=None, help="also write CSV (and XLSX if openpyxl is installed) here")
	ap.add_argument("--trace", action="store_true", help="print FIRST/FOLLOW iteration passes")
	ap.add_argument("--parse", default=None, metavar="TOKENS", help="parse a space-separated token string with the table")
	ap.add_argument("-v", "--verbose", action="count", default=0)
	return ap


def _print_passes(label: str, passes) -> None:
	for n, changes in enumerate(passes or [], 1):
		added = ", ".join(f"{nt} += {{{' '.join(syms)}}}" for nt, syms in changes.items() if syms)
		print(f"{label} pass {n}: {added}")


def main(argv: Optional[List[str]] = None) -> int:
	args = build_arg_parser().parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	try:
		settings = Settings.from_env()
	except ValidationError as exc:
		print(f"Invalid LL1LAB_* setting: {exc}", file=sys.stderr)
		return 1
	if args.strict is not None:
		settings.strict = args.strict
	if args.trace:
		settings.include_working = True

	try:
		text = Path(args.grammar).read_text(encoding="utf-8")
	except OSError as exc:
		print(f"Error: Unable to open grammar file: {exc}", file=sys.stderr)
		return 1

	try:
		grammar, start = parse_grammar_text(text, start=args.start, epsilon_tokens=settings.epsilon_tokens)
		art = LL1Workbench(settings).run(grammar, start)
	except InvalidGrammar as exc:
		print(f"Invalid grammar: {exc}", file=sys.stderr)
		return 1
	except LL1ConflictError as exc:
		print(f"Error: {exc}", file=sys.stderr)
		for c in exc.conflicts:
			print(f"  {c}", file=sys.stderr)
		return 1

	report = render_report(art, column_width=settings.column_width)
	if args.output == "-":
		sys.stdout.write(report)
	else:
		Path(args.output).write_text(report, encoding="utf-8")
		print(f"Processing complete. Check {args.output} for results.")

	if args.trace:
		_print_passes("FIRST", art.first_passes)
		_print_passes("FOLLOW", art.follow_passes)

	if args.export_dir:
		written = export_csv(art, Path(args.export_dir))
		xlsx_ok = export_xlsx(art, Path(args.export_dir) / "LL1_Parse_Table.xlsx")
		log.info("wrote %s (xlsx: %s)", ", ".join(p.name for p in written), xlsx_ok)

	if args.parse is not None:
		result = parse_tokens_ll1(art.final, art.table, art.start, args.parse.split())
		for s in result.steps:
			print("STACK:", " ".join(s.stack), "| IN:", " ".join(s.remaining_input), "| ACT:", s.action.replace(EPS, "eps"))
		print("accepted:", result.accepted)
		for nt, t in result.ambiguous_cells:
			print(f"warning: M[{nt}, {t}] had more than one candidate; the later production was used")
		if result.error:
			print("error:", result.error)
			return 2

	return 0


if __name__ == "__main__":
	sys.exit(main())
