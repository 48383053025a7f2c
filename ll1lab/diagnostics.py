"""Non-fatal findings collected while a grammar goes through the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Severity(Enum):
	# a rewrite the grammar author may want to know about (fresh non-terminal)
	INFO = "info"
	# the result is usable but lossy: table conflict, renamed or dead non-terminal
	WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
	severity: Severity
	message: str
	nonterminal: Optional[str] = None
	hint: Optional[str] = None

	def __str__(self) -> str:
		where = f" ({self.nonterminal})" if self.nonterminal else ""
		return f"[{self.severity.name}]{where} {self.message}"


class DiagnosticEngine:
	def __init__(self) -> None:
		self.items: List[Diagnostic] = []

	def info(self, message: str, nonterminal: Optional[str] = None) -> None:
		self.items.append(Diagnostic(Severity.INFO, message, nonterminal))

	def warning(self, message: str, nonterminal: Optional[str] = None, hint: Optional[str] = None) -> None:
		self.items.append(Diagnostic(Severity.WARNING, message, nonterminal, hint))
