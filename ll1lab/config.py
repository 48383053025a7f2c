from __future__ import annotations

import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, Field

DEFAULT_EPSILON_TOKENS = ["ε", "eps", "epsilon", "EPS", "EPSILON"]

ENV_PREFIX = "LL1LAB_"


def _flag(value: str) -> bool:
	return value.strip().lower() in {"1", "true", "yes", "on"}


def _listing(value: str) -> List[str]:
	return [v.strip() for v in value.split(",") if v.strip()]


class Settings(BaseModel):
	# Raise instead of silently keeping the last production in a conflicting cell
	strict: bool = False
	epsilon_tokens: List[str] = Field(default_factory=lambda: list(DEFAULT_EPSILON_TOKENS))
	# Width of one column in the plain-text parsing table
	column_width: int = Field(default=20, ge=4)
	# Keep FIRST/FOLLOW iteration logs
	include_working: bool = False
	cors_origins: List[str] = Field(default_factory=lambda: ["*"])

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
		env = os.environ if environ is None else environ
		data = {}
		if ENV_PREFIX + "STRICT" in env:
			data["strict"] = _flag(env[ENV_PREFIX + "STRICT"])
		if ENV_PREFIX + "EPSILON_TOKENS" in env:
			data["epsilon_tokens"] = _listing(env[ENV_PREFIX + "EPSILON_TOKENS"])
		if ENV_PREFIX + "COLUMN_WIDTH" in env:
			data["column_width"] = env[ENV_PREFIX + "COLUMN_WIDTH"]
		if ENV_PREFIX + "INCLUDE_WORKING" in env:
			data["include_working"] = _flag(env[ENV_PREFIX + "INCLUDE_WORKING"])
		if ENV_PREFIX + "CORS_ORIGINS" in env:
			data["cors_origins"] = _listing(env[ENV_PREFIX + "CORS_ORIGINS"])
		return cls(**data)
