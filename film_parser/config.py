"""
Pipeline configuration.
Settings come from defaults, then FILM_PARSER_* environment variables, then explicit overrides (CLI flags).
"""

import os  # environment lookup
from pathlib import Path  # result file locations
from typing import Literal, Mapping, Optional  # type annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator  # validated settings model

ENV_PREFIX = "FILM_PARSER_"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")  # loguru levels


class PipelineConfig(BaseModel):
	"""Settings shared by the batch pipeline, the CLI and the API."""
	model_config = ConfigDict(frozen=True, extra="forbid")

	mode: Literal["strict", "lenient"] = "lenient"  # failure policy for a batch
	workers: int = Field(default=1, ge=1)  # >1 fans records out to a thread pool
	result_path: Path = Path("data") / "result_file.txt"  # formatted film output
	structure_path: Path = Path("data") / "result_wo_formating_file.txt"  # repr() output
	log_level: str = "INFO"

	@field_validator("mode", mode="before")
	@classmethod
	def _normalize_mode(cls, value):
		return value.strip().lower() if isinstance(value, str) else value

	@field_validator("log_level")
	@classmethod
	def _check_log_level(cls, value: str) -> str:
		level = value.strip().upper()
		if level not in LOG_LEVELS:
			raise ValueError(f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
		return level

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX, **overrides) -> "PipelineConfig":
		"""
		Build a config from environment variables such as FILM_PARSER_MODE or FILM_PARSER_WORKERS.
		Keyword overrides win over the environment; None values are ignored so unset CLI flags fall through.
		"""
		environ = os.environ if environ is None else environ
		data = {}
		for name in cls.model_fields:
			key = prefix + name.upper()
			if key in environ:
				data[name] = environ[key]
		data.update({k: v for k, v in overrides.items() if v is not None})
		return cls(**data)
