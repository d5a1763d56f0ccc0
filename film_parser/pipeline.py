"""
Batch pipeline module.
Runs each raw record through grammar, extraction, validation and assembly, and collects
accepted films and per-record diagnostics in input order.
"""

from concurrent.futures import ThreadPoolExecutor  # optional per-record fan-out
from pathlib import Path  # input file paths
from typing import Iterable, Iterator, List, Optional, Tuple, Union  # type annotations

# Import loguru for console logging
from loguru import logger  # simple structured logger

# Import project modules for data structures and stages
from .config import PipelineConfig  # mode / workers settings
from .data_loader import RecordLoader  # file -> record strings
from .errors import BatchAbortedError, MissingFieldsError, RecordError  # failure taxonomy
from .extractor import extract_fields  # parsed tree -> raw values
from .grammar import parse_record  # raw text -> parsed tree
from .models import BatchResult, Diagnostic, Film  # result containers
from .validator import assemble_film  # raw values -> Film

Outcome = Union[Film, RecordError]


def parse_film(text: str) -> Film:
	"""Parse a single record string into a Film, raising a RecordError subclass on failure."""
	record = parse_record(text)  # EmptyInputError / RecordSyntaxError
	fields = extract_fields(record)  # InvalidYearError
	return assemble_film(fields)  # MissingFieldsError


def describe_error(error: RecordError) -> str:
	"""Human-readable reason for a diagnostic."""
	if isinstance(error, MissingFieldsError) and error.missing:
		return f"{error}: {', '.join(error.missing)}"
	return str(error)


class BatchPipeline:
	"""
	Drives a collection of raw records through the parser.
	In lenient mode every failing record becomes a Diagnostic and the batch carries on;
	in strict mode the first failing record raises BatchAbortedError.
	InternalParserError is never turned into a diagnostic and always propagates.
	"""

	def __init__(self, config: Optional[PipelineConfig] = None):
		self.config = config or PipelineConfig()  # defaults: lenient, single worker
		self.loader = RecordLoader()  # used by parse_file
		logger.debug(f"[Pipeline] Initialized | mode={self.config.mode} | workers={self.config.workers}")

	@property
	def strict(self) -> bool:
		return self.config.mode == "strict"

	def run(self, records: Iterable[str]) -> BatchResult:
		"""Process records and return accepted films plus diagnostics, both in input order."""
		if isinstance(records, str):  # a single record, not an iterable of characters
			records = [records]
		records = list(records)  # need a stable index for ordering
		logger.info(f"[Pipeline] Processing {len(records)} records ({self.config.mode} mode)")

		result = BatchResult()  # accumulators
		for index, record, outcome in self._outcomes(records):
			if isinstance(outcome, Film):
				logger.debug(f"[Pipeline] Record {index} accepted | title={outcome.title!r} year={outcome.year}")
				result.films.append(outcome)
				continue

			diagnostic = Diagnostic(index=index, record=record, reason=describe_error(outcome), kind=outcome.kind)
			logger.warning(f"[Pipeline] Record {index} rejected | {diagnostic.kind}: {diagnostic.reason}")
			if self.strict:
				raise BatchAbortedError(diagnostic) from outcome
			result.diagnostics.append(diagnostic)

		logger.info(f"[Pipeline] Accepted {len(result.films)} of {len(records)} records, {len(result.diagnostics)} diagnostics")
		return result

	def parse_file(self, filepath: Union[str, Path]) -> BatchResult:
		"""Read a record file (one record per line) and run the batch over it."""
		return self.run(self.loader.read_records(filepath))

	def _outcomes(self, records: List[str]) -> Iterator[Tuple[int, str, Outcome]]:
		# Yields in input order; strict mode stops consuming at the first failure
		if self.config.workers > 1 and len(records) > 1:
			yield from self._outcomes_parallel(records)
			return
		for index, record in enumerate(records):
			yield index, record, self._process(record)

	def _outcomes_parallel(self, records: List[str]) -> Iterator[Tuple[int, str, Outcome]]:
		logger.debug(f"[Pipeline] Fanning out over {self.config.workers} worker threads")
		with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
			futures = [pool.submit(self._process, record) for record in records]
			# Merge by original index, never by completion order
			for index, (record, future) in enumerate(zip(records, futures)):
				yield index, record, future.result()  # re-raises InternalParserError

	@staticmethod
	def _process(record: str) -> Outcome:
		try:
			return parse_film(record)
		except RecordError as e:
			return e


def parse_films(records: Iterable[str], config: Optional[PipelineConfig] = None) -> BatchResult:
	"""Convenience wrapper: run a batch with the given (or default) configuration."""
	return BatchPipeline(config).run(records)
