"""Errors raised by the film record parser."""

from typing import List, Optional

from .models import Diagnostic


class FilmParserError(Exception):
	"""Base error for this package."""


class RecordError(FilmParserError):
	"""A single record could not be turned into a Film. Non-fatal at batch level."""
	kind = "RecordError"


class EmptyInputError(RecordError):
	"""Record text is empty or whitespace only; the grammar is never invoked."""
	kind = "EmptyInput"

	def __init__(self, message: str = "Empty input was provided"):
		super().__init__(message)


class RecordSyntaxError(RecordError):
	"""Record text does not match the grammar."""
	kind = "SyntaxError"

	def __init__(self, message: str, offset: int = 0, suggestion: Optional[str] = None):
		self.offset = offset  # character offset inside the record
		self.suggestion = suggestion  # closest known label for an unrecognized one
		self.line = None  # set by parse_document for multi-line input
		if suggestion:
			message = f"{message} (did you mean '{suggestion}'?)"
		super().__init__(f"{message} at offset {offset}")


class InvalidYearError(RecordError):
	"""The Year span is present but is not an unsigned integer."""
	kind = "InvalidYear"

	def __init__(self, span: str):
		self.span = span
		super().__init__(f"Invalid year: {span!r}")


class MissingFieldsError(RecordError):
	"""The record parsed, but one or more required fields resolved to a default."""
	kind = "MissingFields"

	def __init__(self, missing: Optional[List[str]] = None):
		self.missing = list(missing or [])
		super().__init__("Missing required film fields")


class InternalParserError(FilmParserError):
	"""An invariant of the parse tree was violated. Never reported as a data problem."""


class BatchAbortedError(FilmParserError):
	"""Strict mode stopped at the first failing record."""

	def __init__(self, diagnostic: Diagnostic):
		self.diagnostic = diagnostic
		super().__init__(
			f"Batch aborted at record {diagnostic.index}: {diagnostic.kind}: {diagnostic.reason}"
		)


class RecordFileNotFoundError(FilmParserError):
	"""Specified record file was not found."""


class RecordFileReadError(FilmParserError):
	"""Record file exists but could not be opened or decoded."""


class ResultWriteError(FilmParserError):
	"""Result file could not be created or written."""
