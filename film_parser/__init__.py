"""
Film Parser.
Parses semi-structured film records ("Title: ...; Year: ...; ...") into validated Film objects.
"""

__version__ = "1.0.0"

from .config import PipelineConfig
from .errors import (
	BatchAbortedError,
	EmptyInputError,
	FilmParserError,
	InternalParserError,
	InvalidYearError,
	MissingFieldsError,
	RecordError,
	RecordSyntaxError,
)
from .models import BatchResult, Diagnostic, Film
from .pipeline import BatchPipeline, parse_film, parse_films

__all__ = [
	"BatchAbortedError",
	"BatchPipeline",
	"BatchResult",
	"Diagnostic",
	"EmptyInputError",
	"Film",
	"FilmParserError",
	"InternalParserError",
	"InvalidYearError",
	"MissingFieldsError",
	"PipelineConfig",
	"RecordError",
	"RecordSyntaxError",
	"parse_film",
	"parse_films",
]
