"""
Data models for the Film Parser.
Defines the parsed record tree, the final Film entity and the batch result containers.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field, asdict  # auto-generates __init__, __repr__, etc.
# Enum gives us a closed set of field kinds in canonical order
from enum import Enum  # field labels
# Import typing helpers for precise and self-documenting types
from typing import List, Tuple, Union  # lists, fixed tuples and variant unions


class FieldKind(str, Enum):
	"""The seven recognized field labels, declared in the order a record must list them."""
	TITLE = "Title"
	YEAR = "Year"
	DIRECTOR = "Director"
	WRITER = "Writer"
	GENRE = "Genre"
	STARS = "Stars"
	DESCRIPTION = "Description"

	@property
	def position(self) -> int:
		"""Index of this field in the canonical record order."""
		return list(FieldKind).index(self)

	@property
	def is_list(self) -> bool:
		return self in (FieldKind.GENRE, FieldKind.STARS)

	@classmethod
	def labels(cls) -> List[str]:
		return [k.value for k in cls]


# Parsed structure: one frozen variant per field kind.

@dataclass(frozen=True)
class TitleNode:
	value: str  # trimmed scalar text, may be empty
	kind: FieldKind = field(default=FieldKind.TITLE, init=False)


@dataclass(frozen=True)
class YearNode:
	span: str  # raw trimmed text following "Year:", checked later by parse_year
	kind: FieldKind = field(default=FieldKind.YEAR, init=False)


@dataclass(frozen=True)
class DirectorNode:
	value: str
	kind: FieldKind = field(default=FieldKind.DIRECTOR, init=False)


@dataclass(frozen=True)
class WriterNode:
	value: str
	kind: FieldKind = field(default=FieldKind.WRITER, init=False)


@dataclass(frozen=True)
class GenreNode:
	items: Tuple[str, ...]  # raw item spans, trimmed, quotes still attached
	kind: FieldKind = field(default=FieldKind.GENRE, init=False)


@dataclass(frozen=True)
class StarsNode:
	items: Tuple[str, ...]
	kind: FieldKind = field(default=FieldKind.STARS, init=False)


@dataclass(frozen=True)
class DescriptionNode:
	value: str
	kind: FieldKind = field(default=FieldKind.DESCRIPTION, init=False)


FieldNode = Union[TitleNode, YearNode, DirectorNode, WriterNode, GenreNode, StarsNode, DescriptionNode]


@dataclass(frozen=True)
class RecordNode:
	"""One parsed record: the original text plus its fields in canonical order."""
	text: str  # original record text as given to the grammar
	fields: Tuple[FieldNode, ...]  # present fields only, never reordered


@dataclass(frozen=True)
class DocumentNode:
	"""Root of a parsed document: one or more records."""
	records: Tuple[RecordNode, ...]


@dataclass
class ExtractedFields:
	"""
	Raw field values pulled out of a RecordNode.
	Absent fields keep their defaults so the validator can tell them apart.
	"""
	title: str = ""
	year: int = 0  # 0 doubles as the "absent" sentinel
	director: str = ""
	writer: str = ""
	genre: List[str] = field(default_factory=list)
	stars: List[str] = field(default_factory=list)
	description: str = ""


@dataclass(frozen=True)
class Film:
	"""
	Represents a single validated film record.
	Instances only come out of the assembler, so every field is non-default.
	"""
	title: str  # film title
	year: int  # release year, non-zero
	director: str  # director name
	writer: str  # writer name
	genre: Tuple[str, ...]  # genres in input order
	stars: Tuple[str, ...]  # main cast in input order
	description: str  # short synopsis

	@classmethod
	def from_str(cls, text: str) -> "Film":
		"""Parse a single record string into a Film (raises RecordError subclasses)."""
		# Local import: the pipeline depends on this module
		from .pipeline import parse_film
		return parse_film(text)

	def to_dict(self) -> dict:
		data = asdict(self)
		data["genre"] = list(self.genre)  # JSON-friendly lists
		data["stars"] = list(self.stars)
		return data


@dataclass(frozen=True)
class Diagnostic:
	"""A record that failed somewhere in the pipeline, kept instead of aborting the batch."""
	index: int  # 0-based position of the record in the batch
	record: str  # original record text
	reason: str  # human-readable failure message
	kind: str  # EmptyInput | SyntaxError | InvalidYear | MissingFields


@dataclass
class BatchResult:
	"""Output of a batch run: accepted films and diagnostics, both in input order."""
	films: List[Film] = field(default_factory=list)
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return not self.diagnostics

	def raise_for_diagnostics(self) -> None:
		"""Fail-fast check for callers that ran in lenient mode."""
		if self.diagnostics:
			# Local import: errors.py imports this module
			from .errors import BatchAbortedError
			raise BatchAbortedError(self.diagnostics[0])
