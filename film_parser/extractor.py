"""
Field extraction module.
Walks a RecordNode and pulls out raw values for the seven film fields.
Extraction is total: a field the record left out keeps its default and is judged by the validator.
"""

import re  # digit-run check for years
from typing import Iterable, List  # type annotations

from loguru import logger  # console logging

from .errors import InternalParserError, InvalidYearError
from .models import (
	DescriptionNode,
	DirectorNode,
	ExtractedFields,
	GenreNode,
	RecordNode,
	StarsNode,
	TitleNode,
	WriterNode,
	YearNode,
)

RE_DIGITS = re.compile(r"[0-9]+")  # ASCII digits only; str.isdigit() also accepts superscripts
MAX_YEAR = 2 ** 32 - 1  # unsigned 32-bit upper bound
QUOTE_CHARS = ('"', "'")


def parse_year(span: str) -> int:
	"""
	Convert the text captured after 'Year:' into an unsigned integer.
	An empty span means the year was left blank and returns 0 (the absent sentinel);
	anything else that is not a digit run raises InvalidYearError instead of defaulting.
	"""
	span = span.strip()
	if not span:
		return 0
	if not RE_DIGITS.fullmatch(span):
		raise InvalidYearError(span)
	year = int(span)
	if year > MAX_YEAR:  # overflow counts as malformed
		raise InvalidYearError(span)
	return year


def strip_quotes(item: str) -> str:
	"""Remove one matching pair of surrounding quote characters, if present."""
	if len(item) >= 2 and item[0] in QUOTE_CHARS and item[-1] == item[0]:
		return item[1:-1]
	return item


def split_list_items(items: Iterable[str]) -> List[str]:
	"""
	Normalize raw list items into an ordered list of trimmed strings.

	Quotes are stripped from the ends of each item only, then the item is split on
	commas unconditionally. So '"A, B"' yields two entries, 'A' and 'B': quoting does
	not protect commas. Every piece is kept, empty ones included, in order and without deduplication.
	"""
	out: List[str] = []
	for item in items:
		out.extend(piece.strip() for piece in strip_quotes(item.strip()).split(","))
	return out


def extract_fields(record: RecordNode) -> ExtractedFields:
	"""Pull every field value out of a parsed record."""
	fields = ExtractedFields()
	for node in record.fields:
		if isinstance(node, TitleNode):
			fields.title = node.value
		elif isinstance(node, YearNode):
			fields.year = parse_year(node.span)  # may raise InvalidYearError
		elif isinstance(node, DirectorNode):
			fields.director = node.value
		elif isinstance(node, WriterNode):
			fields.writer = node.value
		elif isinstance(node, GenreNode):
			fields.genre = split_list_items(node.items)
		elif isinstance(node, StarsNode):
			fields.stars = split_list_items(node.items)
		elif isinstance(node, DescriptionNode):
			fields.description = node.value
		else:
			# Only reachable if something other than the grammar built the tree
			raise InternalParserError(f"unexpected node in record: {node!r}")
	logger.debug(f"[Extractor] Extracted fields: {fields}")
	return fields
