"""
Record grammar module.
Turns the raw text of a film record into a RecordNode tree, and a multi-line document into a DocumentNode.

A record is a fixed-order sequence of ';'-separated fields:

	Title: <scalar>; Year: <scalar>; Director: <scalar>; Writer: <scalar>;
	Genre: [<item>, ...]; Stars: [<item>, ...]; Description: <scalar>

Fields may be left out (the validator rejects that later) but never reordered or repeated.
"""

import re  # regex tokens for labels, scalars and list items
from typing import List, Optional, Tuple  # type annotations

from rapidfuzz import process, fuzz, utils  # "did you mean" for unknown labels

from loguru import logger  # console logging

from .errors import EmptyInputError, RecordSyntaxError
from .models import (
	DescriptionNode,
	DirectorNode,
	DocumentNode,
	FieldKind,
	FieldNode,
	GenreNode,
	RecordNode,
	StarsNode,
	TitleNode,
	WriterNode,
	YearNode,
)


class RecordGrammar:
	"""
	Hand-written scanner for the film record grammar.
	Each method consumes text from a position and returns the new position, raising
	RecordSyntaxError with the offending offset when the text does not fit.
	"""

	# Pre-compiled tokens
	RE_LABEL = re.compile(r"\s*(?P<label>[A-Za-z][\w \-]*?)\s*:")  # Title:
	RE_SCALAR = re.compile(r"[^;]*")  # free text up to the next separator
	RE_FIELD_END = re.compile(r"\s*(?:;|\Z)")  # separator or end of record
	RE_END = re.compile(r"\s*\Z")  # only whitespace left
	RE_LIST_OPEN = re.compile(r"\s*\[")
	RE_LIST_CLOSE = re.compile(r"\s*\]")
	# Quoted items may carry commas; bare items stop at ',' or ']'
	RE_ITEM = re.compile(r"""\s*(?P<item>"[^"]*"|'[^']*'|[^,\[\]\s][^,\[\]]*?)\s*(?=[,\]])""")
	RE_ITEM_SEP = re.compile(r"\s*(?P<sep>[,\]])")

	# Minimum rapidfuzz score for suggesting a label
	SUGGESTION_CUTOFF = 70

	_LABELS = {k.value: k for k in FieldKind}

	def parse_record(self, text: str) -> RecordNode:
		"""Parse one record. Raises EmptyInputError or RecordSyntaxError."""
		if text is None or not text.strip():  # empty input guard, before any scanning
			raise EmptyInputError()

		fields: List[FieldNode] = []
		last_position = -1  # canonical index of the previous field
		pos = 0
		while not self.RE_END.match(text, pos):
			label_match = self.RE_LABEL.match(text, pos)
			if not label_match:
				raise RecordSyntaxError("expected '<Label>:'", offset=self._skip_ws(text, pos))

			label = label_match.group("label")
			label_offset = label_match.start("label")
			kind = self._lookup_label(label, label_offset)

			# Enforce canonical order; equal position means a repeated field
			if kind.position == last_position:
				raise RecordSyntaxError(f"duplicate field '{label}'", offset=label_offset)
			if kind.position < last_position:
				raise RecordSyntaxError(
					f"field '{label}' out of order, fields must follow {', '.join(FieldKind.labels())}",
					offset=label_offset,
				)

			node, pos = self._parse_value(kind, text, label_match.end())
			fields.append(node)
			last_position = kind.position

			end_match = self.RE_FIELD_END.match(text, pos)
			if not end_match:
				raise RecordSyntaxError(f"expected ';' after {label} value", offset=self._skip_ws(text, pos))
			pos = end_match.end()

		logger.debug(f"[Grammar] Parsed record with fields {[f.kind.value for f in fields]}")
		return RecordNode(text=text, fields=tuple(fields))

	def parse_document(self, text: str) -> DocumentNode:
		"""Parse a newline-separated document of records; blank lines are skipped."""
		records: List[RecordNode] = []
		for line_num, line in enumerate(text.splitlines(), 1):  # line numbers for error reports
			if not line.strip():
				continue
			try:
				records.append(self.parse_record(line))
			except RecordSyntaxError as e:
				e.line = line_num
				logger.debug(f"[Grammar] Syntax error on line {line_num}: {e}")
				raise
		if not records:
			raise EmptyInputError("Document contains no records")
		logger.debug(f"[Grammar] Parsed document with {len(records)} records")
		return DocumentNode(records=tuple(records))

	def _parse_value(self, kind: FieldKind, text: str, pos: int) -> Tuple[FieldNode, int]:
		if kind.is_list:
			items, pos = self._parse_list(kind, text, pos)
			if kind is FieldKind.GENRE:
				return GenreNode(items=items), pos
			return StarsNode(items=items), pos

		scalar = self.RE_SCALAR.match(text, pos)  # always matches, possibly empty
		value = scalar.group(0).strip()
		end = scalar.end()
		if kind is FieldKind.TITLE:
			return TitleNode(value=value), end
		if kind is FieldKind.YEAR:
			return YearNode(span=value), end
		if kind is FieldKind.DIRECTOR:
			return DirectorNode(value=value), end
		if kind is FieldKind.WRITER:
			return WriterNode(value=value), end
		return DescriptionNode(value=value), end

	def _parse_list(self, kind: FieldKind, text: str, pos: int) -> Tuple[Tuple[str, ...], int]:
		opening = self.RE_LIST_OPEN.match(text, pos)
		if not opening:
			raise RecordSyntaxError(f"{kind.value} expects a bracketed list '[...]'", offset=self._skip_ws(text, pos))
		pos = opening.end()

		closing = self.RE_LIST_CLOSE.match(text, pos)
		if closing:  # "[]" is an empty list, rejected later as a missing field
			return (), closing.end()

		items: List[str] = []
		while True:
			item = self.RE_ITEM.match(text, pos)
			if not item:
				raise RecordSyntaxError(
					f"empty or unterminated item in {kind.value} list", offset=self._skip_ws(text, pos)
				)
			items.append(item.group("item").strip())
			sep = self.RE_ITEM_SEP.match(text, item.end())  # lookahead in RE_ITEM guarantees a match
			pos = sep.end()
			if sep.group("sep") == "]":
				return tuple(items), pos

	def _lookup_label(self, label: str, offset: int) -> FieldKind:
		kind = self._LABELS.get(label)
		if kind is not None:
			return kind
		suggestion = self._suggest_label(label)
		raise RecordSyntaxError(f"unrecognized field label '{label}'", offset=offset, suggestion=suggestion)

	def _suggest_label(self, label: str) -> Optional[str]:
		# Fuzzy match against the known labels, case-insensitive
		best = process.extractOne(
			label,
			FieldKind.labels(),
			scorer=fuzz.ratio,
			processor=utils.default_process,
			score_cutoff=self.SUGGESTION_CUTOFF,
		)
		if best:
			logger.debug(f"[Grammar] Label fuzzy match: '{label}' -> '{best[0]}' (score={best[1]:.1f})")
			return best[0]
		return None

	@staticmethod
	def _skip_ws(text: str, pos: int) -> int:
		while pos < len(text) and text[pos].isspace():
			pos += 1
		return pos


_GRAMMAR = RecordGrammar()


def parse_record(text: str) -> RecordNode:
	return _GRAMMAR.parse_record(text)


def parse_document(text: str) -> DocumentNode:
	return _GRAMMAR.parse_document(text)


def split_records(text: str) -> List[str]:
	"""Split a document into raw record strings, one per non-blank line."""
	return [line for line in text.splitlines() if line.strip()]
