"""
Record validation and assembly.
A Film is only ever built here, after every field has been checked against its default.
"""

from typing import List

from .errors import MissingFieldsError
from .models import ExtractedFields, FieldKind, Film


def missing_fields(fields: ExtractedFields) -> List[str]:
	"""Return the labels of fields that still hold their default value, in canonical order."""
	checks = [
		(FieldKind.TITLE, bool(fields.title)),
		(FieldKind.YEAR, fields.year != 0),
		(FieldKind.DIRECTOR, bool(fields.director)),
		(FieldKind.WRITER, bool(fields.writer)),
		(FieldKind.GENRE, bool(fields.genre)),
		(FieldKind.STARS, bool(fields.stars)),
		(FieldKind.DESCRIPTION, bool(fields.description)),
	]
	return [kind.value for kind, present in checks if not present]


def validate_fields(fields: ExtractedFields) -> None:
	"""Raise MissingFieldsError if any field is empty, zero or an empty list."""
	missing = missing_fields(fields)
	if missing:
		raise MissingFieldsError(missing)


def assemble_film(fields: ExtractedFields) -> Film:
	"""Validate the extracted values and build the immutable Film."""
	validate_fields(fields)
	return Film(
		title=fields.title,
		year=fields.year,
		director=fields.director,
		writer=fields.writer,
		genre=tuple(fields.genre),
		stars=tuple(fields.stars),
		description=fields.description,
	)
