"""
Unit tests for record validation and Film assembly.
"""

import dataclasses

import pytest

from film_parser.errors import MissingFieldsError
from film_parser.models import ExtractedFields, Film
from film_parser.validator import assemble_film, missing_fields, validate_fields


def complete_fields(**overrides) -> ExtractedFields:
	values = dict(
		title="Some_Title",
		year=2024,
		director="Some_Director",
		writer="Some_Writer",
		genre=["Some_Genre"],
		stars=["Some_Actor_A", "Some_Actor_B"],
		description="Some_Description.",
	)
	values.update(overrides)
	return ExtractedFields(**values)


def test_complete_fields_have_nothing_missing():
	assert missing_fields(complete_fields()) == []
	validate_fields(complete_fields())  # does not raise


def test_defaults_are_all_missing():
	assert missing_fields(ExtractedFields()) == [
		"Title", "Year", "Director", "Writer", "Genre", "Stars", "Description",
	]


@pytest.mark.parametrize("field, default, label", [
	("title", "", "Title"),
	("year", 0, "Year"),
	("director", "", "Director"),
	("writer", "", "Writer"),
	("genre", [], "Genre"),
	("stars", [], "Stars"),
	("description", "", "Description"),
])
def test_each_default_field_is_reported(field, default, label):
	with pytest.raises(MissingFieldsError) as exc:
		validate_fields(complete_fields(**{field: default}))
	assert exc.value.missing == [label]
	assert str(exc.value) == "Missing required film fields"


def test_assemble_film_builds_immutable_film():
	film = assemble_film(complete_fields())
	assert film == Film(
		title="Some_Title",
		year=2024,
		director="Some_Director",
		writer="Some_Writer",
		genre=("Some_Genre",),
		stars=("Some_Actor_A", "Some_Actor_B"),
		description="Some_Description.",
	)
	with pytest.raises(dataclasses.FrozenInstanceError):
		film.title = "Other"


def test_assemble_film_propagates_missing_fields():
	with pytest.raises(MissingFieldsError):
		assemble_film(complete_fields(stars=[]))


def test_film_to_dict_uses_lists():
	data = assemble_film(complete_fields()).to_dict()
	assert data["genre"] == ["Some_Genre"]
	assert data["stars"] == ["Some_Actor_A", "Some_Actor_B"]
	assert data["year"] == 2024
