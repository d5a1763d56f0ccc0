"""
Shared fixtures for the film parser tests.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))


VALID_FIELDS = {
	"Title": "I Used To Be Funny",
	"Year": "2023",
	"Director": "Ally Pankiw",
	"Writer": "Ally Pankiw",
	"Genre": "[Comedy, Drama]",
	"Stars": "[Rachel Sennott, Olga Petsa, Jason Jones]",
	"Description": "A stand-up comedian struggling with PTSD.",
}

VALID_RECORD = (
	"Title: I Used To Be Funny; Year: 2023; Director: Ally Pankiw; Writer: Ally Pankiw; "
	"Genre: [Comedy, Drama]; Stars: [Rachel Sennott, Olga Petsa, Jason Jones]; "
	"Description: A stand-up comedian struggling with PTSD."
)


def build_record(**overrides) -> str:
	"""
	Build a record string from VALID_FIELDS.
	Pass Label="value" to replace a field, or Label=None to leave it out entirely.
	"""
	fields = dict(VALID_FIELDS)
	fields.update(overrides)
	return "; ".join(f"{label}: {value}" for label, value in fields.items() if value is not None)


@pytest.fixture
def valid_record() -> str:
	return VALID_RECORD


@pytest.fixture
def make_record():
	return build_record
