"""
Unit tests for PipelineConfig.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from film_parser.config import PipelineConfig


def test_defaults():
	config = PipelineConfig()
	assert config.mode == "lenient"
	assert config.workers == 1
	assert config.result_path == Path("data/result_file.txt")
	assert config.structure_path == Path("data/result_wo_formating_file.txt")
	assert config.log_level == "INFO"


def test_from_env_reads_prefixed_variables():
	config = PipelineConfig.from_env({
		"FILM_PARSER_MODE": "Strict",
		"FILM_PARSER_WORKERS": "4",
		"FILM_PARSER_LOG_LEVEL": "debug",
		"FILM_PARSER_RESULT_PATH": "out/films.txt",
		"UNRELATED": "x",
	})
	assert config.mode == "strict"
	assert config.workers == 4
	assert config.log_level == "DEBUG"
	assert config.result_path == Path("out/films.txt")


def test_overrides_win_and_none_is_ignored():
	config = PipelineConfig.from_env({"FILM_PARSER_MODE": "strict", "FILM_PARSER_WORKERS": "3"}, mode="lenient", workers=None)
	assert config.mode == "lenient"
	assert config.workers == 3


@pytest.mark.parametrize("kwargs", [
	{"mode": "sometimes"},
	{"workers": 0},
	{"log_level": "LOUD"},
	{"unknown": 1},
])
def test_invalid_settings(kwargs):
	with pytest.raises(ValidationError):
		PipelineConfig(**kwargs)


def test_config_is_frozen():
	with pytest.raises(ValidationError):
		PipelineConfig().mode = "strict"
