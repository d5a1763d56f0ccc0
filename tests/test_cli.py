"""
Tests for the film-parser command line.
"""

import pytest

from film_parser import cli

BAD_RECORD = "Title: Broken; Genre: Drama, Mystery"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
	for name in ("MODE", "WORKERS", "RESULT_PATH", "STRUCTURE_PATH", "LOG_LEVEL"):
		monkeypatch.delenv(f"FILM_PARSER_{name}", raising=False)


@pytest.fixture
def record_file(tmp_path, valid_record):
	def write(*records):
		path = tmp_path / "films.txt"
		path.write_text("\n".join(records) + "\n", encoding="utf-8")
		return path
	return write


def test_parse_all_accepted_writes_results(tmp_path, record_file, valid_record, capsys):
	path = record_file(valid_record, valid_record)
	out_file = tmp_path / "out" / "result.txt"
	struct_file = tmp_path / "out" / "structure.txt"
	code = cli.main([
		"--log-level", "ERROR", "parse", str(path), "--output", str(out_file), "--structure-output", str(struct_file),
	])
	assert code == cli.EXIT_OK
	assert "Accepted 2 of 2 records" in capsys.readouterr().out
	assert out_file.read_text(encoding="utf-8").count("Title: I Used To Be Funny") == 2
	assert struct_file.read_text(encoding="utf-8").count("Film(") == 2


def test_parse_with_diagnostics(record_file, valid_record, capsys):
	path = record_file(valid_record, BAD_RECORD)
	code = cli.main(["--log-level", "ERROR", "parse", str(path), "--no-write"])
	out = capsys.readouterr().out
	assert code == cli.EXIT_REJECTED
	assert "Accepted 1 of 2 records" in out
	assert "Rejected 1 records" in out
	assert "SyntaxError" in out


def test_parse_strict_aborts(record_file, valid_record, capsys):
	path = record_file(BAD_RECORD, valid_record)
	code = cli.main(["--log-level", "ERROR", "parse", str(path), "--no-write", "--mode", "strict"])
	assert code == cli.EXIT_REJECTED
	assert "Aborted" in capsys.readouterr().err


def test_parse_missing_file(tmp_path, capsys):
	code = cli.main(["--log-level", "ERROR", "parse", str(tmp_path / "nope.txt"), "--no-write"])
	assert code == cli.EXIT_USAGE
	assert "Error reading file" in capsys.readouterr().err


def test_parse_invalid_settings(record_file, valid_record, capsys):
	path = record_file(valid_record)
	code = cli.main(["--log-level", "ERROR", "parse", str(path), "--no-write", "--workers", "0"])
	assert code == cli.EXIT_USAGE
	assert "invalid settings" in capsys.readouterr().err


def test_help_and_credits(capsys):
	assert cli.main(["help"]) == cli.EXIT_OK
	assert "parse <filename>" in capsys.readouterr().out
	assert cli.main(["credits"]) == cli.EXIT_OK
	assert "Film Parser v" in capsys.readouterr().out


def test_log_level_is_global(monkeypatch, capsys):
	levels = []
	monkeypatch.setattr(cli, "configure_logging", lambda level: levels.append(level))
	assert cli.main(["--log-level", "debug", "credits"]) == cli.EXIT_OK
	assert levels == ["DEBUG"]
	with pytest.raises(SystemExit) as exc:
		cli.main(["--log-level", "LOUD", "help"])
	assert exc.value.code == 2


def test_no_command_is_usage_error():
	with pytest.raises(SystemExit) as exc:
		cli.main([])
	assert exc.value.code == 2


def test_test_command_reports_pytest_result(monkeypatch, capsys):
	calls = []

	class Completed:
		returncode = 0
		stdout = "3 passed"
		stderr = ""

	def fake_run(cmd, capture_output, text):
		calls.append(cmd)
		return Completed()

	monkeypatch.setattr(cli.subprocess, "run", fake_run)
	assert cli.main(["test", "tests/test_grammar.py"]) == 0
	assert calls[0][1:] == ["-m", "pytest", "tests/test_grammar.py"]
	assert "Tests passed successfully" in capsys.readouterr().out
