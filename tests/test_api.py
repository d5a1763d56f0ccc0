"""
Tests for the FastAPI server, exercised through TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api import app

BAD_RECORD = "Title: Broken; Genre: Drama, Mystery"


@pytest.fixture
def client(monkeypatch):
	monkeypatch.delenv("FILM_PARSER_MODE", raising=False)
	monkeypatch.delenv("FILM_PARSER_WORKERS", raising=False)
	with TestClient(app) as c:  # runs the lifespan hook
		yield c


def test_health(client):
	resp = client.get("/health")
	assert resp.status_code == 200
	body = resp.json()
	assert body["status"] == "ok"
	assert body["mode"] == "lenient"


def test_parse_lenient(client, valid_record):
	resp = client.post("/parse", json={"records": [valid_record, BAD_RECORD, ""]})
	assert resp.status_code == 200
	body = resp.json()
	assert body["accepted"] == 1
	assert body["rejected"] == 2
	assert body["films"][0]["genre"] == ["Comedy", "Drama"]
	assert [d["kind"] for d in body["diagnostics"]] == ["SyntaxError", "EmptyInput"]
	assert body["diagnostics"][0]["record"] == BAD_RECORD


def test_parse_strict_returns_422(client, valid_record):
	resp = client.post("/parse", json={"records": [valid_record, BAD_RECORD], "mode": "strict"})
	assert resp.status_code == 422
	assert resp.json()["detail"]["index"] == 1


def test_parse_rejects_unknown_mode(client):
	resp = client.post("/parse", json={"records": [], "mode": "sometimes"})
	assert resp.status_code == 422


def test_parse_single_record(client, valid_record):
	resp = client.post("/parse/record", json={"record": valid_record})
	assert resp.status_code == 200
	assert resp.json()["title"] == "I Used To Be Funny"
	assert resp.json()["year"] == 2023


def test_parse_single_record_error_kind(client):
	resp = client.post("/parse/record", json={"record": "Title: Some_Title; Year: 2023;"})
	assert resp.status_code == 422
	detail = resp.json()["detail"]
	assert detail["kind"] == "MissingFields"
	assert "Director" in detail["reason"]
