"""Tests for api/main.py"""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


@pytest.fixture
def client():
    from game_review.api.main import app
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_analyze_returns_bundle(client, scholars_mate):
    resp = client.post("/analyze", json={"pgn": scholars_mate, "username": "alice"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["game"]["outcome"] == "Win"
    assert data["game"]["userColor"] == "white"
    assert data["openings"]["eco"] == "C20"
    assert 0 <= data["fundamentals"]["kingSafety"] <= 100


def test_analyze_rejects_empty_pgn(client):
    resp = client.post("/analyze", json={"pgn": "   ", "username": "alice"})
    assert resp.status_code == 400


def test_analyze_requires_username(client, scholars_mate):
    resp = client.post("/analyze", json={"pgn": scholars_mate})
    assert resp.status_code == 422


def test_analyze_survives_internal_failure(client, scholars_mate):
    with patch("game_review.analyzer.run_tactics_analysis", side_effect=RuntimeError("boom")):
        resp = client.post("/analyze", json={"pgn": scholars_mate, "username": "alice"})
    assert resp.status_code == 200
    assert resp.json()["openings"]["name"] == "Unknown Opening"


def test_parse_returns_headers_and_moves(client, scholars_mate):
    resp = client.post("/parse", json={"pgn": scholars_mate})
    assert resp.status_code == 200
    data = resp.json()
    assert data["white"] == "alice"
    assert data["date"] == "2024-03-15"
    assert data["timeControl"] == "300+0"
    assert data["moves"] == ["e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7#"]


def test_modules_are_namespaced_under_game_review():
    import pkgutil

    import game_review

    names = {m.name for m in pkgutil.iter_modules(game_review.__path__)}
    assert {
        "ai_analysis", "analyzer", "api", "fundamentals_analysis", "game_analysis", "mock_engine",
        "models", "openings_analysis", "pgn_parser", "rules", "schemas", "tactics_analysis",
    } <= names
    for bare in ("models", "schemas", "rules", "analyzer"):
        assert bare not in sys.modules
