"""Pytest configuration."""

import pytest


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: mark test as calling the live AI endpoint (skipped without OPENROUTER_API_KEY)"
    )


SCHOLARS_MATE = """[Event "Casual Game"]
[Site "lichess.org"]
[Date "2024.03.15"]
[White "alice"]
[Black "bob"]
[Result "1-0"]
[ECO "C20"]
[Opening "King's Pawn Game"]
[TimeControl "300+0"]

1. e4 e5 2. Bc4 Nc6 3. Qh5 Nf6 4. Qxf7# 1-0
"""

RUY_LOPEZ = """[White "alice"]
[Black "bob"]
[Result "*"]
[ECO "C60"]
[Opening "Ruy Lopez"]

1. e4 e5 2. Nf3 Nc6 3. Bb5 a6 4. Ba4 Nf6 5. O-O Be7 *
"""

NAJDORF = """[White "carol"]
[Black "dave"]
[Result "1/2-1/2"]
[ECO "B90"]
[Opening "Sicilian Defense: Najdorf Variation"]

1. e4 c5 2. Nf3 d6 3. d4 cxd4 4. Nxd4 Nf6 5. Nc3 a6 6. Be3 e5 7. Nb3 Be6
8. f3 Be7 9. Qd2 O-O 10. O-O-O Nbd7 1/2-1/2
"""


@pytest.fixture
def scholars_mate():
    return SCHOLARS_MATE


@pytest.fixture
def ruy_lopez():
    return RUY_LOPEZ


@pytest.fixture
def najdorf():
    return NAJDORF


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    """Tests never reach the live AI endpoint unless they set a key themselves."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
