"""
Pytest configuration and fixtures for Lexicon Stream backend tests.
"""

from __future__ import annotations

import copy

import httpx
import pytest

from backend.config import Settings
from backend.main import create_app
from backend.services.stream_store import StreamStore

SAMPLE_STATE = {
    "generation": 10,
    "words": {
        "ba": {"born": 2, "meaning": "fire", "category": "noun", "fitness": 0.8, "uses": 5},
        "ki": {"born": 6, "meaning": "to see", "category": "verb", "fitness": 0.3, "uses": 1},
    },
    "extinct": [
        {"word": "zel", "meaning": "void", "born": 1, "died": 4, "uses": 0},
        {"word": "om", "meaning": "sky", "category": "noun", "born": 3},
    ],
    "compounds": {
        "baki": {"born": 7, "compound_meaning": "lamp", "parts": ["ba", "ki"], "meanings": ["fire", "to see"]},
    },
    "sound_shifts": [{"gen": 5, "from": "pa", "to": "ba", "meaning": "fire"}],
    "stats": {"total_generated": 4, "total_extinct": 2, "total_shifts": 1},
}


@pytest.fixture
def sample_state():
    """A fresh copy of the sample /api/state document."""
    return copy.deepcopy(SAMPLE_STATE)


@pytest.fixture
def test_settings(tmp_path, monkeypatch):
    """Settings pointing every path into tmp_path."""
    monkeypatch.setenv("LEXICON_URL", "http://lexicon.test:7890/")
    monkeypatch.setenv("STREAM_FILE", str(tmp_path / "stream.json"))
    monkeypatch.setenv("SNAPSHOT_DIR", str(tmp_path / "snapshots"))
    monkeypatch.setenv("STATIC_DIR", str(tmp_path / "public"))
    (tmp_path / "public").mkdir()
    (tmp_path / "public" / "index.html").write_text("<html><body><div id=\"stream\"></div></body></html>")
    return Settings()


@pytest.fixture
def store(test_settings):
    return StreamStore(test_settings.STREAM_FILE, test_settings.SNAPSHOT_DIR)


@pytest.fixture
async def client(test_settings):
    """HTTP client bound to an app built from test_settings."""
    app = create_app(test_settings)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
