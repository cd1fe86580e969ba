"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from recall.application.deck_service import DeckService
from recall.infrastructure.store.repository import TextDeckRepository

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def data_dir(tmp_path):
    """Temporary recall data directory (created lazily by the repository)."""
    return tmp_path / "recall"


@pytest.fixture
def repo(data_dir):
    return TextDeckRepository(data_dir)


@pytest.fixture
def service(repo):
    s = DeckService(repo)
    s.load_all()
    return s


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Points HOME at a temp dir and clears RECALL_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("RECALL_DATA_DIR", "RECALL_INDEX_FILE", "RECALL_CARDS_DIR", "RECALL_VERBOSE"):
        monkeypatch.delenv(var, raising=False)
    return home
