import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# base isolée avant l'import de app.main (qui instancie l'app au chargement)
os.environ.setdefault("DATABASE_URL", "sqlite:///" + os.path.join(tempfile.mkdtemp(), "import.db"))

from app.core.config import get_settings  # noqa: E402
from app.db import database  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.cards import CardRepository  # noqa: E402


@pytest.fixture
def test_client(tmp_path, monkeypatch):
    """
    Crée un TestClient avec une base SQLite temporaire (isolée par test),
    et force quelques variables d'env pour les tests.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "Vocab Cards API (tests)")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cards.db'}")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()

    app = create_app()
    with TestClient(app) as client:
        yield client

    get_settings.cache_clear()


@pytest.fixture
def repo(test_client):
    db = database.SessionLocal()
    try:
        yield CardRepository(db)
    finally:
        db.close()
