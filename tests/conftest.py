"""
Shared fixtures: every test gets an application backed by its own
SQLite file under ``tmp_path``.
"""
import pytest
from fastapi.testclient import TestClient

from music_library_api.app.core.config import Settings
from music_library_api.app.core.db import Database
from music_library_api.app.main import create_app
from music_library_api.app.services.song_service import SongService


@pytest.fixture
def db(tmp_path):
    database = Database(str(tmp_path / "songs.db"))
    database.init_db()
    return database


@pytest.fixture
def service(db):
    return SongService(db)


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(database_url=str(tmp_path / "api.db")))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_song(client):
    def _make_song(**fields):
        payload = {
            "group": "Muse",
            "song": "Supermassive Black Hole",
            "release_date": "16.07.2006",
            "text": "Ooh baby, don't you know I suffer?\nOoh baby, can you hear me moan?",
            "link": "https://www.youtube.com/watch?v=Xsp3_a-PMTw",
        }
        payload.update(fields)
        resp = client.post("/songs", json=payload)
        assert resp.status_code == 201
        return resp.json()

    return _make_song
