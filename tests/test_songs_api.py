import sqlite3

import pytest
from fastapi.testclient import TestClient

from music_library_api.app.core.config import Settings
from music_library_api.app.core.db import DatabaseConfigError
from music_library_api.app.main import create_app


def test_create_song_returns_persisted_record(client, make_song):
    song = make_song(group="Queen", song="Bohemian Rhapsody")
    assert song["group"] == "Queen"
    assert song["song"] == "Bohemian Rhapsody"
    assert isinstance(song["id"], int)
    assert set(song) == {"id", "group", "song", "release_date", "text", "link"}
    other = make_song()
    assert other["id"] != song["id"]


def test_create_song_ignores_client_id(client):
    resp = client.post("/songs", json={"id": 999, "group": "G", "song": "S"})
    assert resp.status_code == 201
    assert resp.json()["id"] != 999


def test_create_song_rejects_malformed_body(client):
    resp = client.post("/songs", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}

    resp = client.post("/songs", json={"group": 42})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}


def test_list_songs_default_limit_and_filters(client, make_song):
    for i in range(12):
        make_song(group="Muse" if i % 2 else "Queen", song=f"Track {i}")

    resp = client.get("/songs")
    assert resp.status_code == 200
    assert len(resp.json()) == 10

    queen = client.get("/songs", params={"group": "Queen", "limit": "100"}).json()
    assert len(queen) == 6
    assert all(song["group"] == "Queen" for song in queen)

    # Exact match only.
    assert client.get("/songs", params={"group": "Que"}).json() == []

    exact = client.get("/songs", params={"group": "Muse", "song": "Track 3"}).json()
    assert [song["song"] for song in exact] == ["Track 3"]


def test_list_songs_limit_offset(client, make_song):
    ids = [make_song(song=f"S{i}")["id"] for i in range(5)]

    assert client.get("/songs", params={"limit": "0"}).json() == []
    page = client.get("/songs", params={"limit": "2", "offset": "2"}).json()
    assert [song["id"] for song in page] == ids[2:4]


def test_list_songs_unparseable_pagination_falls_back_to_defaults(client, make_song):
    for i in range(12):
        make_song(song=f"S{i}")
    resp = client.get("/songs", params={"limit": "many", "offset": "x"})
    assert resp.status_code == 200
    assert len(resp.json()) == 10


def test_get_lyrics_pages_verses(client, make_song):
    song = make_song(text="line1\nline2\nline3")

    resp = client.get(f"/songs/{song['id']}/lyrics", params={"page": 1, "per_page": 10})
    assert resp.status_code == 200
    assert resp.json() == {"lyrics": ["line1", "line2", "line3"]}

    resp = client.get(f"/songs/{song['id']}/lyrics", params={"page": 2, "per_page": 2})
    assert resp.json() == {"lyrics": ["line3"]}

    resp = client.get(f"/songs/{song['id']}/lyrics", params={"page": 5, "per_page": 2})
    assert resp.json() == {"lyrics": []}


def test_get_lyrics_not_found(client):
    resp = client.get("/songs/12345/lyrics", params={"page": 1, "per_page": 5})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Song not found"}


def test_get_lyrics_requires_valid_paging(client, make_song):
    song = make_song()
    assert client.get(f"/songs/{song['id']}/lyrics").status_code == 400
    resp = client.get(f"/songs/{song['id']}/lyrics", params={"page": 0, "per_page": 5})
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_update_song_replaces_every_field(client, make_song):
    song = make_song()
    resp = client.put(f"/songs/{song['id']}", json={"song": "New Title"})
    assert resp.status_code == 200
    assert resp.json() == {
        "id": song["id"],
        "group": "",
        "song": "New Title",
        "release_date": "",
        "text": "",
        "link": "",
    }
    stored = client.get("/songs", params={"song": "New Title"}).json()
    assert stored == [resp.json()]


def test_update_song_not_found_takes_precedence_over_bad_body(client):
    resp = client.put("/songs/777", content=b"garbage", headers={"Content-Type": "application/json"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Song not found"}


def test_update_song_rejects_malformed_body(client, make_song):
    song = make_song()
    resp = client.put(f"/songs/{song['id']}", content=b"[1, 2]", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid input"}


def test_delete_song_is_idempotent(client, make_song):
    song = make_song()
    for _ in range(2):
        resp = client.delete(f"/songs/{song['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Song deleted"}
    resp = client.get(f"/songs/{song['id']}/lyrics", params={"page": 1, "per_page": 1})
    assert resp.status_code == 404


def test_store_errors_become_500(client):
    db = client.app.state.db
    with db.cursor() as cursor:
        cursor.execute("DROP TABLE songs")
    resp = client.get("/songs")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_startup_fails_without_database_url():
    app = create_app(Settings(database_url=""))
    with pytest.raises(DatabaseConfigError, match="DATABASE_URL"):
        with TestClient(app):
            pass


def test_openapi_docs_are_served(client):
    resp = client.get("/openapi.json")
    assert resp.status_code == 200
    spec = resp.json()
    assert spec["info"]["title"] == "Music Library API"
    assert "/songs/{song_id}/lyrics" in spec["paths"]


def test_created_song_is_persisted(client, make_song):
    song = make_song()
    path = client.app.state.db.path
    conn = sqlite3.connect(path)
    try:
        row = conn.execute('SELECT "group" FROM songs WHERE id = ?', (song["id"],)).fetchone()
    finally:
        conn.close()
    assert row == (song["group"],)


def test_ids_beyond_64_bits_are_missing(client):
    huge = "99999999999999999999"

    resp = client.get(f"/songs/{huge}/lyrics", params={"page": 1, "per_page": 1})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Song not found"}

    resp = client.put(f"/songs/{huge}", json={"song": "S"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Song not found"}

    resp = client.delete(f"/songs/{huge}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Song deleted"}


def test_unexpected_errors_return_json(tmp_path, monkeypatch):
    app = create_app(Settings(database_url=str(tmp_path / "api.db")))
    with TestClient(app, raise_server_exceptions=False) as test_client:
        async def explode(**kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(app.state.song_service, "list_songs", explode)
        resp = test_client.get("/songs")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_update_of_song_deleted_after_lookup_is_not_found(client, make_song, monkeypatch):
    song = make_song()
    service = client.app.state.song_service
    lookup = service.get_song

    async def lookup_then_delete(song_id):
        found = await lookup(song_id)
        await service.delete_song(song_id)
        return found

    monkeypatch.setattr(service, "get_song", lookup_then_delete)
    resp = client.put(f"/songs/{song['id']}", json={"song": "Too late"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Song not found"}


def test_update_and_delete_store_errors_become_500(client, make_song):
    song = make_song()
    with client.app.state.db.cursor() as cursor:
        cursor.execute("DROP TABLE songs")

    resp = client.put(f"/songs/{song['id']}", json={"song": "S"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}

    resp = client.delete(f"/songs/{song['id']}")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
