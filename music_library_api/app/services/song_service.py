"""
Service layer for songs.

``SongService`` translates song operations into SQL against the
``songs`` table.  It is bound to a single ``Database`` instance passed
in at construction time; every method opens its own connection
through that store client, so one service object can serve
concurrent requests.

All queries use parameterized statements.  Store errors
(``sqlite3.Error``) are not caught here; they propagate to the
application's exception handler.  Ids outside the signed 64-bit range
cannot exist in the table and are treated as missing.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from music_library_api.app.core.db import Database
from music_library_api.app.core.pagination import fits_int64, paginate, split_verses
from music_library_api.app.schemas.song import SongIn, SongRead

logger = logging.getLogger(__name__)

_SELECT_SONG = 'SELECT id, "group", song, release_date, text, link FROM songs'


class SongService:
    """Service class for managing songs."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_songs(
        self,
        group: Optional[str] = None,
        song: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[SongRead]:
        """Return songs matching the optional exact filters.

        Filters are applied only for non‑empty values.  ``limit`` and
        ``offset`` follow SQLite semantics: ``limit=0`` returns nothing,
        a negative limit means no limit and a negative offset acts as 0.
        Results are ordered by id.
        """
        conditions = []
        params: list = []
        if group:
            conditions.append('"group" = ?')
            params.append(group)
        if song:
            conditions.append("song = ?")
            params.append(song)
        query = _SELECT_SONG
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY id LIMIT ? OFFSET ?"
        params.extend([limit, offset])
        with self.db.cursor() as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [self._row_to_song(row) for row in rows]

    async def get_song(self, song_id: int) -> Optional[SongRead]:
        """Retrieve a single song by its ID."""
        if not fits_int64(song_id):
            return None
        with self.db.cursor() as cursor:
            row = cursor.execute(f"{_SELECT_SONG} WHERE id = ?", (song_id,)).fetchone()
        if not row:
            return None
        return self._row_to_song(row)

    async def get_lyrics(self, song_id: int, page: int, per_page: int) -> Optional[List[str]]:
        """Return one page of verses of a song, or ``None`` if it does not exist."""
        if not fits_int64(song_id):
            return None
        with self.db.cursor() as cursor:
            row = cursor.execute("SELECT text FROM songs WHERE id = ?", (song_id,)).fetchone()
        if not row:
            return None
        return paginate(split_verses(row["text"]), page, per_page)

    async def create_song(self, data: SongIn) -> SongRead:
        """Insert a new song and return the created record."""
        with self.db.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO songs ("group", song, release_date, text, link)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.group, data.song, data.release_date, data.text, data.link),
            )
            song_id = cursor.lastrowid
        logger.info("Created song %s (%s - %s)", song_id, data.group, data.song)
        return SongRead(id=song_id, **data.model_dump())

    async def update_song(self, song_id: int, data: SongIn) -> Optional[SongRead]:
        """Overwrite every field of an existing song.

        Returns the updated song or ``None`` if no row has that ID.
        """
        if not fits_int64(song_id):
            return None
        with self.db.cursor() as cursor:
            cursor.execute(
                """
                UPDATE songs
                SET "group" = ?, song = ?, release_date = ?, text = ?, link = ?
                WHERE id = ?
                """,
                (data.group, data.song, data.release_date, data.text, data.link, song_id),
            )
            affected = cursor.rowcount
        if not affected:
            return None
        logger.info("Updated song %s", song_id)
        return SongRead(id=song_id, **data.model_dump())

    async def delete_song(self, song_id: int) -> bool:
        """Delete a song by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        if not fits_int64(song_id):
            return False
        with self.db.cursor() as cursor:
            cursor.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            affected = cursor.rowcount
        if affected:
            logger.info("Deleted song %s", song_id)
        return affected > 0

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> SongRead:
        """Convert a database row to a SongRead schema instance."""
        return SongRead.model_validate(dict(row))
