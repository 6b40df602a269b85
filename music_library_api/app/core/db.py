"""
SQLite database integration and simple migration system.

The ``Database`` class is the store client of the application.  One
instance is created by ``create_app`` and shared by every request; it
holds only the resolved database path and hands out a fresh
connection for each unit of work, so concurrent requests never share
a cursor.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

# Append new migrations with an incremented version number.
MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS songs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            "group" TEXT NOT NULL DEFAULT '',
            song TEXT NOT NULL DEFAULT '',
            release_date TEXT NOT NULL DEFAULT '',
            text TEXT NOT NULL DEFAULT '',
            link TEXT NOT NULL DEFAULT ''
        );
        CREATE INDEX IF NOT EXISTS idx_songs_group ON songs("group");
        CREATE INDEX IF NOT EXISTS idx_songs_song ON songs(song);
        """,
    ),
]


class DatabaseConfigError(RuntimeError):
    """Raised when the database connection string is missing or unusable."""


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Accepts either a plain filesystem path or a ``sqlite:///`` URL.
    Absolute paths are returned as is; relative paths are resolved
    against the project root (the directory holding the
    ``music_library_api`` package).
    """
    if not database_url:
        raise DatabaseConfigError("DATABASE_URL is not set")
    db_url = database_url
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    elif "://" in db_url:
        raise DatabaseConfigError(f"Unsupported database URL: {database_url}")
    if not db_url:
        raise DatabaseConfigError("DATABASE_URL does not name a database file")
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


class Database:
    """Store client wrapping a SQLite database file."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be
        accessed by name.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the database file if needed and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version, and applies any migrations from
        ``MIGRATIONS`` newer than it.
        """
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] or 0
            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s", version)
            conn.commit()
        finally:
            conn.close()
        logger.info("Database ready at %s", self.path)
