"""
SQLite persistence and simple migration system.

All durable state lives in one SQLite file split into *regions*, each
addressed by an integer region id so that several structures can grow
independently without colliding:

* ``stable_cells`` holds fixed-size values, one per region
  (the id counter lives in ``COUNTER_REGION``).
* ``stable_maps`` holds ordered key/value maps, many rows per region
  (green spaces live in ``GREEN_SPACE_REGION``).

Integer keys and the counter are stored as 8-byte big-endian blobs.
SQLite compares blobs byte by byte, so ``ORDER BY key`` yields
ascending numeric order across the whole unsigned 64-bit range.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import StorageError

logger = logging.getLogger(__name__)

COUNTER_REGION = 0
GREEN_SPACE_REGION = 1

U64_MAX = 2**64 - 1

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: region tables
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS stable_cells (
            region_id INTEGER PRIMARY KEY,
            value BLOB NOT NULL
        );

        CREATE TABLE IF NOT EXISTS stable_maps (
            region_id INTEGER NOT NULL,
            key BLOB NOT NULL,
            value BLOB NOT NULL,
            PRIMARY KEY (region_id, key)
        ) WITHOUT ROWID;
        """,
    ),
]


def u64_to_bytes(value: int) -> bytes:
    if not 0 <= value <= U64_MAX:
        raise StorageError(f"{value} does not fit in an unsigned 64-bit integer")
    return value.to_bytes(8, "big")


def u64_from_bytes(data: bytes) -> int:
    if len(data) != 8:
        raise StorageError(f"Expected 8 bytes for an unsigned 64-bit integer, got {len(data)}")
    return int.from_bytes(data, "big")


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # green_space_api/
    return str((base_dir / database_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection runs in autocommit mode (``isolation_level=None``);
    callers that need atomicity open transactions explicitly.  Rows
    are returned as ``sqlite3.Row`` so columns can be read by name.
    """
    conn = sqlite3.connect(db_path, isolation_level=None)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Create the database file if needed and apply pending migrations.

    If you add a new migration, append it to ``MIGRATIONS`` with an
    incremented version number.
    """
    try:
        with get_cursor(db_path) as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s to %s", version, db_path)
                    current_version = version
    except sqlite3.Error as e:
        raise StorageError(f"Cannot initialise database {db_path}: {e}") from e


class StableMemory:
    """Handle on one database file shared by every region.

    The lock is re-entrant and scoped to the whole file, so a caller
    may hold it across several region operations (for example
    allocate an id and insert the record) without interleaving with
    other threads.
    """

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        self.lock = threading.RLock()

    @classmethod
    def open(cls, db_path: str) -> "StableMemory":
        init_db(db_path)
        return cls(db_path)

    @contextmanager
    def transaction(self, write: bool = False) -> Iterator[sqlite3.Cursor]:
        """Run the body in one SQLite transaction under the store lock.

        Write transactions use ``BEGIN IMMEDIATE`` so the write lock is
        taken up front and another process cannot slip in between a
        read and the following write.  Any ``sqlite3.Error`` is
        re-raised as ``StorageError``.
        """
        with self.lock:
            conn = get_connection(self.db_path)
            try:
                conn.execute("BEGIN IMMEDIATE" if write else "BEGIN")
                try:
                    yield conn.cursor()
                except BaseException:
                    conn.rollback()
                    raise
                conn.commit()
            except sqlite3.Error as e:
                logger.exception("Storage failure on %s", self.db_path)
                raise StorageError(str(e)) from e
            finally:
                conn.close()
