"""
Durable ordered map from green space id to record.

Values are encoded with ``core.codec`` and written straight through to
SQLite; nothing is cached in memory.  ``get`` and ``remove`` return
``None`` for a missing id and leave it to the caller to decide whether
that is an error.
"""

from typing import Iterator, Optional

from ..schemas.green_space import GreenSpace
from .codec import decode_green_space, encode_green_space
from .db import GREEN_SPACE_REGION, StableMemory, u64_from_bytes, u64_to_bytes


class RecordStore:
    """Ordered ``id -> GreenSpace`` map stored in one region."""

    def __init__(self, memory: StableMemory, region_id: int = GREEN_SPACE_REGION) -> None:
        self._memory = memory
        self._region_id = region_id

    def insert(self, record: GreenSpace) -> None:
        """Insert ``record`` or overwrite the entry with the same id."""
        value = encode_green_space(record)
        with self._memory.transaction(write=True) as cursor:
            cursor.execute(
                "INSERT OR REPLACE INTO stable_maps (region_id, key, value) VALUES (?, ?, ?)",
                (self._region_id, u64_to_bytes(record.id), value),
            )

    def get(self, record_id: int) -> Optional[GreenSpace]:
        with self._memory.transaction() as cursor:
            row = cursor.execute(
                "SELECT value FROM stable_maps WHERE region_id = ? AND key = ?",
                (self._region_id, u64_to_bytes(record_id)),
            ).fetchone()
        if row is None:
            return None
        return decode_green_space(row["value"])

    def remove(self, record_id: int) -> Optional[GreenSpace]:
        """Delete the entry and return what it held, or ``None``."""
        key = u64_to_bytes(record_id)
        with self._memory.transaction(write=True) as cursor:
            row = cursor.execute(
                "SELECT value FROM stable_maps WHERE region_id = ? AND key = ?",
                (self._region_id, key),
            ).fetchone()
            if row is None:
                return None
            # Decode before deleting so a corrupt value rolls the delete back.
            space = decode_green_space(row["value"])
            cursor.execute(
                "DELETE FROM stable_maps WHERE region_id = ? AND key = ?",
                (self._region_id, key),
            )
        return space

    def iterate(self) -> Iterator[tuple[int, GreenSpace]]:
        """Yield ``(id, record)`` pairs in ascending id order.

        The rows are read in one transaction before anything is
        yielded, so a consumer sees a consistent snapshot even if it
        mutates the store while iterating.
        """
        with self._memory.transaction() as cursor:
            rows = cursor.execute(
                "SELECT key, value FROM stable_maps WHERE region_id = ? ORDER BY key",
                (self._region_id,),
            ).fetchall()
        for row in rows:
            yield u64_from_bytes(row["key"]), decode_green_space(row["value"])

    def count(self) -> int:
        with self._memory.transaction() as cursor:
            row = cursor.execute(
                "SELECT COUNT(*) AS n FROM stable_maps WHERE region_id = ?",
                (self._region_id,),
            ).fetchone()
        return row["n"]

    def __len__(self) -> int:
        return self.count()
