"""
Durable, monotonically increasing id allocator.

The counter is a single 8-byte cell in its own region.  It starts at
zero and ``next_id`` returns the value *after* incrementing, so the
first id handed out is 1.  Because the counter is persisted and never
decremented, ids are never reused, even after the record that carried
one has been deleted or the process has restarted.
"""

import logging

from .db import COUNTER_REGION, U64_MAX, StableMemory, u64_from_bytes, u64_to_bytes
from .errors import StorageError

logger = logging.getLogger(__name__)


class IdAllocator:
    """Issues unique, strictly increasing 64-bit identifiers."""

    def __init__(self, memory: StableMemory, region_id: int = COUNTER_REGION, initial: int = 0) -> None:
        self._memory = memory
        self._region_id = region_id
        with self._memory.transaction(write=True) as cursor:
            cursor.execute(
                "INSERT OR IGNORE INTO stable_cells (region_id, value) VALUES (?, ?)",
                (region_id, u64_to_bytes(initial)),
            )

    def current(self) -> int:
        """Return the most recently issued id (0 if none yet)."""
        with self._memory.transaction() as cursor:
            return self._read(cursor)

    def next_id(self) -> int:
        """Increment the persisted counter and return the new value."""
        with self._memory.transaction(write=True) as cursor:
            value = self._read(cursor)
            if value >= U64_MAX:
                raise StorageError("Cannot increment id counter for green spaces: counter exhausted")
            value += 1
            cursor.execute(
                "UPDATE stable_cells SET value = ? WHERE region_id = ?",
                (u64_to_bytes(value), self._region_id),
            )
        logger.debug("Allocated green space id %s", value)
        return value

    def _read(self, cursor) -> int:
        row = cursor.execute(
            "SELECT value FROM stable_cells WHERE region_id = ?", (self._region_id,)
        ).fetchone()
        if row is None:
            raise StorageError(f"Counter region {self._region_id} is not initialised")
        return u64_from_bytes(row["value"])
