"""
Business logic for green spaces.

``GreenSpaceService`` owns the id allocator and the record store for
one database file.  The application builds a single instance at
startup and hands it to every request handler, so there is no global
state beyond ``app.state``.

Creation returns a tagged result (``Created`` or ``Rejected``) rather
than raising, because an invalid payload is an expected outcome.
Lookups of a missing id raise ``NotFoundError``.  Updates are
copy-modify-write: the stored record is read, a modified copy is built
and written back under the same id.
"""

import logging
from typing import Callable, List, Optional

from ..core.allocator import IdAllocator
from ..core.codec import MAX_RECORD_SIZE, encoded_size
from ..core.db import StableMemory
from ..core.errors import NotFoundError
from ..core.store import RecordStore
from ..schemas.green_space import (
    Created,
    CreateResult,
    GreenSpace,
    GreenSpaceCreate,
    GreenSpaceUpdate,
    MAX_ID,
    Rejected,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ("name", "location", "description")


def validate_green_space(payload: GreenSpaceCreate) -> Optional[str]:
    """Return why ``payload`` cannot be stored, or ``None`` if it can.

    All three text fields must be non-empty, and the record built from
    them must fit the per-record size limit even with the largest
    possible id.
    """
    empty = [field for field in TEXT_FIELDS if not getattr(payload, field)]
    if empty:
        return f"Fields must not be empty: {', '.join(empty)}"
    size = encoded_size(GreenSpace(id=MAX_ID, **payload.model_dump()))
    if size > MAX_RECORD_SIZE:
        return f"Green space is too large: {size} bytes encoded, limit is {MAX_RECORD_SIZE}"
    return None


class GreenSpaceService:
    """Service for managing green spaces."""

    def __init__(self, memory: StableMemory) -> None:
        self._memory = memory
        self.allocator = IdAllocator(memory)
        self.store = RecordStore(memory)

    @classmethod
    def open(cls, db_path: str) -> "GreenSpaceService":
        """Open (creating if needed) the database at ``db_path``."""
        return cls(StableMemory.open(db_path))

    def add_green_space(self, payload: GreenSpaceCreate) -> CreateResult:
        """Validate ``payload``, allocate an id and store the new record."""
        reason = validate_green_space(payload)
        if reason is not None:
            logger.warning("Rejected green space '%s': %s", payload.name, reason)
            return Rejected(reason=reason)
        with self._memory.lock:
            space = GreenSpace(id=self.allocator.next_id(), **payload.model_dump())
            self.store.insert(space)
        logger.info("Created green space %s '%s'", space.id, space.name)
        return Created(green_space=space)

    def get_green_space(self, space_id: int) -> GreenSpace:
        space = self.store.get(space_id)
        if space is None:
            raise NotFoundError(f"A green space with id={space_id} not found")
        return space

    def update_green_space(self, space_id: int, payload: GreenSpaceUpdate) -> GreenSpace:
        """Replace name, location and description of an existing record."""
        return self._modify(
            space_id,
            payload.model_dump(),
            f"Couldn't update a green space with id={space_id}. Space not found",
        )

    def update_green_space_location(self, space_id: int, new_location: str) -> GreenSpace:
        """Replace only the location; other fields are kept."""
        return self._modify(
            space_id,
            {"location": new_location},
            f"Couldn't update location for green space with id={space_id}. Space not found",
        )

    def delete_green_space(self, space_id: int) -> GreenSpace:
        """Remove a record for good and return it."""
        space = self.store.remove(space_id)
        if space is None:
            raise NotFoundError(
                f"Couldn't delete a green space with id={space_id}. Space not found"
            )
        logger.info("Deleted green space %s", space_id)
        return space

    def list_green_spaces(self) -> List[GreenSpace]:
        return [space for _, space in self.store.iterate()]

    def search_by_name(self, query: str) -> List[GreenSpace]:
        return self._search(lambda space: space.name, query)

    def search_by_location(self, query: str) -> List[GreenSpace]:
        return self._search(lambda space: space.location, query)

    def search_by_description(self, query: str) -> List[GreenSpace]:
        return self._search(lambda space: space.description, query)

    def count_green_spaces(self) -> int:
        return self.store.count()

    def _search(self, field: Callable[[GreenSpace], str], query: str) -> List[GreenSpace]:
        # Plain case-sensitive containment; "" is contained in every string.
        return [space for _, space in self.store.iterate() if query in field(space)]

    def _modify(self, space_id: int, changes: dict, missing_msg: str) -> GreenSpace:
        with self._memory.lock:
            current = self.store.get(space_id)
            if current is None:
                raise NotFoundError(missing_msg)
            updated = current.model_copy(update=changes)
            self.store.insert(updated)
        logger.info("Updated green space %s (%s)", space_id, ", ".join(changes))
        return updated
