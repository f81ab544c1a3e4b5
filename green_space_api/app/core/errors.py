"""
Exceptions raised by the green space storage and service layers.

``NotFoundError`` is the only recoverable condition: the requested id
is not in the store.  It subclasses ``ValueError`` so callers written
in the usual ``except ValueError`` style keep working.

``StorageError`` signals that the persistence layer itself failed
(a record could not be encoded or decoded, the id counter ran out,
SQLite raised).  It is never caught inside the core and aborts the
current operation.
"""


class GreenSpaceError(Exception):
    """Base class for all errors raised by this package."""


class NotFoundError(GreenSpaceError, ValueError):
    """The requested green space does not exist."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class StorageError(GreenSpaceError):
    """Unrecoverable persistence failure."""
