"""
Binary encoding of green space records.

A record is stored as compact UTF-8 JSON of its four fields in
declaration order, for example::

    {"id":1,"name":"Central Park","location":"NYC","description":"Big park"}

The encoding is self-describing and canonical: pydantic always emits
the same bytes for the same record.  Decoding is strict and only
accepts that exact form (no extra keys, no coercion, no reordering or
whitespace), so decoding and re-encoding a stored value reproduces it
exactly.  Encoded records may not exceed ``MAX_RECORD_SIZE`` bytes.
"""

from pydantic import ValidationError

from ..schemas.green_space import GreenSpace
from .errors import StorageError

MAX_RECORD_SIZE = 1024


def encoded_size(record: GreenSpace) -> int:
    """Return the size in bytes of ``record`` once encoded."""
    return len(record.model_dump_json().encode("utf-8"))


def encode_green_space(record: GreenSpace) -> bytes:
    """Serialize ``record``; raises ``StorageError`` if it is too large."""
    data = record.model_dump_json().encode("utf-8")
    if len(data) > MAX_RECORD_SIZE:
        raise StorageError(
            f"Green space id={record.id} encodes to {len(data)} bytes "
            f"(limit {MAX_RECORD_SIZE})"
        )
    return data


def decode_green_space(data: bytes) -> GreenSpace:
    """Deserialize a stored value; raises ``StorageError`` on corrupt input."""
    if len(data) > MAX_RECORD_SIZE:
        raise StorageError(f"Stored value of {len(data)} bytes exceeds {MAX_RECORD_SIZE}")
    try:
        record = GreenSpace.model_validate_json(data, strict=True)
    except ValidationError as e:
        raise StorageError(f"Cannot decode green space: {e}") from e
    if record.model_dump_json().encode("utf-8") != data:
        raise StorageError(f"Stored value for green space id={record.id} is not canonical")
    return record
