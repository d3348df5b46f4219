"""
Champion records decoded from the catalog payload.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

STAT_FIELDS = ("attack", "defense", "magic", "difficulty")


class PayloadError(ValueError):
    """The catalog payload does not match the expected shape."""


@dataclass(frozen=True)
class CharacterStats:
    attack: int
    defense: int
    magic: int
    difficulty: int


@dataclass(frozen=True)
class Character:
    name: str
    title: str
    image_file_name: str
    id: str
    blurb: str
    stats: CharacterStats
    tags: Tuple[str, ...]


def _field(record: Mapping[str, Any], key: str, name: str, expected: type, prefix: str = "") -> Any:
    label = f"{prefix}{name}"
    if name not in record:
        raise PayloadError(f"{key}: missing field '{label}'")
    value = record[name]
    # bool is an int subclass
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise PayloadError(f"{key}: field '{label}' must be {expected.__name__}")
    return value


def decode_character(key: str, record: Any) -> Character:
    """Decode one catalog record, raising PayloadError on any missing or ill-typed field."""
    if not isinstance(record, dict):
        raise PayloadError(f"{key}: record must be an object")

    image = _field(record, key, "image", dict)
    info = _field(record, key, "info", dict)
    tags = _field(record, key, "tags", list)
    if not all(isinstance(tag, str) for tag in tags):
        raise PayloadError(f"{key}: field 'tags' must contain only strings")

    stats = CharacterStats(**{stat: _field(info, key, stat, int, prefix="info.") for stat in STAT_FIELDS})
    return Character(
        name=_field(record, key, "name", str),
        title=_field(record, key, "title", str),
        image_file_name=_field(image, key, "full", str, prefix="image."),
        id=_field(record, key, "id", str),
        blurb=_field(record, key, "blurb", str),
        stats=stats,
        tags=tuple(tags),
    )


def decode_collection(payload: Any) -> Tuple[Character, ...]:
    """Decode ``{"data": {<key>: <record>, ...}}`` into characters in payload key order.

    The payload is accepted or rejected as a whole; one bad record fails it.
    """
    if not isinstance(payload, dict):
        raise PayloadError("payload must be an object")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise PayloadError("payload must contain a 'data' object")
    return tuple(decode_character(str(key), record) for key, record in data.items())
