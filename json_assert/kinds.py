from collections.abc import Mapping
from enum import Enum
from typing import Any


class JsonKind(str, Enum):
    """Primitive kind of a deserialised JSON value."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def kind_of(value: Any) -> JsonKind:
    """Return the JsonKind of `value`. Raise TypeError for non-JSON values."""
    if value is None:
        return JsonKind.NULL
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return JsonKind.BOOLEAN
    if isinstance(value, (int, float)):
        return JsonKind.NUMBER
    if isinstance(value, str):
        return JsonKind.TEXT
    if isinstance(value, (list, tuple)):
        return JsonKind.SEQUENCE
    if isinstance(value, Mapping):
        return JsonKind.MAPPING
    raise TypeError(f"{type(value).__name__} is not a JSON value")
