"""JSON-like value types accepted at the decoding boundary.

The value tree is whatever `json.loads` (or an equivalent parser) produced.
`JsonKind` is the explicit tag over that tree; decoders classify with
`kind_of` instead of probing Python types ad hoc.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import StrEnum
from typing import TypeAlias


JSONScalar: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONScalar | list["JSONValue"] | dict[str, "JSONValue"]
JSONObject: TypeAlias = dict[str, JSONValue]
JSONArray: TypeAlias = list[JSONValue]


class JsonKind(StrEnum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: object) -> JsonKind | None:
    match value:
        case None:
            return JsonKind.NULL
        # bool is an int subclass; it has to be matched first.
        case bool():
            return JsonKind.BOOLEAN
        case int() | float():
            return JsonKind.NUMBER
        case str():
            return JsonKind.STRING
        case list() | tuple():
            return JsonKind.ARRAY
        case Mapping():
            return JsonKind.OBJECT
        case _:
            return None


def kind_name(value: object) -> str:
    kind = kind_of(value)
    if kind is None:
        return type(value).__name__
    return kind.value


def compact_text(value: object) -> str:
    """Single-line JSON text for a value, keeping mapping insertion order.

    Values outside the JSON model are rendered with `repr` so that error
    reporting never fails on foreign input.
    """
    return json.dumps(
        to_json(value),
        separators=(",", ":"),
        sort_keys=False,
        ensure_ascii=False,
        default=repr,
    )


def to_json(value: object) -> object:
    """Convert decoded values (read-only records, tuples) back to a plain tree."""
    match value:
        case None | str() | int() | float() | bool():
            return value
        case Mapping() as value_mapping:
            return {str(key): to_json(item) for key, item in value_mapping.items()}
        case tuple() if hasattr(value, "_fields"):
            return {name: to_json(item) for name, item in zip(value._fields, value)}
        case list() | tuple() as items:
            return [to_json(item) for item in items]
        case _:
            if hasattr(value, "__dataclass_fields__"):
                return {
                    name: to_json(getattr(value, name))
                    for name in value.__dataclass_fields__
                }
            return value
