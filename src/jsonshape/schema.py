"""Record schemas and their compilation into record decoders.

A schema is either a `Leaf` wrapping a decoder or a `Nested` mapping of
field names to schemas. Literal mappings such as::

    employee = record({
        "employeeId": number_decoder,
        "name": string_decoder,
        "address": {"city": string_decoder},
    })

are converted into the tagged form once, when the record decoder is
built, so decoding never has to inspect what a field description is.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias, TypeVar

from jsonshape.decoder import Decoder, mismatch
from jsonshape.errors import DecodeError, KeyFrame, MissingKey
from jsonshape.exceptions import SchemaError
from jsonshape.json_types import JsonKind, JSONValue, kind_of
from jsonshape.result import DecodeResult, Err, Ok

R = TypeVar("R")


@dataclass(frozen=True)
class Leaf:
    decoder: Decoder


@dataclass(frozen=True)
class Nested:
    fields: Mapping[str, Schema]


Schema: TypeAlias = Leaf | Nested
SchemaLiteral: TypeAlias = Mapping[str, Any]


def schema_of(
    description: Schema | Decoder | SchemaLiteral,
    *,
    path: tuple[str | int, ...] = (),
) -> Schema:
    """Convert a decoder or a literal field mapping into a tagged `Schema`."""
    match description:
        case Leaf() | Nested():
            return description
        case Decoder():
            return Leaf(description)
        case Mapping():
            fields: dict[str, Schema] = {}
            for key, field in description.items():
                if not isinstance(key, str):
                    raise SchemaError(
                        f"field names must be strings, got {type(key).__name__}",
                        path=path,
                    )
                fields[key] = schema_of(field, path=(*path, key))
            return Nested(MappingProxyType(fields))
        case _:
            raise SchemaError(
                "a schema field must be a Decoder or a mapping of fields, "
                f"got {type(description).__name__}",
                path=path,
            )


def compile_schema(schema: Schema) -> Decoder:
    match schema:
        case Leaf(decoder=decoder):
            return decoder
        case Nested(fields=fields):
            return _record_decoder(
                tuple((key, compile_schema(field)) for key, field in fields.items()),
                into=None,
            )
        case _:
            raise SchemaError(f"not a schema: {type(schema).__name__}")


def record(
    description: Nested | SchemaLiteral,
    *,
    into: Callable[..., R] | None = None,
) -> Decoder:
    """Build a decoder for objects carrying every declared field.

    Fields are decoded in declaration order and the first failure stops
    decoding. Keys that the schema does not declare are ignored. The result
    is a read-only mapping of exactly the declared keys, or
    `into(**fields)` when an explicit target type is given; a target whose
    signature cannot take the declared fields is a `SchemaError`.
    """
    schema = schema_of(description)
    if not isinstance(schema, Nested):
        raise SchemaError("record() needs a mapping of fields")
    fields = tuple((key, compile_schema(field)) for key, field in schema.fields.items())
    if into is not None:
        _check_target(into, tuple(key for key, _ in fields))
    return _record_decoder(fields, into=into)


def _check_target(into: Callable[..., Any], names: tuple[str, ...]) -> None:
    """Reject an `into=` target that cannot be called with the declared fields."""
    try:
        signature = inspect.signature(into)
    except (TypeError, ValueError):
        # Builtins and TypedDict classes expose no signature to check.
        return
    try:
        signature.bind(**dict.fromkeys(names))
    except TypeError as exc:
        target = getattr(into, "__name__", repr(into))
        raise SchemaError(
            f"record target `{target}` does not accept the fields "
            + ", ".join(f"`{name}`" for name in names)
            + f": {exc}"
        ) from exc


def _record_decoder(
    fields: tuple[tuple[str, Decoder], ...],
    *,
    into: Callable[..., Any] | None,
) -> Decoder:
    def run(value: JSONValue) -> DecodeResult:
        if kind_of(value) is not JsonKind.OBJECT:
            return mismatch(JsonKind.OBJECT.value, value)
        mapping: Mapping[str, JSONValue] = value  # type: ignore[assignment]
        decoded: dict[str, Any] = {}
        for key, field in fields:
            # An `option` decoder does not excuse a missing key.
            if key not in mapping:
                return Err(DecodeError.leaf(MissingKey(key=key, container=mapping)))
            match field(mapping[key]):
                case Ok(value=field_value):
                    decoded[key] = field_value
                case Err(error=error):
                    return Err(error.within(KeyFrame(key)))
        if into is not None:
            return Ok(into(**decoded))
        return Ok(MappingProxyType(decoded))

    label = "{" + ", ".join(f"{key}: {field.label}" for key, field in fields) + "}"
    return Decoder(run=run, label=label)
