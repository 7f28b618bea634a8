"""Schemas described as JSON data.

A schema document is one of:

- ``"string"``, ``"number"`` or ``"boolean"``;
- ``{"$array": <document>}`` or ``{"$dict": <document>}``;
- ``{"$option": <document>}``;
- ``{"$union": [<document>, ...]}``;
- any other object, read as a record whose values are field documents.

Loading happens once; the result is an ordinary `Schema` that compiles
to the same decoders as one written in Python.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from jsonshape.combinators import array_of, dict_of, option, union
from jsonshape.decoder import Decoder, boolean_decoder, number_decoder, string_decoder
from jsonshape.exceptions import SchemaError
from jsonshape.schema import Leaf, Nested, Schema, compile_schema

logger = logging.getLogger(__name__)

_PRIMITIVES: dict[str, Decoder] = {
    "string": string_decoder,
    "number": number_decoder,
    "boolean": boolean_decoder,
}


def load_schema_document(document: object) -> Schema:
    return _load(document, path=())


def load_schema_path(path: Path) -> Schema:
    logger.debug("loading schema document %s", path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"schema document {path} is not valid JSON: {exc}") from exc
    return load_schema_document(document)


def _load(document: object, *, path: tuple[str | int, ...]) -> Schema:
    match document:
        case str() as name:
            decoder = _PRIMITIVES.get(name)
            if decoder is None:
                raise SchemaError(f"unknown primitive type `{name}`", path=path)
            return Leaf(decoder)
        case Mapping() if any(str(key).startswith("$") for key in document):
            return Leaf(_load_operator(document, path=path))
        case Mapping():
            fields = {
                str(key): _load(field, path=(*path, str(key)))
                for key, field in document.items()
            }
            return Nested(MappingProxyType(fields))
        case _:
            raise SchemaError(
                f"expected a type name or an object, got {type(document).__name__}",
                path=path,
            )


def _load_operator(document: Mapping[str, object], *, path: tuple[str | int, ...]) -> Decoder:
    if len(document) != 1:
        raise SchemaError(
            "an operator object must have exactly one key, got "
            + ", ".join(f"`{key}`" for key in document),
            path=path,
        )
    ((operator, argument),) = document.items()
    inner_path = (*path, operator)
    match operator:
        case "$array":
            return array_of(_decoder(argument, path=inner_path))
        case "$dict":
            return dict_of(_decoder(argument, path=inner_path))
        case "$option":
            return option(_decoder(argument, path=inner_path))
        case "$union":
            if not isinstance(argument, list):
                raise SchemaError("`$union` takes a list of cases", path=inner_path)
            return union(
                *(
                    _decoder(case_document, path=(*inner_path, position))
                    for position, case_document in enumerate(argument)
                )
            )
        case _:
            raise SchemaError(f"unknown operator `{operator}`", path=path)


def _decoder(document: object, *, path: tuple[str | int, ...]) -> Decoder:
    return compile_schema(_load(document, path=path))
