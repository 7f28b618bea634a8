"""Combinators that build composite decoders from smaller ones.

Every combinator is fail-fast: the first failing element or value stops
decoding, and its error is returned with exactly one extra context frame
naming the index or key it came from.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TypeVar

from jsonshape.decoder import Decoder, absent_decoder, mismatch
from jsonshape.errors import DecodeError, IndexFrame, KeyFrame, UnionExhausted
from jsonshape.json_types import JsonKind, JSONValue, kind_of
from jsonshape.result import DecodeResult, Err, Ok

T = TypeVar("T")


def array_of(element: Decoder[T]) -> Decoder[list[T]]:
    def run(value: JSONValue) -> DecodeResult[list[T]]:
        if kind_of(value) is not JsonKind.ARRAY:
            return mismatch(JsonKind.ARRAY.value, value)
        items = value  # type: ignore[assignment]
        decoded: list[T] = []
        for index, item in enumerate(items):
            match element(item):
                case Ok(value=item_value):
                    decoded.append(item_value)
                case Err(error=error):
                    return Err(error.within(IndexFrame(index)))
        return Ok(decoded)

    return Decoder(run=run, label=f"array<{element.label}>")


def dict_of(item: Decoder[T]) -> Decoder[dict[str, T]]:
    """Decode every value of an object; keys pass through untouched."""

    def run(value: JSONValue) -> DecodeResult[dict[str, T]]:
        if kind_of(value) is not JsonKind.OBJECT:
            return mismatch(JsonKind.OBJECT.value, value)
        mapping: Mapping[str, JSONValue] = value  # type: ignore[assignment]
        decoded: dict[str, T] = {}
        for key, raw in mapping.items():
            match item(raw):
                case Ok(value=item_value):
                    decoded[key] = item_value
                case Err(error=error):
                    return Err(error.within(KeyFrame(key)))
        return Ok(decoded)

    return Decoder(run=run, label=f"dict<{item.label}>")


def union(*decoders: Decoder) -> Decoder:
    """Try each decoder left to right; the first success wins.

    When every case fails, the single `UnionExhausted` frame keeps each
    case's complete trail in the order the cases were tried. A union of no
    decoders rejects every value.
    """
    branches: Sequence[Decoder] = tuple(decoders)

    def run(value: JSONValue) -> DecodeResult:
        failures: list[DecodeError] = []
        for branch in branches:
            match branch(value):
                case Ok() as success:
                    return success
                case Err(error=error):
                    failures.append(error)
        return Err(DecodeError.leaf(UnionExhausted(branch_failures=tuple(failures))))

    label = " | ".join(branch.label for branch in branches) or "never"
    return Decoder(run=run, label=label)


def option(decoder: Decoder[T]) -> Decoder[T | None]:
    """Accept JSON null as `None`, otherwise defer to `decoder`.

    The `optional` marker does not make a record key optional: a record
    still reports a missing key when the key itself is absent.
    """
    optional = union(absent_decoder, decoder)
    return replace(optional, label=f"option<{decoder.label}>", optional=True)
