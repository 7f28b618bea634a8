"""The `Decoder` carrier and the primitive leaf decoders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from jsonshape.errors import DecodeError, TypeMismatch
from jsonshape.exceptions import DecodeFailure
from jsonshape.json_types import JsonKind, JSONValue, kind_of
from jsonshape.result import DecodeResult, Err, Ok

T = TypeVar("T")


@dataclass(frozen=True)
class Decoder(Generic[T]):
    """A pure function from a JSON value to `Ok(value)` or `Err(error)`.

    Decoders hold no mutable state, so one instance can be shared freely
    and called any number of times. `label` names the shape the decoder
    expects; `optional` marks decoders built by `option()`.
    """

    run: Callable[[JSONValue], DecodeResult[T]]
    label: str
    optional: bool = False

    def __call__(self, value: JSONValue) -> DecodeResult[T]:
        return self.run(value)

    def decode(self, value: JSONValue) -> T:
        """Return the decoded value, raising `DecodeFailure` on mismatch."""
        match self.run(value):
            case Ok(value=decoded):
                return decoded
            case Err(error=error):
                raise DecodeFailure(error)

    def __repr__(self) -> str:
        marker = ", optional" if self.optional else ""
        return f"Decoder<{self.label}{marker}>"


def mismatch(expected: str, value: object) -> Err:
    return Err(DecodeError.leaf(TypeMismatch.of(expected, value)))


def _primitive(kind: JsonKind) -> Decoder:
    def run(value: JSONValue) -> DecodeResult:
        if kind_of(value) is kind:
            return Ok(value)
        return mismatch(kind.value, value)

    return Decoder(run=run, label=kind.value)


string_decoder: Decoder[str] = _primitive(JsonKind.STRING)
number_decoder: Decoder[int | float] = _primitive(JsonKind.NUMBER)
boolean_decoder: Decoder[bool] = _primitive(JsonKind.BOOLEAN)


def _absent(value: JSONValue) -> DecodeResult[None]:
    if value is None:
        return Ok(None)
    return mismatch("absent", value)


# Only used by `option()`; JSON null is the one representation of "absent".
absent_decoder: Decoder[None] = Decoder(run=_absent, label="absent")
