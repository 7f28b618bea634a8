"""jsonshape package root."""

from jsonshape.combinators import array_of, dict_of, option, union
from jsonshape.decoder import Decoder, boolean_decoder, number_decoder, string_decoder
from jsonshape.errors import (
    DecodeError,
    IndexFrame,
    KeyFrame,
    MissingKey,
    TypeMismatch,
    UnionExhausted,
)
from jsonshape.exceptions import DecodeFailure, SchemaError
from jsonshape.result import DecodeResult, Err, Ok
from jsonshape.schema import Leaf, Nested, compile_schema, record, schema_of

__all__ = [
    "__version__",
    "DecodeError",
    "DecodeFailure",
    "DecodeResult",
    "Decoder",
    "Err",
    "IndexFrame",
    "KeyFrame",
    "Leaf",
    "MissingKey",
    "Nested",
    "Ok",
    "SchemaError",
    "TypeMismatch",
    "UnionExhausted",
    "array_of",
    "boolean_decoder",
    "compile_schema",
    "dict_of",
    "number_decoder",
    "option",
    "record",
    "schema_of",
    "string_decoder",
    "union",
]

__version__ = "0.1.0"
