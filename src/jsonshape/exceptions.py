"""Exceptions raised at the jsonshape boundary.

Decoders report failures as values; these exceptions only appear where a
caller asks for an unwrapped result or builds a schema incorrectly.
"""

from __future__ import annotations

from jsonshape.errors import DecodeError
from jsonshape.render import render_error


class DecodeFailure(ValueError):
    """A decode failed and the caller asked for the value anyway."""

    def __init__(self, error: DecodeError):
        super().__init__(render_error(error))
        self.error = error


class SchemaError(TypeError):
    """A schema literal or schema document is malformed."""

    def __init__(self, message: str, *, path: tuple[str | int, ...] = ()):
        location = "/".join(str(step) for step in path)
        super().__init__(f"{message} (at `{location}`)" if path else message)
        self.path = path
