"""Structured error trail produced by failing decoders.

A `DecodeError` is an innermost-first sequence of frames. The first frame
is always the root cause (`TypeMismatch`, `MissingKey` or
`UnionExhausted`); every frame after it is a `KeyFrame` or `IndexFrame`
added by an enclosing combinator on the way out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import TypeAlias

from jsonshape.json_types import compact_text, kind_name


@dataclass(frozen=True)
class KeyFrame:
    key: str


@dataclass(frozen=True)
class IndexFrame:
    index: int


@dataclass(frozen=True)
class TypeMismatch:
    """A value of the wrong kind.

    The rejected value is kept as-is; `actual_rendering` is computed on
    first access.
    """

    expected: str
    actual_kind: str
    actual: object = field(hash=False)

    @classmethod
    def of(cls, expected: str, value: object) -> TypeMismatch:
        return cls(expected=expected, actual_kind=kind_name(value), actual=value)

    @cached_property
    def actual_rendering(self) -> str:
        return compact_text(self.actual)


@dataclass(frozen=True)
class MissingKey:
    key: str
    container: object = field(hash=False)

    @cached_property
    def container_rendering(self) -> str:
        return compact_text(self.container)


@dataclass(frozen=True)
class UnionExhausted:
    branch_failures: tuple[DecodeError, ...]


ContextFrame: TypeAlias = KeyFrame | IndexFrame
CauseFrame: TypeAlias = TypeMismatch | MissingKey | UnionExhausted
Frame: TypeAlias = ContextFrame | CauseFrame


@dataclass(frozen=True)
class DecodeError:
    frames: tuple[Frame, ...]

    def __post_init__(self) -> None:
        if not self.frames:
            raise ValueError("DecodeError requires at least one frame")
        if not isinstance(self.frames[0], (TypeMismatch, MissingKey, UnionExhausted)):
            raise ValueError("innermost frame of a DecodeError must be a root cause")
        for frame in self.frames[1:]:
            if not isinstance(frame, (KeyFrame, IndexFrame)):
                raise ValueError("only key and index frames may wrap a root cause")

    @classmethod
    def leaf(cls, cause: CauseFrame) -> DecodeError:
        return cls(frames=(cause,))

    def within(self, frame: ContextFrame) -> DecodeError:
        """Return this error with one more enclosing context frame."""
        return DecodeError(frames=(*self.frames, frame))

    @property
    def root_cause(self) -> CauseFrame:
        return self.frames[0]  # type: ignore[return-value]

    @property
    def context(self) -> tuple[ContextFrame, ...]:
        return self.frames[1:]  # type: ignore[return-value]

    @property
    def path(self) -> tuple[str | int, ...]:
        """Keys and indices leading from the root value down to the failure."""
        steps: list[str | int] = []
        for frame in reversed(self.context):
            match frame:
                case KeyFrame(key=key):
                    steps.append(key)
                case IndexFrame(index=index):
                    steps.append(index)
        return tuple(steps)

    def json_pointer(self) -> str:
        return "".join(
            "/" + str(step).replace("~", "~0").replace("/", "~1")
            for step in self.path
        )

    @property
    def is_empty_union(self) -> bool:
        cause = self.root_cause
        return isinstance(cause, UnionExhausted) and not cause.branch_failures
