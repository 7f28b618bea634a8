"""Developer-facing rendering of decode error trails."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from jsonshape.errors import (
    DecodeError,
    Frame,
    IndexFrame,
    KeyFrame,
    MissingKey,
    TypeMismatch,
    UnionExhausted,
)
from jsonshape.json_types import JSONObject, JSONValue

_INDENT = "  "
_ELLIPSIS = "..."


class RenderOrder(StrEnum):
    INNERMOST = "innermost"
    OUTERMOST = "outermost"


@dataclass(frozen=True)
class RenderOptions:
    order: RenderOrder = RenderOrder.INNERMOST
    # 0 disables truncation.
    max_value_chars: int = 120


DEFAULT_RENDER_OPTIONS = RenderOptions()


def truncate(text: str, limit: int) -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    if limit <= len(_ELLIPSIS):
        return text[:limit]
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def render_error(
    error: DecodeError,
    options: RenderOptions = DEFAULT_RENDER_OPTIONS,
) -> str:
    """Render a trail as one line per frame.

    Union frames are followed by the renderings of each rejected branch,
    indented one level beneath the frame that owns them.
    """
    return "\n".join(_render_lines(error, options, depth=0))


def _render_lines(error: DecodeError, options: RenderOptions, *, depth: int) -> list[str]:
    frames = list(error.frames)
    if options.order is RenderOrder.OUTERMOST:
        frames.reverse()
    prefix = _INDENT * depth
    lines: list[str] = []
    for frame in frames:
        lines.append(prefix + _frame_line(frame, options))
        if isinstance(frame, UnionExhausted):
            for position, branch in enumerate(frame.branch_failures, start=1):
                lines.append(f"{prefix}{_INDENT}case {position}:")
                lines.extend(_render_lines(branch, options, depth=depth + 2))
    return lines


def _frame_line(frame: Frame, options: RenderOptions) -> str:
    limit = options.max_value_chars
    match frame:
        case TypeMismatch(expected=expected, actual_kind=actual_kind, actual_rendering=rendering):
            return (
                f"The value `{truncate(rendering, limit)}` is not of type "
                f"`{expected}`, but is of type `{actual_kind}`"
            )
        case MissingKey(key=key, container_rendering=rendering):
            return f"Cannot find key `{key}` in `{truncate(rendering, limit)}`"
        case UnionExhausted(branch_failures=()):
            return "Could not match any of the union cases: the union has no cases"
        case UnionExhausted(branch_failures=failures):
            return f"Could not match any of the {len(failures)} union cases"
        case KeyFrame(key=key):
            return f"when trying to decode the key `{key}`"
        case IndexFrame(index=index):
            return f"when trying to decode the array at index {index}"


def error_payload(error: DecodeError) -> JSONObject:
    """Structured, JSON-compatible view of a trail for programmatic consumers."""
    return {
        "pointer": error.json_pointer(),
        "path": list(error.path),
        "frames": [frame_payload(frame) for frame in error.frames],
    }


def frame_payload(frame: Frame) -> JSONObject:
    match frame:
        case TypeMismatch(expected=expected, actual_kind=actual_kind, actual_rendering=rendering):
            return {
                "kind": "type_mismatch",
                "expected": expected,
                "actual_kind": actual_kind,
                "actual": rendering,
            }
        case MissingKey(key=key, container_rendering=rendering):
            return {"kind": "missing_key", "key": key, "container": rendering}
        case UnionExhausted(branch_failures=failures):
            branches: list[JSONValue] = [error_payload(branch) for branch in failures]
            return {"kind": "union_exhausted", "branches": branches}
        case KeyFrame(key=key):
            return {"kind": "key", "key": key}
        case IndexFrame(index=index):
            return {"kind": "index", "index": index}
