from __future__ import annotations

import pytest

from jsonshape import errors as errors_module
from jsonshape.combinators import array_of, dict_of, option, union
from jsonshape.decoder import Decoder, boolean_decoder, number_decoder, string_decoder
from jsonshape.errors import (
    DecodeError,
    IndexFrame,
    KeyFrame,
    TypeMismatch,
    UnionExhausted,
)
from jsonshape.render import render_error
from jsonshape.result import Err, Ok
from jsonshape.schema import record


def _counting(decoder: Decoder, calls: list[object]) -> Decoder:
    def run(value):
        calls.append(value)
        return decoder(value)

    return Decoder(run=run, label=decoder.label)


def test_array_of_decodes_in_order() -> None:
    assert array_of(number_decoder)([1, 2, 3]) == Ok([1, 2, 3])
    assert array_of(number_decoder)([]) == Ok([])


def test_array_of_points_at_first_failing_index() -> None:
    result = array_of(number_decoder)([1, "x", 3])
    assert result == Err(
        DecodeError(frames=(TypeMismatch("number", "string", "x"), IndexFrame(1)))
    )


def test_array_of_stops_at_first_failure() -> None:
    calls: list[object] = []
    decoder = array_of(_counting(number_decoder, calls))
    assert isinstance(decoder([1, "x", "y", 4]), Err)
    assert calls == [1, "x"]


def test_array_of_rejects_non_arrays() -> None:
    match array_of(string_decoder)({"a": 1}):
        case Err(error=error):
            assert error.frames == (TypeMismatch("array", "object", {"a": 1}),)
        case other:
            raise AssertionError(other)


def test_nested_arrays_stack_index_frames() -> None:
    result = array_of(array_of(boolean_decoder))([[True], [0, False]])
    assert isinstance(result, Err)
    assert result.error.frames[1:] == (IndexFrame(0), IndexFrame(1))
    assert result.error.path == (1, 0)


def test_dict_of_preserves_keys() -> None:
    result = dict_of(number_decoder)({"b": 2, "a": 1})
    assert result == Ok({"b": 2, "a": 1})
    assert list(result.value) == ["b", "a"]


def test_dict_of_reports_failing_key() -> None:
    result = dict_of(number_decoder)({"a": "x"})
    assert result == Err(
        DecodeError(frames=(TypeMismatch("number", "string", "x"), KeyFrame("a")))
    )


def test_dict_of_stops_at_first_failure() -> None:
    calls: list[object] = []
    decoder = dict_of(_counting(number_decoder, calls))
    result = decoder({"a": 1, "b": "x", "c": "y"})
    assert isinstance(result, Err)
    assert result.error.context == (KeyFrame("b"),)
    assert calls == [1, "x"]


def test_dict_of_rejects_non_objects() -> None:
    result = dict_of(number_decoder)([1])
    assert isinstance(result, Err)
    assert result.error.root_cause == TypeMismatch("object", "array", [1])


def test_union_takes_first_success() -> None:
    decoder = union(string_decoder, number_decoder)
    assert decoder(5) == Ok(5)
    assert decoder("a") == Ok("a")


def test_union_order_is_significant() -> None:
    tagged_first = union(
        Decoder(run=lambda value: Ok("first"), label="first"),
        Decoder(run=lambda value: Ok("second"), label="second"),
    )
    assert tagged_first(1) == Ok("first")


def test_union_collects_every_branch_failure() -> None:
    result = union(string_decoder, number_decoder)(True)
    assert isinstance(result, Err)
    cause = result.error.root_cause
    assert isinstance(cause, UnionExhausted)
    assert len(cause.branch_failures) == 2
    assert [failure.root_cause.expected for failure in cause.branch_failures] == [
        "string",
        "number",
    ]


def test_empty_union_rejects_everything() -> None:
    decoder = union()
    result = decoder("anything")
    assert result == Err(DecodeError.leaf(UnionExhausted(branch_failures=())))
    assert result.error.is_empty_union
    assert decoder.label == "never"


def test_option_accepts_null_and_inner_kind() -> None:
    decoder = option(string_decoder)
    assert decoder(None) == Ok(None)
    assert decoder("hi") == Ok("hi")
    assert decoder.optional is True
    assert string_decoder.optional is False


def test_option_rejects_other_kinds() -> None:
    result = option(string_decoder)(5)
    assert isinstance(result, Err)
    cause = result.error.root_cause
    assert isinstance(cause, UnionExhausted)
    assert [failure.root_cause.expected for failure in cause.branch_failures] == [
        "absent",
        "string",
    ]


def test_union_error_inside_array_keeps_context() -> None:
    result = array_of(union(string_decoder, number_decoder))(["a", 1, None])
    assert isinstance(result, Err)
    assert isinstance(result.error.root_cause, UnionExhausted)
    assert result.error.context == (IndexFrame(2),)


def test_labels_describe_shape() -> None:
    assert array_of(dict_of(string_decoder)).label == "array<dict<string>>"
    assert option(number_decoder).label == "option<number>"
    assert union(string_decoder, boolean_decoder).label == "string | boolean"


@pytest.fixture
def rendered_values(monkeypatch: pytest.MonkeyPatch) -> list[object]:
    rendered: list[object] = []
    original = errors_module.compact_text

    def _counting(value: object) -> str:
        rendered.append(value)
        return original(value)

    monkeypatch.setattr(errors_module, "compact_text", _counting)
    return rendered


def test_successful_option_renders_nothing(rendered_values: list[object]) -> None:
    values = list(range(1000))
    assert option(array_of(number_decoder))(values) == Ok(values)
    assert rendered_values == []


def test_nested_options_render_nothing_on_success(rendered_values: list[object]) -> None:
    decoder = number_decoder
    value: object = 1
    for _ in range(60):
        decoder = option(record({"a": decoder}))
        value = {"a": value}
    assert isinstance(decoder(value), Ok)
    assert rendered_values == []


def test_failed_option_renders_only_when_asked(rendered_values: list[object]) -> None:
    result = option(string_decoder)(5)
    assert isinstance(result, Err)
    assert rendered_values == []
    assert "case 2:" in render_error(result.error)
    assert rendered_values == [5, 5]
