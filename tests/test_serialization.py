"""Unit tests for the stringify adapter."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

import pytest
from pydantic import BaseModel

from typed_json import OMIT, CaughtError, JSONValue, is_number, parse, stringify


class _Thrown(BaseException):
    """A raised object outside the ``Exception`` hierarchy."""


class _RaisingMapping(Mapping[str, Any]):
    """Mapping whose single member raises when read."""

    def __init__(self, error: BaseException) -> None:
        self._error = error

    def __getitem__(self, key: str) -> Any:
        raise self._error

    def __iter__(self) -> Iterator[str]:
        yield "a"

    def __len__(self) -> int:
        return 1


class _Point(BaseModel):
    x: int
    y: int


class _Stamp:
    def to_json(self, key: str) -> str:
        return f"{key}:stamp"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "null"),
        (1, "1"),
        (True, "true"),
        (-2.5, "-2.5"),
        ("héllo", '"héllo"'),
        ([], "[]"),
        ({"a": 1, "b": [1, 2]}, '{"a":1,"b":[1,2]}'),
        ((1, "two"), '[1,"two"]'),
    ],
)
def test_values_serialize_compactly(value: JSONValue, expected: str) -> None:
    """Without spacing the output carries no whitespace."""
    assert stringify(value).to_optional() == expected


def test_replacer_omitting_everything_yields_null_text() -> None:
    """An omitted root becomes ``"null"``, which still parses."""
    result = stringify({}, lambda _key, _value: OMIT)
    assert result.to_optional() == "null"
    parsed = parse(result.to_value(""))
    assert parsed.is_ok
    assert parsed.to_value(-1) is None


def test_replacer_can_replace_root() -> None:
    """The replacer sees the root first, with the empty key."""
    assert stringify({}, lambda _key, _value: 0).to_optional() == "0"


def test_replacer_applies_to_every_member() -> None:
    """Replacer output is serialized in place of each member."""
    result = stringify(
        {"a": 1, "b": [2, "x"]},
        lambda _key, value: value * 2 if is_number(value) else value,
    )
    assert result.to_optional() == '{"a":2,"b":[4,"x"]}'


def test_replacer_receives_string_keys() -> None:
    """Array indices reach the replacer as decimal strings."""
    seen: list[str] = []

    def record(key: str, value: JSONValue) -> JSONValue:
        seen.append(key)
        return value

    stringify({"list": ["a", "b"]}, record)
    assert seen == ["", "list", "0", "1"]


def test_omitted_array_element_becomes_null() -> None:
    """Arrays keep their positions when an element is omitted."""
    result = stringify([1, 2, 3], lambda key, value: OMIT if key == "1" else value)
    assert result.to_optional() == "[1,null,3]"


def test_omitted_object_member_is_skipped() -> None:
    """Objects drop omitted members entirely."""
    result = stringify({"keep": 1, "drop": 2}, lambda key, value: OMIT if key == "drop" else value)
    assert result.to_optional() == '{"keep":1}'


def test_whitelist_selects_and_orders_members_at_every_depth() -> None:
    """Whitelisted names apply to nested objects and follow whitelist order."""
    value = {"a": 1, "b": 2, "c": {"a": 3, "d": 4}}
    assert stringify(value, ["c", "a"]).to_optional() == '{"c":{"a":3},"a":1}'


def test_whitelist_integers_name_members() -> None:
    """Integer entries are converted to member names."""
    assert stringify({"1": "x", "2": "y"}, [1, 1]).to_optional() == '{"1":"x"}'


def test_whitelist_does_not_filter_arrays() -> None:
    """Array elements are always serialized."""
    assert stringify([{"a": 1, "b": 2}, 3], ["a"]).to_optional() == '[{"a":1},3]'


def test_invalid_whitelist_entry_returns_err() -> None:
    """Whitelist entries must be names."""
    result = stringify({"a": 1}, ["a", 1.5])  # type: ignore[list-item]
    assert result.is_err
    assert isinstance(result.error, TypeError)


def test_invalid_filter_returns_err() -> None:
    """A filter that is neither callable nor a list is rejected."""
    result = stringify({"a": 1}, "a")  # type: ignore[arg-type]
    assert result.is_err
    assert isinstance(result.error, TypeError)


def test_integer_space_indents() -> None:
    """Integer spacing indents nested members one per line."""
    assert stringify({"a": [1]}, None, 2).to_optional() == '{\n  "a": [\n    1\n  ]\n}'


@pytest.mark.parametrize(
    ("space", "indent"),
    [
        (20, " " * 10),
        ("\t", "\t"),
        ("abcdefghijklmnop", "abcdefghij"),
    ],
)
def test_space_is_truncated_to_ten_characters(space: Any, indent: str) -> None:
    """Both string and integer spacing are capped at 10 characters."""
    assert stringify([1], None, space).to_optional() == f"[\n{indent}1\n]"


@pytest.mark.parametrize("space", [0, -3, ""])
def test_empty_space_is_compact(space: Any) -> None:
    """Zero, negative or empty spacing means no whitespace."""
    assert stringify({"a": [1]}, None, space).to_optional() == '{"a":[1]}'


def test_non_finite_numbers_serialize_as_null() -> None:
    """JSON has no literal for NaN or infinities."""
    result = stringify([float("nan"), float("inf"), float("-inf")])
    assert result.to_optional() == "[null,null,null]"


def test_non_string_keys_are_converted() -> None:
    """Scalar keys become member names the way the json module converts them."""
    result = stringify({1: "a", None: "b", 2.5: "c", False: "d"})
    assert result.to_optional() == '{"1":"a","null":"b","2.5":"c","false":"d"}'


def test_unsupported_key_returns_err() -> None:
    """Keys that cannot be names are a serialization error."""
    result = stringify({(1, 2): "x"})
    assert result.is_err
    assert isinstance(result.error, TypeError)


def test_unsupported_value_returns_err() -> None:
    """Values outside JSON are a serialization error, not an exception."""
    result = stringify({"a": {1, 2}})
    assert result.is_err
    assert isinstance(result.error, TypeError)
    assert "set" in str(result.error)


def test_cyclic_structure_returns_err() -> None:
    """A structure containing itself cannot be serialized."""
    cyclic: list[Any] = [1]
    cyclic.append(cyclic)
    result = stringify(cyclic)
    assert result.is_err
    assert isinstance(result.error, ValueError)


def test_shared_substructure_serializes_twice() -> None:
    """Referencing the same list twice is not a cycle."""
    shared = [1]
    assert stringify([shared, shared]).to_optional() == "[[1],[1]]"


def test_accessor_exception_is_returned_unchanged() -> None:
    """An ``Exception`` raised while reading a member is forwarded as is."""
    failure = RuntimeError("boom")
    result = stringify(_RaisingMapping(failure))
    assert result.is_err
    assert result.error is failure


def test_non_exception_raise_is_normalized() -> None:
    """Raised objects outside ``Exception`` are wrapped in ``CaughtError``."""
    thrown = _Thrown(2)
    result = stringify(_RaisingMapping(thrown))
    assert result.is_err
    reason = result.error
    assert isinstance(reason, CaughtError)
    assert "2" in str(reason)
    assert reason.caught_error is thrown
    assert thrown.args == (2,)


def test_system_exit_propagates() -> None:
    """Interpreter shutdown signals are never converted into results."""
    with pytest.raises(SystemExit):
        stringify(_RaisingMapping(SystemExit(3)))


def test_pydantic_models_serialize_as_objects() -> None:
    """Models are dumped in JSON mode before serializing."""
    result = stringify({"p": _Point(x=1, y=2)})
    assert result.to_optional() == '{"p":{"x":1,"y":2}}'


def test_to_json_hook_receives_member_key() -> None:
    """Objects with ``to_json`` are replaced by its return value."""
    assert stringify({"when": _Stamp()}).to_optional() == '{"when":"when:stamp"}'


def test_replacer_sees_converted_model() -> None:
    """Custom conversion runs before the replacer."""
    seen: list[Any] = []

    def record(key: str, value: JSONValue) -> JSONValue:
        if key == "p":
            seen.append(value)
        return value

    stringify({"p": _Point(x=0, y=5)}, record)
    assert seen == [{"x": 0, "y": 5}]


@pytest.mark.parametrize(
    "value",
    [
        None,
        False,
        0,
        -12.75,
        "quote\" and \\ and  ",
        [1, [2, [3, []]]],
        {"name": "json", "tags": ["foo", "bar"], "version": 1.3, "extra": {}},
    ],
)
def test_serialized_text_parses_back(value: JSONValue) -> None:
    """Every successful serialization round-trips through ``parse``."""
    text = stringify(value).to_value("")
    assert parse(text).to_optional() == value
    pretty = stringify(value, None, 4).to_value("")
    assert parse(pretty).to_optional() == value


def test_lone_surrogate_is_escaped() -> None:
    """Unpaired surrogates are written as escapes so the text encodes as UTF-8."""
    text = stringify(["\ud800", "a\udfffb"]).to_value("")
    assert text == '["\\ud800","a\\udfffb"]'
    text.encode("utf-8")
    assert parse(text).to_optional() == ["\ud800", "a\udfffb"]


def test_astral_characters_are_written_raw() -> None:
    """Characters outside the BMP are not escaped."""
    assert stringify("😀").to_optional() == '"😀"'


@pytest.mark.parametrize(
    ("space", "indent"),
    [
        (2.0, "  "),
        (2.7, "  "),
        (float("inf"), " " * 10),
    ],
)
def test_float_space_is_floored(space: float, indent: str) -> None:
    """Numeric spacing is floored and clamped like integer spacing."""
    assert stringify([1], None, space).to_optional() == f"[\n{indent}1\n]"


def test_non_numeric_space_returns_err() -> None:
    """Spacing must be text or a number."""
    result = stringify([1], None, [2])  # type: ignore[arg-type]
    assert result.is_err
    assert isinstance(result.error, TypeError)


def test_whitelist_matches_converted_keys() -> None:
    """Whitelist entries select members by their converted names."""
    assert stringify({1: "a", 2: "b"}, [1]).to_optional() == '{"1":"a"}'
