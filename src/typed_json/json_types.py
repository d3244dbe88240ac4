"""JSON-compatible typing aliases shared across the project."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Final, Union


class _OmitType:
    """Type of :data:`OMIT`, returned by revivers and replacers to drop a member."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OMIT"


OMIT: Final = _OmitType()

type JSONNumber = Union[int, float]
type JSONPrimitive = Union[str, int, float, bool, None]
type JSONArray = Union[list[JSONValue], tuple[JSONValue, ...]]
type JSONObject = Mapping[str, JSONValue]
type JSONValue = JSONPrimitive | JSONArray | JSONObject
type MutableJSONObject = dict[str, JSONValue]

type Omitted = _OmitType
type Reviver = Callable[[str, JSONValue], Union[JSONValue, Omitted]]
type Replacer = Callable[[str, JSONValue], Union[JSONValue, Omitted]]
type WhiteList = Sequence[Union[str, int]]
