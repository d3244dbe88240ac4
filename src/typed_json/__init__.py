"""Typed JSON parsing and serialization returning results instead of raising."""

from __future__ import annotations

from .json_types import (
    OMIT,
    JSONArray,
    JSONObject,
    JSONValue,
    Replacer,
    Reviver,
    WhiteList,
)
from .matching import Match, describe, match
from .parsing import ParseResult, parse
from .predicates import (
    is_array,
    is_boolean,
    is_null,
    is_number,
    is_object,
    is_string,
    is_value,
)
from .result import Err, Ok, Result
from .serialization import CaughtError, SerializationResult, stringify

__all__ = [
    "OMIT",
    "CaughtError",
    "Err",
    "JSONArray",
    "JSONObject",
    "JSONValue",
    "Match",
    "Ok",
    "ParseResult",
    "Replacer",
    "Result",
    "Reviver",
    "SerializationResult",
    "WhiteList",
    "describe",
    "is_array",
    "is_boolean",
    "is_null",
    "is_number",
    "is_object",
    "is_string",
    "is_value",
    "match",
    "parse",
    "stringify",
]
