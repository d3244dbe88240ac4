"""Typed adapter over the standard library JSON encoder."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
import json
import logging
import math
import re
from typing import Any, Optional, Union

from pydantic import BaseModel

from .json_types import OMIT, JSONValue, MutableJSONObject, Omitted, Replacer, WhiteList
from .result import Err, Ok, Result

_LOGGER = logging.getLogger(__name__)

_MAX_GAP = 10
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")
_PASSTHROUGH_ERRORS = (KeyboardInterrupt, SystemExit, GeneratorExit)


class CaughtError(Exception):
    """Raised object normalized into an exception.

    Anything deriving from ``BaseException`` can be raised, but callers of
    :func:`stringify` only ever receive ``Exception`` instances. Raised
    objects outside that hierarchy are wrapped and kept on ``caught_error``.
    """

    def __init__(self, message: str, caught_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.caught_error = caught_error


type SerializationResult = Result[Exception, str]


def stringify(
    value: Any,
    replacer_or_whitelist: Optional[Union[Replacer, WhiteList]] = None,
    space: Optional[Union[str, int, float]] = None,
) -> SerializationResult:
    """Serialize a JSON value to text.

    Any failure comes back as ``Err`` instead of being raised. A successful
    result always parses: when ``replacer_or_whitelist`` omits the root value
    the result is ``Ok("null")``.

    Args:
        value (Any): JSON value to serialize. Pydantic models and objects
            with a ``to_json(key)`` method are converted before serializing.
        replacer_or_whitelist (Optional[Union[Replacer, WhiteList]]): Either a
            function called with ``(key, value)`` for every member (returning
            ``OMIT`` drops it), or a sequence of member names (ints are
            converted to strings) selecting and ordering object members.
        space (Optional[Union[str, int, float]]): Indentation: a string
            truncated to 10 characters, or a count of spaces floored and
            clamped to ``0..10``. Empty or zero means compact output.

    Returns:
        SerializationResult: ``Ok`` with the JSON text, or ``Err`` with the
            raised exception.
    """
    try:
        serializer = _Serializer.from_filter(replacer_or_whitelist)
        gap = _gap(space)
        serialized = serializer.serialize_root(value)
        if serialized is OMIT:
            _LOGGER.debug("Replacer omitted the root value; returning null")
            return Ok("null")
        return Ok(_render(serialized, gap=gap))
    except _PASSTHROUGH_ERRORS:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.debug("JSON serialization failed: %s", exc)
        return Err(exc)
    except BaseException as exc:  # pylint: disable=broad-exception-caught
        reason = CaughtError(
            f"JSON serialization raised non-Exception error: {exc}",
            caught_error=exc,
        )
        _LOGGER.debug("%s", reason)
        return Err(reason)


class _Serializer:
    """Walks a value the way a JSON serializer visits members."""

    def __init__(
        self,
        *,
        replacer: Optional[Replacer],
        property_list: Optional[tuple[str, ...]],
    ) -> None:
        self._replacer = replacer
        self._property_list = property_list
        self._active: set[int] = set()

    @classmethod
    def from_filter(
        cls,
        replacer_or_whitelist: Optional[Union[Replacer, WhiteList]],
    ) -> _Serializer:
        """Build a serializer from the filter argument of :func:`stringify`."""
        if replacer_or_whitelist is None:
            return cls(replacer=None, property_list=None)
        if callable(replacer_or_whitelist):
            return cls(replacer=replacer_or_whitelist, property_list=None)
        if isinstance(replacer_or_whitelist, (list, tuple)):
            return cls(replacer=None, property_list=_property_list(replacer_or_whitelist))
        raise TypeError(
            "replacer_or_whitelist must be a callable or a list of member names, "
            f"not {type(replacer_or_whitelist).__name__}"
        )

    def serialize_root(self, value: Any) -> Union[JSONValue, Omitted]:
        return self._serialize_member(key="", value=value)

    def _serialize_member(self, *, key: str, value: Any) -> Union[JSONValue, Omitted]:
        value = _convert_custom(value, key=key)
        if self._replacer is not None:
            value = self._replacer(key, value)

        if value is OMIT:
            return OMIT
        if value is None or isinstance(value, (bool, int, str)):
            return value
        if isinstance(value, float):
            return value if math.isfinite(value) else None
        if isinstance(value, (list, tuple)):
            return self._serialize_array(value)
        if isinstance(value, Mapping):
            return self._serialize_object(value)
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    def _serialize_array(self, array: Union[list[Any], tuple[Any, ...]]) -> list[JSONValue]:
        with self._entered(array):
            items: list[JSONValue] = []
            for index, item in enumerate(array):
                serialized = self._serialize_member(key=str(index), value=item)
                items.append(None if serialized is OMIT else serialized)
            return items

    def _serialize_object(self, mapping: Mapping[Any, Any]) -> MutableJSONObject:
        with self._entered(mapping):
            if self._property_list is None:
                members = [(_member_name(key), key) for key in mapping]
            else:
                keys_by_name = {_member_name(key): key for key in mapping}
                members = [
                    (name, keys_by_name[name])
                    for name in self._property_list
                    if name in keys_by_name
                ]

            result: MutableJSONObject = {}
            for name, key in members:
                serialized = self._serialize_member(key=name, value=mapping[key])
                if serialized is not OMIT:
                    result[name] = serialized
            return result

    @contextmanager
    def _entered(self, container: Any) -> Iterator[None]:
        marker = id(container)
        if marker in self._active:
            raise ValueError("Circular reference detected")
        self._active.add(marker)
        try:
            yield
        finally:
            self._active.discard(marker)


def _convert_custom(value: Any, *, key: str) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    to_json = getattr(value, "to_json", None)
    if callable(to_json) and not isinstance(value, type):
        return to_json(key)
    return value


def _member_name(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    if isinstance(key, int):
        return str(key)
    if isinstance(key, float):
        return repr(key)
    raise TypeError(f"keys must be str, int, float, bool or None, not {type(key).__name__}")


def _property_list(whitelist: WhiteList) -> tuple[str, ...]:
    names: dict[str, None] = {}
    for item in whitelist:
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise TypeError(f"Whitelist entries must be str or int, not {type(item).__name__}")
        names.setdefault(str(item), None)
    return tuple(names)


def _gap(space: Optional[Union[str, int, float]]) -> str:
    if space is None:
        return ""
    if isinstance(space, str):
        return space[:_MAX_GAP]
    if isinstance(space, bool) or not isinstance(space, (int, float)):
        raise TypeError(f"space must be a str or number, not {type(space).__name__}")
    if math.isnan(space):
        return ""
    return " " * int(min(max(space, 0), _MAX_GAP))


def _render(value: JSONValue, *, gap: str) -> str:
    if not gap:
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    else:
        text = json.dumps(
            value,
            indent=gap,
            separators=(",", ": "),
            ensure_ascii=False,
            allow_nan=False,
        )
    # Surrogate pairs are already joined in str, so any surrogate left is unpaired.
    return _LONE_SURROGATE.sub(_escape_surrogate, text)


def _escape_surrogate(match: re.Match[str]) -> str:
    return f"\\u{ord(match.group()):04x}"
