"""Typed adapter over the standard library JSON decoder."""

from __future__ import annotations

import functools
import json
import logging
import re
from typing import NoReturn, Optional, Union

from .json_types import OMIT, JSONNumber, JSONValue, MutableJSONObject, Omitted, Reviver
from .result import Err, Ok, Result

_LOGGER = logging.getLogger(__name__)

_CONSTANT_OR_STRING = re.compile(r'"(?:[^"\\]|\\.)*"|-?Infinity|NaN', re.DOTALL)

type ParseResult = Result[Exception, JSONValue]


def parse(text: str, reviver: Optional[Reviver] = None) -> ParseResult:
    """Parse ``text`` as JSON, optionally transforming the parsed members.

    Unlike :func:`json.loads` this never raises: malformed input comes back as
    ``Err`` holding the decoder's :class:`json.JSONDecodeError`. ``NaN`` and
    ``Infinity`` are rejected since they are not JSON. When ``reviver`` drops
    the root value the result is ``Ok(None)``, because JSON has no way to
    express "nothing".

    Args:
        text (str): The JSON text to parse.
        reviver (Optional[Reviver]): Called bottom-up with ``(key, value)`` for
            every member, then for the root with key ``""``. Array indices are
            passed as decimal strings. Returning ``OMIT`` drops the member; a
            dropped array element becomes ``None``.

    Returns:
        ParseResult: ``Ok`` with the parsed value, or ``Err`` with the raised
            exception.
    """
    try:
        value: Union[JSONValue, Omitted] = json.loads(
            text,
            parse_int=_parse_int,
            parse_constant=functools.partial(_reject_constant, text),
        )
        if reviver is not None:
            root: MutableJSONObject = {"": value}
            value = _revive(root, "", reviver)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.debug("JSON parse failed: %s", exc)
        return Err(exc)

    if value is OMIT:
        _LOGGER.debug("Reviver omitted the root value; returning null")
        return Ok(None)
    return Ok(value)


def _parse_int(literal: str) -> JSONNumber:
    try:
        return int(literal)
    except ValueError:
        # Past the int string conversion limit; decode like any other large number.
        return float(literal)


def _reject_constant(text: str, name: str) -> NoReturn:
    raise json.JSONDecodeError(f"Invalid constant {name}", text, _constant_position(text, name))


def _constant_position(text: str, name: str) -> int:
    for token in _CONSTANT_OR_STRING.finditer(text):
        if token.group() == name:
            return token.start()
    return 0


def _revive(
    holder: Union[list[JSONValue], MutableJSONObject],
    key: Union[int, str],
    reviver: Reviver,
) -> Union[JSONValue, Omitted]:
    value = holder[key]  # type: ignore[index]
    if isinstance(value, list):
        for index in range(len(value)):
            revived = _revive(value, index, reviver)
            value[index] = None if revived is OMIT else revived
    elif isinstance(value, dict):
        for name in list(value):
            revived = _revive(value, name, reviver)
            if revived is OMIT:
                del value[name]
            else:
                value[name] = revived
    return reviver(str(key), value)
