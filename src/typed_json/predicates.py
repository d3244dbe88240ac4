"""Runtime predicates that refine arbitrary input to a JSON value variant.

For any well formed JSON value exactly one of :func:`is_null`,
:func:`is_boolean`, :func:`is_number`, :func:`is_string`, :func:`is_array`
and :func:`is_object` returns ``True``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeGuard

from .json_types import JSONArray, JSONNumber, JSONObject, JSONValue


def is_null(value: Any) -> TypeGuard[None]:
    """Return whether ``value`` is JSON ``null``."""
    return value is None


def is_boolean(value: Any) -> TypeGuard[bool]:
    """Return whether ``value`` is a JSON boolean."""
    return isinstance(value, bool)


def is_number(value: Any) -> TypeGuard[JSONNumber]:
    """Return whether ``value`` is a JSON number.

    ``bool`` subclasses ``int`` in Python, so booleans are excluded here and
    only match :func:`is_boolean`.
    """
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_string(value: Any) -> TypeGuard[str]:
    """Return whether ``value`` is a JSON string."""
    return isinstance(value, str)


def is_array(value: Any) -> TypeGuard[JSONArray]:
    """Return whether ``value`` is a JSON array (a list or tuple)."""
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> TypeGuard[JSONObject]:
    """Return whether ``value`` is a JSON object (any mapping)."""
    return isinstance(value, Mapping)


def is_value(value: Any) -> TypeGuard[JSONValue]:
    """Return whether ``value`` is a well formed JSON value all the way down.

    Args:
        value (Any): Candidate value to inspect.

    Returns:
        bool: Whether every nested element and member is a JSON value and
            every object key is a string. Cyclic structures are rejected.
    """
    return _is_value(value, active=set())


def _is_value(value: Any, *, active: set[int]) -> bool:
    if is_null(value) or is_boolean(value) or is_number(value) or is_string(value):
        return True
    if not is_array(value) and not is_object(value):
        return False

    marker = id(value)
    if marker in active:
        return False
    active.add(marker)
    try:
        if is_array(value):
            return all(_is_value(item, active=active) for item in value)
        return all(
            isinstance(key, str) and _is_value(member, active=active)
            for key, member in value.items()
        )
    finally:
        active.discard(marker)
