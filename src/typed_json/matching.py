"""Pattern matching over JSON value variants."""

from __future__ import annotations

from collections.abc import Callable

from .json_types import JSONArray, JSONNumber, JSONObject, JSONValue
from .predicates import is_array, is_boolean, is_null, is_number, is_object, is_string
from .serialization import stringify

type Match[A] = Callable[[JSONValue], A]


def match[A](
    on_null: Callable[[None], A],
    on_boolean: Callable[[bool], A],
    on_number: Callable[[JSONNumber], A],
    on_string: Callable[[str], A],
    on_array: Callable[[JSONArray], A],
    on_object: Callable[[JSONObject], A],
) -> Match[A]:
    """Build a dispatcher that maps a JSON value with the handler for its variant.

    All handlers return the same type. The dispatcher calls exactly one of
    them and does not recurse: handlers for arrays and objects call the
    dispatcher themselves when they need to visit nested values.

    ```python
    show = match(
        lambda _: "null",
        lambda boolean: str(boolean).lower(),
        lambda number: f"{number:g}",
        lambda string: string.upper(),
        lambda array: f"{len(array)} items",
        lambda obj: ", ".join(obj),
    )
    show(parse('"Hi"').to_value(None))  # => "HI"
    ```

    Args:
        on_null (Callable[[None], A]): Called for ``None``.
        on_boolean (Callable[[bool], A]): Called for ``True`` and ``False``.
        on_number (Callable[[JSONNumber], A]): Called for ints and floats.
        on_string (Callable[[str], A]): Called for strings.
        on_array (Callable[[JSONArray], A]): Called for lists and tuples.
        on_object (Callable[[JSONObject], A]): Called for mappings.

    Returns:
        Match[A]: Dispatcher raising ``TypeError`` for values outside JSON.
    """

    def dispatch(value: JSONValue) -> A:
        # None and bool come first: bool subclasses int.
        if is_null(value):
            return on_null(value)
        if is_boolean(value):
            return on_boolean(value)
        if is_number(value):
            return on_number(value)
        if is_string(value):
            return on_string(value)
        if is_array(value):
            return on_array(value)
        if is_object(value):
            return on_object(value)
        raise TypeError(f"Expected a JSON value, got {type(value).__name__}")

    return dispatch


def describe(value: JSONValue) -> str:
    """Render ``value`` as a tagged outline such as ``<array>[<int>1, <null>null]``."""
    return _DESCRIBE(value)


def _describe_number(number: JSONNumber) -> str:
    if isinstance(number, int):
        return f"<int>{number}"
    return f"<float>{number!r}"


def _describe_array(array: JSONArray) -> str:
    return f"<array>[{', '.join(describe(item) for item in array)}]"


def _describe_object(obj: JSONObject) -> str:
    members = (f"{_quote(key)}:{describe(member)}" for key, member in obj.items())
    return f"<object>{{{', '.join(members)}}}"


def _quote(text: str) -> str:
    return stringify(text).to_value(repr(text))


_DESCRIBE: Match[str] = match(
    lambda _: "<null>null",
    lambda boolean: f"<boolean>{'true' if boolean else 'false'}",
    _describe_number,
    lambda string: f"<string>{_quote(string)}",
    _describe_array,
    _describe_object,
)
