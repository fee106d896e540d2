"""Dot-path access to parsed JSON trees.

A tree is what ``json.loads`` returns: dicts (objects), lists (arrays),
str, int/float, bool and None. Paths look like ``"a.b.c"``; every key but
the last must lead to an object.
"""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional, Tuple, Type, Union

from link_extractor.exceptions import ParsingError, PathNotFoundError, TypeMismatchError

ExpectedType = Union[Type[Any], Tuple[Type[Any], ...]]

_JSON_TYPE_NAMES = (
    (bool, "boolean"),
    (dict, "object"),
    (list, "array"),
    (str, "string"),
    (int, "number"),
    (float, "number"),
)


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    for py_type, name in _JSON_TYPE_NAMES:
        if isinstance(value, py_type):
            return name
    return type(value).__name__


def _expected_name(expected: ExpectedType) -> str:
    types = expected if isinstance(expected, tuple) else (expected,)
    names = []
    for t in types:
        name = dict(_JSON_TYPE_NAMES).get(t, t.__name__)
        if name not in names:
            names.append(name)
    return "|".join(names)


def _is_instance(value: Any, expected: ExpectedType) -> bool:
    types = expected if isinstance(expected, tuple) else (expected,)
    # bool is an int subclass; only accept it when asked for explicitly
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def get_value(root: Any, path: str) -> Any:
    """Return the raw value stored at ``path``.

    Raises PathNotFoundError when a key is missing and TypeMismatchError when
    something on the way is not an object. A JSON null stored at the last key
    is returned as None.
    """
    keys = path.split(".")
    current = root
    walked: List[str] = []
    for key in keys:
        if not isinstance(current, Mapping):
            where = ".".join(walked) or "<root>"
            raise TypeMismatchError(where, "object", json_type_name(current))
        if key not in current:
            raise PathNotFoundError(path)
        current = current[key]
        walked.append(key)
    return current


def get_as(root: Any, path: str, expected: ExpectedType) -> Any:
    value = get_value(root, path)
    if not _is_instance(value, expected):
        raise TypeMismatchError(path, _expected_name(expected), json_type_name(value))
    return value


def get_string(root: Any, path: str) -> str:
    return get_as(root, path, str)


def get_boolean(root: Any, path: str) -> bool:
    return get_as(root, path, bool)


def get_number(root: Any, path: str) -> Union[int, float]:
    return get_as(root, path, (int, float))


def get_object(root: Any, path: str) -> dict:
    return get_as(root, path, dict)


def get_array(root: Any, path: str) -> list:
    return get_as(root, path, list)


def get_values(array: Any, path: str) -> List[Any]:
    """Apply ``get_value(element, path)`` to every element, keeping order.

    The first element that fails stops the walk with its own error.
    """
    if not isinstance(array, list):
        raise TypeMismatchError("<root>", "array", json_type_name(array))
    return [get_value(element, path) for element in array]


def opt_value(root: Any, path: str, default: Any = None) -> Any:
    """Like ``get_value`` but returns ``default`` instead of raising."""
    try:
        value = get_value(root, path)
    except (PathNotFoundError, TypeMismatchError):
        return default
    return default if value is None else value


def get_string_list_from_json_array(array: list) -> List[str]:
    return [item for item in array if isinstance(item, str)]


def _load(raw: Optional[str], expected: type, label: str) -> Any:
    if raw is None:
        raise ParsingError(f"Could not parse JSON {label}: no input")
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ParsingError(f"Could not parse JSON {label}", {"cause": str(exc)}) from exc
    if not isinstance(value, expected):
        raise ParsingError(
            f"Could not parse JSON {label}: got {json_type_name(value)}"
        )
    return value


def to_json_object(raw: Optional[str]) -> dict:
    return _load(raw, dict, "object")


def to_json_array(raw: Optional[str]) -> list:
    return _load(raw, list, "array")
