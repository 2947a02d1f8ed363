from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

PATH_SEPARATOR = "."


def _model_attribute(model: BaseModel, key: str) -> str:
    """Field name for `key`, which may be a field name or one of its aliases."""
    for name, info in type(model).model_fields.items():
        if key in (info.alias, info.serialization_alias):
            return name
    return key


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(segment)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes, bytearray)):
        if segment.isdigit() and int(segment) < len(current):
            return current[int(segment)]
        return None
    if isinstance(current, BaseModel):
        return getattr(current, _model_attribute(current, segment), None)
    return getattr(current, segment, None)


def get_value_by_path(data: Any, path: str) -> Any:
    """
    Return the value found at a dotted `path` inside `data`, or None.

    Walks mappings by key, lists by numeric segment, pydantic models by field
    name or alias and any other object by attribute, so plain dicts, models and
    ODM documents resolve alike. A mapping holding the whole dotted path as one
    key (`{"general.name": ...}`, as in a `$set`) resolves to that entry.
    The value is returned as-is (no copy, no string conversion).

    Examples:
        get_value_by_path({"a": {"b": 2}}, "a.b")  -> 2
        get_value_by_path({"a.b": 3}, "a.b")       -> 3
        get_value_by_path({}, "a.b")               -> None
        get_value_by_path({"l": [1, 2]}, "l.1")    -> 2
    """
    if isinstance(data, Mapping) and path in data:
        return data[path]

    result = data
    for segment in path.split(PATH_SEPARATOR):
        if result is None:
            break
        result = _step(result, segment)
    return result


def join_path(prefix: str, key: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key


__all__ = ["PATH_SEPARATOR", "get_value_by_path", "join_path"]
