"""Conversions between Python objects and protocol values.

A protocol value is what the API calls a ``google.protobuf.Value``: null,
bool, number, string, list or object (a ``Struct``). On the JSON wire these
are plain JSON, so conversion means reducing arbitrary Python objects
(pydantic models, dataclasses, enums, dates) to JSON-compatible data.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import JsonValue
from pydantic_core import from_json, to_jsonable_python


def object_to_value(obj: Any) -> JsonValue:
    """Convert an arbitrary Python object to a protocol value."""
    return to_jsonable_python(obj, bytes_mode="base64")


def json_to_value(document: Mapping[str, Any] | str | bytes) -> JsonValue:
    """Convert a JSON document (parsed or raw text) to a protocol value."""
    if isinstance(document, str | bytes):
        return from_json(document)
    return object_to_value(document)


def value_to_object(value: JsonValue) -> Any:
    """Convert a protocol value back to plain Python data.

    The result shares no containers with *value*.
    """
    if isinstance(value, dict):
        return {key: value_to_object(item) for key, item in value.items()}
    if isinstance(value, list):
        return [value_to_object(item) for item in value]
    return value


def is_struct(value: JsonValue) -> bool:
    """Whether *value* is an object (``Struct``) rather than a scalar or list."""
    return isinstance(value, dict)
