# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Lenient access to JSON emitted by the ``sf`` CLI.

``sf ... --json`` output is loosely specified and its shape drifts between
releases, so the accessors here coerce decoded values into predictable shapes
instead of raising. Nothing in this module imports logging, configuration or
CLI code.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TypeAlias, cast

from pydantic import JsonValue

__all__ = [
    "JSONList",
    "JSONMapping",
    "JSONValue",
    "as_int",
    "as_list",
    "as_mapping",
    "as_str",
    "normalize_enums_for_json",
    "parse_json_object",
    "require_json",
]

JSONValue: TypeAlias = JsonValue
JSONMapping = dict[str, JsonValue]
JSONList = list[JsonValue]


def require_json(payload: str) -> JSONMapping:
    """Decode ``payload``, which must be a JSON object.

    Raises:
        ValueError: If the text does not decode to a JSON object.
    """
    text = payload.strip()
    if not text:
        msg = "Expected JSON output but received empty string"
        raise ValueError(msg)
    data = json.loads(text)
    if not isinstance(data, dict):
        msg = f"Expected a JSON object but received {type(data).__name__}"
        raise ValueError(msg)
    return cast("JSONMapping", data)


def parse_json_object(payload: str | None) -> JSONMapping | None:
    """Like ``require_json`` but returns ``None`` for anything that is not an object.

    CLI banners such as update notices make stdout non-JSON; callers treat
    that the same as no output.
    """
    if not payload:
        return None
    try:
        return require_json(payload)
    except ValueError:
        return None


def as_mapping(value: object) -> JSONMapping:
    return cast("JSONMapping", value) if isinstance(value, dict) else {}


def as_list(value: object) -> JSONList:
    return cast("JSONList", value) if isinstance(value, list) else []


def as_str(value: object, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_int(value: object, default: int = 0) -> int:
    """Read an integer that may arrive as a number or a numeric string.

    Booleans are not integers here; anything unreadable yields ``default``.
    """
    match value:
        case bool():
            return default
        case int():
            return value
        case str():
            try:
                return int(value)
            except ValueError:
                return default
        case _:
            return default


def normalize_enums_for_json(value: object) -> JSONValue:
    """Make ``value`` JSON-serialisable.

    Enum keys and values are replaced by their ``.value``. Objects JSON cannot
    represent fall back to ``str()``.
    """
    match value:
        case Enum():
            return cast("JSONValue", value.value)
        case dict():
            items = cast("dict[object, object]", value).items()
            return {
                str(key.value) if isinstance(key, Enum) else str(key): normalize_enums_for_json(item)
                for key, item in items
            }
        case list() | tuple():
            return [normalize_enums_for_json(item) for item in cast("list[object] | tuple[object, ...]", value)]
        case str() | int() | float() | bool() | None:
            return value
        case _:
            return str(value)
