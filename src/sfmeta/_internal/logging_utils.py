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


"""Structured logging for sfmeta.

Every sfmeta logger lives under the ``sfmeta`` root. ``configure_logging``
installs a single stream handler on that root, either as one readable line
per record or as one JSON object per record, and records emitted with
``extra=structured_extra(...)`` carry typed fields (component, tool, counts,
paths...) that the JSON formatter passes through.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Final, Literal, TypedDict, Unpack, cast, override

from sfmeta.core.model_types import LogComponent, LogFormat, RetrievalStatus
from sfmeta.json import normalize_enums_for_json

ROOT_LOGGER_NAME: Final[str] = "sfmeta"
LOG_FORMAT_ENV: Final[str] = "SFMETA_LOG_FORMAT"
LOG_LEVEL_ENV: Final[str] = "SFMETA_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "info"

LOG_FORMATS: Final[tuple[Literal["text", "json"], ...]] = cast(
    "tuple[Literal['text', 'json'], ...]",
    tuple(format_.value for format_ in LogFormat),
)
LOG_LEVELS: Final[tuple[Literal["debug", "info", "warning", "error"], ...]] = (
    "debug",
    "info",
    "warning",
    "error",
)
_LEVEL_VALUES: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# One child logger per component, plus the subprocess runner.
CHILD_LOGGERS: Final[tuple[str, ...]] = (
    *(f"{ROOT_LOGGER_NAME}.{component.value}" for component in LogComponent),
    f"{ROOT_LOGGER_NAME}.internal",
)


@dataclass(slots=True, frozen=True)
class LogConfig:
    """Resolved logging configuration.

    Attributes:
        format: Selected output format.
        level: Numeric level applied to the sfmeta loggers.
        level_name: Lower-case name of ``level``.
    """

    format: LogFormat
    level: int
    level_name: str


def _level_from(value: str | int) -> tuple[int, str]:
    if isinstance(value, int):
        return value, logging.getLevelName(value).lower()
    name = value.strip().lower()
    if name not in _LEVEL_VALUES:
        name = DEFAULT_LOG_LEVEL
    return _LEVEL_VALUES[name], name


def resolve_log_settings(
    log_format: LogFormat | str | None = None,
    log_level: str | int | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LogConfig:
    """Pick the log format and level without touching any logger.

    Explicit values win, then ``SFMETA_LOG_FORMAT`` / ``SFMETA_LOG_LEVEL``,
    then ``text`` / ``info``. Unknown level names fall back to ``info``.

    Raises:
        ValueError: If the selected format is not a known ``LogFormat``.
    """
    env = os.environ if environ is None else environ
    raw_format = log_format if log_format is not None else env.get(LOG_FORMAT_ENV) or LogFormat.TEXT
    selected = raw_format if isinstance(raw_format, LogFormat) else LogFormat.from_str(raw_format)
    raw_level = log_level if log_level is not None else env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL
    level, level_name = _level_from(raw_level)
    return LogConfig(format=selected, level=level, level_name=level_name)


class JSONLogFormatter(logging.Formatter):
    """One JSON object per record, including any structured fields."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update((name, getattr(record, name)) for name in STRUCTURED_FIELDS if hasattr(record, name))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(normalize_enums_for_json(payload), ensure_ascii=False)


class TextLogFormatter(logging.Formatter):
    """``[LEVEL] message`` lines, suffixed with the component when one is attached."""

    def __init__(self) -> None:
        super().__init__("[%(levelname)s] %(message)s")

    @override
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        component = getattr(record, "component", None)
        if component is None:
            return line
        first, newline, rest = line.partition("\n")
        return f"{first} ({component}){newline}{rest}"


def configure_logging(
    log_format: LogFormat | str | None = None,
    *,
    log_level: str | int | None = None,
) -> LogConfig:
    """Install the sfmeta log handler.

    Any handler previously installed on the ``sfmeta`` root is replaced, and
    records stop propagating to the Python root logger.

    Args:
        log_format: ``text`` or ``json``. ``None`` consults ``SFMETA_LOG_FORMAT``.
        log_level: Level name or number. ``None`` consults ``SFMETA_LOG_LEVEL``.

    Returns:
        The settings that were applied.
    """
    settings = resolve_log_settings(log_format, log_level)
    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter() if settings.format is LogFormat.JSON else TextLogFormatter())

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.level)
    root.propagate = False
    for name in CHILD_LOGGERS:
        logging.getLogger(name).setLevel(settings.level)
    return settings


class _StructuredLogBase(TypedDict):
    component: LogComponent


class StructuredLogExtra(_StructuredLogBase, total=False):
    """Normalised ``extra=`` payload attached to sfmeta log records."""

    tool: str
    type_name: str
    duration_ms: float
    counts: dict[RetrievalStatus, int]
    exit_code: int
    path: str
    details: dict[str, object]


class _StructuredLogKwargs(TypedDict, total=False):
    tool: str | None
    type_name: str | None
    duration_ms: float | None
    counts: Mapping[RetrievalStatus, int] | None
    exit_code: int | None
    path: str | os.PathLike[str] | None
    details: Mapping[str, object] | None


def _non_empty_dict(value: object) -> object | None:
    if isinstance(value, Mapping) and value:
        return dict(cast("Mapping[object, object]", value))
    return None


def _fspath(value: object) -> str:
    return os.fspath(cast("str | os.PathLike[str]", value))


def _as_float(value: object) -> float:
    return float(cast("float | str", value))


def _as_int(value: object) -> int:
    return int(cast("int | str", value))


_FIELD_TRANSFORMS: Final[dict[str, Callable[[object], object | None]]] = {
    "tool": str,
    "type_name": str,
    "duration_ms": _as_float,
    "counts": _non_empty_dict,
    "exit_code": _as_int,
    "path": _fspath,
    "details": _non_empty_dict,
}
STRUCTURED_FIELDS: Final[tuple[str, ...]] = ("component", *_FIELD_TRANSFORMS)


def structured_extra(
    component: LogComponent,
    **kwargs: Unpack[_StructuredLogKwargs],
) -> StructuredLogExtra:
    """Build the ``extra=`` mapping for a log record.

    ``None`` values and empty ``counts`` / ``details`` mappings are left out;
    paths are converted to strings.

    Args:
        component: Area of sfmeta emitting the record.
        **kwargs: Optional structured fields.

    Returns:
        Mapping to pass as ``extra`` to a logging call.
    """
    extra: dict[str, object] = {"component": component}
    for name, value in cast("dict[str, object]", kwargs).items():
        transform = _FIELD_TRANSFORMS.get(name)
        if transform is None or value is None:
            continue
        converted = transform(value)
        if converted is not None:
            extra[name] = converted
    return cast("StructuredLogExtra", extra)


__all__ = [
    "CHILD_LOGGERS",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "JSONLogFormatter",
    "LogConfig",
    "StructuredLogExtra",
    "TextLogFormatter",
    "configure_logging",
    "resolve_log_settings",
    "structured_extra",
]
