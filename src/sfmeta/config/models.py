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


"""Configuration models and validation for sfmeta.

This module defines the data models for sfmeta configuration: pydantic models
that validate the raw TOML tables, and slotted dataclasses that carry the
validated settings at runtime. Conversion functions bridge the two.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, cast

from pydantic import BaseModel, Field, field_validator, model_validator

from sfmeta._internal.collection_utils import dedupe_preserve
from sfmeta.core.model_types import BENIGN_ERROR_MARKERS, DEFAULT_API_VERSION, FOLDER_SCOPED_TYPES, LogFormat
from sfmeta.core.type_aliases import ApiVersion, TypeName
from sfmeta.exceptions import SfmetaValidationError

CONFIG_VERSION: Final[int] = 0
DEFAULT_MANIFEST_PATH: Final[Path] = Path("manifest/package.xml")
DEFAULT_SF_EXECUTABLE: Final[str] = "sf"
LOG_FORMAT_ALLOWED_VALUES: Final[tuple[str, ...]] = tuple(format_.value for format_ in LogFormat)
LOG_LEVEL_ALLOWED_VALUES: Final[tuple[str, ...]] = ("debug", "info", "warning", "error")


class ConfigValidationError(SfmetaValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldTypeError(ConfigValidationError):
    """Raised when a configuration field has an invalid type."""

    def __init__(self, field: str, expected: str = "a string") -> None:
        """Initialize the exception with the field name that has an invalid type.

        Args:
            field: The name of the configuration field with an invalid type.
            expected: Description of the expected type.
        """
        self.field = field
        super().__init__(f"{field} must be {expected}")


class ConfigFieldChoiceError(ConfigValidationError):
    """Raised when a configuration field is provided with an unsupported value."""

    def __init__(self, field: str, allowed: tuple[str, ...]) -> None:
        """Initialize the exception with the field name and allowed values.

        Args:
            field: The name of the configuration field with an invalid value.
            allowed: Tuple of allowed values for this field.
        """
        self.field = field
        self.allowed = allowed
        allowed_text = ", ".join(sorted(allowed))
        super().__init__(f"{field} must be one of: {allowed_text}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid sfmeta configuration in {path}: {error}")


def _default_folder_types() -> list[TypeName]:
    return sorted(FOLDER_SCOPED_TYPES)


def _default_benign_errors() -> list[str]:
    return list(BENIGN_ERROR_MARKERS)


@dataclass(slots=True)
class RetrieveConfig:
    """Settings for manifest generation and the retrieval tool.

    Attributes:
        manifest_path: Location of ``package.xml``; relative paths resolve
            against the project root.
        api_version: Pinned API version. ``None`` asks the org.
        default_api_version: Version used when the org cannot be asked.
        sf_executable: Name or path of the Salesforce CLI executable.
        ignore_conflicts: Whether to pass ``--ignore-conflicts`` to retrievals.
        folder_types: Metadata types whose members are folder-qualified.
        benign_errors: Batch error substrings that are reported as success.
    """

    manifest_path: Path = DEFAULT_MANIFEST_PATH
    api_version: ApiVersion | None = None
    default_api_version: ApiVersion = DEFAULT_API_VERSION
    sf_executable: str = DEFAULT_SF_EXECUTABLE
    ignore_conflicts: bool = True
    folder_types: list[TypeName] = field(default_factory=_default_folder_types)
    benign_errors: list[str] = field(default_factory=_default_benign_errors)


def _default_retrieve() -> RetrieveConfig:
    return RetrieveConfig()


@dataclass(slots=True)
class Config:
    """Top-level runtime configuration.

    Attributes:
        retrieve: Manifest and retrieval settings.
        log_format: Preferred log format when the CLI flag is not given.
        log_level: Preferred log level when the CLI flag is not given.
        project_root: Directory the configuration applies to.
        source: Configuration file the values were read from, if any.
    """

    retrieve: RetrieveConfig = field(default_factory=_default_retrieve)
    log_format: LogFormat | None = None
    log_level: str | None = None
    project_root: Path = field(default_factory=Path.cwd)
    source: Path | None = None


def ensure_list(value: object | None) -> list[str] | None:
    """Convert a string or iterable of strings to a list of stripped, non-empty strings.

    Args:
        value: The input value to convert. Can be None, a string, or an iterable.

    Returns:
        A list of non-empty strings, or None if the input was None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return [stripped] if stripped else []
    if not isinstance(value, Iterable):
        return []
    result: list[str] = []
    for item in cast("Iterable[object]", value):
        if isinstance(item, str):
            stripped = item.strip()
            if stripped:
                result.append(stripped)
    return result


def _optional_text(value: object, field_name: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # TOML allows an unquoted ``api_version = 64.0``.
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    raise ConfigFieldTypeError(field_name)


class RetrieveConfigModel(BaseModel):
    """Pydantic model for validating the ``[retrieve]`` table.

    After validation it is converted to a ``RetrieveConfig`` dataclass for
    runtime use.

    Attributes:
        manifest_path: Location of ``package.xml``.
        api_version: Optional pinned API version.
        default_api_version: Fallback API version.
        sf_executable: Salesforce CLI executable.
        ignore_conflicts: Whether to ignore source-tracking conflicts.
        folder_types: Folder-scoped metadata types.
        benign_errors: Known-benign batch error substrings.
    """

    manifest_path: Path = DEFAULT_MANIFEST_PATH
    api_version: str | None = None
    default_api_version: str = DEFAULT_API_VERSION
    sf_executable: str = DEFAULT_SF_EXECUTABLE
    ignore_conflicts: bool = True
    folder_types: list[str] = Field(default_factory=_default_folder_types)
    benign_errors: list[str] = Field(default_factory=_default_benign_errors)

    @field_validator("folder_types", "benign_errors", mode="before")
    @classmethod
    def _coerce_list(cls, value: object) -> list[str]:
        return ensure_list(value) or []

    @field_validator("api_version", mode="before")
    @classmethod
    def _coerce_api_version(cls, value: object) -> str | None:
        return _optional_text(value, "retrieve.api_version")

    @field_validator("default_api_version", mode="before")
    @classmethod
    def _coerce_default_api_version(cls, value: object) -> str:
        return _optional_text(value, "retrieve.default_api_version") or DEFAULT_API_VERSION

    @field_validator("sf_executable", mode="before")
    @classmethod
    def _strip_executable(cls, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        msg = "retrieve.sf_executable"
        raise ConfigFieldTypeError(msg, "a non-empty string")

    @model_validator(mode="after")
    def _normalise(self) -> RetrieveConfigModel:
        self.folder_types = dedupe_preserve(self.folder_types)
        self.benign_errors = dedupe_preserve(self.benign_errors)
        return self


def _default_retrieve_model() -> RetrieveConfigModel:
    return RetrieveConfigModel()


class ConfigModel(BaseModel):
    """Pydantic model for validating the top-level sfmeta configuration.

    Attributes:
        config_version: Schema version number for the configuration file.
        log_format: Optional default log format (``text`` or ``json``).
        log_level: Optional default log level.
        retrieve: Manifest and retrieval settings.
    """

    config_version: int = Field(default=CONFIG_VERSION)
    log_format: LogFormat | None = None
    log_level: str | None = None
    retrieve: RetrieveConfigModel = Field(default_factory=_default_retrieve_model)

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalise_log_format(cls, value: object) -> LogFormat | None:
        if value is None or isinstance(value, LogFormat):
            return value
        if isinstance(value, str):
            try:
                return LogFormat.from_str(value)
            except ValueError as exc:
                msg = "log_format"
                raise ConfigFieldChoiceError(msg, LOG_FORMAT_ALLOWED_VALUES) from exc
        msg = "log_format"
        raise ConfigFieldTypeError(msg)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            msg = "log_level"
            raise ConfigFieldTypeError(msg)
        level = value.strip().lower()
        if level not in LOG_LEVEL_ALLOWED_VALUES:
            msg = "log_level"
            raise ConfigFieldChoiceError(msg, LOG_LEVEL_ALLOWED_VALUES)
        return level

    @model_validator(mode="after")
    def _check_version(self) -> ConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


def retrieve_from_model(model: RetrieveConfigModel) -> RetrieveConfig:
    """Convert a RetrieveConfigModel to a RetrieveConfig dataclass.

    Args:
        model: The validated model.

    Returns:
        A RetrieveConfig ready for runtime use.
    """
    payload = model.model_dump(mode="python")
    return RetrieveConfig(
        manifest_path=payload["manifest_path"],
        api_version=ApiVersion(payload["api_version"]) if payload["api_version"] else None,
        default_api_version=ApiVersion(payload["default_api_version"]),
        sf_executable=payload["sf_executable"],
        ignore_conflicts=payload["ignore_conflicts"],
        folder_types=[TypeName(name) for name in payload["folder_types"]],
        benign_errors=list(payload["benign_errors"]),
    )


def config_from_model(model: ConfigModel, *, project_root: Path, source: Path | None = None) -> Config:
    """Convert a validated ConfigModel into the runtime Config dataclass."""
    return Config(
        retrieve=retrieve_from_model(model.retrieve),
        log_format=model.log_format,
        log_level=model.log_level,
        project_root=project_root,
        source=source,
    )


__all__ = [
    "CONFIG_VERSION",
    "DEFAULT_MANIFEST_PATH",
    "LOG_FORMAT_ALLOWED_VALUES",
    "LOG_LEVEL_ALLOWED_VALUES",
    "Config",
    "ConfigFieldChoiceError",
    "ConfigFieldTypeError",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "RetrieveConfig",
    "RetrieveConfigModel",
    "UnsupportedConfigVersionError",
    "config_from_model",
    "ensure_list",
    "retrieve_from_model",
]
