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

"""Model types and enumerations for sfmeta.

This module defines the enumerations and well-known constants shared by the
manifest, retrieval and catalog layers:

- Retrieval status and batch error classification
- Log formats and loggable components
- CLI action enumerations
- Folder-scoped metadata types and known-benign tool failures
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from .type_aliases import ApiVersion, FolderPath, TypeName


class RetrievalStatus(StrEnum):
    """Per-component outcome of a retrieval.

    Attributes:
        SUCCESS: The component was retrieved (or no failure was reported for it).
        FAILED: The component, or the whole batch, failed.
    """

    SUCCESS = "Success"
    FAILED = "Failed"


class ErrorType(StrEnum):
    """Classification of a batch-level retrieval error.

    Attributes:
        COMMAND: The tool could not run or reported a top-level failure.
        COMPONENT: The tool succeeded but individual components failed.
    """

    COMMAND = "command"
    COMPONENT = "component"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components.

    Attributes:
        CLI: Command-line interface component.
        CONFIG: Configuration loading.
        FOLDERS: Folder hierarchy resolution.
        MANIFEST: Manifest building and parsing.
        RETRIEVAL: Retrieval output reconciliation.
        CATALOG: Org listing normalisation.
        SERVICES: Service layer component.
    """

    CLI = "cli"
    CONFIG = "config"
    FOLDERS = "folders"
    MANIFEST = "manifest"
    RETRIEVAL = "retrieval"
    CATALOG = "catalog"
    SERVICES = "services"


class ManifestAction(StrEnum):
    """Enumeration of manifest command actions.

    Attributes:
        BUILD: Build a manifest from a selection file.
        SHOW: Print the selection stored in a manifest.
    """

    BUILD = "build"
    SHOW = "show"

    @classmethod
    def from_str(cls, raw: str) -> ManifestAction:
        """Create a ManifestAction enum from a string value.

        Args:
            raw: String representation of the manifest action.

        Returns:
            ManifestAction enum value.

        Raises:
            ValueError: If the string does not match any ManifestAction value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown manifest action '{raw}'"
            raise ValueError(msg) from exc


FOLDER_SCOPED_TYPES: Final[frozenset[TypeName]] = frozenset({
    TypeName("Dashboard"),
    TypeName("Document"),
    TypeName("EmailTemplate"),
})
# Source-tracked sandboxes report this after a retrieve that actually completed.
BENIGN_ERROR_MARKERS: Final[tuple[str, ...]] = ("Metadata API request failed: Could not find HEAD.",)
UNFILED_PUBLIC_FOLDER: Final[FolderPath] = FolderPath("unfiled$public")
DEFAULT_API_VERSION: Final[ApiVersion] = ApiVersion("64.0")
ORG_ID_PREFIX: Final[str] = "00D"
USER_ID_PREFIX: Final[str] = "005"

__all__ = [
    "BENIGN_ERROR_MARKERS",
    "DEFAULT_API_VERSION",
    "FOLDER_SCOPED_TYPES",
    "ORG_ID_PREFIX",
    "UNFILED_PUBLIC_FOLDER",
    "USER_ID_PREFIX",
    "ErrorType",
    "LogComponent",
    "LogFormat",
    "ManifestAction",
    "RetrievalStatus",
]
