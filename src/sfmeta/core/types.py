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

"""Core data classes for component selections and retrieval results.

These are the value objects passed between the manifest engines, the
retrieval reconciler and the service layer. All of them are immutable;
every operation produces fresh instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .model_types import RetrievalStatus

if TYPE_CHECKING:
    from .model_types import ErrorType
    from .type_aliases import ApiName, FolderId, TypeName


@dataclass(slots=True, frozen=True)
class Component:
    """A single metadata member eligible for retrieval.

    Attributes:
        name: Display label, usually equal to ``api_name``.
        api_name: Identifier sent to the retrieval tool. Folder-scoped types
            carry a ``folder/path/Leaf`` value.
        type: Metadata type the member belongs to (e.g. ``ApexClass``).
    """

    name: str
    api_name: ApiName
    type: TypeName

    @property
    def folder_path(self) -> str:
        """Return the part of ``api_name`` before the last ``/`` (empty if none)."""
        head, sep, _ = self.api_name.rpartition("/")
        return head if sep else ""


@dataclass(slots=True, frozen=True)
class FolderRecord:
    """A node in an org folder tree.

    Attributes:
        id: Folder record id.
        developer_name: API name of the folder.
        parent_id: Id of the parent folder, or ``None`` for a root folder.
    """

    id: FolderId
    developer_name: str
    parent_id: FolderId | None = None


@dataclass(slots=True, frozen=True)
class RetrievalResult:
    """Retrieval outcome for one requested component.

    Attributes:
        index: Position of the component in the requested list.
        status: Success or failure.
        error_message: Detail text for failed components.
    """

    index: int
    status: RetrievalStatus
    error_message: str | None = None

    @property
    def failed(self) -> bool:
        return self.status is RetrievalStatus.FAILED


def _default_results() -> list[RetrievalResult]:
    return []


@dataclass(slots=True, frozen=True)
class ReconcileOutcome:
    """Per-component results plus the batch-level error for one retrieval.

    Attributes:
        results: One entry per requested component, in request order.
        error_message: Human-readable batch error, if any.
        error_type: Whether the batch error is command- or component-level.
    """

    results: list[RetrievalResult] = field(default_factory=_default_results)
    error_message: str | None = None
    error_type: ErrorType | None = None

    @property
    def ok(self) -> bool:
        return self.error_message is None and not any(result.failed for result in self.results)


@dataclass(slots=True, frozen=True)
class ProcessOutput:
    """Captured output of one retrieval tool invocation.

    Attributes:
        exit_failed: Whether the process could not run or exited abnormally.
        stdout: Captured standard output.
        stderr: Captured standard error.
        invocation_error: Description of the launch/exit failure, if any.
    """

    exit_failed: bool = False
    stdout: str = ""
    stderr: str = ""
    invocation_error: str | None = None


__all__ = [
    "Component",
    "FolderRecord",
    "ProcessOutput",
    "ReconcileOutcome",
    "RetrievalResult",
]
