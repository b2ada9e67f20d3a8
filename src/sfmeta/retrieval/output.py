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

"""Decode raw retrieval tool output into a small set of tagged variants.

The ``sf project retrieve start --json`` command reports its outcome on
several channels (exit status, JSON on stdout, JSON or plain text on stderr)
and the shape of each channel varies with the failure mode. ``decode_output``
collapses all of that into exactly one of:

- ``InvocationFailure``: the process could not run or exited abnormally.
- ``CommandFailure``: stdout JSON carries a non-zero integer ``status``.
- ``CommandSuccess``: stdout JSON carries ``status == 0`` and per-file results.
- ``UnknownStatus``: stdout JSON (or nothing) without a recognised status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, TypeAlias

from sfmeta.core.types import ProcessOutput
from sfmeta.json import JSONMapping, JSONValue, as_list, as_mapping, as_str, parse_json_object

DEFAULT_BATCH_MESSAGE: Final[str] = "Retrieval failed"
FAILED_STATE: Final[str] = "Failed"
SUCCESS_STATUS: Final[int] = 0


@dataclass(slots=True, frozen=True)
class FileResult:
    """One entry of ``result.files`` in a successful retrieval payload.

    Attributes:
        full_name: Member name as reported by the tool.
        type: Metadata type of the member.
        state: Tool-reported state (``Changed``, ``Created``, ``Failed``...).
        error: Error text, if any.
        problem: Alternative error text used by some tool versions.
    """

    full_name: str
    type: str = ""
    state: str = ""
    error: str | None = None
    problem: str | None = None

    @property
    def failed(self) -> bool:
        return self.state == FAILED_STATE

    def detail(self, default: str) -> str:
        """Return the error text, then the problem text, then ``default``."""
        return self.error or self.problem or default


@dataclass(slots=True, frozen=True)
class InvocationFailure:
    message: str


@dataclass(slots=True, frozen=True)
class CommandFailure:
    message: str


def _default_files() -> list[FileResult]:
    return []


@dataclass(slots=True, frozen=True)
class CommandSuccess:
    files: list[FileResult] = field(default_factory=_default_files)

    @property
    def failed_files(self) -> list[FileResult]:
        return [entry for entry in self.files if entry.failed]


@dataclass(slots=True, frozen=True)
class UnknownStatus:
    status: JSONValue = None


RetrievalOutput: TypeAlias = InvocationFailure | CommandFailure | CommandSuccess | UnknownStatus


def _status_code(payload: JSONMapping) -> int | None:
    status = payload.get("status")
    # bool is an int subclass; JSON ``true`` is not a status code.
    if isinstance(status, bool) or not isinstance(status, int):
        return None
    return status


def _optional_text(value: object) -> str | None:
    return as_str(value) or None


def _file_results(payload: JSONMapping) -> list[FileResult]:
    files: list[FileResult] = []
    for item in as_list(as_mapping(payload.get("result")).get("files")):
        entry = as_mapping(item)
        if not entry:
            continue
        files.append(
            FileResult(
                full_name=as_str(entry.get("fullName")),
                type=as_str(entry.get("type")),
                state=as_str(entry.get("state")),
                error=_optional_text(entry.get("error")),
                problem=_optional_text(entry.get("problem")),
            ),
        )
    return files


def _stderr_message(stderr: str) -> str | None:
    payload = parse_json_object(stderr)
    if payload is not None:
        message = _optional_text(payload.get("message")) or _optional_text(payload.get("error"))
        if message:
            return message
    return stderr.strip() or None


def _invocation_message(raw: ProcessOutput, stdout_payload: JSONMapping | None) -> str:
    if stdout_payload is not None:
        status = _status_code(stdout_payload)
        message = _optional_text(stdout_payload.get("message"))
        if status is not None and status != SUCCESS_STATUS and message:
            return message
    return _stderr_message(raw.stderr) or raw.invocation_error or DEFAULT_BATCH_MESSAGE


def decode_output(raw: ProcessOutput) -> RetrievalOutput:
    """Classify captured retrieval output into one tagged variant.

    Precedence follows the channels' reliability: a process-level failure wins
    over anything printed, then the stdout JSON ``status`` decides. Stdout that
    is present but not a JSON object is treated as an invocation failure.

    Args:
        raw: Captured process output.

    Returns:
        The decoded variant. This function never raises.
    """
    stdout_payload = parse_json_object(raw.stdout)
    if raw.exit_failed:
        return InvocationFailure(message=_invocation_message(raw, stdout_payload))
    if stdout_payload is None:
        if raw.stdout.strip():
            return InvocationFailure(message=_invocation_message(raw, None))
        return UnknownStatus()
    status = _status_code(stdout_payload)
    if status is None:
        return UnknownStatus(status=stdout_payload.get("status"))
    if status != SUCCESS_STATUS:
        return CommandFailure(message=_optional_text(stdout_payload.get("message")) or DEFAULT_BATCH_MESSAGE)
    return CommandSuccess(files=_file_results(stdout_payload))


__all__ = [
    "DEFAULT_BATCH_MESSAGE",
    "CommandFailure",
    "CommandSuccess",
    "FileResult",
    "InvocationFailure",
    "RetrievalOutput",
    "UnknownStatus",
    "decode_output",
]
