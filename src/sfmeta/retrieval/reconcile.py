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

"""Map decoded retrieval output onto the requested component selection.

``reconcile`` always returns exactly one ``RetrievalResult`` per requested
component, in request order, whatever the tool printed. Batch-level errors
that contain a known-benign marker are discarded and reported as success.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Final

from sfmeta.core.model_types import BENIGN_ERROR_MARKERS, ErrorType, LogComponent, RetrievalStatus
from sfmeta.core.types import ReconcileOutcome, RetrievalResult
from sfmeta.logging import structured_extra

from .output import CommandFailure, CommandSuccess, FileResult, InvocationFailure, UnknownStatus, decode_output

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sfmeta.core.types import Component, ProcessOutput

logger: logging.Logger = logging.getLogger("sfmeta.retrieval")

COMPONENT_FAILURE_MESSAGE: Final[str] = "Component retrieval failed"
UNKNOWN_ERROR_MESSAGE: Final[str] = "Unknown error"
BULLET: Final[str] = "•"
MESSAGE_SEPARATOR: Final[str] = "\n\n"


def is_benign(message: str, markers: Iterable[str] = BENIGN_ERROR_MARKERS) -> bool:
    """Return whether ``message`` contains any known-benign failure marker."""
    return any(marker and marker in message for marker in markers)


def format_component_errors(failed: Sequence[FileResult]) -> str:
    """Combine failed file entries into one bulleted, blank-line separated message."""
    return MESSAGE_SEPARATOR.join(
        f"{BULLET} {entry.full_name} ({entry.type}) - {entry.detail(UNKNOWN_ERROR_MESSAGE)}" for entry in failed
    )


def _all_success(count: int) -> list[RetrievalResult]:
    return [RetrievalResult(index=index, status=RetrievalStatus.SUCCESS) for index in range(count)]


def _all_failed(count: int, message: str) -> list[RetrievalResult]:
    return [
        RetrievalResult(index=index, status=RetrievalStatus.FAILED, error_message=message) for index in range(count)
    ]


def _batch_failure(message: str, count: int, markers: Sequence[str]) -> ReconcileOutcome:
    if is_benign(message, markers):
        return _benign_outcome(count, message)
    return ReconcileOutcome(results=_all_failed(count, message), error_message=message, error_type=ErrorType.COMMAND)


def _benign_outcome(count: int, message: str) -> ReconcileOutcome:
    logger.info(
        "Ignoring known-benign retrieval error: %s",
        message,
        extra=structured_extra(component=LogComponent.RETRIEVAL),
    )
    return ReconcileOutcome(results=_all_success(count))


def _component_outcome(
    success: CommandSuccess,
    components: Sequence[Component],
    markers: Sequence[str],
) -> ReconcileOutcome:
    failed = success.failed_files
    by_name: dict[str, FileResult] = {}
    for entry in failed:
        _ = by_name.setdefault(entry.full_name, entry)
    results: list[RetrievalResult] = []
    for index, component in enumerate(components):
        entry = by_name.get(component.api_name)
        if entry is None:
            results.append(RetrievalResult(index=index, status=RetrievalStatus.SUCCESS))
        else:
            results.append(
                RetrievalResult(
                    index=index,
                    status=RetrievalStatus.FAILED,
                    error_message=entry.detail(COMPONENT_FAILURE_MESSAGE),
                ),
            )
    if not failed:
        return ReconcileOutcome(results=results)
    message = format_component_errors(failed)
    # The combined message is a batch error too: one benign entry clears the
    # whole batch, including other failed files.
    if is_benign(message, markers):
        return _benign_outcome(len(components), message)
    return ReconcileOutcome(results=results, error_message=message, error_type=ErrorType.COMPONENT)


def status_counts(outcome: ReconcileOutcome) -> dict[RetrievalStatus, int]:
    """Count results per status, including statuses with zero results."""
    counter = Counter(result.status for result in outcome.results)
    return {status: counter.get(status, 0) for status in RetrievalStatus}


def reconcile(
    raw: ProcessOutput,
    components: Sequence[Component],
    *,
    benign_errors: Sequence[str] = BENIGN_ERROR_MARKERS,
) -> ReconcileOutcome:
    """Produce a per-component status list from captured retrieval output.

    Args:
        raw: Captured output of the retrieval tool.
        components: Requested components, in request order.
        benign_errors: Substrings that mark a batch error as a false failure.

    Returns:
        One result per component (indices ``0..n-1`` in order) plus the batch
        error message and type, if any. Unrecognised statuses are reported as
        success for every component.
    """
    count = len(components)
    decoded = decode_output(raw)
    match decoded:
        case InvocationFailure(message=message):
            outcome = _batch_failure(message, count, benign_errors)
        case CommandFailure(message=message):
            outcome = _batch_failure(message, count, benign_errors)
        case CommandSuccess():
            outcome = _component_outcome(decoded, components, benign_errors)
        case UnknownStatus(status=status):
            logger.debug(
                "Unrecognised retrieval status %r; reporting success",
                status,
                extra=structured_extra(component=LogComponent.RETRIEVAL),
            )
            outcome = ReconcileOutcome(results=_all_success(count))
    logger.debug(
        "Reconciled %d component(s) from %s",
        count,
        type(decoded).__name__,
        extra=structured_extra(
            component=LogComponent.RETRIEVAL,
            counts=status_counts(outcome),
            details={"error_type": outcome.error_type},
        ),
    )
    return outcome


__all__ = [
    "COMPONENT_FAILURE_MESSAGE",
    "format_component_errors",
    "is_benign",
    "reconcile",
    "status_counts",
]
