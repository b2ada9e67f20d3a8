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


"""Run ``sf project retrieve start`` for a selection and reconcile its output."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sfmeta.core.model_types import LogComponent
from sfmeta.core.types import ProcessOutput
from sfmeta.logging import structured_extra
from sfmeta.retrieval import reconcile, status_counts
from sfmeta.runtime import run_command

from .manifest import write_manifest

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from sfmeta.config import Config, RetrieveConfig
    from sfmeta.core.type_aliases import ApiVersion, Command
    from sfmeta.core.types import Component, ReconcileOutcome
    from sfmeta.runtime import CommandOutput

logger: logging.Logger = logging.getLogger("sfmeta.services.retrieval")


def _manifest_argument(manifest_path: Path, project_root: Path) -> str:
    try:
        return manifest_path.relative_to(project_root).as_posix()
    except ValueError:
        return str(manifest_path)


def build_retrieve_command(retrieve: RetrieveConfig, project_root: Path) -> Command:
    """Return the retrieval command line for the configured manifest.

    Args:
        retrieve: Retrieval settings.
        project_root: Working directory of the command; the manifest path is
            passed relative to it when possible.

    Returns:
        Argument vector for ``sf project retrieve start``.
    """
    argv: Command = [
        retrieve.sf_executable,
        "project",
        "retrieve",
        "start",
        "--manifest",
        _manifest_argument(retrieve.manifest_path, project_root),
    ]
    if retrieve.ignore_conflicts:
        argv.append("--ignore-conflicts")
    argv.append("--json")
    return argv


def process_output_from_command(result: CommandOutput) -> ProcessOutput:
    """Wrap a captured command result; any non-zero exit counts as a failed run."""
    exit_failed = not result.succeeded
    return ProcessOutput(
        exit_failed=exit_failed,
        stdout=result.stdout,
        stderr=result.stderr,
        invocation_error=f"Command failed with exit code {result.exit_code}" if exit_failed else None,
    )


def capture_retrieve(argv: Command, project_root: Path, *, executable: str) -> ProcessOutput:
    """Run the retrieval command and capture its output; launch errors become invocation errors."""
    try:
        result = run_command(argv, cwd=project_root, allowed={executable})
    except OSError as exc:
        logger.warning(
            "Unable to launch %s: %s",
            executable,
            exc,
            extra=structured_extra(component=LogComponent.SERVICES, tool=executable),
        )
        return ProcessOutput(exit_failed=True, invocation_error=str(exc))
    return process_output_from_command(result)


def run_retrieve(
    components: Sequence[Component],
    config: Config,
    *,
    api_version: ApiVersion,
) -> ReconcileOutcome:
    """Write the manifest for ``components``, retrieve it, and reconcile the result.

    Args:
        components: Selected components, in request order.
        config: Loaded configuration (manifest path, executable, markers).
        api_version: API version written to the manifest.

    Returns:
        One result per component plus the batch error, if any.
    """
    retrieve = config.retrieve
    _ = write_manifest(retrieve.manifest_path, components, api_version, folder_types=retrieve.folder_types)
    argv = build_retrieve_command(retrieve, config.project_root)
    logger.info(
        "Retrieving %d component(s)",
        len(components),
        extra=structured_extra(component=LogComponent.SERVICES, tool=retrieve.sf_executable),
    )
    raw = capture_retrieve(argv, config.project_root, executable=retrieve.sf_executable)
    outcome = reconcile(raw, components, benign_errors=retrieve.benign_errors)
    logger.info(
        "Retrieval finished (%s)",
        "ok" if outcome.ok else outcome.error_type or "failed",
        extra=structured_extra(
            component=LogComponent.SERVICES,
            tool=retrieve.sf_executable,
            counts=status_counts(outcome),
        ),
    )
    return outcome


__all__ = [
    "build_retrieve_command",
    "capture_retrieve",
    "process_output_from_command",
    "run_retrieve",
]
