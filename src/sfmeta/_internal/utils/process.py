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

"""Run the Salesforce CLI (or any other allowlisted tool) and capture its output."""

from __future__ import annotations

import logging
import subprocess  # noqa: S404  # JUSTIFIED: argv-only execution behind an executable allowlist
import time
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING

from sfmeta._internal.logging_utils import structured_extra
from sfmeta.core.model_types import LogComponent

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from sfmeta.core.type_aliases import Command

logger: logging.Logger = logging.getLogger("sfmeta.internal.process")

__all__ = ["CommandOutput", "run_command"]


@dataclass(slots=True)
class CommandOutput:
    """Captured result of one finished command.

    Attributes:
        args: Argument vector that was executed.
        stdout: Decoded standard output (undecodable bytes replaced).
        stderr: Decoded standard error.
        exit_code: Process return code.
        duration_ms: Wall-clock run time.
    """

    args: Command
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: float

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


def _checked_argv(args: Iterable[str], allowed: set[str] | None) -> Command:
    argv: Command = list(args)
    if not argv:
        msg = "Command must not be empty"
        raise ValueError(msg)
    if not all(argv):
        msg = "Command arguments must be non-empty strings"
        raise TypeError(msg)
    if allowed is not None and argv[0] not in allowed:
        msg = f"Executable '{argv[0]}' is not allowed"
        raise ValueError(msg)
    return argv


def run_command(
    args: Iterable[str],
    cwd: Path | None = None,
    *,
    allowed: set[str] | None = None,
) -> CommandOutput:
    """Run ``args`` without a shell and capture stdout and stderr as text.

    A non-zero exit status is returned, not raised; it is logged as a warning.

    Args:
        args: Argument vector; the first element is the executable.
        cwd: Working directory for the child process.
        allowed: When given, the executable must be one of these names.

    Returns:
        The captured ``CommandOutput``.

    Raises:
        ValueError: If ``args`` is empty or the executable is not allowed.
        TypeError: If any argument is an empty string.
        OSError: If the executable cannot be launched.
    """
    argv = _checked_argv(args, allowed)
    tool = PurePath(argv[0]).name
    logger.debug(
        "Running %s",
        " ".join(argv),
        extra=structured_extra(
            component=LogComponent.SERVICES,
            tool=tool,
            details={"cwd": str(cwd)} if cwd else None,
        ),
    )
    start = time.perf_counter()
    completed = subprocess.run(  # noqa: S603 - argv validated above
        argv,
        check=False,
        cwd=cwd,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    output = CommandOutput(
        args=argv,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        exit_code=completed.returncode,
        duration_ms=(time.perf_counter() - start) * 1000,
    )
    if not output.succeeded:
        logger.warning(
            "Command failed (exit=%s): %s",
            output.exit_code,
            " ".join(argv),
            extra=structured_extra(
                component=LogComponent.SERVICES,
                tool=tool,
                exit_code=output.exit_code,
                duration_ms=output.duration_ms,
            ),
        )
    return output
