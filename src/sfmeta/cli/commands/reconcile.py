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


"""``sfmeta reconcile``: reconcile captured retrieval output offline."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from sfmeta.cli.helpers import echo, register_argument
from sfmeta.core.types import ProcessOutput
from sfmeta.retrieval import reconcile
from sfmeta.selection import dump_outcome, load_selection

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfmeta.cli.helpers import CLIContext
    from sfmeta.cli.helpers.args import SubparserCollection


def register_reconcile_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `sfmeta reconcile` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    reconcile_cmd = subparsers.add_parser(
        "reconcile",
        help="Map saved retrieval output onto a component selection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(reconcile_cmd, "selection", type=Path, help="JSON selection that was retrieved")
    register_argument(
        reconcile_cmd,
        "--stdout",
        dest="stdout_file",
        type=Path,
        required=True,
        help="File holding the tool's standard output",
    )
    register_argument(
        reconcile_cmd,
        "--stderr",
        dest="stderr_file",
        type=Path,
        default=None,
        help="File holding the tool's standard error",
    )
    register_argument(
        reconcile_cmd,
        "--exit-failed",
        action="store_true",
        help="The tool exited abnormally",
    )
    register_argument(
        reconcile_cmd,
        "--invocation-error",
        default=None,
        help="Description of the launch or exit failure",
    )


def _read_optional(path: Path | None) -> str:
    return path.read_text(encoding="utf-8") if path is not None else ""


def execute_reconcile(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `sfmeta reconcile` command.

    Returns:
        `0` when every component succeeded, `1` when a batch error was reported.
    """
    components = load_selection(args.selection)
    raw = ProcessOutput(
        exit_failed=bool(args.exit_failed or args.invocation_error),
        stdout=_read_optional(args.stdout_file),
        stderr=_read_optional(args.stderr_file),
        invocation_error=args.invocation_error,
    )
    outcome = reconcile(raw, components, benign_errors=context.config.retrieve.benign_errors)
    echo(dump_outcome(outcome))
    return 0 if outcome.ok else 1


__all__ = ["execute_reconcile", "register_reconcile_command"]
