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


"""``sfmeta retrieve``: write the manifest, run the retrieval and report per-component status."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from sfmeta.cli.helpers import echo, register_api_version_flag, register_argument
from sfmeta.selection import dump_outcome, load_selection
from sfmeta.services.org import resolve_api_version
from sfmeta.services.retrieval import run_retrieve

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfmeta.cli.helpers import CLIContext
    from sfmeta.cli.helpers.args import SubparserCollection


def register_retrieve_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `sfmeta retrieve` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    retrieve_cmd = subparsers.add_parser(
        "retrieve",
        help="Retrieve a component selection from the org",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(retrieve_cmd, "selection", type=Path, help="JSON selection to retrieve")
    register_api_version_flag(retrieve_cmd)


def execute_retrieve(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `sfmeta retrieve` command.

    Returns:
        `0` when every component was retrieved, `1` when a batch error was reported.
    """
    components = load_selection(args.selection)
    api_version = resolve_api_version(context.config, args.api_version)
    outcome = run_retrieve(components, context.config, api_version=api_version)
    echo(dump_outcome(outcome))
    return 0 if outcome.ok else 1


__all__ = ["execute_retrieve", "register_retrieve_command"]
