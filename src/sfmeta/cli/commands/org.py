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


"""``sfmeta types`` and ``sfmeta components``: browse what the org offers."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from sfmeta.cli.helpers import echo, echo_json, register_api_version_flag, register_argument
from sfmeta.core.type_aliases import TypeName
from sfmeta.selection import dump_selection
from sfmeta.services.org import fetch_components, fetch_metadata_types, resolve_api_version

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfmeta.cli.helpers import CLIContext
    from sfmeta.cli.helpers.args import SubparserCollection


def register_org_commands(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `sfmeta types` and `sfmeta components` commands.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    types_cmd = subparsers.add_parser(
        "types",
        help="List the metadata types available in the org",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_api_version_flag(types_cmd)

    components_cmd = subparsers.add_parser(
        "components",
        help="List the members of one metadata type as a JSON selection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    register_argument(components_cmd, "type_name", metavar="TYPE", help="Metadata type, e.g. ApexClass")
    register_api_version_flag(components_cmd)


def execute_types(args: argparse.Namespace, context: CLIContext) -> int:
    api_version = resolve_api_version(context.config, args.api_version)
    types = fetch_metadata_types(context.config, api_version)
    echo_json([{"name": item.name, "label": item.label} for item in types])
    return 0


def execute_components(args: argparse.Namespace, context: CLIContext) -> int:
    api_version = resolve_api_version(context.config, args.api_version)
    components = fetch_components(context.config, TypeName(args.type_name), api_version)
    echo(dump_selection(components))
    return 0


__all__ = ["execute_components", "execute_types", "register_org_commands"]
