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


"""``sfmeta manifest``: build a manifest from a selection or show the stored selection."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING, Never, NoReturn

from sfmeta.cli.helpers import echo, register_api_version_flag, register_argument
from sfmeta.core.model_types import ManifestAction
from sfmeta.selection import dump_selection, load_selection
from sfmeta.services.manifest import load_manifest_components, write_manifest
from sfmeta.services.org import resolve_api_version

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sfmeta.cli.helpers import CLIContext
    from sfmeta.cli.helpers.args import SubparserCollection


def _raise_unknown_manifest_action(action: Never) -> NoReturn:
    msg = f"Unknown manifest action: {action}"
    raise SystemExit(msg)


def register_manifest_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None = None,
) -> None:
    """Register the `sfmeta manifest` command.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
        parents: Shared parent parsers carrying global options.
    """
    manifest_cmd = subparsers.add_parser(
        "manifest",
        help="Build or inspect package.xml manifests",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    manifest_sub = manifest_cmd.add_subparsers(dest="action", required=True)

    manifest_build = manifest_sub.add_parser(
        ManifestAction.BUILD.value,
        help="Write package.xml for a JSON component selection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        manifest_build,
        "selection",
        type=Path,
        help="JSON file holding [{name, apiName, type}, ...]",
    )
    register_api_version_flag(manifest_build)
    register_argument(
        manifest_build,
        "--output",
        type=Path,
        default=None,
        help="Manifest destination (default: configured manifest path)",
    )

    manifest_show = manifest_sub.add_parser(
        ManifestAction.SHOW.value,
        help="Print the selection stored in a manifest as JSON",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        manifest_show,
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="Manifest to read (default: configured manifest path)",
    )


def _handle_build(args: argparse.Namespace, context: CLIContext) -> int:
    components = load_selection(args.selection)
    api_version = resolve_api_version(context.config, args.api_version)
    output: Path = args.output or context.manifest_path
    _ = write_manifest(output, components, api_version, folder_types=context.config.retrieve.folder_types)
    echo(f"[sfmeta] Wrote {len(components)} component(s) to {output}")
    return 0


def _handle_show(args: argparse.Namespace, context: CLIContext) -> int:
    path: Path = args.path or context.manifest_path
    components = load_manifest_components(path, folder_types=context.config.retrieve.folder_types)
    echo(dump_selection(components))
    return 0


def execute_manifest(args: argparse.Namespace, context: CLIContext) -> int:
    """Execute the `sfmeta manifest` command.

    Args:
        args: Parsed CLI namespace describing the requested action.
        context: Shared CLI context carrying the loaded configuration.

    Returns:
        `0` on success.

    Raises:
        SystemExit: If the action is invalid.
    """
    action_value = args.action
    try:
        action = action_value if isinstance(action_value, ManifestAction) else ManifestAction.from_str(action_value)
    except ValueError as exc:  # pragma: no cover - argparse prevents invalid choices
        raise SystemExit(str(exc)) from exc
    if action is ManifestAction.BUILD:
        return _handle_build(args, context)
    if action is ManifestAction.SHOW:
        return _handle_show(args, context)
    _raise_unknown_manifest_action(action)


__all__ = ["execute_manifest", "register_manifest_command"]
