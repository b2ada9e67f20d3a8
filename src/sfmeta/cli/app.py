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


"""CLI entry point and orchestration for sfmeta commands."""

from __future__ import annotations

import argparse
import logging
import pathlib
from collections.abc import Callable, Sequence
from contextlib import suppress
from textwrap import dedent
from typing import TYPE_CHECKING, Final

from sfmeta import __version__
from sfmeta.catalog import CatalogError
from sfmeta.cli.commands import manifest as manifest_command
from sfmeta.cli.commands import org as org_command
from sfmeta.cli.commands import reconcile as reconcile_command
from sfmeta.cli.commands import retrieve as retrieve_command
from sfmeta.cli.helpers import CLIContext, build_cli_context, echo
from sfmeta.cli.helpers import register_argument as _register_argument
from sfmeta.config import ConfigValidationError
from sfmeta.core.model_types import LogComponent, LogFormat
from sfmeta.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from sfmeta.runtime import consume
from sfmeta.selection import SelectionError

if TYPE_CHECKING:
    from sfmeta.cli.helpers.args import SubparserCollection

logger: logging.Logger = logging.getLogger("sfmeta.cli")

SFMETA_VERSION: Final[str] = __version__
EXIT_OK: Final[int] = 0
EXIT_FAILED: Final[int] = 1
EXIT_USAGE: Final[int] = 2
# Global flags are accepted before or after the subcommand.
GLOBAL_OPTIONS: Final[tuple[str, ...]] = ("log_format", "log_level", "config")


CONFIG_TEMPLATE: Final[str] = dedent(
    """\
    # sfmeta configuration template
    # Save this file as sfmeta.toml in the root of your Salesforce project.
    config_version = 0

    # Default logging when --log-format / --log-level are not given.
    # log_format = "text"            # choices: text, json
    # log_level = "info"             # choices: debug, info, warning, error

    [retrieve]
    # Where package.xml is written and read, relative to this file.
    manifest_path = "manifest/package.xml"

    # Pin the manifest API version instead of asking the org.
    # api_version = "64.0"
    # Used when the org cannot be asked.
    default_api_version = "64.0"

    # Salesforce CLI executable and retrieval flags.
    sf_executable = "sf"
    ignore_conflicts = true

    # Types whose members live in (nested) folders.
    folder_types = ["Dashboard", "Document", "EmailTemplate"]

    # Batch errors containing one of these texts are reported as success.
    benign_errors = ["Metadata API request failed: Could not find HEAD."]
    """,
)


def write_config_template(path: pathlib.Path, *, force: bool) -> int:
    """Write the sfmeta configuration template to a file.

    Args:
        path: Target path where the configuration file will be written.
        force: If True, overwrite the file if it already exists.

    Returns:
        int: Exit code (0 for success, 1 when refusing to overwrite).
    """
    if path.exists() and not force:
        echo(f"[sfmeta] Refusing to overwrite existing file: {path}")
        echo("Use --force if you want to replace it.")
        return EXIT_FAILED
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(CONFIG_TEMPLATE, encoding="utf-8"))
    echo(f"[sfmeta] Wrote starter config to {path}")
    return EXIT_OK


CommandHandler = Callable[[argparse.Namespace, CLIContext], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for the sfmeta command-line interface.

    Parses command-line arguments, loads configuration, configures logging, and
    dispatches to the selected command handler.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: ``0`` on success, ``1`` when a retrieval or org query reported an
        error, ``2`` for usage, configuration or selection-file errors.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    for option in GLOBAL_OPTIONS:
        _ = vars(args).setdefault(option, None)
    if args.version:
        echo(f"sfmeta {SFMETA_VERSION}")
        return EXIT_OK
    if args.command is None:
        parser.error("No command provided.")
    if args.command == "init":
        _initialize_logging(args.log_format, args.log_level)
        return write_config_template(args.output, force=args.force)
    try:
        context = build_cli_context(args.config)
    except ConfigValidationError as exc:
        _initialize_logging(args.log_format, args.log_level)
        echo(f"[sfmeta] {exc}", err=True)
        return EXIT_USAGE
    _initialize_logging(
        args.log_format or context.config.log_format,
        args.log_level or context.config.log_level,
    )
    handler = _command_handlers().get(args.command)
    if handler is None:
        parser.error(f"Unknown command {args.command}")
    return _dispatch(handler, args, context)


def _dispatch(handler: CommandHandler, args: argparse.Namespace, context: CLIContext) -> int:
    try:
        return handler(args, context)
    except SelectionError as exc:
        echo(f"[sfmeta] {exc}", err=True)
        return EXIT_USAGE
    except CatalogError as exc:
        logger.exception(
            "Org query failed",
            extra=structured_extra(component=LogComponent.CLI, details={"command": args.command}),
        )
        echo(f"[sfmeta] {exc}", err=True)
        return EXIT_FAILED
    except OSError as exc:
        echo(f"[sfmeta] {exc}", err=True)
        return EXIT_USAGE


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with global options and every subcommand.

    Returns:
        argparse.ArgumentParser: Fully configured argument parser.
    """
    common = argparse.ArgumentParser(add_help=False)
    _register_argument(
        common,
        "--log-format",
        choices=LOG_FORMATS,
        default=argparse.SUPPRESS,
        help="Logging output format (default: config, SFMETA_LOG_FORMAT, then text).",
    )
    _register_argument(
        common,
        "--log-level",
        choices=LOG_LEVELS,
        default=argparse.SUPPRESS,
        help="Logging verbosity (default: config, SFMETA_LOG_LEVEL, then info).",
    )
    _register_argument(
        common,
        "--config",
        type=pathlib.Path,
        default=argparse.SUPPRESS,
        help="Configuration file (default: sfmeta.toml, .sfmeta.toml or pyproject.toml [tool.sfmeta]).",
    )
    parser = argparse.ArgumentParser(
        prog="sfmeta",
        parents=[common],
        description="Build Salesforce package.xml manifests and reconcile retrieval results.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _register_argument(
        parser,
        "--version",
        action="store_true",
        help="Print the sfmeta version and exit.",
    )
    subparsers = parser.add_subparsers(dest="command")

    parents = [common]
    manifest_command.register_manifest_command(subparsers, parents=parents)
    reconcile_command.register_reconcile_command(subparsers, parents=parents)
    retrieve_command.register_retrieve_command(subparsers, parents=parents)
    org_command.register_org_commands(subparsers, parents=parents)
    _register_init_command(subparsers, parents=parents)
    return parser


def _register_init_command(
    subparsers: SubparserCollection,
    *,
    parents: Sequence[argparse.ArgumentParser] | None,
) -> None:
    """Register the 'init' subcommand, which writes a starter sfmeta.toml.

    Args:
        subparsers: Subparser registry where the init command will be added.
        parents: Shared parent parsers carrying global flags.
    """
    init = subparsers.add_parser(
        "init",
        help="Generate a starter configuration file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        parents=parents or [],
    )
    _register_argument(
        init,
        "output",
        nargs="?",
        type=pathlib.Path,
        default=pathlib.Path("sfmeta.toml"),
        help="Destination for the generated configuration file.",
    )
    _register_argument(
        init,
        "--force",
        action="store_true",
        help="Overwrite the output file if it already exists.",
    )


def _initialize_logging(log_format: LogFormat | str | None, log_level: str | None) -> None:
    """Configure logging; failures are suppressed (best-effort initialization)."""
    with suppress(Exception):
        _ = configure_logging(log_format, log_level=log_level)


def _command_handlers() -> dict[str, CommandHandler]:
    return {
        "components": org_command.execute_components,
        "manifest": manifest_command.execute_manifest,
        "reconcile": reconcile_command.execute_reconcile,
        "retrieve": retrieve_command.execute_retrieve,
        "types": org_command.execute_types,
    }


__all__ = ["CONFIG_TEMPLATE", "main", "write_config_template"]
