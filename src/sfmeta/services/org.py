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


"""Query the connected org through the Salesforce CLI.

Each helper runs one ``sf ... --json`` command and hands its output to the
catalog normalisers. Listing failures degrade to empty results (and the API
version to its configured default); only the metadata-type listing raises.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sfmeta.catalog import (
    CatalogError,
    folder_components,
    folder_ids_to_resolve,
    folder_query,
    parse_api_version,
    parse_folder_records,
    parse_listed_components,
    parse_metadata_types,
    parse_query_records,
    parse_user_id,
    record_query,
    visible_records,
)
from sfmeta.core.model_types import LogComponent
from sfmeta.json import parse_json_object
from sfmeta.logging import structured_extra
from sfmeta.runtime import run_command

if TYPE_CHECKING:
    from sfmeta.catalog import MetadataType
    from sfmeta.config import Config
    from sfmeta.core.type_aliases import ApiVersion, Command, TypeName
    from sfmeta.core.types import Component, FolderRecord
    from sfmeta.runtime import CommandOutput

logger: logging.Logger = logging.getLogger("sfmeta.services.org")


def _run_sf(config: Config, *args: str) -> CommandOutput | None:
    executable = config.retrieve.sf_executable
    argv: Command = [executable, *args, "--json"]
    try:
        result = run_command(argv, cwd=config.project_root, allowed={executable})
    except OSError as exc:
        logger.warning(
            "Unable to launch %s: %s",
            executable,
            exc,
            extra=structured_extra(component=LogComponent.SERVICES, tool=executable),
        )
        return None
    return result


def _stdout_if_ok(result: CommandOutput | None) -> str | None:
    if result is None or not result.succeeded:
        return None
    return result.stdout


def fetch_api_version(config: Config) -> ApiVersion:
    """Return the org's API version, or the configured default when it cannot be read."""
    default = config.retrieve.default_api_version
    stdout = _stdout_if_ok(_run_sf(config, "org", "display"))
    return parse_api_version(stdout, default) if stdout is not None else default


def resolve_api_version(config: Config, explicit: ApiVersion | None = None) -> ApiVersion:
    """Pick the manifest API version: explicit value, configured pin, then the org."""
    if explicit:
        return explicit
    if config.retrieve.api_version:
        return config.retrieve.api_version
    return fetch_api_version(config)


def fetch_user_id(config: Config) -> str | None:
    stdout = _stdout_if_ok(_run_sf(config, "org", "display", "user"))
    return parse_user_id(stdout) if stdout is not None else None


def fetch_metadata_types(config: Config, api_version: ApiVersion) -> list[MetadataType]:
    """List the metadata types available in the org.

    Raises:
        CatalogError: If the command cannot run or reports a failure.
    """
    result = _run_sf(config, "org", "list", "metadata-types", "--api-version", api_version)
    if result is None:
        msg = f"Unable to run {config.retrieve.sf_executable}"
        raise CatalogError(msg)
    if not result.succeeded:
        if parse_json_object(result.stdout) is not None:
            # A failing JSON status carries the most specific message.
            _ = parse_metadata_types(result.stdout)
        msg = result.stderr.strip() or f"Metadata type listing failed with exit code {result.exit_code}"
        raise CatalogError(msg)
    return parse_metadata_types(result.stdout)


def _query(config: Config, soql: str) -> str | None:
    return _stdout_if_ok(_run_sf(config, "data", "query", "--query", soql))


def fetch_folder_components(config: Config, type_name: TypeName) -> list[Component]:
    """List the members of a folder-scoped type with their folder paths."""
    stdout = _query(config, record_query(type_name))
    if stdout is None:
        return []
    records = parse_query_records(stdout)
    if not records:
        return []
    current_user_id = fetch_user_id(config)
    folder_ids = folder_ids_to_resolve(visible_records(records, current_user_id=current_user_id))
    folders: list[FolderRecord] = []
    if folder_ids:
        folder_stdout = _query(config, folder_query(folder_ids))
        if folder_stdout is None:
            return []
        folders = parse_folder_records(parse_query_records(folder_stdout))
    return folder_components(records, folders, type_name, current_user_id=current_user_id)


def fetch_components(config: Config, type_name: TypeName, api_version: ApiVersion) -> list[Component]:
    """List the members of ``type_name`` available in the org, sorted by name."""
    if type_name in config.retrieve.folder_types:
        components = fetch_folder_components(config, type_name)
    else:
        result = _run_sf(
            config,
            "org",
            "list",
            "metadata",
            "--metadata-type",
            type_name,
            "--api-version",
            api_version,
        )
        stdout = _stdout_if_ok(result)
        components = parse_listed_components(stdout, type_name) if stdout is not None else []
    logger.info(
        "Listed %d %s component(s)",
        len(components),
        type_name,
        extra=structured_extra(component=LogComponent.SERVICES, type_name=type_name),
    )
    return components


__all__ = [
    "fetch_api_version",
    "fetch_components",
    "fetch_folder_components",
    "fetch_metadata_types",
    "fetch_user_id",
    "resolve_api_version",
]
