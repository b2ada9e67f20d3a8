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


"""Normalise ``sf`` org listing output into catalog values.

Each function here takes the raw stdout of one ``sf ... --json`` command and
returns plain values. Listing output that cannot be read yields empty results,
except for the metadata-type listing, whose failure is surfaced as a
``CatalogError`` because nothing can be selected without it.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from sfmeta._internal.collection_utils import dedupe_by, dedupe_preserve
from sfmeta.core.model_types import (
    DEFAULT_API_VERSION,
    ORG_ID_PREFIX,
    UNFILED_PUBLIC_FOLDER,
    USER_ID_PREFIX,
    LogComponent,
)
from sfmeta.core.type_aliases import ApiName, ApiVersion, FolderId, TypeName
from sfmeta.core.types import Component, FolderRecord
from sfmeta.folders import qualify_name, resolve_folder_paths
from sfmeta.json import JSONMapping, as_int, as_list, as_mapping, as_str, parse_json_object
from sfmeta.logging import structured_extra

from .models import CatalogError, MetadataType

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: logging.Logger = logging.getLogger("sfmeta.catalog")

_LOWER_UPPER: Final[re.Pattern[str]] = re.compile(r"([a-z])([A-Z])")
_ACRONYM_WORD: Final[re.Pattern[str]] = re.compile(r"([A-Z])([A-Z][a-z])")
_SOQL_ID: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9]+$")

FOLDER_QUERY: Final[str] = "SELECT DeveloperName, Id, ParentId FROM Folder"


def _sort_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def type_label(name: str) -> str:
    """Split a PascalCase type name into words.

    >>> type_label("CustomObjectTranslation")
    'Custom Object Translation'
    >>> type_label("LWCBundle")
    'LWC Bundle'
    """
    spaced = _LOWER_UPPER.sub(r"\1 \2", name)
    return _ACRONYM_WORD.sub(r"\1 \2", spaced).strip()


def _result(stdout: str) -> JSONMapping:
    return as_mapping((parse_json_object(stdout) or {}).get("result"))


def parse_api_version(stdout: str, default: ApiVersion = DEFAULT_API_VERSION) -> ApiVersion:
    """Return ``result.apiVersion`` from ``sf org display --json`` or ``default``."""
    version = as_str(_result(stdout).get("apiVersion")).strip()
    return ApiVersion(version) if version else default


def parse_user_id(stdout: str) -> str | None:
    """Return ``result.id`` from ``sf org display user --json``, if present."""
    return as_str(_result(stdout).get("id")).strip() or None


def parse_metadata_types(stdout: str) -> list[MetadataType]:
    """Collect the retrievable metadata types from ``sf org list metadata-types --json``.

    Every ``metadataObjects[].xmlName`` and each of its ``childXmlNames`` is
    listed once, labelled from its PascalCase name, and sorted by label.

    Args:
        stdout: Raw command output.

    Returns:
        Metadata types sorted by label.

    Raises:
        CatalogError: If the output is not a JSON object or reports a failing status.
    """
    payload = parse_json_object(stdout)
    if payload is None:
        msg = "Unable to read metadata type listing"
        raise CatalogError(msg)
    status = as_int(payload.get("status"), 0)
    if status != 0:
        message = as_str(payload.get("message")) or "Command failed"
        msg = f"Metadata type listing failed: {message}"
        raise CatalogError(msg)
    names: list[str] = []
    for item in as_list(as_mapping(payload.get("result")).get("metadataObjects")):
        entry = as_mapping(item)
        if xml_name := as_str(entry.get("xmlName")):
            names.append(xml_name)
        names.extend(child for raw in as_list(entry.get("childXmlNames")) if (child := as_str(raw)))
    types = [MetadataType(name=TypeName(name), label=type_label(name)) for name in names]
    unique = dedupe_by(types, key=lambda item: item.name)
    return sorted(unique, key=lambda item: _sort_key(item.label))


def parse_listed_components(stdout: str, type_name: TypeName) -> list[Component]:
    """Return the members listed by ``sf org list metadata --json``, sorted by name.

    A single listed member may be reported as an object rather than a list.
    Unreadable output yields an empty list.
    """
    payload = parse_json_object(stdout)
    if payload is None:
        return []
    raw_result = payload.get("result")
    items = [raw_result] if isinstance(raw_result, dict) else as_list(raw_result)
    names = [name for item in items if (name := as_str(as_mapping(item).get("fullName")))]
    return sorted(
        (Component(name=name, api_name=ApiName(name), type=type_name) for name in names),
        key=lambda component: _sort_key(component.name),
    )


def parse_query_records(stdout: str) -> list[JSONMapping]:
    """Return ``result.records`` from ``sf data query --json`` (empty when unreadable)."""
    return [record for item in as_list(_result(stdout).get("records")) if (record := as_mapping(item))]


def parse_folder_records(records: Iterable[JSONMapping]) -> list[FolderRecord]:
    """Convert ``Folder`` query rows into folder records, skipping rows without an id."""
    folders: list[FolderRecord] = []
    for record in records:
        folder_id = as_str(record.get("Id"))
        if not folder_id:
            continue
        parent_id = as_str(record.get("ParentId"))
        folders.append(
            FolderRecord(
                id=FolderId(folder_id),
                developer_name=as_str(record.get("DeveloperName")),
                parent_id=FolderId(parent_id) if parent_id else None,
            ),
        )
    return folders


def record_query(type_name: TypeName) -> str:
    """Return the SOQL query listing the members of a folder-scoped type."""
    return f"SELECT Id, FolderId, DeveloperName, Name, Folder.DeveloperName, Folder.Name FROM {type_name}"


def folder_query(folder_ids: Iterable[FolderId]) -> str:
    """Return the SOQL query for the given folders.

    Raises:
        ValueError: If an id contains characters other than letters and digits.
    """
    ids = list(folder_ids)
    for folder_id in ids:
        if not _SOQL_ID.match(folder_id):
            msg = f"Invalid folder id '{folder_id}'"
            raise ValueError(msg)
    if not ids:
        return FOLDER_QUERY
    joined = "','".join(ids)
    return f"{FOLDER_QUERY} WHERE Id IN ('{joined}')"


def _folder_id(record: JSONMapping) -> str:
    return as_str(record.get("FolderId"))


def visible_records(records: Iterable[JSONMapping], *, current_user_id: str | None) -> list[JSONMapping]:
    """Drop records filed in another user's personal folder.

    Personal folders are addressed by the owning user's id, so a folder id with
    the user key prefix is only visible when it is the current user's.
    """
    return [
        record
        for record in records
        if not _folder_id(record).startswith(USER_ID_PREFIX) or _folder_id(record) == current_user_id
    ]


def folder_ids_to_resolve(records: Iterable[JSONMapping]) -> list[FolderId]:
    """Return the distinct real folder ids referenced by ``records``, in first-seen order.

    The org-wide default container (org key prefix) is not a real folder and
    is excluded.
    """
    ids = (FolderId(folder_id) for record in records if (folder_id := _folder_id(record)))
    return dedupe_preserve(folder_id for folder_id in ids if not folder_id.startswith(ORG_ID_PREFIX))


def folder_components(
    records: Iterable[JSONMapping],
    folders: Iterable[FolderRecord],
    type_name: TypeName,
    *,
    current_user_id: str | None,
) -> list[Component]:
    """Build folder-qualified components for a folder-scoped metadata type.

    Args:
        records: Rows of the type's SOQL query (``DeveloperName``, ``FolderId``).
        folders: Folder records covering the folders the rows reference.
        type_name: Metadata type of the rows.
        current_user_id: Id of the authenticated user, used to keep that user's
            personal folder and drop everyone else's.

    Returns:
        Components named ``folder/path/DeveloperName``, sorted by name. Rows in
        the org-wide default container are filed under ``unfiled$public``; rows
        whose folder is unknown carry no folder prefix.
    """
    rows = list(records)
    kept = visible_records(rows, current_user_id=current_user_id)
    paths = resolve_folder_paths(folders)
    components: list[Component] = []
    for record in kept:
        developer_name = as_str(record.get("DeveloperName"))
        if not developer_name:
            continue
        folder_id = _folder_id(record)
        if folder_id.startswith(ORG_ID_PREFIX):
            folder_path: str = UNFILED_PUBLIC_FOLDER
        else:
            folder_path = paths.get(FolderId(folder_id), "")
        api_name = qualify_name(folder_path, developer_name)
        components.append(Component(name=api_name, api_name=ApiName(api_name), type=type_name))
    logger.debug(
        "Built %d folder-scoped component(s)",
        len(components),
        extra=structured_extra(
            component=LogComponent.CATALOG,
            type_name=type_name,
            details={"hidden": len(rows) - len(kept)},
        ),
    )
    return sorted(components, key=lambda component: _sort_key(component.name))


__all__ = [
    "FOLDER_QUERY",
    "folder_components",
    "folder_ids_to_resolve",
    "folder_query",
    "parse_api_version",
    "parse_folder_records",
    "parse_listed_components",
    "parse_metadata_types",
    "parse_query_records",
    "parse_user_id",
    "record_query",
    "type_label",
    "visible_records",
]
