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

"""Resolve slash-delimited folder paths from flat folder records.

Folder-scoped metadata (dashboards, documents, email templates) is addressed
by its full folder path, e.g. ``Sales/EMEA/Pipeline``. The org only returns
folders as flat records linked by ``parent_id``; this module rebuilds each
folder's path by walking those links upwards.

The walk is iterative and keeps a visited set per folder, so adversarial
inputs (deep chains, parent cycles) can neither exhaust the stack nor loop.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sfmeta.core.model_types import LogComponent
from sfmeta.core.type_aliases import FolderId, FolderPath
from sfmeta.logging import structured_extra

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sfmeta.core.types import FolderRecord

logger: logging.Logger = logging.getLogger("sfmeta.folders")

PATH_SEPARATOR = "/"


def _walk_to_root(start: FolderRecord, by_id: Mapping[FolderId, FolderRecord]) -> FolderPath | None:
    """Return the path of ``start``, or ``None`` when its ancestry loops."""
    segments = [start.developer_name]
    visited: set[FolderId] = {start.id}
    current = start
    while current.parent_id:
        parent_id = current.parent_id
        if parent_id in visited:
            return None
        parent = by_id.get(parent_id)
        if parent is None:
            # Ancestors outside the input are treated as absent.
            break
        visited.add(parent_id)
        segments.append(parent.developer_name)
        current = parent
    return FolderPath(PATH_SEPARATOR.join(reversed(segments)))


def resolve_folder_paths(folders: Iterable[FolderRecord]) -> dict[FolderId, FolderPath]:
    """Compute the slash-delimited path of every folder record.

    Root folders resolve to their own developer name. Parent ids missing from
    the input end the walk early, so the folder resolves relative to its
    highest known ancestor. Folders whose ancestry contains a cycle resolve to
    an empty path, which callers treat as "no folder prefix".

    Args:
        folders: Flat folder records (id, developer name, parent id).

    Returns:
        Mapping from every input folder id to its resolved path.
    """
    records = list(folders)
    by_id: dict[FolderId, FolderRecord] = {record.id: record for record in records}
    paths: dict[FolderId, FolderPath] = {}
    cyclic: list[FolderId] = []
    for record in records:
        path = _walk_to_root(record, by_id)
        if path is None:
            cyclic.append(record.id)
            path = FolderPath("")
        paths[record.id] = path
    if cyclic:
        logger.warning(
            "Folder hierarchy contains cycles; %d folder(s) left without a path",
            len(cyclic),
            extra=structured_extra(component=LogComponent.FOLDERS, details={"folders": sorted(cyclic)}),
        )
    logger.debug(
        "Resolved %d folder path(s)",
        len(paths),
        extra=structured_extra(component=LogComponent.FOLDERS),
    )
    return paths


def qualify_name(folder_path: str, developer_name: str) -> str:
    """Join a folder path and a leaf name into a folder-qualified API name.

    Args:
        folder_path: Resolved folder path, possibly empty.
        developer_name: Leaf developer name.

    Returns:
        ``folder_path/developer_name``, or just ``developer_name`` when the
        folder path is empty.
    """
    return f"{folder_path}{PATH_SEPARATOR}{developer_name}" if folder_path else developer_name


def ancestor_paths(folder_path: str) -> list[str]:
    """Return every cumulative prefix of ``folder_path``, shortest first.

    Each prefix is the first segments re-joined with ``/``, so empty segments
    are kept and every entry is a literal prefix of ``folder_path``.

    >>> ancestor_paths("a/b/c")
    ['a', 'a/b', 'a/b/c']
    >>> ancestor_paths("/a")
    ['', '/a']
    """
    if not folder_path:
        return []
    parts = folder_path.split(PATH_SEPARATOR)
    return [PATH_SEPARATOR.join(parts[: index + 1]) for index in range(len(parts))]


__all__ = ["PATH_SEPARATOR", "ancestor_paths", "qualify_name", "resolve_folder_paths"]
