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


"""Read and write ``package.xml`` files on disk."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sfmeta.core.model_types import FOLDER_SCOPED_TYPES, LogComponent
from sfmeta.logging import structured_extra
from sfmeta.manifest import build_manifest, parse_manifest
from sfmeta.runtime import consume

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence
    from pathlib import Path

    from sfmeta.core.type_aliases import ApiVersion
    from sfmeta.core.types import Component

logger: logging.Logger = logging.getLogger("sfmeta.services.manifest")


def write_manifest(
    path: Path,
    components: Sequence[Component],
    api_version: ApiVersion,
    *,
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES,
) -> str:
    """Build a manifest for ``components`` and write it to ``path``.

    The parent directory is created when missing and an existing file is
    always replaced.

    Args:
        path: Destination ``package.xml``.
        components: Selected components.
        api_version: API version for the manifest.
        folder_types: Metadata types whose members are folder-qualified.

    Returns:
        The manifest text that was written.
    """
    text = build_manifest(components, api_version, folder_types=folder_types)
    path.parent.mkdir(parents=True, exist_ok=True)
    consume(path.write_text(text, encoding="utf-8"))
    logger.info(
        "Wrote manifest with %d component(s) to %s",
        len(components),
        path,
        extra=structured_extra(component=LogComponent.MANIFEST, path=path),
    )
    return text


def load_manifest_components(
    path: Path,
    *,
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES,
) -> list[Component]:
    """Return the selection stored in the manifest at ``path``.

    A missing file yields an empty selection.
    """
    if not path.exists():
        logger.debug(
            "No manifest at %s",
            path,
            extra=structured_extra(component=LogComponent.MANIFEST, path=path),
        )
        return []
    components = parse_manifest(path.read_text(encoding="utf-8"), folder_types=folder_types)
    logger.debug(
        "Loaded %d component(s) from %s",
        len(components),
        path,
        extra=structured_extra(component=LogComponent.MANIFEST, path=path),
    )
    return components


__all__ = ["load_manifest_components", "write_manifest"]
