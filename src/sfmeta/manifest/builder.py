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

"""Build ``package.xml`` manifests from a component selection.

This module provides the ManifestBuilder class, which groups selected
components by metadata type, materialises the ancestor folders of
folder-scoped members, and renders the result as a deterministic
``package.xml`` document.

The Metadata API expects folder containers to be listed explicitly next to
their contents, and expects containers to precede their members. Plain
lexicographic ordering guarantees the latter: a folder path sorts before any
path it is a strict prefix of.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from sfmeta.core.model_types import FOLDER_SCOPED_TYPES, LogComponent
from sfmeta.folders import ancestor_paths
from sfmeta.logging import structured_extra

from .models import INDENT, PACKAGE_NAMESPACE, XML_DECLARATION, Manifest, TypeGroup

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from sfmeta.core.type_aliases import ApiVersion, TypeName
    from sfmeta.core.types import Component

logger: logging.Logger = logging.getLogger("sfmeta.manifest.builder")


def _default_groups() -> dict[TypeName, TypeGroup]:
    return {}


@dataclass(slots=True)
class ManifestBuilder:
    """Accumulate a component selection into manifest type groups.

    Attributes:
        api_version: API version written to the ``<version>`` element.
        folder_types: Metadata types whose members are folder-qualified.
        groups: Type groups keyed by type name, in first-seen order.
    """

    api_version: ApiVersion
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES
    groups: dict[TypeName, TypeGroup] = field(default_factory=_default_groups)

    def add(self, component: Component) -> None:
        """Add one component, materialising its ancestor folders when folder-scoped.

        Args:
            component: Selected component to include in the manifest.
        """
        group = self.groups.get(component.type)
        if group is None:
            group = TypeGroup(name=component.type)
            self.groups[component.type] = group
        if component.type in self.folder_types:
            for folder in ancestor_paths(component.folder_path):
                if folder:
                    _ = group.add(folder)
        _ = group.add(component.api_name)

    def extend(self, components: Iterable[Component]) -> None:
        for component in components:
            self.add(component)

    def manifest(self) -> Manifest:
        """Return the accumulated manifest with every group's members sorted."""
        return Manifest(
            api_version=self.api_version,
            groups=[TypeGroup(name=group.name, members=group.sorted_members()) for group in self.groups.values()],
        )

    def render(self) -> str:
        """Render the accumulated selection as ``package.xml`` text."""
        manifest = self.manifest()
        logger.debug(
            "Rendering manifest with %d type group(s)",
            len(manifest.groups),
            extra=structured_extra(
                component=LogComponent.MANIFEST,
                details={"members": sum(len(group.members) for group in manifest.groups)},
            ),
        )
        return render_manifest(manifest)


def render_manifest(manifest: Manifest) -> str:
    """Serialise a manifest into ``package.xml`` text.

    Each type group becomes one ``<types>`` block listing its members followed
    by its name; a single ``<version>`` element closes the package. Text
    content is XML-escaped.

    Args:
        manifest: Manifest to serialise. Members are written in the given order.

    Returns:
        The XML document without a trailing newline.
    """
    lines = [XML_DECLARATION, f'<Package xmlns="{PACKAGE_NAMESPACE}">']
    for group in manifest.groups:
        lines.append(f"{INDENT}<types>")
        lines.extend(f"{INDENT * 2}<members>{escape(member)}</members>" for member in group.members)
        lines.append(f"{INDENT * 2}<name>{escape(group.name)}</name>")
        lines.append(f"{INDENT}</types>")
    if manifest.api_version is not None:
        lines.append(f"{INDENT}<version>{escape(manifest.api_version)}</version>")
    lines.append("</Package>")
    return "\n".join(lines)


def build_manifest(
    components: Iterable[Component],
    api_version: ApiVersion,
    *,
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES,
) -> str:
    """Build ``package.xml`` text for a component selection.

    Args:
        components: Selected components, in selection order.
        api_version: API version for the ``<version>`` element.
        folder_types: Metadata types whose members are folder-qualified.

    Returns:
        The rendered manifest. An empty selection yields a package holding only
        the version element.
    """
    builder = ManifestBuilder(api_version=api_version, folder_types=folder_types)
    builder.extend(components)
    return builder.render()


__all__ = ["ManifestBuilder", "build_manifest", "render_manifest"]
