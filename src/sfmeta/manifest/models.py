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

"""Data structures describing a ``package.xml`` manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from sfmeta.core.type_aliases import ApiVersion, TypeName

XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="UTF-8"?>'
PACKAGE_NAMESPACE: Final[str] = "http://soap.sforce.com/2006/04/metadata"
INDENT: Final[str] = "    "


def _default_members() -> list[str]:
    return []


@dataclass(slots=True)
class TypeGroup:
    """Members of one metadata type inside a manifest.

    Attributes:
        name: Metadata type name (the ``<name>`` element).
        members: Ordered ``<members>`` values. During a build this also holds
            the materialised ancestor folders of folder-scoped members.
    """

    name: TypeName
    members: list[str] = field(default_factory=_default_members)
    _seen: set[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._seen = set(self.members)

    def add(self, member: str) -> bool:
        """Append ``member`` unless already present; return whether it was added."""
        if member in self._seen:
            return False
        self._seen.add(member)
        self.members.append(member)
        return True

    def sorted_members(self) -> list[str]:
        return sorted(self.members)


def _default_groups() -> list[TypeGroup]:
    return []


@dataclass(slots=True)
class Manifest:
    """An ordered list of type groups plus the document-level API version.

    Attributes:
        api_version: Value of the trailing ``<version>`` element.
        groups: Type groups in document order.
    """

    api_version: ApiVersion | None = None
    groups: list[TypeGroup] = field(default_factory=_default_groups)

    def group(self, name: TypeName) -> TypeGroup | None:
        return next((group for group in self.groups if group.name == name), None)


__all__ = ["INDENT", "PACKAGE_NAMESPACE", "XML_DECLARATION", "Manifest", "TypeGroup"]
