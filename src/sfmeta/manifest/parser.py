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

"""Recover a component selection from ``package.xml`` text.

The parser is deliberately lenient: it extracts ``<types>`` blocks with
regular expressions rather than a full XML parser, so hand-edited or partially
written manifests still yield whatever selection can be recovered. Nothing in
this module raises for malformed input.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final
from xml.sax.saxutils import unescape

from sfmeta.core.model_types import FOLDER_SCOPED_TYPES, LogComponent
from sfmeta.core.type_aliases import ApiName, ApiVersion, TypeName
from sfmeta.core.types import Component
from sfmeta.folders import PATH_SEPARATOR
from sfmeta.logging import structured_extra

from .models import Manifest, TypeGroup

if TYPE_CHECKING:
    from collections.abc import Collection

logger: logging.Logger = logging.getLogger("sfmeta.manifest.parser")

_TYPES_BLOCK: Final[re.Pattern[str]] = re.compile(r"<types\b[^>]*>(?P<body>.*?)</types>", re.DOTALL)
_NAME: Final[re.Pattern[str]] = re.compile(r"<name\b[^>]*>(?P<text>.*?)</name>", re.DOTALL)
_MEMBERS: Final[re.Pattern[str]] = re.compile(r"<members\b[^>]*>(?P<text>.*?)</members>", re.DOTALL)
_VERSION: Final[re.Pattern[str]] = re.compile(r"<version\b[^>]*>(?P<text>.*?)</version>", re.DOTALL)


def _text(raw: str) -> str:
    return unescape(raw.strip())


def _member_text(raw: str) -> str:
    # Member names are kept verbatim; surrounding whitespace is significant.
    return unescape(raw)


def parse_manifest_groups(text: str) -> list[TypeGroup]:
    """Extract every well-formed ``<types>`` block in document order.

    Blocks without a ``<name>`` are skipped. Empty member values are ignored.

    Args:
        text: Raw manifest text.

    Returns:
        Type groups with their members in document order.
    """
    groups: list[TypeGroup] = []
    for block in _TYPES_BLOCK.finditer(text):
        body = block.group("body")
        name_match = _NAME.search(body)
        if name_match is None:
            logger.debug(
                "Skipping <types> block without <name>",
                extra=structured_extra(component=LogComponent.MANIFEST),
            )
            continue
        name = _text(name_match.group("text"))
        if not name:
            continue
        members = [member for raw in _MEMBERS.finditer(body) if (member := _member_text(raw.group("text")))]
        groups.append(TypeGroup(name=TypeName(name), members=members))
    return groups


def parse_manifest_version(text: str) -> ApiVersion | None:
    """Return the ``<version>`` value that follows the last ``<types>`` block, if any."""
    tail_start = 0
    for block in _TYPES_BLOCK.finditer(text):
        tail_start = block.end()
    match = _VERSION.search(text, tail_start)
    if match is None:
        return None
    version = _text(match.group("text"))
    return ApiVersion(version) if version else None


def _folder_placeholders(members: list[str]) -> set[str]:
    """Return members ``m`` such that another member starts with ``m + "/"``."""
    enclosing = {
        member[:index] for member in members for index, char in enumerate(member) if char == PATH_SEPARATOR
    }
    return enclosing.intersection(members)


def components_from_groups(
    groups: list[TypeGroup],
    *,
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES,
) -> list[Component]:
    """Convert parsed type groups into selected components.

    For folder-scoped types, a member is a folder placeholder, and is dropped,
    when another member of the same group lives beneath it.

    Args:
        groups: Parsed type groups.
        folder_types: Metadata types whose members are folder-qualified.

    Returns:
        Selected components in document order.
    """
    components: list[Component] = []
    for group in groups:
        skip = _folder_placeholders(group.members) if group.name in folder_types else set[str]()
        components.extend(
            Component(name=member, api_name=ApiName(member), type=group.name)
            for member in group.members
            if member not in skip
        )
    return components


def parse_manifest_document(text: str) -> Manifest:
    """Parse manifest text into a ``Manifest`` (groups plus API version)."""
    return Manifest(api_version=parse_manifest_version(text), groups=parse_manifest_groups(text))


def parse_manifest(
    text: str,
    *,
    folder_types: Collection[str] = FOLDER_SCOPED_TYPES,
) -> list[Component]:
    """Recover the component selection stored in ``package.xml`` text.

    Args:
        text: Raw manifest text. Malformed or partial documents are accepted.
        folder_types: Metadata types whose members are folder-qualified.

    Returns:
        Selected components in document order, excluding materialised folder
        placeholders. Text without ``<types>`` blocks yields an empty list.
    """
    groups = parse_manifest_groups(text)
    components = components_from_groups(groups, folder_types=folder_types)
    logger.debug(
        "Parsed %d component(s) from %d type group(s)",
        len(components),
        len(groups),
        extra=structured_extra(component=LogComponent.MANIFEST),
    )
    return components


__all__ = [
    "components_from_groups",
    "parse_manifest",
    "parse_manifest_document",
    "parse_manifest_groups",
    "parse_manifest_version",
]
