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


"""Value types produced by the org catalog normalisers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sfmeta.exceptions import SfmetaError

if TYPE_CHECKING:
    from sfmeta.core.type_aliases import TypeName


class CatalogError(SfmetaError):
    """Raised when the org reports a failure while listing metadata types."""


@dataclass(slots=True, frozen=True)
class MetadataType:
    """A retrievable metadata type and its human-readable label.

    Attributes:
        name: API name of the type (e.g. ``ApexClass``).
        label: Display label derived from the name (e.g. ``Apex Class``).
    """

    name: TypeName
    label: str


__all__ = ["CatalogError", "MetadataType"]
