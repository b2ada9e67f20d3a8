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


"""Org listing normalisers: API version, metadata types and components."""

from __future__ import annotations

from .models import CatalogError, MetadataType
from .normalize import (
    FOLDER_QUERY,
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
    type_label,
    visible_records,
)

__all__ = [
    "FOLDER_QUERY",
    "CatalogError",
    "MetadataType",
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
