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


"""Service layer: manifest files, retrieval runs and org queries."""

from __future__ import annotations

from .manifest import load_manifest_components, write_manifest
from .org import (
    fetch_api_version,
    fetch_components,
    fetch_folder_components,
    fetch_metadata_types,
    fetch_user_id,
    resolve_api_version,
)
from .retrieval import build_retrieve_command, capture_retrieve, process_output_from_command, run_retrieve

__all__ = [
    "build_retrieve_command",
    "capture_retrieve",
    "fetch_api_version",
    "fetch_components",
    "fetch_folder_components",
    "fetch_metadata_types",
    "fetch_user_id",
    "load_manifest_components",
    "process_output_from_command",
    "resolve_api_version",
    "run_retrieve",
    "write_manifest",
]
