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


"""sfmeta - Salesforce metadata manifest toolkit.

Builds and parses ``package.xml`` manifests for a selection of metadata
components, resolves folder paths for folder-scoped types, and reconciles the
output of ``sf project retrieve start --json`` back onto the selection.
"""

from __future__ import annotations

from sfmeta.exceptions import SfmetaError, SfmetaValidationError

from .config import Config, RetrieveConfig, load_config
from .core.model_types import ErrorType, RetrievalStatus
from .core.types import Component, FolderRecord, ProcessOutput, ReconcileOutcome, RetrievalResult
from .folders import qualify_name, resolve_folder_paths
from .manifest import ManifestBuilder, build_manifest, parse_manifest
from .retrieval import decode_output, reconcile
from .selection import SelectionError, dump_selection, load_selection

__version__ = "0.1.0"

__all__ = [
    "Component",
    "Config",
    "ErrorType",
    "FolderRecord",
    "ManifestBuilder",
    "ProcessOutput",
    "ReconcileOutcome",
    "RetrievalResult",
    "RetrievalStatus",
    "RetrieveConfig",
    "SelectionError",
    "SfmetaError",
    "SfmetaValidationError",
    "__version__",
    "build_manifest",
    "decode_output",
    "dump_selection",
    "load_config",
    "load_selection",
    "parse_manifest",
    "qualify_name",
    "reconcile",
    "resolve_folder_paths",
]
