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


"""Manifest (``package.xml``) building and parsing."""

from __future__ import annotations

from .builder import ManifestBuilder, build_manifest, render_manifest
from .models import Manifest, TypeGroup
from .parser import (
    components_from_groups,
    parse_manifest,
    parse_manifest_document,
    parse_manifest_groups,
    parse_manifest_version,
)

__all__ = [
    "Manifest",
    "ManifestBuilder",
    "TypeGroup",
    "build_manifest",
    "components_from_groups",
    "parse_manifest",
    "parse_manifest_document",
    "parse_manifest_groups",
    "parse_manifest_version",
    "render_manifest",
]
