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


"""Exception hierarchy shared by every sfmeta module.

Errors caused by bad input (selection files, configuration, manifests) derive
from ``SfmetaValidationError`` so callers that only care about "the user gave
us something unusable" can catch ``ValueError``. Failures reported by the
Salesforce CLI surface as ``sfmeta.catalog.CatalogError``.
"""

from __future__ import annotations

__all__ = ["SfmetaError", "SfmetaValidationError"]


class SfmetaError(Exception):
    """Root of all sfmeta errors."""


class SfmetaValidationError(SfmetaError, ValueError):
    """Input could not be turned into sfmeta data."""
