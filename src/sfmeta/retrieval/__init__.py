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


"""Retrieval output decoding and per-component reconciliation."""

from __future__ import annotations

from .output import (
    DEFAULT_BATCH_MESSAGE,
    CommandFailure,
    CommandSuccess,
    FileResult,
    InvocationFailure,
    RetrievalOutput,
    UnknownStatus,
    decode_output,
)
from .reconcile import COMPONENT_FAILURE_MESSAGE, format_component_errors, is_benign, reconcile, status_counts

__all__ = [
    "COMPONENT_FAILURE_MESSAGE",
    "DEFAULT_BATCH_MESSAGE",
    "CommandFailure",
    "CommandSuccess",
    "FileResult",
    "InvocationFailure",
    "RetrievalOutput",
    "UnknownStatus",
    "decode_output",
    "format_component_errors",
    "is_benign",
    "reconcile",
    "status_counts",
]
