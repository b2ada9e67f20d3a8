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


"""Unit tests for reading and writing manifests on disk."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sfmeta.core.type_aliases import ApiVersion
from sfmeta.services import load_manifest_components, write_manifest
from tests.fixtures.sf_payloads import component

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_write_creates_parent_and_overwrites(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "manifest" / "package.xml"
    first = write_manifest(path, [component("Foo")], ApiVersion("60.0"))
    assert path.read_text(encoding="utf-8") == first
    second = write_manifest(path, [component("Bar")], ApiVersion("60.0"))
    assert path.read_text(encoding="utf-8") == second
    assert "Foo" not in second


def test_written_manifest_loads_back(tmp_path: Path) -> None:
    path = tmp_path / "package.xml"
    selection = [component("Foo"), component("Sales/EMEA/Pipeline", "Dashboard")]
    _ = write_manifest(path, selection, ApiVersion("60.0"))
    assert sorted(load_manifest_components(path), key=lambda item: item.api_name) == sorted(
        selection,
        key=lambda item: item.api_name,
    )


def test_missing_manifest_is_empty_selection(tmp_path: Path) -> None:
    assert load_manifest_components(tmp_path / "absent.xml") == []
