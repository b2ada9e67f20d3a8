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


"""Fixtures for CLI tests: an isolated project directory and a scripted ``sf``."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from tests.fixtures.fake_sf import FakeSf

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SFMETA_LOG_FORMAT", raising=False)
    monkeypatch.delenv("SFMETA_LOG_LEVEL", raising=False)
    return tmp_path


@pytest.fixture
def selection_file(project: Path) -> Path:
    path = project / "selection.json"
    _ = path.write_text(
        json.dumps(
            [
                {"name": "Foo", "apiName": "Foo", "type": "ApexClass"},
                {"name": "Pipeline", "apiName": "Sales/EMEA/Pipeline", "type": "Dashboard"},
            ],
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def fake_sf(monkeypatch: pytest.MonkeyPatch) -> FakeSf:
    fake = FakeSf()
    monkeypatch.setattr("sfmeta.services.org.run_command", fake)
    monkeypatch.setattr("sfmeta.services.retrieval.run_command", fake)
    return fake
