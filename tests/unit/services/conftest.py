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


"""Shared fixtures for service-layer tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sfmeta.config import Config, RetrieveConfig
from tests.fixtures.fake_sf import FakeSf

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        retrieve=RetrieveConfig(manifest_path=tmp_path / "manifest" / "package.xml"),
        project_root=tmp_path,
    )


@pytest.fixture
def fake_sf(monkeypatch: pytest.MonkeyPatch) -> FakeSf:
    fake = FakeSf()
    monkeypatch.setattr("sfmeta.services.org.run_command", fake)
    monkeypatch.setattr("sfmeta.services.retrieval.run_command", fake)
    return fake
