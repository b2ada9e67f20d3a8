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


"""Unit tests for selection files and outcome serialisation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from sfmeta.core.model_types import ErrorType, RetrievalStatus
from sfmeta.core.types import ReconcileOutcome, RetrievalResult
from sfmeta.selection import (
    SelectionError,
    dump_outcome,
    dump_selection,
    load_selection,
    outcome_to_json,
    parse_selection,
)
from tests.fixtures.sf_payloads import component

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.unit


def test_parse_selection_defaults_name_and_strips() -> None:
    text = json.dumps(
        [
            {"name": "Foo class", "apiName": "Foo", "type": "ApexClass"},
            {"apiName": " Sales/Pipeline ", "type": "Dashboard", "extra": True},
        ],
    )
    assert parse_selection(text) == [
        component("Foo", name="Foo class"),
        component("Sales/Pipeline", "Dashboard"),
    ]


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"apiName": "Foo", "type": "ApexClass"}',
        '[{"apiName": "", "type": "ApexClass"}]',
        '[{"apiName": "Foo"}]',
    ],
)
def test_parse_selection_rejects_invalid_input(text: str) -> None:
    with pytest.raises(SelectionError, match="Invalid selection in demo.json"):
        _ = parse_selection(text, source="demo.json")


def test_load_selection_wraps_read_errors(tmp_path: Path) -> None:
    missing = tmp_path / "missing.json"
    with pytest.raises(SelectionError) as excinfo:
        _ = load_selection(missing)
    assert excinfo.value.source == str(missing)
    assert isinstance(excinfo.value.error, OSError)


def test_dump_selection_uses_api_name_key(tmp_path: Path) -> None:
    selection = [component("Foo"), component("Sales/Pipeline", "Dashboard")]
    text = dump_selection(selection)
    assert json.loads(text)[0] == {"name": "Foo", "apiName": "Foo", "type": "ApexClass"}
    path = tmp_path / "selection.json"
    _ = path.write_text(text, encoding="utf-8")
    assert load_selection(path) == selection


def test_outcome_json_shape() -> None:
    outcome = ReconcileOutcome(
        results=[
            RetrievalResult(index=0, status=RetrievalStatus.FAILED, error_message="boom"),
            RetrievalResult(index=1, status=RetrievalStatus.SUCCESS),
        ],
        error_message="boom",
        error_type=ErrorType.COMMAND,
    )
    assert outcome_to_json(outcome) == {
        "results": [
            {"index": 0, "status": "Failed", "errorMessage": "boom"},
            {"index": 1, "status": "Success", "errorMessage": None},
        ],
        "errorMessage": "boom",
        "errorType": "command",
    }
    assert json.loads(dump_outcome(ReconcileOutcome())) == {"results": [], "errorMessage": None, "errorType": None}
