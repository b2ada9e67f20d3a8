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


"""Unit tests for reconciling retrieval output onto a selection."""

from __future__ import annotations

import pytest

from sfmeta.core.model_types import ErrorType, RetrievalStatus
from sfmeta.retrieval import reconcile, status_counts
from tests.fixtures.sf_payloads import (
    BENIGN,
    component,
    file_entry,
    process,
    retrieve_failure,
    retrieve_success,
)

pytestmark = pytest.mark.unit

SELECTION = [component("Foo"), component("Bar"), component("Sales/Pipeline", "Dashboard")]


def test_component_failure_marks_only_matching_component() -> None:
    raw = process(
        retrieve_success(
            file_entry("Foo", state="Failed", error="Entity of type 'ApexClass' named 'Foo' cannot be found"),
            file_entry("Bar", state="Changed"),
        ),
    )
    outcome = reconcile(raw, SELECTION)
    assert [result.status for result in outcome.results] == [
        RetrievalStatus.FAILED,
        RetrievalStatus.SUCCESS,
        RetrievalStatus.SUCCESS,
    ]
    assert outcome.results[0].error_message == "Entity of type 'ApexClass' named 'Foo' cannot be found"
    assert outcome.error_type is ErrorType.COMPONENT
    assert outcome.error_message == "• Foo (ApexClass) - Entity of type 'ApexClass' named 'Foo' cannot be found"


def test_combined_message_lists_every_failed_file() -> None:
    raw = process(
        retrieve_success(
            file_entry("Foo", state="Failed", problem="missing"),
            file_entry("Other", "ApexPage", state="Failed"),
        ),
    )
    outcome = reconcile(raw, SELECTION)
    assert outcome.error_message == "• Foo (ApexClass) - missing\n\n• Other (ApexPage) - Unknown error"
    assert outcome.results[0].error_message == "missing"


def test_failed_file_without_detail_uses_default_text() -> None:
    outcome = reconcile(process(retrieve_success(file_entry("Bar", state="Failed"))), SELECTION)
    assert outcome.results[1].error_message == "Component retrieval failed"


def test_success_without_failures_has_no_batch_error() -> None:
    outcome = reconcile(process(retrieve_success(file_entry("Foo"))), SELECTION)
    assert outcome.ok
    assert outcome.error_type is None
    assert all(result.status is RetrievalStatus.SUCCESS for result in outcome.results)


def test_command_failure_fails_every_component_with_shared_message() -> None:
    outcome = reconcile(process(retrieve_failure("INVALID_SESSION_ID")), SELECTION)
    assert outcome.error_type is ErrorType.COMMAND
    assert outcome.error_message == "INVALID_SESSION_ID"
    assert {result.error_message for result in outcome.results} == {"INVALID_SESSION_ID"}
    assert not outcome.ok


def test_benign_command_failure_is_success() -> None:
    outcome = reconcile(process(retrieve_failure(f"Retrieve failed. {BENIGN}")), SELECTION)
    assert outcome.error_message is None
    assert outcome.error_type is None
    assert all(result.status is RetrievalStatus.SUCCESS for result in outcome.results)


def test_benign_stderr_on_exit_failure_is_success() -> None:
    outcome = reconcile(process(stderr=f'{{"message": "{BENIGN}"}}', exit_failed=True), SELECTION)
    assert outcome.ok


def test_benign_component_message_is_success() -> None:
    raw = process(retrieve_success(file_entry("Foo", state="Failed", error=BENIGN)))
    outcome = reconcile(raw, SELECTION)
    assert outcome.ok
    assert outcome.results[0].status is RetrievalStatus.SUCCESS


def test_benign_entry_clears_other_component_failures() -> None:
    raw = process(
        retrieve_success(
            file_entry("Foo", state="Failed", error=BENIGN),
            file_entry("Bar", state="Failed", error="Entity cannot be found"),
        ),
    )
    outcome = reconcile(raw, SELECTION)
    assert outcome.error_message is None
    assert outcome.error_type is None
    assert {result.status for result in outcome.results} == {RetrievalStatus.SUCCESS}


def test_custom_benign_markers_replace_defaults() -> None:
    outcome = reconcile(process(retrieve_failure("transient lock")), SELECTION, benign_errors=["transient"])
    assert outcome.ok
    outcome = reconcile(process(retrieve_failure(BENIGN)), SELECTION, benign_errors=["transient"])
    assert outcome.error_message == BENIGN


def test_unknown_status_fails_open() -> None:
    outcome = reconcile(process('{"status": 2.5}'), SELECTION)
    assert outcome.ok
    assert len(outcome.results) == len(SELECTION)


def test_invocation_failure_carries_text_on_every_component() -> None:
    raw = process("garbage", stderr="", exit_failed=True, invocation_error="spawn sf ENOENT")
    outcome = reconcile(raw, SELECTION)
    assert outcome.error_type is ErrorType.COMMAND
    assert [result.error_message for result in outcome.results] == ["spawn sf ENOENT"] * 3
    assert [result.status for result in outcome.results] == [RetrievalStatus.FAILED] * 3


def test_results_follow_request_order() -> None:
    outcome = reconcile(process(retrieve_failure("x")), SELECTION)
    assert [result.index for result in outcome.results] == [0, 1, 2]


def test_empty_selection_yields_no_results() -> None:
    outcome = reconcile(process(retrieve_failure("x")), [])
    assert outcome.results == []
    assert outcome.error_message == "x"


def test_status_counts_cover_every_status() -> None:
    outcome = reconcile(process(retrieve_success(file_entry("Foo", state="Failed"))), SELECTION)
    assert status_counts(outcome) == {RetrievalStatus.SUCCESS: 2, RetrievalStatus.FAILED: 1}
