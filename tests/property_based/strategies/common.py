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


"""Hypothesis strategies for selections, folder trees and tool output."""

from __future__ import annotations

import json

from hypothesis import strategies as st

from sfmeta.core.type_aliases import ApiName, FolderId, TypeName
from sfmeta.core.types import Component, FolderRecord, ProcessOutput
from tests.fixtures.sf_payloads import BENIGN

PLAIN_TYPES = ("ApexClass", "ApexPage", "CustomObject")
FOLDER_TYPES = ("Dashboard", "Document", "EmailTemplate")

# Folder segments and leaves use disjoint first letters so no leaf can be
# mistaken for a folder placeholder. Empty segments put extra
# separators into folder paths.
_folder_segment = st.one_of(st.just(""), st.from_regex(r"f[a-z0-9_]{0,6}", fullmatch=True))
_leaf = st.from_regex(r"L[A-Za-z0-9_&<>]{0,8}", fullmatch=True)


@st.composite
def _component(draw: st.DrawFn) -> Component:
    if draw(st.booleans()):
        type_name = draw(st.sampled_from(FOLDER_TYPES))
        folders = draw(st.lists(_folder_segment, max_size=3))
        api_name = "/".join([*folders, draw(_leaf)])
    else:
        type_name = draw(st.sampled_from(PLAIN_TYPES))
        api_name = draw(_leaf)
    return Component(name=api_name, api_name=ApiName(api_name), type=TypeName(type_name))


def selections(max_size: int = 12) -> st.SearchStrategy[list[Component]]:
    """Return component selections with unique ``(type, api_name)`` pairs."""
    return st.lists(_component(), max_size=max_size, unique_by=lambda item: (item.type, item.api_name))


@st.composite
def folder_forests(draw: st.DrawFn, max_size: int = 8) -> list[FolderRecord]:
    """Return folder records whose parent links may dangle or form cycles."""
    size = draw(st.integers(min_value=0, max_value=max_size))
    ids = [FolderId(f"00l{index}") for index in range(size)]
    parent_choices = st.one_of(st.none(), st.just(FolderId("00lMISSING")), *(st.just(item) for item in ids))
    return [
        FolderRecord(id=folder_id, developer_name=f"folder{index}", parent_id=draw(parent_choices))
        for index, folder_id in enumerate(ids)
    ]


_file_entries = st.fixed_dictionaries(
    {"fullName": st.one_of(st.sampled_from(["Lfoo", "Lbar"]), st.text(max_size=5))},
    optional={
        "type": st.sampled_from(PLAIN_TYPES),
        "state": st.sampled_from(["Changed", "Created", "Failed", "Unchanged"]),
        "error": st.one_of(st.none(), st.text(max_size=10), st.just(BENIGN)),
        "problem": st.one_of(st.none(), st.text(max_size=10)),
    },
)

_statuses = st.one_of(st.integers(min_value=-2, max_value=3), st.booleans(), st.none(), st.text(max_size=3))


@st.composite
def retrieve_payloads(draw: st.DrawFn) -> str:
    """Return ``sf`` retrieve stdout: JSON objects of varying shape or arbitrary text."""
    payload: dict[str, object] = {}
    if draw(st.booleans()):
        payload["status"] = draw(_statuses)
    if draw(st.booleans()):
        payload["message"] = draw(st.one_of(st.text(max_size=10), st.just(BENIGN), st.integers()))
    if draw(st.booleans()):
        payload["result"] = draw(
            st.one_of(
                st.fixed_dictionaries({"files": st.lists(_file_entries, max_size=4)}),
                st.fixed_dictionaries({"files": st.just("not a list")}),
                st.none(),
            ),
        )
    return draw(st.one_of(st.just(json.dumps(payload)), st.text(max_size=20)))


@st.composite
def process_outputs(draw: st.DrawFn) -> ProcessOutput:
    """Return captured retrieval output across every channel combination."""
    return ProcessOutput(
        exit_failed=draw(st.booleans()),
        stdout=draw(retrieve_payloads()),
        stderr=draw(st.one_of(st.just(""), st.text(max_size=10), st.just(json.dumps({"message": BENIGN})))),
        invocation_error=draw(st.one_of(st.none(), st.text(max_size=10))),
    )


__all__ = ["folder_forests", "process_outputs", "retrieve_payloads", "selections"]
