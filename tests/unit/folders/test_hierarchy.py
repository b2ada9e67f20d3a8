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


"""Unit tests for folder path resolution."""

from __future__ import annotations

import logging

import pytest

from sfmeta.folders import ancestor_paths, qualify_name, resolve_folder_paths
from tests.fixtures.sf_payloads import folder

pytestmark = pytest.mark.unit


def test_root_folder_resolves_to_its_own_name() -> None:
    paths = resolve_folder_paths([folder("A", "Sales")])
    assert paths == {"A": "Sales"}


def test_nested_folders_join_names_from_the_root() -> None:
    folders = [
        folder("C", "Q3", parent_id="B"),
        folder("A", "Sales"),
        folder("B", "EMEA", parent_id="A"),
    ]
    assert resolve_folder_paths(folders) == {
        "A": "Sales",
        "B": "Sales/EMEA",
        "C": "Sales/EMEA/Q3",
    }


def test_missing_parent_truncates_the_chain() -> None:
    folders = [folder("B", "EMEA", parent_id="A"), folder("C", "Q3", parent_id="B")]
    assert resolve_folder_paths(folders) == {"B": "EMEA", "C": "EMEA/Q3"}


def test_cycle_maps_members_to_empty_path(caplog: pytest.LogCaptureFixture) -> None:
    folders = [
        folder("A", "One", parent_id="B"),
        folder("B", "Two", parent_id="A"),
        folder("C", "Three", parent_id="A"),
        folder("D", "Root"),
    ]
    with caplog.at_level(logging.WARNING, logger="sfmeta.folders"):
        paths = resolve_folder_paths(folders)
    assert paths["A"] == ""
    assert paths["B"] == ""
    assert paths["C"] == ""
    assert paths["D"] == "Root"
    assert "cycles" in caplog.text


def test_self_parent_is_a_cycle() -> None:
    assert resolve_folder_paths([folder("A", "Loop", parent_id="A")]) == {"A": ""}


def test_map_is_total_and_empty_input_is_empty() -> None:
    assert resolve_folder_paths([]) == {}
    folders = [folder(str(index), f"F{index}", parent_id=str(index - 1) if index else None) for index in range(50)]
    paths = resolve_folder_paths(folders)
    assert set(paths) == {record.id for record in folders}
    assert paths["49"].count("/") == 49


def test_deep_chain_does_not_recurse() -> None:
    depth = 1500
    folders = [folder(str(index), "n", parent_id=str(index - 1) if index else None) for index in range(depth)]
    paths = resolve_folder_paths(folders[-1:] + folders[:-1])
    assert paths[str(depth - 1)].count("/") == depth - 1


@pytest.mark.parametrize(
    ("folder_path", "leaf", "expected"),
    [
        ("Sales/EMEA", "Pipeline", "Sales/EMEA/Pipeline"),
        ("", "Pipeline", "Pipeline"),
        ("unfiled$public", "Letterhead", "unfiled$public/Letterhead"),
    ],
)
def test_qualify_name(folder_path: str, leaf: str, expected: str) -> None:
    assert qualify_name(folder_path, leaf) == expected


def test_ancestor_paths() -> None:
    assert ancestor_paths("a/b/c") == ["a", "a/b", "a/b/c"]
    assert ancestor_paths("a") == ["a"]
    assert ancestor_paths("") == []


@pytest.mark.parametrize(
    ("folder_path", "expected"),
    [
        ("/a", ["", "/a"]),
        ("/a/b", ["", "/a", "/a/b"]),
        ("a/", ["a", "a/"]),
        ("a//b", ["a", "a/", "a//b"]),
    ],
)
def test_ancestor_paths_keep_empty_segments(folder_path: str, expected: list[str]) -> None:
    prefixes = ancestor_paths(folder_path)
    assert prefixes == expected
    assert all(folder_path.startswith(prefix) for prefix in prefixes)
