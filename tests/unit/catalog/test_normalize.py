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


"""Unit tests for catalog normalisation of ``sf`` listing output."""

from __future__ import annotations

import json

import pytest

from sfmeta.catalog import (
    CatalogError,
    MetadataType,
    folder_components,
    folder_ids_to_resolve,
    folder_query,
    parse_api_version,
    parse_folder_records,
    parse_listed_components,
    parse_metadata_types,
    parse_query_records,
    parse_user_id,
    record_query,
    type_label,
    visible_records,
)
from sfmeta.core.type_aliases import ApiVersion, FolderId, TypeName
from tests.fixtures.sf_payloads import component, folder, sf_result

pytestmark = pytest.mark.unit

DASHBOARD = TypeName("Dashboard")


@pytest.mark.parametrize(
    ("name", "label"),
    [
        ("ApexClass", "Apex Class"),
        ("CustomObjectTranslation", "Custom Object Translation"),
        ("LWCBundle", "LWC Bundle"),
        ("Layout", "Layout"),
    ],
)
def test_type_label_splits_pascal_case(name: str, label: str) -> None:
    assert type_label(name) == label


def test_parse_api_version_reads_result_or_default() -> None:
    assert parse_api_version(sf_result({"apiVersion": "61.0"})) == "61.0"
    assert parse_api_version(sf_result({}), ApiVersion("58.0")) == "58.0"
    assert parse_api_version("not json", ApiVersion("58.0")) == "58.0"


def test_parse_user_id() -> None:
    assert parse_user_id(sf_result({"id": "005000000000001"})) == "005000000000001"
    assert parse_user_id(sf_result({"id": ""})) is None
    assert parse_user_id("") is None


def test_parse_metadata_types_includes_children_sorted_by_label() -> None:
    stdout = sf_result(
        {
            "metadataObjects": [
                {"xmlName": "CustomObject", "childXmlNames": ["CustomField", "ValidationRule"]},
                {"xmlName": "ApexClass", "childXmlNames": []},
                {"xmlName": "CustomField"},
            ],
        },
    )
    assert parse_metadata_types(stdout) == [
        MetadataType(name=TypeName("ApexClass"), label="Apex Class"),
        MetadataType(name=TypeName("CustomField"), label="Custom Field"),
        MetadataType(name=TypeName("CustomObject"), label="Custom Object"),
        MetadataType(name=TypeName("ValidationRule"), label="Validation Rule"),
    ]


def test_parse_metadata_types_raises_on_failure() -> None:
    with pytest.raises(CatalogError, match="No default org"):
        _ = parse_metadata_types(json.dumps({"status": 1, "message": "No default org"}))
    with pytest.raises(CatalogError):
        _ = parse_metadata_types("")


def test_parse_listed_components_accepts_single_object() -> None:
    single = parse_listed_components(sf_result({"fullName": "Solo"}), TypeName("ApexClass"))
    assert single == [component("Solo")]
    many = parse_listed_components(
        sf_result([{"fullName": "beta"}, {"fullName": "Alpha"}, {"type": "ApexClass"}]),
        TypeName("ApexClass"),
    )
    assert [item.api_name for item in many] == ["Alpha", "beta"]
    assert parse_listed_components("{", TypeName("ApexClass")) == []


def test_parse_query_records_and_folders() -> None:
    stdout = sf_result(
        {
            "records": [
                {"Id": "00l1", "DeveloperName": "Sales", "ParentId": None},
                {"Id": "00l2", "DeveloperName": "EMEA", "ParentId": "00l1"},
                {"DeveloperName": "NoId"},
                "junk",
            ],
        },
    )
    records = parse_query_records(stdout)
    assert len(records) == 3
    assert parse_folder_records(records) == [folder("00l1", "Sales"), folder("00l2", "EMEA", "00l1")]


def test_queries() -> None:
    assert record_query(DASHBOARD).endswith("FROM Dashboard")
    assert folder_query([FolderId("00l1"), FolderId("00l2")]).endswith("WHERE Id IN ('00l1','00l2')")
    with pytest.raises(ValueError, match="Invalid folder id"):
        _ = folder_query([FolderId("00l1' OR Id != '")])


def test_visible_records_hide_other_users_personal_folders() -> None:
    records = [
        {"DeveloperName": "Mine", "FolderId": "005ME"},
        {"DeveloperName": "Theirs", "FolderId": "005THEM"},
        {"DeveloperName": "Shared", "FolderId": "00l1"},
    ]
    kept = visible_records(records, current_user_id="005ME")
    assert [record["DeveloperName"] for record in kept] == ["Mine", "Shared"]
    assert [record["DeveloperName"] for record in visible_records(records, current_user_id=None)] == ["Shared"]


def test_folder_ids_to_resolve_skips_org_container_and_duplicates() -> None:
    records = [{"FolderId": "00l1"}, {"FolderId": "00D000"}, {"FolderId": "00l1"}, {"FolderId": "00l2"}, {}]
    assert folder_ids_to_resolve(records) == ["00l1", "00l2"]


def test_folder_components_qualifies_names() -> None:
    records = [
        {"DeveloperName": "Pipeline", "FolderId": "00l2"},
        {"DeveloperName": "Overview", "FolderId": "00D000"},
        {"DeveloperName": "Orphan", "FolderId": "00lMISSING"},
        {"DeveloperName": "Private", "FolderId": "005OTHER"},
        {"DeveloperName": "", "FolderId": "00l1"},
    ]
    folders = [folder("00l1", "Sales"), folder("00l2", "EMEA", "00l1")]
    result = folder_components(records, folders, DASHBOARD, current_user_id="005ME")
    assert [item.api_name for item in result] == ["Orphan", "Sales/EMEA/Pipeline", "unfiled$public/Overview"]
    assert all(item.type == DASHBOARD for item in result)
    assert all(item.name == item.api_name for item in result)


def test_folder_components_accepts_generators() -> None:
    records = ({"DeveloperName": name, "FolderId": "00l1"} for name in ("B", "A"))
    result = folder_components(records, [folder("00l1", "Sales")], DASHBOARD, current_user_id=None)
    assert [item.api_name for item in result] == ["Sales/A", "Sales/B"]
