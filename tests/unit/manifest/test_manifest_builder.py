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


"""Unit tests for manifest building."""

from __future__ import annotations

import pytest

from sfmeta.core.type_aliases import ApiVersion, TypeName
from sfmeta.manifest import Manifest, ManifestBuilder, TypeGroup, build_manifest, render_manifest
from tests.fixtures.sf_payloads import component

pytestmark = pytest.mark.unit

VERSION = ApiVersion("64.0")


def test_build_manifest_matches_package_xml_layout() -> None:
    text = build_manifest(
        [component("Zeta"), component("Alpha"), component("Account", "CustomObject")],
        VERSION,
    )
    assert text == "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<Package xmlns="http://soap.sforce.com/2006/04/metadata">',
        "    <types>",
        "        <members>Alpha</members>",
        "        <members>Zeta</members>",
        "        <name>ApexClass</name>",
        "    </types>",
        "    <types>",
        "        <members>Account</members>",
        "        <name>CustomObject</name>",
        "    </types>",
        "    <version>64.0</version>",
        "</Package>",
    ])


def test_empty_selection_renders_only_version() -> None:
    text = build_manifest([], VERSION)
    assert "<types>" not in text
    assert "<version>64.0</version>" in text


def test_folder_scoped_members_include_every_ancestor_folder() -> None:
    builder = ManifestBuilder(api_version=VERSION)
    builder.extend([component("Sales/EMEA/Pipeline", "Dashboard"), component("Sales/Summary", "Dashboard")])
    manifest = builder.manifest()
    group = manifest.group(TypeName("Dashboard"))
    assert group is not None
    assert group.members == ["Sales", "Sales/EMEA", "Sales/EMEA/Pipeline", "Sales/Summary"]


def test_leading_separator_folder_is_listed_with_its_separator() -> None:
    builder = ManifestBuilder(api_version=VERSION)
    builder.extend([component("a", "Document"), component("/a/b", "Document")])
    group = builder.manifest().group(TypeName("Document"))
    assert group is not None
    assert group.members == ["/a", "/a/b", "a"]


def test_folder_expansion_only_applies_to_folder_types() -> None:
    builder = ManifestBuilder(api_version=VERSION)
    builder.add(component("Account/Layout", "Layout"))
    group = builder.manifest().group(TypeName("Layout"))
    assert group is not None
    assert group.members == ["Account/Layout"]


def test_custom_folder_types_enable_report_expansion() -> None:
    text = build_manifest([component("Ops/Weekly", "Report")], VERSION, folder_types={"Report"})
    assert "<members>Ops</members>" in text


def test_members_are_deduplicated_and_groups_keep_first_seen_order() -> None:
    builder = ManifestBuilder(api_version=VERSION)
    builder.extend([
        component("B", "ApexPage"),
        component("A", "ApexClass"),
        component("B", "ApexPage"),
    ])
    manifest = builder.manifest()
    assert [group.name for group in manifest.groups] == ["ApexPage", "ApexClass"]
    assert manifest.groups[0].members == ["B"]


def test_render_escapes_markup() -> None:
    manifest = Manifest(api_version=VERSION, groups=[TypeGroup(name=TypeName("Document"), members=["R&D/<draft>"])])
    assert "<members>R&amp;D/&lt;draft&gt;</members>" in render_manifest(manifest)


def test_render_without_version_omits_element() -> None:
    assert "<version>" not in render_manifest(Manifest())


def test_type_group_add_reports_duplicates() -> None:
    group = TypeGroup(name=TypeName("ApexClass"), members=["A"])
    assert group.add("A") is False
    assert group.add("B") is True
    assert group.members == ["A", "B"]
