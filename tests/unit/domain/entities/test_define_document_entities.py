import dataclasses

import pytest

from define_explorer.domain.entities import (
    AnalysisResult,
    CodeList,
    CodeListItem,
    Decode,
    EnumeratedItem,
    ItemDef,
    ItemGroup,
    ItemRef,
    MetaDataVersion,
    ParsedDefineXML,
    Study,
)


def test_entities_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Study(name="X").name = "Y"  # type: ignore[misc]


class TestItemGroup:
    def test_is_repeating(self):
        assert ItemGroup(repeating="Yes").is_repeating
        assert ItemGroup(repeating="yes").is_repeating
        assert not ItemGroup(repeating="No").is_repeating
        assert not ItemGroup().is_repeating

    def test_sorted_item_refs_uses_numeric_order(self):
        group = ItemGroup(
            item_refs=(
                ItemRef(oid="C", order_number="10"),
                ItemRef(oid="A", order_number="2"),
                ItemRef(oid="B", order_number=None),
            )
        )
        assert [ref.oid for ref in group.sorted_item_refs()] == ["B", "A", "C"]


class TestItemDef:
    @pytest.mark.parametrize(
        ("data_type", "expected"),
        [
            ("integer", "numeric"),
            ("float", "numeric"),
            ("text", "text"),
            ("datetime", "datetime"),
            (None, "unknown"),
        ],
    )
    def test_effective_data_type(self, data_type, expected):
        assert ItemDef(data_type=data_type).effective_data_type == expected

    def test_is_derived(self):
        assert ItemDef(origin_type="Derived").is_derived
        assert not ItemDef(origin_type="Collected").is_derived


class TestCodeList:
    def test_find_decode(self):
        code_list = CodeList(
            code_list_items=(
                CodeListItem(coded_value="Y", decode=Decode("Yes")),
                CodeListItem(coded_value="N"),
            )
        )
        assert code_list.find_decode("Y") == "Yes"
        assert code_list.find_decode("N") is None
        assert code_list.find_decode("U") is None

    def test_valid_values_cover_both_item_kinds(self):
        code_list = CodeList(
            code_list_items=(CodeListItem(coded_value="Y"),),
            enumerated_items=(EnumeratedItem(coded_value="HIGH"), EnumeratedItem()),
        )
        assert code_list.valid_values() == ["Y", "HIGH"]
        assert code_list.is_enumerated
        assert not CodeList().is_enumerated


class TestAnalysisResult:
    def test_variable_oids(self):
        result = AnalysisResult(variables="IT.ADLB.AVAL, IT.ADLB.ANRIND,")
        assert result.variable_oids() == ["IT.ADLB.AVAL", "IT.ADLB.ANRIND"]
        assert AnalysisResult().variable_oids() == []

    def test_has_programming_code(self):
        assert AnalysisResult(programming_code="proc means; run;").has_programming_code
        assert AnalysisResult(programming_document="LF.PGM").has_programming_code
        assert not AnalysisResult().has_programming_code


class TestParsedDefineXML:
    @pytest.mark.parametrize(
        ("oid", "adam", "sdtm"),
        [
            ("MDV.CDISCPILOT01.ADaMIG.1.1", True, False),
            ("MDV.CDISCPILOT01.SDTMIG.3.3", False, True),
            (None, False, False),
        ],
    )
    def test_standard_detection(self, oid, adam, sdtm):
        document = ParsedDefineXML(study=Study(), metadata=MetaDataVersion(oid=oid))
        assert document.is_adam is adam
        assert document.is_sdtm is sdtm

    def test_collection_counts_for_sample(self, parsed_define):
        assert parsed_define.collection_counts() == {
            "Standards": 1,
            "ItemGroups": 2,
            "ItemDefs": 13,
            "ItemRefs": 8,
            "Methods": 1,
            "Comments": 2,
            "CodeLists": 2,
            "Dictionaries": 1,
            "WhereClauseDefs": 3,
            "ValueListDefs": 4,
            "Documents": 1,
            "AnalysisResults": 1,
        }
