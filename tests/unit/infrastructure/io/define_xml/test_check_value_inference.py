"""Tests for CheckValue inference from WhereClauseDef OIDs."""

import pytest

from define_explorer.infrastructure.io.define_xml import (
    WhereClauseOIDContext,
    infer_check_values,
)
from define_explorer.infrastructure.io.define_xml.where_clauses import (
    split_on_uppercase,
)


def _infer(oid: str) -> list[str]:
    return infer_check_values(WhereClauseOIDContext.from_oid(oid))


class TestWhereClauseOIDContext:
    def test_single_condition(self):
        context = WhereClauseOIDContext.from_oid("WC.ADLB.PARAMCD.EQ.ALT")
        assert context.domain == "ADLB"
        assert context.variables == ("PARAMCD",)
        assert context.operations == ("EQ",)
        assert context.values == ("ALT",)

    def test_multiple_conditions(self):
        context = WhereClauseOIDContext.from_oid(
            "WC.ADVS.PARAMCD.EQ.SYSBP.AVISIT.EQ.Week24"
        )
        assert context.variables == ("PARAMCD", "AVISIT")
        assert context.operations == ("EQ", "EQ")
        assert context.values == ("SYSBP", "Week24")

    def test_incomplete_trailing_triple_is_ignored(self):
        context = WhereClauseOIDContext.from_oid("WC.ADLB.PARAMCD.EQ")
        assert context.domain == "ADLB"
        assert context.variables == ()
        assert context.values == ()

    def test_short_oid_has_no_domain(self):
        context = WhereClauseOIDContext.from_oid("WC")
        assert context.domain is None
        assert context.variables == ()


class TestInferCheckValues:
    def test_lab_category_is_split_and_upper_cased(self):
        assert _infer("WC.ADLB.PARCAT1.EQ.HematologyChemistry") == [
            "HEMATOLOGY",
            "CHEMISTRY",
        ]

    def test_all_caps_lab_category_is_kept_whole(self):
        assert _infer("WC.ADLB.PARCAT1.EQ.HEMATOLOGYCHEMISTRY") == [
            "HEMATOLOGYCHEMISTRY"
        ]

    def test_lab_variables_return_all_values(self):
        assert _infer("WC.ADLB.LBTESTCD.EQ.GLUC.LBSPEC.EQ.URINE") == ["GLUC", "URINE"]

    def test_missing_operation_gives_empty_value(self):
        assert _infer("WC.ADAE.AESTDTC.MISSING.X") == [""]

    def test_visit_value_is_split_on_uppercase(self):
        assert _infer("WC.ADVS.AVISIT.EQ.BaselineWeek4") == ["Baseline", "Week4"]

    def test_paramcd_value(self):
        assert _infer("WC.ADVS.PARAMCD.EQ.SYSBP") == ["SYSBP"]

    def test_flag_variable_gives_y(self):
        assert _infer("WC.ADSL.SAFFL.EQ.Yes") == ["Y"]

    def test_date_variable_value(self):
        assert _infer("WC.ADSL.TRTSDT.GE.2020") == ["2020"]

    def test_last_value_fallback(self):
        assert _infer("WC.ADEG.EGTESTCD.EQ.QTCF.EGPOS.EQ.SUPINE") == ["SUPINE"]

    def test_no_triples_gives_nothing(self):
        assert _infer("WC.ADLB") == []

    def test_rule_order_prefers_paramcd_over_flag(self):
        assert _infer("WC.ADVS.PARAMCD.EQ.HR.ANL01FL.EQ.Y") == ["HR"]

    def test_rule_order_prefers_visit_over_paramcd(self):
        assert _infer("WC.ADVS.PARAMCD.EQ.HR.AVISIT.EQ.Week8") == ["Week8"]

    def test_lab_dataset_without_lab_variables_falls_through(self):
        assert _infer("WC.ADLB.PARAMCD.EQ.ALT") == ["ALT"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("HematologyChemistry", ["Hematology", "Chemistry"]),
        ("Week24", ["Week24"]),
        ("HEMATOLOGYCHEMISTRY", ["HEMATOLOGYCHEMISTRY"]),
        ("WEEK24", ["WEEK24"]),
        ("lowercase", ["lowercase"]),
        ("", []),
    ],
)
def test_split_on_uppercase(value: str, expected: list[str]):
    assert split_on_uppercase(value) == expected
