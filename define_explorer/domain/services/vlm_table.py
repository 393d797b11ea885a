"""Tabular views over a processed VLM structure.

The coverage grid has one row per parameter code and one column per VLM
variable, with ``PARAMCD`` and ``PARAM`` first. A leading ``*`` row marks the
variables that carry non-parameterized definitions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from ...constants import CoverageMarkers, VLMVariables
from ..entities import NON_PARAMETERIZED, VLMSummary

if TYPE_CHECKING:
    from ..entities import ProcessedVLM

NON_PARAMETER_LABEL = "Non-Parameter Specific"
SUMMARY_PARAMETER_LIMIT = 10
COVERAGE_COLUMNS = ["Variable", "Coverage %", "Covered Parameters", "Total Parameters"]


def _other_variables(vlm: ProcessedVLM) -> list[str]:
    return [
        name
        for name in vlm.variables
        if name not in (VLMVariables.PARAMCD, VLMVariables.PARAM)
    ]


def _param_label(vlm: ProcessedVLM, paramcd: str) -> str:
    param_variable = vlm.variables.get(VLMVariables.PARAM)
    if param_variable is None:
        return ""
    for ref in param_variable.item_refs:
        if ref.paramcd == paramcd and ref.param_info is not None:
            return ref.param_info.decode
    return ""


def build_coverage_table(vlm: ProcessedVLM) -> pd.DataFrame:
    others = _other_variables(vlm)
    columns = [VLMVariables.PARAMCD, VLMVariables.PARAM, *others]
    rows: list[dict[str, str]] = []

    if vlm.has_non_parameterized():
        row = {
            VLMVariables.PARAMCD: NON_PARAMETERIZED,
            VLMVariables.PARAM: NON_PARAMETER_LABEL,
        }
        for name in others:
            has_item = any(
                ref.is_non_parameterized for ref in vlm.variables[name].item_refs
            )
            row[name] = CoverageMarkers.COVERED if has_item else CoverageMarkers.MISSING
        rows.append(row)

    for paramcd in vlm.all_paramcds():
        row = {
            VLMVariables.PARAMCD: paramcd,
            VLMVariables.PARAM: _param_label(vlm, paramcd),
        }
        for name in others:
            row[name] = (
                CoverageMarkers.COVERED
                if paramcd in vlm.variables[name].covered_paramcds()
                else CoverageMarkers.MISSING
            )
        rows.append(row)

    return pd.DataFrame(rows, columns=columns)


def coverage_by_variable(vlm: ProcessedVLM) -> pd.DataFrame:
    all_paramcds = vlm.all_paramcds()
    total = len(all_paramcds)
    records: list[dict[str, object]] = []
    for name in _other_variables(vlm):
        covered = vlm.variables[name].covered_paramcds()
        covered_count = sum(1 for paramcd in all_paramcds if paramcd in covered)
        percentage = round(covered_count / total * 100, 1) if total else 0.0
        records.append(
            {
                "Variable": name,
                "Coverage %": percentage,
                "Covered Parameters": covered_count,
                "Total Parameters": total,
            }
        )
    return pd.DataFrame(records, columns=COVERAGE_COLUMNS)


def hide_columns(table: pd.DataFrame, hidden: set[str] | frozenset[str]) -> pd.DataFrame:
    """Drop user-hidden variable columns; PARAMCD and PARAM always stay."""
    droppable = [
        column
        for column in table.columns
        if column in hidden
        and column not in (VLMVariables.PARAMCD, VLMVariables.PARAM)
    ]
    return table.drop(columns=droppable)


def create_vlm_summary(vlm: ProcessedVLM) -> VLMSummary:
    all_paramcds = vlm.all_paramcds()
    return VLMSummary(
        dataset=vlm.dataset,
        variable_count=len(vlm.variables),
        variables=tuple(vlm.variable_names()),
        parameter_count=len(all_paramcds),
        has_non_parameterized_data=vlm.has_non_parameterized(),
        parameters=tuple(all_paramcds[:SUMMARY_PARAMETER_LIMIT]),
    )
