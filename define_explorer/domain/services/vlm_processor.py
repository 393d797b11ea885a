from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from ...constants import Defaults, OIDPrefixes, VLMVariables
from ..entities import (
    ParamInfo,
    ProcessedVLM,
    VLMItemRef,
    VLMValueList,
    VLMVariable,
)
from .value_list_finder import find_value_list_defs, value_list_variable
from .vlm_table import build_coverage_table, create_vlm_summary

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import ParsedDefineXML, ValueListDef
    from .item_ref_processor import ItemRefProcessor
    from .paramcd_mapper import ParamcdMapper
    from .vlm_validator import VLMValidator


class VLMProcessingError(ValueError):
    pass


class VLMStage(StrEnum):
    INIT = "init"
    MAPPING_BUILT = "mapping-built"
    VALUE_LISTS_FOUND = "value-lists-found"
    ITEM_REFS_PROCESSED = "item-refs-processed"
    PARAM_VARIABLE_ENSURED = "param-variable-ensured"
    PARAMCD_VARIABLE_ENSURED = "paramcd-variable-ensured"
    TABLE_STRUCTURE_LOGGED = "table-structure-logged"
    VALIDATED = "validated"
    DONE = "done"


@dataclass(slots=True)
class _VariableDraft:
    oid: str
    description: str | None
    item_refs: list[VLMItemRef] = field(default_factory=list)

    def freeze(self, name: str) -> VLMVariable:
        return VLMVariable(
            name=name,
            value_list_def=VLMValueList(
                oid=self.oid,
                item_refs=tuple(self.item_refs),
                description=self.description,
            ),
        )


class VLMProcessor:
    """Derive the value-level metadata view of one dataset.

    Runs mapping, value-list lookup, per-variable item-ref expansion,
    PARAM/PARAMCD synthesis, the coverage preview and validation in that order.
    A failure while expanding one variable drops that variable only.
    """

    def __init__(
        self,
        mapper: ParamcdMapper,
        item_ref_processor: ItemRefProcessor,
        validator: VLMValidator,
        logger: LoggerPort,
        *,
        table_preview_rows: int = Defaults.TABLE_PREVIEW_ROWS,
    ) -> None:
        super().__init__()
        self.mapper = mapper
        self.item_ref_processor = item_ref_processor
        self.validator = validator
        self.logger = logger
        self.table_preview_rows = table_preview_rows
        self.stage = VLMStage.INIT

    def process(self, document: ParsedDefineXML, dataset_name: str) -> ProcessedVLM:
        self._advance(VLMStage.INIT)
        self.logger.debug(
            f"Starting VLM processing for {dataset_name}: "
            f"{len(document.item_defs)} ItemDefs, "
            f"{len(document.value_list_defs)} ValueListDefs, "
            f"{len(document.where_clause_defs)} WhereClauseDefs"
        )

        paramcd_map = self.mapper.build_mapping(document, dataset_name)
        self._advance(VLMStage.MAPPING_BUILT)

        value_list_defs = find_value_list_defs(document, dataset_name, self.logger)
        self._advance(VLMStage.VALUE_LISTS_FOUND)

        drafts: dict[str, _VariableDraft] = {}
        for index, value_list_def in enumerate(value_list_defs, start=1):
            try:
                self._process_value_list(
                    value_list_def, document, paramcd_map, dataset_name, drafts
                )
            except ValueError as exc:
                self.logger.warning(
                    f"Skipping ValueListDef {value_list_def.oid} "
                    f"[{index}/{len(value_list_defs)}]: {exc}"
                )
        self._advance(VLMStage.ITEM_REFS_PROCESSED)

        self._ensure_param_variable(drafts, paramcd_map, dataset_name)
        self._advance(VLMStage.PARAM_VARIABLE_ENSURED)
        self._ensure_paramcd_variable(drafts, paramcd_map, dataset_name)
        self._advance(VLMStage.PARAMCD_VARIABLE_ENSURED)

        vlm = ProcessedVLM(
            dataset=dataset_name,
            variables=MappingProxyType(
                {name: draft.freeze(name) for name, draft in drafts.items()}
            ),
        )
        self._log_table_structure(vlm)
        self._advance(VLMStage.TABLE_STRUCTURE_LOGGED)

        report = self.validator.validate(vlm)
        self._advance(VLMStage.VALIDATED)

        vlm = replace(vlm, report=report)
        self._advance(VLMStage.DONE)
        return vlm

    def _process_value_list(
        self,
        value_list_def: ValueListDef,
        document: ParsedDefineXML,
        paramcd_map: dict[str, str],
        dataset_name: str,
        drafts: dict[str, _VariableDraft],
    ) -> None:
        if not value_list_def.oid:
            return
        variable = value_list_variable(value_list_def.oid)
        if variable is None:
            raise VLMProcessingError(
                f"Invalid ValueListDef OID format: {value_list_def.oid}"
            )

        item_refs = self.item_ref_processor.process(
            value_list_def, document, paramcd_map, dataset_name
        )
        draft = drafts.get(variable)
        if draft is None:
            draft = _VariableDraft(
                oid=value_list_def.oid, description=value_list_def.description
            )
            drafts[variable] = draft
        draft.item_refs.extend(item_refs)
        self.logger.verbose(
            f"  {variable}: {len(item_refs)} parameter-specific definitions"
        )

    def _ensure_param_variable(
        self,
        drafts: dict[str, _VariableDraft],
        paramcd_map: dict[str, str],
        dataset_name: str,
    ) -> None:
        if VLMVariables.PARAM in drafts or not paramcd_map:
            return
        drafts[VLMVariables.PARAM] = _VariableDraft(
            oid=_synthetic_oid(dataset_name, VLMVariables.PARAM),
            description=None,
            item_refs=[
                _synthetic_ref(paramcd, label, ordinal)
                for ordinal, (paramcd, label) in enumerate(paramcd_map.items(), start=1)
            ],
        )
        self.logger.debug(
            f"Added synthetic PARAM variable with {len(paramcd_map)} parameters"
        )

    def _ensure_paramcd_variable(
        self,
        drafts: dict[str, _VariableDraft],
        paramcd_map: dict[str, str],
        dataset_name: str,
    ) -> None:
        if VLMVariables.PARAMCD in drafts or not paramcd_map:
            return
        drafts[VLMVariables.PARAMCD] = _VariableDraft(
            oid=_synthetic_oid(dataset_name, VLMVariables.PARAMCD),
            description=None,
            item_refs=[
                _synthetic_ref(paramcd, paramcd, ordinal)
                for ordinal, paramcd in enumerate(paramcd_map, start=1)
            ],
        )
        self.logger.debug(
            f"Added synthetic PARAMCD variable with {len(paramcd_map)} parameter codes"
        )

    def _log_table_structure(self, vlm: ProcessedVLM) -> None:
        summary = create_vlm_summary(vlm)
        self.logger.debug(
            f"Table will have {summary.variable_count} columns and "
            f"{summary.parameter_count} parameter rows"
        )
        table = build_coverage_table(vlm)
        if table.empty:
            return
        self.logger.debug(
            table.head(self.table_preview_rows).to_string(index=False)
        )
        remaining = len(table) - self.table_preview_rows
        if remaining > 0:
            self.logger.debug(f"...and {remaining} more parameter rows")

    def _advance(self, stage: VLMStage) -> None:
        self.stage = stage
        self.logger.debug(f"VLM stage: {stage}")


def _synthetic_oid(dataset_name: str, variable: str) -> str:
    return f"{OIDPrefixes.VALUE_LIST}.{dataset_name}.{variable}"


def _synthetic_ref(paramcd: str, decode: str, ordinal: int) -> VLMItemRef:
    return VLMItemRef(
        paramcd=paramcd,
        param_info=ParamInfo(ordinal=ordinal, coded_value=paramcd, decode=decode),
        mandatory=True,
        order_number=ordinal,
    )
