from __future__ import annotations

from typing import TYPE_CHECKING

from ...constants import OIDPrefixes, VLMVariables
from .dataset_naming import normalize_dataset_id

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import ItemDef, ParsedDefineXML


class ParamcdMapper:
    """Build the PARAMCD to PARAM label mapping for one dataset.

    The PARAMCD codelist is used when it yields any entries. Otherwise the
    selecting where-clause checks on PARAMCD supply the codes, each labelled
    with itself. The two sources are never merged.
    """

    def __init__(self, logger: LoggerPort) -> None:
        super().__init__()
        self.logger = logger

    def build_mapping(
        self, document: ParsedDefineXML, dataset_name: str
    ) -> dict[str, str]:
        target = normalize_dataset_id(dataset_name)
        self.logger.debug(f"Building PARAMCD to PARAM mapping for {dataset_name}")

        mapping = self._from_codelist(document, target)
        if mapping:
            self.logger.debug(f"Found {len(mapping)} parameter mappings from CodeList")
            return mapping

        mapping = self._from_where_clauses(document, target)
        if mapping:
            self.logger.debug(
                f"Found {len(mapping)} parameter mappings from WhereClauseDefs"
            )
        else:
            self.logger.debug(f"No PARAMCD to PARAM mappings found for {dataset_name}")
        return mapping

    def _from_codelist(self, document: ParsedDefineXML, target: str) -> dict[str, str]:
        mapping: dict[str, str] = {}
        item_def = self._find_paramcd_item_def(document, target)
        if item_def is None or not item_def.code_list_oid:
            return mapping
        code_list = next(
            (cl for cl in document.code_lists if cl.oid == item_def.code_list_oid),
            None,
        )
        if code_list is None:
            self.logger.warning(
                f"PARAMCD CodeList {item_def.code_list_oid} not found in document"
            )
            return mapping
        for item in code_list.code_list_items:
            decode = item.decode.translated_text if item.decode else None
            if item.coded_value and decode:
                mapping[item.coded_value] = decode
        return mapping

    @staticmethod
    def _find_paramcd_item_def(
        document: ParsedDefineXML, target: str
    ) -> ItemDef | None:
        for item_def in document.item_defs:
            parts = (item_def.oid or "").split(".")
            if (
                len(parts) >= 3
                and parts[0] == OIDPrefixes.ITEM_DEF
                and normalize_dataset_id(parts[1]) == target
                and parts[2] == VLMVariables.PARAMCD
            ):
                return item_def
        return None

    @staticmethod
    def _from_where_clauses(
        document: ParsedDefineXML, target: str
    ) -> dict[str, str]:
        mapping: dict[str, str] = {}
        for where_clause in document.where_clause_defs:
            for check in where_clause.range_checks:
                parts = check.item_oid.split(".")
                if (
                    len(parts) == 3
                    and normalize_dataset_id(parts[1]) == target
                    and parts[2] == VLMVariables.PARAMCD
                    and check.comparator in VLMVariables.SELECTING_COMPARATORS
                ):
                    for value in check.check_values:
                        mapping.setdefault(value, value)
        return mapping
