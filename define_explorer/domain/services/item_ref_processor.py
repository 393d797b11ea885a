from __future__ import annotations

from collections.abc import Mapping
import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ...constants import VLMVariables
from ..entities import (
    NON_PARAMETERIZED,
    CodelistDisplayItem,
    CodelistInfo,
    CommentInfo,
    ConditionSource,
    MethodInfo,
    OriginInfo,
    ParamInfo,
    VLMItemRef,
    VLMWhereClause,
)
from .lookup_cache import OIDLookupCache

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort
    from ..entities import (
        ItemDef,
        ItemRef,
        ParsedDefineXML,
        ValueListDef,
        WhereClauseResult,
    )
    from .where_clause_resolver import WhereClauseResolver

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_order_number(value: str | None) -> int:
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else 0


class ItemRefProcessor:
    """Expand the ItemRefs of one ValueListDef into per-parameter VLM records.

    An ItemRef without a where clause, or whose where clause selects no
    PARAMCD, applies to every known parameter. One whose where clause selects
    parameters yields one record per selected code, in source order and
    without de-duplication.
    """

    def __init__(
        self,
        resolver: WhereClauseResolver,
        logger: LoggerPort,
        cache: OIDLookupCache | None = None,
    ) -> None:
        super().__init__()
        self.resolver = resolver
        self.logger = logger
        self.cache = cache or OIDLookupCache()

    def process(
        self,
        value_list_def: ValueListDef,
        document: ParsedDefineXML,
        paramcd_map: Mapping[str, str],
        dataset_name: str,
    ) -> list[VLMItemRef]:
        self.cache.bind(document)
        records: list[VLMItemRef] = []
        if not value_list_def.item_refs:
            self.logger.debug(f"No ItemRefs found in ValueListDef {value_list_def.oid}")
            return records

        all_paramcds = [str(paramcd) for paramcd in paramcd_map]
        for index, item_ref in enumerate(value_list_def.item_refs, start=1):
            if not item_ref.oid:
                self.logger.debug(
                    f"ItemRef #{index} in {value_list_def.oid} has no ItemOID, skipping"
                )
                continue
            item_def = self.cache.item_def(item_ref.oid)
            if item_def is None:
                self.logger.warning(f"ItemDef not found for OID: {item_ref.oid}")
                continue
            records.extend(
                self._process_item_ref(
                    item_ref,
                    item_def,
                    value_list_def,
                    paramcd_map,
                    all_paramcds,
                    dataset_name,
                )
            )
        return records

    def _process_item_ref(
        self,
        item_ref: ItemRef,
        item_def: ItemDef,
        value_list_def: ValueListDef,
        paramcd_map: Mapping[str, str],
        all_paramcds: list[str],
        dataset_name: str,
    ) -> list[VLMItemRef]:
        order_number = parse_order_number(item_ref.order_number)
        shared: dict[str, Any] = {
            "method_oid": item_ref.method_oid,
            "value_list_oid": value_list_def.oid,
            "oid": item_def.oid,
            "method": self._method_info(item_ref.method_oid),
            "origin": self._origin_info(item_def),
            "codelist": self._codelist_info(item_def),
            "comment": self._comment_info(item_def),
            "item_description": item_def.description,
            "mandatory": item_ref.mandatory == VLMVariables.MANDATORY_YES,
            "order_number": order_number,
        }

        if not item_ref.where_clause_oid:
            return self._fan_out(all_paramcds, paramcd_map, order_number, shared)

        result = self._resolve(item_ref.where_clause_oid, dataset_name)
        if result is None:
            self.logger.warning(
                f"No WhereClauseResult for WhereClauseOID: {item_ref.where_clause_oid}"
            )
            return []

        shared["special_variables"] = MappingProxyType(dict(result.special_variables))
        shared["stratification_info"] = MappingProxyType(
            dict(result.stratification_variables)
        )
        if result.conditions:
            primary = result.conditions[0]
            shared["where_clause"] = VLMWhereClause(
                comparator=primary.comparator,
                check_values=primary.values,
                where_clause_oid=item_ref.where_clause_oid,
                oid=item_ref.oid or "",
                source=ConditionSource(domain=dataset_name, variable=primary.variable),
            )

        if not result.paramcds:
            return self._fan_out(all_paramcds, paramcd_map, order_number, shared)
        return [
            self._record(str(paramcd), paramcd_map, order_number, shared)
            for paramcd in result.paramcds
        ]

    def _resolve(
        self, where_clause_oid: str, dataset_name: str
    ) -> WhereClauseResult | None:
        where_clause = self.cache.where_clause(where_clause_oid)
        if where_clause is None:
            self.logger.warning(f"No WhereClauseDef found for OID: {where_clause_oid}")
            return None
        return self.resolver.resolve_def(where_clause, dataset_name)

    def _fan_out(
        self,
        all_paramcds: list[str],
        paramcd_map: Mapping[str, str],
        order_number: int,
        shared: dict[str, Any],
    ) -> list[VLMItemRef]:
        if not all_paramcds:
            return [
                VLMItemRef(
                    paramcd=NON_PARAMETERIZED, is_non_parameterized=True, **shared
                )
            ]
        return [
            self._record(paramcd, paramcd_map, order_number, shared)
            for paramcd in all_paramcds
        ]

    @staticmethod
    def _record(
        paramcd: str,
        paramcd_map: Mapping[str, str],
        order_number: int,
        shared: dict[str, Any],
    ) -> VLMItemRef:
        return VLMItemRef(
            paramcd=paramcd,
            param_info=ParamInfo(
                ordinal=order_number,
                coded_value=paramcd,
                decode=paramcd_map.get(paramcd) or paramcd,
            ),
            **shared,
        )

    def _method_info(self, method_oid: str | None) -> MethodInfo | None:
        if not method_oid:
            return None
        method = self.cache.method(method_oid)
        if method is None:
            self.logger.debug(f"MethodDef not found for OID: {method_oid}")
            return None
        return MethodInfo(
            type=method.type,
            description=method.description,
            translated_text=method.translated_text,
            document=method.document,
        )

    @staticmethod
    def _origin_info(item_def: ItemDef) -> OriginInfo | None:
        if not item_def.origin_type and not item_def.origin:
            return None
        return OriginInfo(
            type=item_def.origin_type or "",
            source=item_def.origin_source,
            description=item_def.description,
            translated_text=item_def.origin,
        )

    def _codelist_info(self, item_def: ItemDef) -> CodelistInfo | None:
        if not item_def.code_list_oid:
            return None
        code_list = self.cache.code_list(item_def.code_list_oid)
        if code_list is None:
            self.logger.debug(f"CodeList not found for OID: {item_def.code_list_oid}")
            return None
        items = [
            CodelistDisplayItem(
                coded_value=item.coded_value,
                decode=item.decode.translated_text,
                is_extended=item.extended_value,
            )
            for item in code_list.code_list_items
            if item.coded_value and item.decode and item.decode.translated_text
        ]
        # Enumerated items carry no separate decode.
        items.extend(
            CodelistDisplayItem(coded_value=item.coded_value, decode=item.coded_value)
            for item in code_list.enumerated_items
            if item.coded_value
        )
        if not items:
            return None
        return CodelistInfo(oid=code_list.oid, name=code_list.name, items=tuple(items))

    def _comment_info(self, item_def: ItemDef) -> CommentInfo | None:
        comment = self.cache.comment(item_def.comment_oid)
        if comment is None:
            return None
        return CommentInfo(oid=comment.oid, description=comment.description)
