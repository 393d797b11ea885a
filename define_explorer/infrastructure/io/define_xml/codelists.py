from __future__ import annotations

from typing import TYPE_CHECKING

from define_explorer.domain.entities import (
    Alias,
    CodeList,
    CodeListItem,
    Decode,
    Dictionary,
    EnumeratedItem,
)

from ..xml_utils import (
    DefineNamespaces,
    children_local,
    find_local,
    get_attr,
    iter_local,
    ns_attr,
    path_text,
)
from .constants import AFFIRMATIVE

if TYPE_CHECKING:
    from ..xml_utils import XmlElement


class CodeListReader:
    """Split ``CodeList`` elements into standard codelists and dictionaries.

    A codelist wrapping an ``ExternalCodeList`` is a dictionary reference;
    every other codelist carries inline values. Each element lands in exactly
    one of the two collections.
    """

    def __init__(self, namespaces: DefineNamespaces) -> None:
        super().__init__()
        self._ns = namespaces

    def read_all(
        self, metadata: XmlElement
    ) -> tuple[tuple[CodeList, ...], tuple[Dictionary, ...]]:
        code_lists: list[CodeList] = []
        dictionaries: list[Dictionary] = []
        for element in iter_local(metadata, "CodeList"):
            external = find_local(element, "ExternalCodeList")
            if external is None:
                code_lists.append(self._read_code_list(element))
            else:
                dictionaries.append(self._read_dictionary(element, external))
        return tuple(code_lists), tuple(dictionaries)

    def _read_code_list(self, element: XmlElement) -> CodeList:
        return CodeList(
            oid=get_attr(element, "OID") or None,
            name=get_attr(element, "Name") or None,
            data_type=get_attr(element, "DataType") or None,
            sas_format_name=get_attr(element, "SASFormatName") or None,
            standard_oid=self._ns.def_attr(element, "StandardOID") or None,
            is_non_standard=self._ns.def_attr(element, "IsNonStandard") or None,
            extended_value=(
                True
                if self._ns.def_attr(element, "ExtendedValue") == AFFIRMATIVE
                else None
            ),
            code_list_items=tuple(
                self._read_item(item) for item in iter_local(element, "CodeListItem")
            ),
            enumerated_items=tuple(
                self._read_enumerated(item)
                for item in iter_local(element, "EnumeratedItem")
            ),
            aliases=tuple(
                self._read_alias(alias) for alias in children_local(element, "Alias")
            ),
        )

    def _read_item(self, element: XmlElement) -> CodeListItem:
        decode_element = find_local(element, "Decode")
        decode = None
        if decode_element is not None:
            text_element = find_local(decode_element, "TranslatedText")
            decode = Decode(
                translated_text=path_text(decode_element, "TranslatedText"),
                lang=ns_attr(text_element, self._ns.xml, "lang"),
            )
        return CodeListItem(
            coded_value=get_attr(element, "CodedValue"),
            order_number=get_attr(element, "OrderNumber"),
            rank=get_attr(element, "Rank"),
            extended_value=self._ns.def_attr(element, "ExtendedValue") == AFFIRMATIVE,
            decode=decode,
            aliases=tuple(
                self._read_alias(alias) for alias in iter_local(element, "Alias")
            ),
        )

    def _read_enumerated(self, element: XmlElement) -> EnumeratedItem:
        return EnumeratedItem(
            coded_value=get_attr(element, "CodedValue"),
            order_number=get_attr(element, "OrderNumber"),
            extended_value=self._ns.def_attr(element, "ExtendedValue") == AFFIRMATIVE,
            aliases=tuple(
                self._read_alias(alias) for alias in iter_local(element, "Alias")
            ),
        )

    @staticmethod
    def _read_alias(element: XmlElement) -> Alias:
        return Alias(name=get_attr(element, "Name"), context=get_attr(element, "Context"))

    @staticmethod
    def _read_dictionary(element: XmlElement, external: XmlElement) -> Dictionary:
        return Dictionary(
            oid=get_attr(element, "OID") or None,
            name=get_attr(element, "Name") or None,
            data_type=get_attr(element, "DataType") or None,
            dictionary=get_attr(external, "Dictionary") or None,
            version=get_attr(external, "Version") or None,
        )
