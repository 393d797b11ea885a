from dataclasses import dataclass
import re

ComparatorType = str
SoftHardType = str

COMPARATORS: tuple[str, ...] = ("EQ", "NE", "LT", "LE", "GT", "GE", "IN", "NOTIN")
SOFT_HARD_VALUES: tuple[str, ...] = ("Soft", "Hard")


def _order_key(value: str | None) -> int:
    match = re.match(r"\s*(-?\d+)", value or "")
    return int(match.group(1)) if match else 0


@dataclass(frozen=True, slots=True)
class Study:
    oid: str | None = None
    name: str | None = None
    description: str | None = None
    protocol_name: str | None = None


@dataclass(frozen=True, slots=True)
class MetaDataVersion:
    oid: str | None = None
    name: str | None = None
    description: str | None = None
    define_version: str | None = None


@dataclass(frozen=True, slots=True)
class Standard:
    oid: str | None = None
    name: str | None = None
    type: str | None = None
    status: str | None = None
    version: str | None = None
    publishing_set: str | None = None
    comment_oid: str | None = None


@dataclass(frozen=True, slots=True)
class ItemRef:
    oid: str | None = None
    mandatory: str | None = None
    order_number: str | None = None
    method_oid: str | None = None
    role: str | None = None
    where_clause_oid: str | None = None
    key_sequence: str | None = None
    role_code_list_oid: str | None = None


@dataclass(frozen=True, slots=True)
class ItemGroup:
    oid: str | None = None
    name: str | None = None
    sas_dataset_name: str | None = None
    repeating: str | None = None
    purpose: str | None = None
    is_reference_data: str | None = None
    standard_oid: str | None = None
    structure: str | None = None
    archive_location_id: str | None = None
    comment_oid: str | None = None
    description: str | None = None
    class_name: str | None = None
    item_refs: tuple[ItemRef, ...] = ()

    @property
    def is_repeating(self) -> bool:
        return (self.repeating or "").lower() == "yes"

    def sorted_item_refs(self) -> list[ItemRef]:
        return sorted(self.item_refs, key=lambda ref: _order_key(ref.order_number))


@dataclass(frozen=True, slots=True)
class ItemDef:
    oid: str | None = None
    dataset: str | None = None
    name: str | None = None
    sas_field_name: str | None = None
    data_type: str | None = None
    length: str | None = None
    description: str | None = None
    origin_type: str | None = None
    origin: str | None = None
    origin_source: str | None = None
    code_list_oid: str | None = None
    significant_digits: str | None = None
    format: str | None = None
    has_no_data: str | None = None
    assigned_value: str | None = None
    # True when def:Common="Yes", otherwise None (never False).
    common: bool | None = None
    pages: str | None = None
    display_format: str | None = None
    comment_oid: str | None = None
    developer_notes: str | None = None

    @property
    def is_derived(self) -> bool:
        return self.origin_type == "Derived"

    @property
    def effective_data_type(self) -> str:
        data_type = (self.data_type or "").upper()
        if data_type in {"INTEGER", "FLOAT"}:
            return "numeric"
        if data_type in {"TEXT", "STRING"}:
            return "text"
        return data_type.lower() or "unknown"


@dataclass(frozen=True, slots=True)
class Method:
    oid: str | None = None
    name: str | None = None
    type: str | None = None
    description: str | None = None
    document: str | None = None
    pages: str | None = None
    translated_text: str | None = None


@dataclass(frozen=True, slots=True)
class Comment:
    oid: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Alias:
    name: str | None = None
    context: str | None = None


@dataclass(frozen=True, slots=True)
class Decode:
    translated_text: str | None = None
    lang: str | None = None


@dataclass(frozen=True, slots=True)
class CodeListItem:
    coded_value: str | None = None
    order_number: str | None = None
    rank: str | None = None
    extended_value: bool = False
    decode: Decode | None = None
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True, slots=True)
class EnumeratedItem:
    coded_value: str | None = None
    order_number: str | None = None
    extended_value: bool = False
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True, slots=True)
class CodeList:
    oid: str | None = None
    name: str | None = None
    data_type: str | None = None
    sas_format_name: str | None = None
    standard_oid: str | None = None
    is_non_standard: str | None = None
    extended_value: bool | None = None
    code_list_items: tuple[CodeListItem, ...] = ()
    enumerated_items: tuple[EnumeratedItem, ...] = ()
    aliases: tuple[Alias, ...] = ()

    @property
    def is_enumerated(self) -> bool:
        return len(self.enumerated_items) > 0

    def find_decode(self, coded_value: str) -> str | None:
        for item in self.code_list_items:
            if item.coded_value == coded_value and item.decode is not None:
                return item.decode.translated_text
        return None

    def valid_values(self) -> list[str]:
        values = [
            item.coded_value
            for item in self.code_list_items
            if item.coded_value is not None
        ]
        values.extend(
            item.coded_value
            for item in self.enumerated_items
            if item.coded_value is not None
        )
        return values


@dataclass(frozen=True, slots=True)
class Dictionary:
    oid: str | None = None
    name: str | None = None
    data_type: str | None = None
    dictionary: str | None = None
    version: str | None = None


@dataclass(frozen=True, slots=True)
class RangeCheck:
    comparator: ComparatorType = "EQ"
    soft_hard: SoftHardType = "Soft"
    item_oid: str = ""
    check_values: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class WhereClauseDef:
    oid: str
    comment_oid: str | None = None
    range_checks: tuple[RangeCheck, ...] = ()


@dataclass(frozen=True, slots=True)
class ValueListDef:
    oid: str | None = None
    item_refs: tuple[ItemRef, ...] = ()
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Document:
    id: str | None = None
    title: str | None = None
    href: str | None = None


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    display: str | None = None
    id: str | None = None
    description: str | None = None
    variables: str | None = None
    reason: str | None = None
    purpose: str | None = None
    selection_criteria: str | None = None
    join_comment: str | None = None
    documentation: str | None = None
    documentation_refs: str | None = None
    programming_context: str | None = None
    programming_code: str | None = None
    programming_document: str | None = None
    pages: str | None = None

    def variable_oids(self) -> list[str]:
        if not self.variables:
            return []
        return [part for part in re.split(r"\s*,\s*", self.variables) if part]

    @property
    def has_programming_code(self) -> bool:
        return bool(self.programming_code or self.programming_document)


@dataclass(frozen=True, slots=True)
class ParsedDefineXML:
    study: Study
    metadata: MetaDataVersion
    standards: tuple[Standard, ...] = ()
    item_groups: tuple[ItemGroup, ...] = ()
    item_defs: tuple[ItemDef, ...] = ()
    methods: tuple[Method, ...] = ()
    comments: tuple[Comment, ...] = ()
    item_refs: tuple[ItemRef, ...] = ()
    code_lists: tuple[CodeList, ...] = ()
    dictionaries: tuple[Dictionary, ...] = ()
    where_clause_defs: tuple[WhereClauseDef, ...] = ()
    value_list_defs: tuple[ValueListDef, ...] = ()
    documents: tuple[Document, ...] = ()
    analysis_results: tuple[AnalysisResult, ...] = ()

    @property
    def is_adam(self) -> bool:
        return "ADaM" in (self.metadata.oid or "")

    @property
    def is_sdtm(self) -> bool:
        return "SDTM" in (self.metadata.oid or "")

    def collection_counts(self) -> dict[str, int]:
        return {
            "Standards": len(self.standards),
            "ItemGroups": len(self.item_groups),
            "ItemDefs": len(self.item_defs),
            "ItemRefs": len(self.item_refs),
            "Methods": len(self.methods),
            "Comments": len(self.comments),
            "CodeLists": len(self.code_lists),
            "Dictionaries": len(self.dictionaries),
            "WhereClauseDefs": len(self.where_clause_defs),
            "ValueListDefs": len(self.value_list_defs),
            "Documents": len(self.documents),
            "AnalysisResults": len(self.analysis_results),
        }
