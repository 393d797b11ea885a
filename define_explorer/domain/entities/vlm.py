from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

NON_PARAMETERIZED = "*"


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Condition:
    variable: str
    comparator: str
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class StratificationCondition:
    comparator: str
    values: tuple[str, ...]


@dataclass(slots=True)
class WhereClauseResult:
    paramcds: list[str] = field(default_factory=list)
    conditions: list[Condition] = field(default_factory=list)
    stratification_variables: dict[str, StratificationCondition] = field(
        default_factory=dict
    )
    special_variables: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ParamInfo:
    ordinal: int
    coded_value: str
    decode: str
    is_external: bool = False


@dataclass(frozen=True, slots=True)
class ConditionSource:
    domain: str
    variable: str


@dataclass(frozen=True, slots=True)
class VLMWhereClause:
    comparator: str
    check_values: tuple[str, ...]
    where_clause_oid: str
    oid: str
    source: ConditionSource


@dataclass(frozen=True, slots=True)
class MethodInfo:
    type: str | None = None
    description: str | None = None
    translated_text: str | None = None
    document: str | None = None


@dataclass(frozen=True, slots=True)
class OriginInfo:
    type: str
    source: str | None = None
    description: str | None = None
    translated_text: str | None = None


@dataclass(frozen=True, slots=True)
class CodelistDisplayItem:
    coded_value: str
    decode: str
    is_extended: bool = False


@dataclass(frozen=True, slots=True)
class CodelistInfo:
    oid: str | None
    name: str | None
    items: tuple[CodelistDisplayItem, ...]


@dataclass(frozen=True, slots=True)
class CommentInfo:
    oid: str | None
    description: str | None


@dataclass(frozen=True, slots=True)
class VLMItemRef:
    paramcd: str
    param_info: ParamInfo | None = None
    where_clause: VLMWhereClause | None = None
    method_oid: str | None = None
    value_list_oid: str | None = None
    oid: str | None = None
    method: MethodInfo | None = None
    origin: OriginInfo | None = None
    codelist: CodelistInfo | None = None
    comment: CommentInfo | None = None
    item_description: str | None = None
    mandatory: bool = False
    order_number: int = 0
    is_non_parameterized: bool = False
    special_variables: Mapping[str, str] = field(default_factory=_empty_mapping)
    stratification_info: Mapping[str, StratificationCondition] | None = None

    @property
    def is_parameterized(self) -> bool:
        return self.paramcd != NON_PARAMETERIZED


@dataclass(frozen=True, slots=True)
class VLMValueList:
    oid: str
    item_refs: tuple[VLMItemRef, ...]
    description: str | None = None


@dataclass(frozen=True, slots=True)
class VLMVariable:
    name: str
    value_list_def: VLMValueList

    @property
    def item_refs(self) -> tuple[VLMItemRef, ...]:
        return self.value_list_def.item_refs

    def covered_paramcds(self) -> set[str]:
        return {ref.paramcd for ref in self.item_refs if ref.is_parameterized}


@dataclass(frozen=True, slots=True)
class VLMValidationIssue:
    code: str
    message: str
    variable: str | None = None
    details: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class VLMValidationReport:
    issues: tuple[VLMValidationIssue, ...] = ()

    @property
    def warning_count(self) -> int:
        return len(self.issues)

    def issues_for(self, code: str) -> list[VLMValidationIssue]:
        return [issue for issue in self.issues if issue.code == code]


@dataclass(frozen=True, slots=True)
class ProcessedVLM:
    dataset: str
    variables: Mapping[str, VLMVariable]
    report: VLMValidationReport = field(default_factory=VLMValidationReport)

    @property
    def warning_count(self) -> int:
        return self.report.warning_count

    def variable_names(self) -> list[str]:
        return list(self.variables.keys())

    def all_paramcds(self) -> list[str]:
        paramcd_variable = self.variables.get("PARAMCD")
        if paramcd_variable is None:
            return []
        seen: dict[str, None] = {}
        for ref in paramcd_variable.item_refs:
            if ref.is_parameterized:
                seen.setdefault(ref.paramcd, None)
        return list(seen)

    def has_non_parameterized(self) -> bool:
        return any(
            ref.is_non_parameterized
            for variable in self.variables.values()
            for ref in variable.item_refs
        )


@dataclass(frozen=True, slots=True)
class VLMSummary:
    dataset: str
    variable_count: int
    variables: tuple[str, ...]
    parameter_count: int
    has_non_parameterized_data: bool
    parameters: tuple[str, ...]
