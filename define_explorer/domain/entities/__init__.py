"""Domain entities.

Parsed Define-XML document graph, value-level metadata output and the
relationship graph.
"""

from .define_document import (
    COMPARATORS,
    SOFT_HARD_VALUES,
    Alias,
    AnalysisResult,
    CodeList,
    CodeListItem,
    Comment,
    Decode,
    Dictionary,
    Document,
    EnumeratedItem,
    ItemDef,
    ItemGroup,
    ItemRef,
    MetaDataVersion,
    Method,
    ParsedDefineXML,
    RangeCheck,
    Standard,
    Study,
    ValueListDef,
    WhereClauseDef,
)
from .graph import GraphData, GraphLink, GraphNode
from .vlm import (
    NON_PARAMETERIZED,
    CodelistDisplayItem,
    CodelistInfo,
    CommentInfo,
    Condition,
    ConditionSource,
    MethodInfo,
    OriginInfo,
    ParamInfo,
    ProcessedVLM,
    StratificationCondition,
    VLMItemRef,
    VLMSummary,
    VLMValidationIssue,
    VLMValidationReport,
    VLMValueList,
    VLMVariable,
    VLMWhereClause,
    WhereClauseResult,
)

__all__ = [
    # Define-XML document
    "COMPARATORS",
    "SOFT_HARD_VALUES",
    "Alias",
    "AnalysisResult",
    "CodeList",
    "CodeListItem",
    "Comment",
    "Decode",
    "Dictionary",
    "Document",
    "EnumeratedItem",
    "ItemDef",
    "ItemGroup",
    "ItemRef",
    "MetaDataVersion",
    "Method",
    "ParsedDefineXML",
    "RangeCheck",
    "Standard",
    "Study",
    "ValueListDef",
    "WhereClauseDef",
    # Relationship graph
    "GraphData",
    "GraphLink",
    "GraphNode",
    # Value-level metadata
    "NON_PARAMETERIZED",
    "CodelistDisplayItem",
    "CodelistInfo",
    "CommentInfo",
    "Condition",
    "ConditionSource",
    "MethodInfo",
    "OriginInfo",
    "ParamInfo",
    "ProcessedVLM",
    "StratificationCondition",
    "VLMItemRef",
    "VLMSummary",
    "VLMValidationIssue",
    "VLMValidationReport",
    "VLMValueList",
    "VLMVariable",
    "VLMWhereClause",
    "WhereClauseResult",
]
