"""Domain services.

Business logic services that operate on domain entities.
"""

from .dataset_naming import (
    find_dataset_by_name,
    get_display_name,
    is_vlm_eligible,
    list_vlm_datasets,
    normalize_dataset_id,
)
from .graph_builder import build_relationship_graph
from .item_ref_processor import ItemRefProcessor
from .lookup_cache import OIDLookupCache
from .paramcd_mapper import ParamcdMapper
from .value_list_finder import find_value_list_defs
from .vlm_processor import VLMProcessingError, VLMProcessor, VLMStage
from .vlm_table import build_coverage_table, coverage_by_variable, create_vlm_summary
from .vlm_validator import VLMValidator
from .where_clause_resolver import WhereClauseResolver

__all__ = [
    # Dataset naming
    "find_dataset_by_name",
    "get_display_name",
    "is_vlm_eligible",
    "list_vlm_datasets",
    "normalize_dataset_id",
    # Relationship graph
    "build_relationship_graph",
    # VLM pipeline
    "ItemRefProcessor",
    "OIDLookupCache",
    "ParamcdMapper",
    "VLMProcessingError",
    "VLMProcessor",
    "VLMStage",
    "VLMValidator",
    "WhereClauseResolver",
    "find_value_list_defs",
    # Coverage table
    "build_coverage_table",
    "coverage_by_variable",
    "create_vlm_summary",
]
