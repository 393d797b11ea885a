from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from ..domain.entities import GraphData, ParsedDefineXML


DEFAULT_DETAIL_COLUMNS: tuple[str, ...] = ("Name", "Label", "Type")


def _empty_counts() -> dict[str, int]:
    return {}


@dataclass(frozen=True, slots=True)
class LoadingState:
    status: str
    file_name: str
    progress: int
    loaded_size: int
    total_size: int


ProgressCallback = Callable[[LoadingState], None]


@dataclass(frozen=True, slots=True)
class FileValidationResult:
    valid: bool
    error: str | None = None


@dataclass(slots=True)
class DefineDetails:
    num_rows: int
    num_columns: int
    columns: tuple[str, ...] = DEFAULT_DETAIL_COLUMNS
    collection_counts: dict[str, int] = field(default_factory=_empty_counts)


@dataclass(slots=True)
class DefineParseSummary:
    file_name: str
    study_name: str | None
    define_version: str | None
    is_adam: bool
    is_sdtm: bool
    collection_counts: dict[str, int] = field(default_factory=_empty_counts)


@dataclass(slots=True)
class DatasetRecord:
    file_name: str
    document: ParsedDefineXML
    details: DefineDetails
    graph: GraphData | None = None
    is_adam: bool = False
    is_sdtm: bool = False
    file_size: int = 0
    processing_time_ms: float = 0.0


@dataclass(slots=True)
class ImportDefineRequest:
    define_file: Path
    progress_callback: ProgressCallback | None = None
    store_result: bool = True


@dataclass(slots=True)
class ImportDefineResponse:
    success: bool = True
    file_name: str = ""
    document: ParsedDefineXML | None = None
    graph: GraphData | None = None
    details: DefineDetails | None = None
    is_adam: bool = False
    is_sdtm: bool = False
    processing_time_ms: float = 0.0
    error: str | None = None
