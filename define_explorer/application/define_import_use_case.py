"""Define-XML import use case.

Validates a candidate file, parses it, derives the relationship graph and
summary details, and stores the result in the dataset repository. Progress is
reported through an optional callback so callers can drive a progress bar.
"""

from __future__ import annotations

from pathlib import Path
import time
from typing import TYPE_CHECKING

from ..domain.services.graph_builder import build_relationship_graph
from .models import (
    DatasetRecord,
    DefineDetails,
    DefineParseSummary,
    FileValidationResult,
    ImportDefineResponse,
    LoadingState,
)

if TYPE_CHECKING:
    from ..config import ExplorerConfig
    from ..domain.entities import GraphData, ParsedDefineXML
    from .models import ImportDefineRequest, ProgressCallback
    from .ports.repositories import DatasetRepositoryPort
    from .ports.services import DefineReaderPort, LoggerPort

PROGRESS_START = 0
PROGRESS_PARSING = 30
PROGRESS_GRAPH = 70
PROGRESS_STORING = 90
PROGRESS_DONE = 100

BYTES_PER_MB = 1024 * 1024


class DefineImportUseCase:
    pass

    def __init__(
        self,
        logger: LoggerPort,
        reader: DefineReaderPort,
        dataset_repository: DatasetRepositoryPort,
        config: ExplorerConfig,
    ) -> None:
        super().__init__()
        self.logger = logger
        self.reader = reader
        self.dataset_repository = dataset_repository
        self.config = config

    def validate_file(self, path: Path) -> FileValidationResult:
        if path.suffix.lower() not in self.config.allowed_extensions:
            allowed = ", ".join(self.config.allowed_extensions)
            return FileValidationResult(
                valid=False,
                error=f"Unsupported file type: {path.name}. Allowed: {allowed}",
            )
        if not path.is_file():
            return FileValidationResult(valid=False, error=f"File not found: {path}")
        size = path.stat().st_size
        if size > self.config.max_file_size_bytes:
            return FileValidationResult(
                valid=False,
                error=(
                    f"File too large: {size / BYTES_PER_MB:.1f} MB exceeds the "
                    f"{self.config.max_file_size_mb} MB limit"
                ),
            )
        return FileValidationResult(valid=True)

    def execute(self, request: ImportDefineRequest) -> ImportDefineResponse:
        path = Path(request.define_file)
        response = ImportDefineResponse(file_name=path.name)

        validation = self.validate_file(path)
        if not validation.valid:
            response.success = False
            response.error = validation.error
            self.logger.error(f"{path.name}: {validation.error}")
            return response

        started = time.perf_counter()
        total_size = path.stat().st_size
        progress = _ProgressReporter(request.progress_callback, path.name, total_size)

        try:
            progress.report("Reading file", PROGRESS_START, loaded_size=0)
            progress.report("Parsing Define-XML", PROGRESS_PARSING)
            document = self.reader.parse_file(path)
        except Exception as exc:
            response.success = False
            response.error = str(exc)
            self.logger.error(f"Failed to parse {path.name}: {exc}")
            return response

        progress.report("Building relationship graph", PROGRESS_GRAPH)
        graph = self._build_graph(document)

        progress.report("Storing results", PROGRESS_STORING)
        details = DefineDetails(
            num_rows=len(document.item_groups),
            num_columns=len(document.item_defs),
            collection_counts=document.collection_counts(),
        )
        processing_time_ms = (time.perf_counter() - started) * 1000
        self.logger.log_define_parsed(
            DefineParseSummary(
                file_name=path.name,
                study_name=document.study.name,
                define_version=document.metadata.define_version,
                is_adam=document.is_adam,
                is_sdtm=document.is_sdtm,
                collection_counts=details.collection_counts,
            )
        )
        if request.store_result:
            self.dataset_repository.add_dataset(
                DatasetRecord(
                    file_name=path.name,
                    document=document,
                    details=details,
                    graph=graph,
                    is_adam=document.is_adam,
                    is_sdtm=document.is_sdtm,
                    file_size=total_size,
                    processing_time_ms=processing_time_ms,
                )
            )
        progress.report("Complete", PROGRESS_DONE)

        response.document = document
        response.graph = graph
        response.details = details
        response.is_adam = document.is_adam
        response.is_sdtm = document.is_sdtm
        response.processing_time_ms = processing_time_ms
        return response

    def _build_graph(self, document: ParsedDefineXML) -> GraphData | None:
        try:
            return build_relationship_graph(document)
        except Exception as exc:
            self.logger.error(f"Failed to build relationship graph: {exc}")
            return None


class _ProgressReporter:
    def __init__(
        self, callback: ProgressCallback | None, file_name: str, total_size: int
    ) -> None:
        super().__init__()
        self.callback = callback
        self.file_name = file_name
        self.total_size = total_size

    def report(self, status: str, progress: int, loaded_size: int | None = None) -> None:
        if self.callback is None:
            return
        self.callback(
            LoadingState(
                status=status,
                file_name=self.file_name,
                progress=progress,
                loaded_size=self.total_size if loaded_size is None else loaded_size,
                total_size=self.total_size,
            )
        )
