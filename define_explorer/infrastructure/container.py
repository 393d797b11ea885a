from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.define_import_use_case import DefineImportUseCase
from ..application.vlm_use_case import VLMUseCase
from ..config import ExplorerConfig
from ..domain.services.item_ref_processor import ItemRefProcessor
from ..domain.services.lookup_cache import OIDLookupCache
from ..domain.services.paramcd_mapper import ParamcdMapper
from ..domain.services.vlm_processor import VLMProcessor
from ..domain.services.vlm_validator import VLMValidator
from ..domain.services.where_clause_resolver import WhereClauseResolver
from .io.define_xml.parser import DefineXMLParser
from .logging.console_logger import ConsoleLogger
from .logging.null_logger import NullLogger
from .repositories.dataset_repository import InMemoryDatasetRepository
from .repositories.preferences_repository import JsonPreferencesRepository

if TYPE_CHECKING:
    from ..application.ports.repositories import (
        DatasetRepositoryPort,
        PreferencesRepositoryPort,
    )
    from ..application.ports.services import DefineReaderPort, LoggerPort


class DependencyContainer:
    pass

    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        config: ExplorerConfig | None = None,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console()
        self.use_null_logger = use_null_logger
        self.config = config or ExplorerConfig()
        self._logger_instance: LoggerPort | None = None
        self._define_reader_instance: DefineReaderPort | None = None
        self._dataset_repository_instance: DatasetRepositoryPort | None = None
        self._preferences_repository_instance: PreferencesRepositoryPort | None = None
        self._lookup_cache_instance: OIDLookupCache | None = None
        self._paramcd_mapper_instance: ParamcdMapper | None = None
        self._where_clause_resolver_instance: WhereClauseResolver | None = None
        self._item_ref_processor_instance: ItemRefProcessor | None = None
        self._vlm_validator_instance: VLMValidator | None = None
        self._vlm_processor_instance: VLMProcessor | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_define_reader(self) -> DefineReaderPort:
        if self._define_reader_instance is None:
            self._define_reader_instance = DefineXMLParser(logger=self.create_logger())
        return self._define_reader_instance

    def create_dataset_repository(self) -> DatasetRepositoryPort:
        if self._dataset_repository_instance is None:
            self._dataset_repository_instance = InMemoryDatasetRepository()
        return self._dataset_repository_instance

    def create_preferences_repository(self) -> PreferencesRepositoryPort:
        if self._preferences_repository_instance is None:
            self._preferences_repository_instance = JsonPreferencesRepository(
                self.config.preferences_file
            )
        return self._preferences_repository_instance

    def create_lookup_cache(self) -> OIDLookupCache:
        if self._lookup_cache_instance is None:
            self._lookup_cache_instance = OIDLookupCache()
        return self._lookup_cache_instance

    def create_paramcd_mapper(self) -> ParamcdMapper:
        if self._paramcd_mapper_instance is None:
            self._paramcd_mapper_instance = ParamcdMapper(logger=self.create_logger())
        return self._paramcd_mapper_instance

    def create_where_clause_resolver(self) -> WhereClauseResolver:
        if self._where_clause_resolver_instance is None:
            self._where_clause_resolver_instance = WhereClauseResolver(
                logger=self.create_logger()
            )
        return self._where_clause_resolver_instance

    def create_item_ref_processor(self) -> ItemRefProcessor:
        if self._item_ref_processor_instance is None:
            self._item_ref_processor_instance = ItemRefProcessor(
                resolver=self.create_where_clause_resolver(),
                logger=self.create_logger(),
                cache=self.create_lookup_cache(),
            )
        return self._item_ref_processor_instance

    def create_vlm_validator(self) -> VLMValidator:
        if self._vlm_validator_instance is None:
            self._vlm_validator_instance = VLMValidator(
                logger=self.create_logger(),
                missing_parameter_preview=self.config.missing_parameter_preview,
            )
        return self._vlm_validator_instance

    def create_vlm_processor(self) -> VLMProcessor:
        if self._vlm_processor_instance is None:
            self._vlm_processor_instance = VLMProcessor(
                mapper=self.create_paramcd_mapper(),
                item_ref_processor=self.create_item_ref_processor(),
                validator=self.create_vlm_validator(),
                logger=self.create_logger(),
                table_preview_rows=self.config.table_preview_rows,
            )
        return self._vlm_processor_instance

    def create_define_import_use_case(self) -> DefineImportUseCase:
        return DefineImportUseCase(
            logger=self.create_logger(),
            reader=self.create_define_reader(),
            dataset_repository=self.create_dataset_repository(),
            config=self.config,
        )

    def create_vlm_use_case(self) -> VLMUseCase:
        return VLMUseCase(
            processor=self.create_vlm_processor(),
            logger=self.create_logger(),
            config=self.config,
        )
