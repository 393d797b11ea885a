from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.services.dataset_naming import list_vlm_datasets

if TYPE_CHECKING:
    from ..config import ExplorerConfig
    from ..domain.entities import ParsedDefineXML, ProcessedVLM
    from ..domain.services.vlm_processor import VLMProcessor
    from .ports.services import LoggerPort


class VLMUseCase:
    """Build the value-level metadata view for one dataset of a parsed document."""

    def __init__(
        self,
        processor: VLMProcessor,
        logger: LoggerPort,
        config: ExplorerConfig,
    ) -> None:
        super().__init__()
        self.processor = processor
        self.logger = logger
        self.config = config

    def execute(self, document: ParsedDefineXML, dataset_name: str) -> ProcessedVLM:
        self.logger.log_vlm_start(dataset_name)
        vlm = self.processor.process(document, dataset_name)
        self.logger.log_vlm_complete(
            dataset_name, len(vlm.variables), vlm.warning_count
        )
        return vlm

    def available_datasets(self, document: ParsedDefineXML) -> list[str]:
        return list_vlm_datasets(document, self.config.vlm_dataset_class)
