from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ...domain.entities import ParsedDefineXML
    from ..models import DefineParseSummary


@runtime_checkable
class DefineReaderPort(Protocol):
    pass

    def parse(self, xml_text: str) -> ParsedDefineXML: ...

    def parse_file(self, path: Path, encoding: str = "utf-8") -> ParsedDefineXML: ...


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_define_parsed(self, summary: DefineParseSummary) -> None: ...

    def log_vlm_start(self, dataset: str) -> None: ...

    def log_vlm_complete(
        self, dataset: str, variable_count: int, warning_count: int
    ) -> None: ...

    def log_final_stats(self) -> None: ...
