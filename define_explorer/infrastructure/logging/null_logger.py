from __future__ import annotations

from typing import TYPE_CHECKING, override

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import DefineParseSummary


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_define_parsed(self, summary: DefineParseSummary) -> None:
        return None

    @override
    def log_vlm_start(self, dataset: str) -> None:
        return None

    @override
    def log_vlm_complete(
        self, dataset: str, variable_count: int, warning_count: int
    ) -> None:
        return None

    @override
    def log_final_stats(self) -> None:
        return None
