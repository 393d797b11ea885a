from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, override

from rich.console import Console

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import DefineParseSummary


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    file_name: str = ""
    dataset: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


def _empty_stats() -> dict[str, int]:
    return {
        "files_parsed": 0,
        "datasets_processed": 0,
        "item_refs": 0,
        "warnings": 0,
        "errors": 0,
    }


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console()
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = _empty_stats()

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{message}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{message}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{message}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {message}")

    @override
    def log_define_parsed(self, summary: DefineParseSummary) -> None:
        self.set_context(file_name=summary.file_name)
        self._stats["files_parsed"] += 1
        self._stats["item_refs"] += summary.collection_counts.get("ItemRefs", 0)
        standard = "ADaM" if summary.is_adam else "SDTM" if summary.is_sdtm else ""
        header = f"[bold]Parsed {summary.file_name}[/bold]"
        if standard:
            header += f" [dim]({standard})[/dim]"
        self.console.print(header)
        self.verbose(f"Study: {summary.study_name or 'unknown'}")
        self.verbose(f"Define-XML version: {summary.define_version or 'unknown'}")
        if self.verbosity >= LogLevel.VERBOSE:
            for name, count in summary.collection_counts.items():
                self.verbose(f"  {name}: {count:,}")

    @override
    def log_vlm_start(self, dataset: str) -> None:
        self.set_context(dataset=dataset, operation="vlm")
        self.verbose(f"Processing value-level metadata for {dataset}")

    @override
    def log_vlm_complete(
        self, dataset: str, variable_count: int, warning_count: int
    ) -> None:
        self._stats["datasets_processed"] += 1
        msg = f"{dataset}: {variable_count} VLM variables"
        if warning_count:
            msg += f" [yellow]({warning_count} validation warnings)[/yellow]"
        self.verbose(msg)

    @override
    def log_final_stats(self) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            self.console.print()
            self.console.print("[dim]Processing Statistics:[/dim]")
            self.console.print(
                f"[dim]  Files parsed: {self._stats['files_parsed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Datasets processed: {self._stats['datasets_processed']}[/dim]"
            )
            self.console.print(
                f"[dim]  Item references: {self._stats['item_refs']:,}[/dim]"
            )
            if self._stats["warnings"] > 0:
                self.console.print(
                    f"[dim yellow]  Warnings: {self._stats['warnings']}[/dim yellow]"
                )
            if self._stats["errors"] > 0:
                self.console.print(
                    f"[dim red]  Errors: {self._stats['errors']}[/dim red]"
                )

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = _empty_stats()

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.dataset:
            parts.append(self._context.dataset)
        if self._context.operation:
            parts.append(self._context.operation)
        return f"[{':'.join(parts)}] " if parts else ""
