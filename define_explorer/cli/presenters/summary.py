from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from ...domain.services.dataset_naming import get_display_name, is_vlm_eligible

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from ...domain.entities import ItemGroup, ParsedDefineXML


@dataclass(frozen=True, slots=True)
class _DatasetRow:
    name: str
    label: str
    class_name: str
    structure: str
    variables: int
    repeating: bool
    has_vlm: bool


@dataclass(frozen=True, slots=True)
class SummaryRequest:
    file_name: str
    document: ParsedDefineXML
    vlm_dataset_class: str
    processing_time_ms: float = 0.0


class SummaryPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: SummaryRequest) -> None:
        document = request.document
        self.console.print()
        self._print_header(request)
        self.console.print()
        self.console.print(self._build_counts_table(document))
        self.console.print()
        rows = self._dataset_rows(document.item_groups, request.vlm_dataset_class)
        self.console.print(self._build_dataset_table(rows))
        vlm_count = sum(1 for row in rows if row.has_vlm)
        if vlm_count:
            self.console.print(
                f"\n[bold]{vlm_count}[/bold] dataset(s) carry value-level metadata. "
                "Use [cyan]define-explorer vlm --dataset NAME[/cyan] to inspect them."
            )

    def _print_header(self, request: SummaryRequest) -> None:
        document = request.document
        standard = (
            "ADaM" if document.is_adam else "SDTM" if document.is_sdtm else "Unknown"
        )
        self.console.print(f"[bold magenta]{escape(request.file_name)}[/bold magenta]")
        self.console.print(f"  Study: {escape(document.study.name or '-')}")
        self.console.print(
            f"  Protocol: {escape(document.study.protocol_name or '-')}"
        )
        self.console.print(f"  Standard: {standard}")
        self.console.print(
            f"  Define-XML version: {escape(document.metadata.define_version or '-')}"
        )
        if request.processing_time_ms:
            self.console.print(
                f"  [dim]Parsed in {request.processing_time_ms:,.0f} ms[/dim]"
            )

    @staticmethod
    def _build_counts_table(document: ParsedDefineXML) -> Table:
        table = Table(
            title="Define-XML Contents",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Collection", style="cyan", no_wrap=True)
        table.add_column("Count", justify="right", style="yellow", no_wrap=True)
        for name, count in document.collection_counts().items():
            table.add_row(name, f"{count:,}")
        return table

    @staticmethod
    def _dataset_rows(
        groups: Sequence[ItemGroup], vlm_dataset_class: str
    ) -> list[_DatasetRow]:
        return [
            _DatasetRow(
                name=get_display_name(group),
                label=group.description or "",
                class_name=group.class_name or "",
                structure=group.structure or "",
                variables=len(group.item_refs),
                repeating=group.is_repeating,
                has_vlm=is_vlm_eligible(group, vlm_dataset_class),
            )
            for group in groups
        ]

    @staticmethod
    def _build_dataset_table(rows: Sequence[_DatasetRow]) -> Table:
        table = Table(
            title="Datasets",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("Label", style="white", overflow="fold", ratio=3)
        table.add_column("Class", style="dim", overflow="fold", ratio=2)
        table.add_column("Variables", justify="right", style="yellow", no_wrap=True)
        table.add_column("Repeating", justify="center", no_wrap=True)
        table.add_column("VLM", justify="center", style="green", no_wrap=True)
        for row in rows:
            table.add_row(
                escape(row.name),
                escape(row.label),
                escape(row.class_name),
                str(row.variables),
                "Yes" if row.repeating else "No",
                "✓" if row.has_vlm else "",
            )
        return table
