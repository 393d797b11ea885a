"""Rich rendering of a processed VLM structure.

The coverage grid mirrors :func:`build_coverage_table`: one row per parameter
code, one column per VLM variable, with hidden variables removed before
rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from ...constants import CoverageMarkers
from ...domain.services.vlm_table import (
    build_coverage_table,
    coverage_by_variable,
    hide_columns,
)

if TYPE_CHECKING:
    import pandas as pd
    from rich.console import Console

    from ...domain.entities import ProcessedVLM


def _no_hidden() -> frozenset[str]:
    return frozenset()


@dataclass(frozen=True, slots=True)
class VLMViewRequest:
    vlm: ProcessedVLM
    hidden_columns: frozenset[str] = field(default_factory=_no_hidden)
    show_coverage: bool = False


class VLMPresenter:
    pass

    def __init__(self, console: Console) -> None:
        super().__init__()
        self.console = console

    def present(self, request: VLMViewRequest) -> None:
        vlm = request.vlm
        self.console.print()
        if not vlm.variables:
            self.console.print(
                f"[yellow]No value-level metadata found for {escape(vlm.dataset)}[/yellow]"
            )
            return

        table = hide_columns(build_coverage_table(vlm), request.hidden_columns)
        self.console.print(
            self._build_grid(table, title=f"Value-Level Metadata: {vlm.dataset}")
        )
        hidden = sorted(
            name for name in request.hidden_columns if name in vlm.variables
        )
        if hidden:
            self.console.print(
                f"[dim]Hidden columns: {escape(', '.join(hidden))}[/dim]"
            )

        if request.show_coverage:
            self.console.print()
            self.console.print(self._build_coverage_table(coverage_by_variable(vlm)))

        self._print_warnings(vlm)

    @staticmethod
    def _build_grid(table: pd.DataFrame, *, title: str) -> Table:
        grid = Table(
            title=escape(title),
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        for index, column in enumerate(table.columns):
            if index < 2:
                grid.add_column(escape(str(column)), style="cyan", no_wrap=index == 0)
            else:
                grid.add_column(escape(str(column)), justify="center", no_wrap=True)
        for row in table.itertuples(index=False):
            grid.add_row(*(_render_cell(str(value)) for value in row))
        return grid

    @staticmethod
    def _build_coverage_table(coverage: pd.DataFrame) -> Table:
        table = Table(
            title="Parameter Coverage",
            show_header=True,
            header_style="bold cyan",
            border_style="bright_blue",
            title_style="bold magenta",
        )
        table.add_column("Variable", style="cyan", no_wrap=True)
        table.add_column("Coverage %", justify="right", style="yellow", no_wrap=True)
        table.add_column("Covered", justify="right", no_wrap=True)
        table.add_column("Total", justify="right", no_wrap=True)
        for record in coverage.to_dict(orient="records"):
            table.add_row(
                escape(str(record["Variable"])),
                f"{record['Coverage %']:.1f}",
                str(record["Covered Parameters"]),
                str(record["Total Parameters"]),
            )
        return table

    def _print_warnings(self, vlm: ProcessedVLM) -> None:
        if not vlm.report.issues:
            self.console.print("\n[green]✓[/green] No validation warnings")
            return
        self.console.print(
            f"\n[bold yellow]Validation warnings ({vlm.warning_count}):[/bold yellow]"
        )
        for issue in vlm.report.issues:
            self.console.print(f"  [yellow]⚠[/yellow] {escape(issue.message)}")


def _render_cell(value: str) -> str:
    if value == CoverageMarkers.COVERED:
        return f"[green]{value}[/green]"
    if value == CoverageMarkers.MISSING:
        return f"[dim]{value}[/dim]"
    return escape(value)
