from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.console import Console

    from ...application.models import LoadingState


class ProgressPresenter:
    pass

    def __init__(self, console: Console, verbose: int = 0) -> None:
        super().__init__()
        self.console = console
        self.verbose = verbose
        self.last_progress = 0
        self.updates = 0

    def update(self, state: LoadingState) -> None:
        self.last_progress = state.progress
        self.updates += 1
        if self.verbose:
            self.print_progress_line(state)

    @property
    def is_complete(self) -> bool:
        return self.last_progress >= 100

    def print_progress_line(self, state: LoadingState) -> None:
        size = f"{state.loaded_size:,}/{state.total_size:,} bytes"
        self.console.print(
            f"[dim]{state.file_name}: {state.status} ({state.progress}%, {size})[/dim]"
        )
