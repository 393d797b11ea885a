"""Helper functions shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from ..application.models import ImportDefineRequest
from ..config import ConfigLoader
from ..infrastructure.container import DependencyContainer
from .presenters.progress import ProgressPresenter

if TYPE_CHECKING:
    from rich.console import Console

    from ..application.models import ImportDefineResponse


def build_container(
    console: Console, *, verbose: int, config_file: Path | None
) -> DependencyContainer:
    config = ConfigLoader.load(config_file=config_file)
    return DependencyContainer(verbose=verbose, console=console, config=config)


def import_define_file(
    container: DependencyContainer, console: Console, define_file: Path
) -> ImportDefineResponse:
    """Parse ``define_file`` through the import use case or abort the command."""
    use_case = container.create_define_import_use_case()
    progress = ProgressPresenter(console, verbose=container.verbose)
    response = use_case.execute(
        ImportDefineRequest(define_file=define_file, progress_callback=progress.update)
    )
    if not response.success or response.document is None:
        raise click.ClickException(
            f"Could not load {define_file.name}: {response.error or 'unknown error'}"
        )
    return response
