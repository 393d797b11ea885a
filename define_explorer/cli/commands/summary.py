from pathlib import Path

import click
from rich.console import Console

from ..helpers import build_container, import_define_file
from ..presenters.summary import SummaryPresenter, SummaryRequest

console = Console()


@click.command()
@click.argument("define_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a define_explorer.toml config file (default: ./define_explorer.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def summary_command(define_file: Path, config_file: Path | None, verbose: int) -> None:
    """Summarize the contents of a Define-XML file.

    Prints the number of entities per collection and the list of datasets,
    marking the ones that carry value-level metadata.

    Examples:

    \b
        define-explorer summary define.xml
    """
    container = build_container(console, verbose=verbose, config_file=config_file)
    response = import_define_file(container, console, define_file)
    assert response.document is not None, "Document should be set on success"

    SummaryPresenter(console).present(
        SummaryRequest(
            file_name=response.file_name,
            document=response.document,
            vlm_dataset_class=container.config.vlm_dataset_class,
            processing_time_ms=response.processing_time_ms,
        )
    )
    container.create_logger().log_final_stats()
