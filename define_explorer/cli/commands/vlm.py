"""VLM command - show the value-level metadata of one dataset.

This module is a thin adapter between the Click CLI and the VLMUseCase:
1. Loading the Define-XML file through the import use case
2. Resolving the dataset name against the VLM-eligible datasets
3. Applying the persisted hidden-column preferences
4. Rendering the coverage grid and validation warnings
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import click
from rich.console import Console

from ...domain.services.dataset_naming import normalize_dataset_id
from ..helpers import build_container, import_define_file
from ..presenters.vlm import VLMPresenter, VLMViewRequest

if TYPE_CHECKING:
    from ...application.ports.repositories import PreferencesRepositoryPort

console = Console()

HIDDEN_COLUMNS_KEY = "hidden_columns"


@dataclass(frozen=True)
class VLMCommandOptions:
    dataset: str | None
    hide: tuple[str, ...]
    show: tuple[str, ...]
    reset_hidden: bool
    coverage: bool
    config_file: Path | None
    verbose: int

    @classmethod
    def from_kwargs(cls, options: dict[str, object]) -> VLMCommandOptions:
        return cls(
            dataset=cast("str | None", options.get("dataset")),
            hide=cast("tuple[str, ...]", options.get("hide") or ()),
            show=cast("tuple[str, ...]", options.get("show") or ()),
            reset_hidden=cast("bool", options["reset_hidden"]),
            coverage=cast("bool", options["coverage"]),
            config_file=cast("Path | None", options.get("config_file")),
            verbose=cast("int", options["verbose"]),
        )


class HiddenColumnStore:
    """Per-dataset hidden VLM columns persisted in the preferences file."""

    def __init__(self, repository: PreferencesRepositoryPort) -> None:
        super().__init__()
        self.repository = repository

    def get(self, dataset: str) -> set[str]:
        hidden = self._all(self.repository.load()).get(normalize_dataset_id(dataset))
        return {str(name).upper() for name in hidden or ()}

    def update(
        self,
        dataset: str,
        *,
        hide: tuple[str, ...] = (),
        show: tuple[str, ...] = (),
        reset: bool = False,
    ) -> set[str]:
        preferences = self.repository.load()
        all_hidden = self._all(preferences)
        key = normalize_dataset_id(dataset)
        hidden: set[str] = set()
        if not reset:
            hidden.update(str(name).upper() for name in all_hidden.get(key) or ())
        hidden.update(name.upper() for name in hide)
        hidden.difference_update(name.upper() for name in show)
        if hidden:
            all_hidden[key] = hidden
        else:
            all_hidden.pop(key, None)
        preferences[HIDDEN_COLUMNS_KEY] = all_hidden
        self.repository.save(preferences)
        return hidden

    @staticmethod
    def _all(preferences: dict[str, Any]) -> dict[str, Any]:
        value = preferences.get(HIDDEN_COLUMNS_KEY)
        if isinstance(value, dict):
            return cast("dict[str, Any]", value)
        return {}


@click.command()
@click.argument("define_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--dataset",
    "-d",
    help="Dataset to inspect (e.g. ADLB); lists the available datasets when omitted",
)
@click.option(
    "--hide",
    multiple=True,
    metavar="VARIABLE",
    help="Hide a variable column; remembered for this dataset (repeatable)",
)
@click.option(
    "--show",
    multiple=True,
    metavar="VARIABLE",
    help="Show a previously hidden variable column again (repeatable)",
)
@click.option(
    "--reset-hidden",
    is_flag=True,
    help="Forget all hidden columns for this dataset",
)
@click.option(
    "--coverage/--no-coverage",
    default=False,
    show_default=True,
    help="Also print the per-variable parameter coverage percentages",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to a define_explorer.toml config file (default: ./define_explorer.toml)",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def vlm_command(define_file: Path, **options: object) -> None:
    """Show the value-level metadata of an ADaM BDS dataset.

    Prints a PARAMCD x variable grid marking which variables define
    parameter-specific metadata for each parameter, followed by any
    consistency warnings.

    Examples:

    \b
        # List the datasets that carry value-level metadata
        define-explorer vlm define.xml

    \b
        # Show the grid for ADLB without the AVALC column
        define-explorer vlm define.xml --dataset ADLB --hide AVALC
    """
    command_options = VLMCommandOptions.from_kwargs(dict(options))
    container = build_container(
        console,
        verbose=command_options.verbose,
        config_file=command_options.config_file,
    )
    response = import_define_file(container, console, define_file)
    assert response.document is not None, "Document should be set on success"

    use_case = container.create_vlm_use_case()
    available = use_case.available_datasets(response.document)
    if not command_options.dataset:
        if not available:
            console.print("[yellow]No datasets with value-level metadata found[/yellow]")
            return
        console.print("[bold]Datasets with value-level metadata:[/bold]")
        for name in available:
            console.print(f"  {name}")
        return

    dataset = normalize_dataset_id(command_options.dataset)
    if dataset not in {normalize_dataset_id(name) for name in available}:
        choices = ", ".join(available) or "none"
        raise click.ClickException(
            f"Dataset {command_options.dataset} has no value-level metadata. "
            f"Available: {choices}"
        )

    store = HiddenColumnStore(container.create_preferences_repository())
    if command_options.hide or command_options.show or command_options.reset_hidden:
        hidden = store.update(
            dataset,
            hide=command_options.hide,
            show=command_options.show,
            reset=command_options.reset_hidden,
        )
    else:
        hidden = store.get(dataset)

    vlm = use_case.execute(response.document, dataset)
    VLMPresenter(console).present(
        VLMViewRequest(
            vlm=vlm,
            hidden_columns=frozenset(hidden),
            show_coverage=command_options.coverage,
        )
    )
    container.create_logger().log_final_stats()
