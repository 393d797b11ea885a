import json
from pathlib import Path

import click
from rich.console import Console

from ..helpers import build_container, import_define_file

console = Console(stderr=True)


@click.command()
@click.argument("define_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the graph JSON to this file instead of standard output",
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
def graph_command(
    define_file: Path,
    output_file: Path | None,
    config_file: Path | None,
    verbose: int,
) -> None:
    """Export the OID relationship graph of a Define-XML file as JSON.

    The document has the shape {"nodes": [...], "links": [...]}; nodes are
    keyed by OID and links carry the referencing attribute name.

    Examples:

    \b
        define-explorer graph define.xml --output graph.json
    """
    container = build_container(console, verbose=verbose, config_file=config_file)
    response = import_define_file(container, console, define_file)
    if response.graph is None:
        raise click.ClickException(
            f"Relationship graph could not be built for {response.file_name}"
        )

    payload = json.dumps(response.graph.to_dict(), indent=2)
    if output_file is None:
        click.echo(payload)
        return

    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(payload + "\n", encoding="utf-8")
    console.print(
        f"[green]✓[/green] Wrote {len(response.graph.nodes)} nodes and "
        f"{len(response.graph.links)} links to {output_file}"
    )
