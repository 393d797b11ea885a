import click

from .commands.graph import graph_command
from .commands.summary import summary_command
from .commands.vlm import vlm_command


@click.group()
@click.version_option(package_name="define-explorer")
def app() -> None:
    pass


app.add_command(summary_command, name="summary")
app.add_command(vlm_command, name="vlm")
app.add_command(graph_command, name="graph")
__all__ = ["app"]
