"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdhtml.cli.commands import blocks_cmd, build_cmd, inspect_cmd, render_cmd


app = typer.Typer(name="mdhtml", no_args_is_help=True, help="Markdown to HTML compiler")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Compile markdown documents to HTML."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


app.command(name="render")(render_cmd)
app.command(name="build")(build_cmd)
app.command(name="blocks")(blocks_cmd)
app.command(name="inspect")(inspect_cmd)
