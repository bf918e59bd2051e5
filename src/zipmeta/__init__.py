import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from zipmeta import pkzip

app = typer.Typer(help="Collection of tools for inspecting zip archive metadata")

app.add_typer(pkzip.app, name="zip", help="Tools for zip archives (.zip/.jar files)")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Print debug messages while reading archives",
        ),
    ] = False,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )


if __name__ == "__main__":
    app()
