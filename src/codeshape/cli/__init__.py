"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="codeshape",
    help="codeshape - Structural analysis for JavaScript and TypeScript projects",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"codeshape {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Unused imports, cycles, mixed responsibilities and oversized files."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .deps import deps as _deps  # noqa: F401, E402
from .responsibilities import responsibilities as _responsibilities  # noqa: F401, E402
from .size import size as _size  # noqa: F401, E402


def main() -> None:
    app()
