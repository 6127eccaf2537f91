"""Size command: effective line counts and split suggestions."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CodeshapeError
from ..logging_config import setup_logging
from ..size import FileSizeReport
from . import app
from ._common import console, open_session, print_json, relative, resolve_config


@app.command()
def size(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Effective line threshold (default: 400)",
        min=1,
    ),
    fmt: str = typer.Option("rich", "--format", "-f", help="Output format: rich or json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every file"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Find files over the effective line threshold and suggest how to split them.

    [bold cyan]Examples:[/bold cyan]

      codeshape size ./my-app --threshold 300
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, threshold=threshold, verbose=verbose, quiet=quiet)
        session = open_session(path, settings)
        report = session.measure_files(session.discover_files())

        if fmt == "json":
            print_json(report.to_dict())
        else:
            _output_rich(report, path, verbose=verbose)

    except typer.Exit:
        raise
    except CodeshapeError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


def _output_rich(report: FileSizeReport, root: Path, verbose: bool = False):
    summary = report.summary
    console.print()
    console.print(
        f"  [bold]{summary.total_files}[/bold] files, average "
        f"[bold]{summary.average_file_size}[/bold] effective lines, threshold "
        f"[bold]{summary.threshold}[/bold]"
    )
    console.print()

    rows = [r for r in report.results if r.report.exceeds_threshold or verbose]
    if not rows:
        console.print("[green]No oversized files[/green]")
        return

    table = Table(title=f"Oversized files ({summary.oversized_files})")
    table.add_column("File", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Suggestion")
    for result in sorted(rows, key=lambda r: r.report.line_count, reverse=True):
        suggestions = result.report.split_suggestions
        table.add_row(
            relative(result.file_path, root),
            str(result.report.line_count),
            suggestions[0].description if suggestions else "-",
        )
    console.print(table)
