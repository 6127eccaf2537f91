"""Responsibility command: files that do too many things at once."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CodeshapeError
from ..logging_config import setup_logging
from ..responsibility import ResponsibilityReport
from . import app
from ._common import console, open_session, print_json, relative, resolve_config


@app.command()
def responsibilities(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    max_responsibilities: Optional[int] = typer.Option(
        None,
        "--max",
        "-m",
        help="Responsibilities allowed per file before it is flagged (default: 2)",
        min=1,
    ),
    strict: bool = typer.Option(False, "--strict", help="Allow only one responsibility"),
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
    Classify what each file is responsible for and flag files that mix concerns.

    [bold cyan]Examples:[/bold cyan]

      codeshape responsibilities ./my-app --strict
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            max_responsibilities=max_responsibilities,
            strict=strict,
            verbose=verbose,
            quiet=quiet,
        )
        session = open_session(path, settings)
        report = session.classify_files(session.discover_files())

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


def _output_rich(report: ResponsibilityReport, root: Path, verbose: bool = False):
    console.print()
    console.print(
        f"  [bold]{report.total_files}[/bold] files, "
        f"[bold]{report.files_with_multiple_responsibilities}[/bold] with mixed concerns, "
        f"average [bold]{report.average_responsibilities}[/bold] responsibilities per file"
    )
    console.print()

    rows = [r for r in report.results if r.analysis.has_multiple_responsibilities or verbose]
    if rows:
        table = Table(title="Responsibilities")
        table.add_column("File", style="cyan")
        table.add_column("Responsibilities")
        table.add_column("Confidence", justify="right")
        for result in rows:
            table.add_row(
                relative(result.file_path, root),
                ", ".join(result.analysis.responsibilities) or "-",
                f"{result.confidence:.2f}",
            )
        console.print(table)
        console.print()
    else:
        console.print("[green]No files with mixed responsibilities[/green]")

    if report.recommended_actions:
        console.print("[bold]Recommended actions[/bold]")
        for action in report.recommended_actions:
            console.print(f"  - {action}")
