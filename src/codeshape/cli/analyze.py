"""Full analysis command: dependencies, responsibilities and size in one report."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CodeshapeError
from ..logging_config import setup_logging
from ..report import ProjectReport, ReportAggregator
from . import app
from ._common import console, open_session, print_json, relative, resolve_config, styled


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Path to the project directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
    ),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Effective line threshold for oversized files",
        min=1,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show every file, not only those with issues",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
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
    Analyze a project: unused imports, cycles, mixed responsibilities, file size.

    [bold cyan]Examples:[/bold cyan]

      codeshape analyze ./my-app

      codeshape analyze . --format json > report.json

      codeshape analyze . --threshold 300 --verbose
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(config=config, threshold=threshold, verbose=verbose, quiet=quiet)
        session = open_session(path, settings)
        report = ReportAggregator(session).build()

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


def _output_rich(report: ProjectReport, root: Path, verbose: bool = False):
    totals = report.totals
    console.print()
    console.print("[bold cyan]CODESHAPE Project Report[/bold cyan]")
    console.print()
    console.print(
        f"  [bold]{totals.file_count}[/bold] files, "
        f"[bold]{totals.total_imports}[/bold] imports, "
        f"[bold]{totals.total_exports}[/bold] exports"
    )
    if totals.skipped_files:
        console.print(f"  [yellow]{totals.skipped_files} files could not be analyzed[/yellow]")
    console.print(f"  Unused imports: [bold]{totals.total_unused_imports}[/bold]")
    console.print(f"  Circular dependencies: [bold]{totals.total_cycles}[/bold]")
    console.print(f"  Oversized files: [bold]{totals.oversized_files}[/bold]")
    console.print(
        "  Files with multiple responsibilities: "
        f"[bold]{totals.files_with_multiple_responsibilities}[/bold]"
    )
    console.print()

    if report.dependencies.circular_dependencies:
        console.print("[bold red]Circular Dependencies[/bold red]")
        for cycle in report.dependencies.circular_dependencies:
            chain = " -> ".join(relative(p, root) for p in cycle.cycle + cycle.cycle[:1])
            console.print(f"  {styled(cycle.severity, chain)}")
        console.print()

    shown = [f for f in report.files if f.issues or verbose]
    if not shown:
        console.print("[green]No issues found[/green]")
        return

    table = Table(title="Files", show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("Lines", justify="right")
    table.add_column("Responsibilities")
    table.add_column("Top issue")

    for file_report in shown:
        top = file_report.issues[0] if file_report.issues else None
        table.add_row(
            relative(file_report.file_path, root),
            str(file_report.size.line_count),
            ", ".join(file_report.responsibility.analysis.responsibilities) or "-",
            styled(top.severity, top.description) if top else "-",
        )
    console.print(table)

    if verbose:
        console.print()
        console.print("[bold]Recommendations[/bold]")
        for file_report in shown:
            for rec in file_report.recommendations:
                console.print(
                    f"  [cyan]{relative(file_report.file_path, root)}[/cyan] "
                    f"(priority {rec.priority}) {rec.description}"
                )
